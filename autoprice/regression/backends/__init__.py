"""
Regression backends.

Available backends:
    CPUQRBackend: pivoted QR, rejects rank-deficient designs (default)
    CPUSVDBackend: SVD pseudo-inverse, minimum-norm solution
"""

from autoprice.regression.backends.cpu import CPUQRBackend, CPUSVDBackend

__all__ = [
    "CPUQRBackend",
    "CPUSVDBackend",
]
