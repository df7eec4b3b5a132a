"""
Descriptive statistics module.

Public API:
    summary(x)  - Six-number summary (Min, Q1, Median, Mean, Q3, Max)
    cor(x)      - Pearson correlation matrix
"""

from autoprice.descriptive.solvers import SixNumberSummary, cor, summary

__all__ = [
    "summary",
    "cor",
    "SixNumberSummary",
]
