"""
Run configuration for the price analysis.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from autoprice.analysis.models import CANDIDATE_MODELS
from autoprice.core.exceptions import ValidationError
from autoprice.dataset.prepare import DEFAULT_PRICE_THRESHOLD
from autoprice.regression.solvers import BackendChoice

_BACKENDS = ('auto', 'cpu', 'cpu_qr', 'cpu_svd')


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Immutable settings for one analysis run.

    Attributes:
        data_path: Input CSV/TSV file
        price_threshold: Rows with price >= threshold are dropped before fitting
        output_dir: Directory for PNG plots; no plots are written if None
        make_plots: Master switch for plot output
        backend: Regression backend ('cpu_svd' tolerates collinear designs)
        histogram_bins: Bin count for the price histograms
        fitted_bins: Number of fitted-value bins in the residual boxplot
        recommended: Name of the model reported as the recommendation
    """
    data_path: Path
    price_threshold: float = DEFAULT_PRICE_THRESHOLD
    output_dir: Path | None = None
    make_plots: bool = True
    backend: BackendChoice = 'auto'
    histogram_bins: int = 15
    fitted_bins: int = 5
    recommended: str = 'model2'

    def __post_init__(self) -> None:
        object.__setattr__(self, 'data_path', Path(self.data_path))
        if self.output_dir is not None:
            object.__setattr__(self, 'output_dir', Path(self.output_dir))

        if not self.price_threshold > 0:
            raise ValidationError(
                f"price_threshold: must be positive, got {self.price_threshold}"
            )
        if self.backend not in _BACKENDS:
            raise ValidationError(
                f"backend: expected one of {list(_BACKENDS)}, got {self.backend!r}"
            )
        candidates = [spec.name for spec in CANDIDATE_MODELS]
        if self.recommended not in candidates:
            raise ValidationError(
                f"recommended: expected one of {candidates}, got {self.recommended!r}"
            )
        for name in ('histogram_bins', 'fitted_bins'):
            value = getattr(self, name)
            if value < 1:
                raise ValidationError(f"{name}: must be >= 1, got {value}")

    @property
    def writes_plots(self) -> bool:
        return self.make_plots and self.output_dir is not None
