"""Shared statuses, traces and numeric helpers."""

from .numeric import (
    MACHINE_EPS,
    PIVOT_EPS,
    as_augmented,
    as_matrix,
    as_vector,
    augment,
    is_finite,
    norm_inf,
    relative_error_pct,
    residual,
    split_augmented,
)
from .status import ResultMixin, SolverError, Status
from .trace import IterationRecord, Trace

__all__ = [
    "IterationRecord",
    "MACHINE_EPS",
    "PIVOT_EPS",
    "ResultMixin",
    "SolverError",
    "Status",
    "Trace",
    "as_augmented",
    "as_matrix",
    "as_vector",
    "augment",
    "is_finite",
    "norm_inf",
    "relative_error_pct",
    "residual",
    "split_augmented",
]
