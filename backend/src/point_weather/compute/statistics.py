"""Descriptive statistics over per-variable sample lists.

Every function is total: an empty input yields None (or an empty mapping)
instead of NaN, infinity or an exception.
"""

from __future__ import annotations

from collections import Counter
from typing import Hashable, Sequence

import numpy as np


def mean(values: Sequence[float]) -> float | None:
    if len(values) == 0:
        return None
    return float(np.mean(values))


def std_dev(values: Sequence[float]) -> float | None:
    """Population standard deviation (divides by n)."""
    if len(values) == 0:
        return None
    return float(np.std(values, ddof=0))


def percentile(values: Sequence[float], p: float) -> float | None:
    """Linear-interpolation percentile, p in [0, 1].

    For idx = (n - 1) * p the result is
    sorted[floor(idx)] + (sorted[ceil(idx)] - sorted[floor(idx)]) * frac(idx),
    which is numpy's default "linear" method.
    """
    if len(values) == 0:
        return None
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"percentile p must be within [0, 1], got {p}")
    return float(np.quantile(np.asarray(values, dtype=float), p))


def categorical_counts(labels: Sequence[Hashable]) -> dict:
    """Occurrence count per distinct label, in first-seen order."""
    return dict(Counter(labels))


def categorical_probabilities(labels: Sequence[Hashable]) -> dict:
    """Empirical frequency of each distinct label."""
    total = len(labels)
    if total == 0:
        return {}
    return {label: count / total for label, count in categorical_counts(labels).items()}


def occurrence_probability(values: Sequence[float], total_samples: int = 0) -> float:
    """Fraction of strictly positive values.

    The denominator falls back to total_samples, then to 1, so no data at all
    reports 0.0. Callers use the sample count to tell that apart from a
    confirmed zero.
    """
    positives = sum(1 for v in values if v > 0)
    denominator = len(values) or total_samples or 1
    return positives / denominator
