"""Statistical profile of a salary sample."""

import math
from dataclasses import dataclass, asdict
from typing import Iterable

import numpy as np


@dataclass(frozen=True)
class StatisticalProfile:
    mean: float
    median: float
    std: float
    min: float
    max: float
    q1: float
    q3: float
    iqr: float
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


def build_profile(salaries: Iterable[float]) -> StatisticalProfile:
    """
    Reduce a sample of salaries to its summary statistics.

    Standard deviation is the population one. Quartiles use the nearest
    rank without interpolation: Q1 = sorted[floor(n * 0.25)],
    Q3 = sorted[floor(n * 0.75)].

    Raises:
        ValueError: If the sample is empty
    """
    values = np.sort(np.asarray(list(salaries), dtype=float))
    count = len(values)
    if count == 0:
        raise ValueError("Cannot profile an empty salary sample")

    # np.percentile would interpolate between ranks
    q1 = float(values[math.floor(count * 0.25)])
    q3 = float(values[math.floor(count * 0.75)])

    return StatisticalProfile(
        mean=float(np.mean(values)),
        median=float(np.median(values)),
        std=float(np.std(values)),
        min=float(values[0]),
        max=float(values[-1]),
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
        count=int(count),
    )
