"""
Anomaly Scoring.

Responsibilities:
- Run the outlier heuristics for one salary against a profile.
- Reduce them to a single 0-100 score and an explanation.

Non-Responsibilities:
- No database access.
- No review status decisions.

Invariant:
The score is the maximum over triggered heuristics, never a sum.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .profile import StatisticalProfile

EXTREME_Z_SCORE = 4
SIGNIFICANT_Z_SCORE = 3
MODERATE_Z_SCORE = 2.5

EXTREME_IQR_MULTIPLIER = 3.5
SIGNIFICANT_IQR_MULTIPLIER = 3

EXTREME_MEDIAN_DEVIATION = 3  # 300%
SIGNIFICANT_MEDIAN_DEVIATION = 2  # 200%

LOW_SALARY_BOUND = 1000
HIGH_SALARY_BOUND = 1_000_000

MEAN_RATIO_RANGE = (0.2, 5)
MEDIAN_RATIO_RANGE = (0.25, 4)

# Scores at or above this are reported as anomalies
ANOMALY_THRESHOLD = 30

Finding = Tuple[int, str]


@dataclass(frozen=True)
class AnomalyScore:
    is_anomaly: bool
    score: int
    reason: str


def z_score(salary: float, profile: StatisticalProfile) -> float:
    """Absolute z-score, 0 when the sample has no spread."""
    if profile.std <= 0:
        return 0.0
    return abs(salary - profile.mean) / profile.std


def check_z_score(salary: float, profile: StatisticalProfile) -> List[Finding]:
    z = z_score(salary, profile)
    if z >= EXTREME_Z_SCORE:
        return [(95, f"Extremely high Z-score ({z:.2f}σ from mean)")]
    if z >= SIGNIFICANT_Z_SCORE:
        return [(75, f"Significant Z-score ({z:.2f}σ from mean)")]
    if z >= MODERATE_Z_SCORE:
        return [(50, f"Moderate Z-score ({z:.2f}σ from mean)")]
    return []


def check_iqr_fences(salary: float, profile: StatisticalProfile) -> List[Finding]:
    """Tukey fences around Q1/Q3."""
    extreme_low = profile.q1 - EXTREME_IQR_MULTIPLIER * profile.iqr
    extreme_high = profile.q3 + EXTREME_IQR_MULTIPLIER * profile.iqr
    if salary < extreme_low or salary > extreme_high:
        return [(90, f"Outside extreme IQR fences ({extreme_low:.0f}-{extreme_high:.0f})")]

    low = profile.q1 - SIGNIFICANT_IQR_MULTIPLIER * profile.iqr
    high = profile.q3 + SIGNIFICANT_IQR_MULTIPLIER * profile.iqr
    if salary < low or salary > high:
        return [(60, f"Outside IQR fences ({low:.0f}-{high:.0f})")]
    return []


def check_median_deviation(salary: float, profile: StatisticalProfile) -> List[Finding]:
    if profile.median == 0:
        return []
    deviation = abs(salary - profile.median) / abs(profile.median)
    if deviation > EXTREME_MEDIAN_DEVIATION:
        return [(85, f"{deviation * 100:.0f}% difference from median")]
    if deviation > SIGNIFICANT_MEDIAN_DEVIATION:
        return [(55, f"{deviation * 100:.0f}% difference from median")]
    return []


def check_absolute_bounds(salary: float, profile: StatisticalProfile) -> List[Finding]:
    # Evaluated regardless of currency.
    if salary < LOW_SALARY_BOUND:
        return [(80, "Suspiciously low salary (<1,000)")]
    if salary > HIGH_SALARY_BOUND:
        return [(85, "Suspiciously high salary (>1,000,000)")]
    return []


def check_ratios(salary: float, profile: StatisticalProfile) -> List[Finding]:
    findings: List[Finding] = []
    if profile.mean != 0:
        ratio = salary / profile.mean
        low, high = MEAN_RATIO_RANGE
        if ratio > high or ratio < low:
            findings.append((70, f"Extreme ratio to mean ({ratio:.2f}x)"))
    if profile.median != 0:
        ratio = salary / profile.median
        low, high = MEDIAN_RATIO_RANGE
        if ratio > high or ratio < low:
            findings.append((65, f"Extreme ratio to median ({ratio:.2f}x)"))
    return findings


HEURISTICS = (
    check_z_score,
    check_iqr_fences,
    check_median_deviation,
    check_absolute_bounds,
    check_ratios,
)


def score_salary(salary: float, profile: StatisticalProfile) -> AnomalyScore:
    """
    Score how anomalous a salary is against a comparison profile.

    Every heuristic runs; the final score is the highest triggered score
    and the reason lists all triggered explanations in heuristic order.
    """
    findings: List[Finding] = []
    for heuristic in HEURISTICS:
        findings.extend(heuristic(salary, profile))

    score = max((s for s, _ in findings), default=0)
    score = min(max(int(score), 0), 100)

    if findings:
        reason = "; ".join(text for _, text in findings)
    else:
        reason = (
            f"Normal entry (Mean: {profile.mean:.0f}, Median: {profile.median:.0f}, "
            f"Z-score: {z_score(salary, profile):.2f})"
        )

    return AnomalyScore(
        is_anomaly=score >= ANOMALY_THRESHOLD,
        score=score,
        reason=reason,
    )
