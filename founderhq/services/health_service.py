"""
Health Service.

Classifies headline metrics into warning / success messages. Each rule is
evaluated on its own: there is no composite score and conflicting signals
are all reported.
"""

import logging
import math
from typing import Optional

from founderhq.config import (
    CAC_PAYBACK_MAX_MONTHS,
    GROWTH_STRONG_PERCENT,
    LTV_CAC_TARGET,
    RUNWAY_HEALTHY_MONTHS,
    RUNWAY_WARNING_MONTHS,
)
from founderhq.models.financial_models import HealthReport, Runway

logger = logging.getLogger(__name__)


def evaluate_health(
    runway: Runway,
    ltv_cac: Optional[float],
    cac_payback: Optional[float],
    growth_rate: float,
) -> HealthReport:
    """Apply the runway, LTV:CAC, CAC payback and growth rules."""
    report = HealthReport()

    if runway.is_infinite:
        report.successes.append("Healthy runway: no net burn")
    elif runway.months < RUNWAY_WARNING_MONTHS:
        report.warnings.append(f"Low runway: only {math.floor(runway.months)} months remaining")
    elif runway.months >= RUNWAY_HEALTHY_MONTHS:
        report.successes.append(f"Healthy runway: {math.floor(runway.months)} months")

    # N/A ratios produce no message
    if ltv_cac is not None:
        if ltv_cac >= LTV_CAC_TARGET:
            report.successes.append(f"Strong LTV:CAC ratio: {ltv_cac:.1f}x")
        else:
            report.warnings.append(f"LTV:CAC ratio below {LTV_CAC_TARGET:.0f}x (currently {ltv_cac:.1f}x)")

    if cac_payback is not None and cac_payback > 0:
        if cac_payback > CAC_PAYBACK_MAX_MONTHS:
            report.warnings.append(f"Long CAC payback: {math.floor(cac_payback)} months")
        else:
            report.successes.append(f"Good CAC payback: {math.floor(cac_payback)} months")

    if growth_rate > GROWTH_STRONG_PERCENT:
        report.successes.append(f"Strong growth: {growth_rate:.1f}% QoQ")
    elif growth_rate < 0:
        report.warnings.append(f"Negative growth: {growth_rate:.1f}% QoQ")

    logger.debug(
        "Health evaluated: %d warnings, %d successes",
        len(report.warnings), len(report.successes),
    )
    return report
