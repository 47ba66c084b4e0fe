"""
PMS Reporting Engine - Policies
=================================
"""

from __future__ import annotations

from typing import Optional

from core.commands.rejection import ReasonCode, RejectionReason
from engines.reporting.commands import ReportPeriod


def report_period_must_be_valid_policy(
    period: ReportPeriod,
) -> Optional[RejectionReason]:
    """date_from must not be after date_to."""
    if (period.date_from is not None and period.date_to is not None
            and period.date_from > period.date_to):
        return RejectionReason(
            code=ReasonCode.INVALID_REQUEST,
            message=(
                f"Report start {period.date_from.isoformat()} is after "
                f"end {period.date_to.isoformat()}."
            ),
            policy_name="report_period_must_be_valid_policy",
        )
    return None
