"""
Staleness policy shared by the generator and the "needs follow-up" view.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import NamedTuple

from core.constants import INTERVIEW_STAGES

ONE_DAY = timedelta(days=1)


class FollowupCheck(NamedTuple):
    due: bool
    threshold_days: int


def days_since(last_touched_at: datetime, now: datetime) -> int:
    """Whole days elapsed, floored (23h59m is 0 days, a future timestamp is negative)."""
    return (now - last_touched_at) // ONE_DAY


def is_due(
    stage: str,
    last_touched_at: datetime,
    now: datetime,
    applied_threshold_days: int,
    interview_threshold_days: int,
) -> FollowupCheck:
    """
    APPLIED jobs use the applied threshold, interview stages share the interview
    threshold; every other stage is never due. The boundary is inclusive.
    """
    if stage == "APPLIED":
        threshold = applied_threshold_days
    elif stage in INTERVIEW_STAGES:
        threshold = interview_threshold_days
    else:
        return FollowupCheck(False, 0)

    return FollowupCheck(days_since(last_touched_at, now) >= threshold, threshold)


def trigger_at(last_touched_at: datetime, threshold_days: int) -> datetime:
    """When the job became stale, independent of when the scan happened to run."""
    return last_touched_at + timedelta(days=threshold_days)


__all__ = ["FollowupCheck", "days_since", "is_due", "trigger_at"]
