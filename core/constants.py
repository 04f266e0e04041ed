"""
Pipeline stages, plans and reminder kinds.
"""

JOB_STAGES = (
    "SAVED",
    "APPLIED",
    "RECRUITER_SCREEN",
    "TECHNICAL",
    "ONSITE",
    "OFFER",
    "REJECTED",
    "GHOSTED",
)

INTERVIEW_STAGES = ("RECRUITER_SCREEN", "TECHNICAL", "ONSITE")

# Stages the reminder engine looks at; everything else never goes stale.
FOLLOWUP_STAGES = ("APPLIED",) + INTERVIEW_STAGES

TERMINAL_STAGES = ("OFFER", "REJECTED", "GHOSTED")

PLAN_FREE = "FREE"
PLAN_PAID_LIFETIME = "PAID_LIFETIME"
PLANS = (PLAN_FREE, PLAN_PAID_LIFETIME)

REMINDER_FOLLOW_UP = "FOLLOW_UP"

DEFAULT_APPLIED_FOLLOWUP_DAYS = 7
DEFAULT_INTERVIEW_FOLLOWUP_DAYS = 5
