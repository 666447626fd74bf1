from __future__ import annotations

from datetime import datetime, UTC
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from sipcalc.utils.sip_models import (
    GoalPlan, GoalResult,
    InvestmentPlan, ProjectionMetrics, ProjectionResult,
    ScenarioRate, ScenarioSet,
)


# -------------------------
# Identity records
# -------------------------

CLIENT_GOALS: List[str] = [
    "Retirement Planning",
    "Children's Education",
    "House Purchase",
    "Wealth Creation",
    "Tax Saving",
    "Emergency Fund",
    "Marriage Planning",
    "Vacation/Travel",
    "Business Investment",
    "Other",
]


class AdvisorInfo(BaseModel):
    name: str
    phone: str
    address: str


class ClientInfo(BaseModel):
    name: str
    phone: str
    email: str
    address: Optional[str] = None
    goals: Optional[List[str]] = None

    @field_validator("goals")
    @classmethod
    def _known_goals(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        unknown = [g for g in v if g not in CLIENT_GOALS]
        if unknown:
            raise ValueError(f"unknown goal(s): {', '.join(unknown)}")
        return v


# -------------------------
# Report bundle
# -------------------------

class PlanReport(BaseModel):
    """Everything a document generator needs for one client report."""

    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    plan: InvestmentPlan
    projection: ProjectionResult
    metrics: ProjectionMetrics

    goal_plan: GoalPlan
    goal: GoalResult
    scenarios: ScenarioSet

    current_age: Optional[int] = None
    retirement_age: Optional[int] = None

    advisor: Optional[AdvisorInfo] = None
    client: Optional[ClientInfo] = None


class ReportRequest(BaseModel):
    """Report options beside the plan and goal; unset values fall back to settings."""

    inflation_rate_pct: Optional[float] = None
    rates: Optional[List[ScenarioRate]] = None

    current_age: Optional[int] = None
    retirement_age: Optional[int] = None

    advisor: Optional[AdvisorInfo] = None
    client: Optional[ClientInfo] = None
