from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class InvestmentPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_contribution: float = Field(..., description="Starting monthly SIP amount.")
    duration_years: int = Field(..., description="Investment horizon in whole years.")
    annual_return_rate_pct: float = Field(..., description="Expected annual return, 12 means 12%/yr.")
    step_up_enabled: bool = False
    step_up_pct: float = Field(10.0, description="Annual increase of the SIP, applied when step-up is enabled.")
    lump_sum: float = Field(0.0, description="One-time amount invested at month 0.")


class YearSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    invested_cumulative: float
    value: float
    gains: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_investment: float
    total_investment: float
    maturity_amount: float
    total_gains: float
    yearly_breakdown: List[YearSnapshot] = Field(default_factory=list)


class ProjectionMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_returns_pct: float = Field(..., description="(maturity / invested - 1) * 100")
    return_on_investment_pct: float = Field(..., description="gains / invested * 100")
    total_installments: int
    inflation_rate_pct: float
    real_maturity_amount: float = Field(..., description="Maturity amount in today's money.")


class GoalPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_amount: float
    duration_years: int
    annual_return_rate_pct: float
    current_contribution: float = 0.0


class GoalResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    target_amount: float
    required_contribution: float
    shortfall: float
    progress_pct: float = Field(..., description="Current contribution as a share of the required one, capped at 100.")


class ScenarioRate(BaseModel):
    model_config = ConfigDict(frozen=True)

    rate: float
    label: str


class ScenarioOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    annual_rate_pct: float
    label: str
    maturity_amount: float
    gains: float
    total_investment: float


class ScenarioSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_contribution: float
    duration_years: int
    outcomes: List[ScenarioOutcome] = Field(default_factory=list)


DEFAULT_SCENARIO_RATES: Tuple[ScenarioRate, ...] = (
    ScenarioRate(rate=8, label="Conservative"),
    ScenarioRate(rate=12, label="Moderate"),
    ScenarioRate(rate=15, label="Aggressive"),
)


class ScenarioRequest(BaseModel):
    monthly_contribution: float
    duration_years: int
    rates: Optional[List[ScenarioRate]] = None


class DeflateRequest(BaseModel):
    nominal_amount: float
    inflation_rate_pct: float
    years: float
