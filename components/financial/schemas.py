"""Pydantic schemas for the financial trackers and calculators."""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from components.core.validation import CurrencyAmount


class RecordBase(BaseModel):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Monthly budget

class BudgetIn(BaseModel):
    """Budget form submission; omitted fields keep their saved value and null or "" counts as zero."""
    income_his: CurrencyAmount = None
    income_hers: CurrencyAmount = None
    expense_housing: CurrencyAmount = None
    expense_utilities: CurrencyAmount = None
    expense_transportation: CurrencyAmount = None
    expense_food: CurrencyAmount = None
    expense_insurance: CurrencyAmount = None
    expense_debt: CurrencyAmount = None
    expense_entertainment: CurrencyAmount = None
    expense_dining: CurrencyAmount = None
    expense_clothing: CurrencyAmount = None
    expense_gifts: CurrencyAmount = None
    expense_charity: CurrencyAmount = None


class Budget(RecordBase):
    income_his: Decimal
    income_hers: Decimal
    expense_housing: Decimal
    expense_utilities: Decimal
    expense_transportation: Decimal
    expense_food: Decimal
    expense_insurance: Decimal
    expense_debt: Decimal
    expense_entertainment: Decimal
    expense_dining: Decimal
    expense_clothing: Decimal
    expense_gifts: Decimal
    expense_charity: Decimal


class BudgetSummary(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    surplus: Decimal
    on_track: bool


class BudgetView(BaseModel):
    record: Optional[Budget] = None
    summary: BudgetSummary


# Mahr

class MahrIn(BaseModel):
    amount: CurrencyAmount
    amount_paid: CurrencyAmount = None
    deferred_schedule: Optional[str] = None
    notes: Optional[str] = None


class Mahr(RecordBase):
    amount: Decimal
    amount_paid: Decimal
    status: Literal["Paid", "Pending", "Partial"]
    deferred_schedule: Optional[str] = None
    notes: Optional[str] = None


class MahrSummary(BaseModel):
    remaining: Decimal
    progress: float
    status: Literal["Paid", "Pending", "Partial"]


class MahrView(BaseModel):
    record: Optional[Mahr] = None
    summary: MahrSummary


# Wedding budget

class WeddingBudgetIn(BaseModel):
    venue_planned: CurrencyAmount = None
    venue_spent: CurrencyAmount = None
    catering_planned: CurrencyAmount = None
    catering_spent: CurrencyAmount = None
    photography_planned: CurrencyAmount = None
    photography_spent: CurrencyAmount = None
    clothing_planned: CurrencyAmount = None
    clothing_spent: CurrencyAmount = None
    decor_planned: CurrencyAmount = None
    decor_spent: CurrencyAmount = None
    invitations_planned: CurrencyAmount = None
    invitations_spent: CurrencyAmount = None
    other_planned: CurrencyAmount = None
    other_spent: CurrencyAmount = None


class WeddingBudget(RecordBase):
    venue_planned: Decimal
    venue_spent: Decimal
    catering_planned: Decimal
    catering_spent: Decimal
    photography_planned: Decimal
    photography_spent: Decimal
    clothing_planned: Decimal
    clothing_spent: Decimal
    decor_planned: Decimal
    decor_spent: Decimal
    invitations_planned: Decimal
    invitations_spent: Decimal
    other_planned: Decimal
    other_spent: Decimal


class WeddingCategory(BaseModel):
    category: str
    planned: Decimal
    spent: Decimal
    remaining: Decimal
    percentage: float
    over_budget: bool


class WeddingBudgetSummary(BaseModel):
    categories: List[WeddingCategory]
    total_planned: Decimal
    total_spent: Decimal
    remaining: Decimal
    percentage_spent: float
    over_budget: bool
    warnings: Dict[str, str] = {}


class WeddingBudgetView(BaseModel):
    record: Optional[WeddingBudget] = None
    summary: WeddingBudgetSummary


# Savings goals

class SavingsGoalsIn(BaseModel):
    emergency_fund_goal: CurrencyAmount = None
    emergency_fund_current: CurrencyAmount = None
    house_goal: CurrencyAmount = None
    house_current: CurrencyAmount = None
    other_goal_name: Optional[str] = Field(None, max_length=100)
    other_goal_amount: CurrencyAmount = None
    other_goal_current: CurrencyAmount = None


class SavingsGoals(RecordBase):
    emergency_fund_goal: Decimal
    emergency_fund_current: Decimal
    house_goal: Decimal
    house_current: Decimal
    other_goal_name: Optional[str] = None
    other_goal_amount: Decimal
    other_goal_current: Decimal


class GoalProgress(BaseModel):
    name: str
    goal: Decimal
    current: Decimal
    progress: float
    remaining: Decimal
    is_complete: bool


class SavingsGoalsSummary(BaseModel):
    goals: List[GoalProgress]
    total_goal: Decimal
    total_saved: Decimal
    overall_progress: float
    completed_goals: int


class SavingsGoalsView(BaseModel):
    record: Optional[SavingsGoals] = None
    summary: SavingsGoalsSummary


# Calculators

class WeddingBreakdownRequest(BaseModel):
    total_budget: CurrencyAmount
    guest_count: int = Field(..., ge=0)
    venue_type: Literal["budget", "moderate", "luxury"] = "moderate"
    include_photography: bool = True
    include_videography: bool = False
    include_live_music: bool = False


class WeddingBreakdown(BaseModel):
    venue: int
    catering: int
    photography: int
    videography: int
    attire: int
    decorations: int
    music: int
    invitations: int
    transportation: int
    miscellaneous: int
    total: Decimal
    per_guest: int


class SavingsPlanRequest(BaseModel):
    target_amount: CurrencyAmount
    current_savings: CurrencyAmount = Decimal("0")
    monthly_income: CurrencyAmount
    monthly_expenses: CurrencyAmount
    target_date: date


class SavingsPlan(BaseModel):
    monthly_required: int
    months_to_goal: Optional[int] = None
    is_achievable: bool
    disposable_income: int
    savings_rate: int
    projected_date: Optional[date] = None


class FamilyContribution(BaseModel):
    name: str
    amount: CurrencyAmount


class CostSplitRequest(BaseModel):
    total_cost: CurrencyAmount
    bride_contribution: CurrencyAmount = Decimal("0")
    groom_contribution: CurrencyAmount = Decimal("0")
    family_contributions: List[FamilyContribution] = []


class Contribution(BaseModel):
    name: str
    amount: Decimal
    percent: float


class CostSplit(BaseModel):
    remaining: int
    bride_percent: int
    groom_percent: int
    family_percent: int
    is_fully_covered: bool
    breakdown: List[Contribution]


class MahrRangeRequest(BaseModel):
    region: Optional[str] = Field(None, description="Region name; its average is used unless region_average is given")
    region_average: Optional[CurrencyAmount] = None
    education_level: Literal["high_school", "bachelors", "masters", "doctorate"] = "bachelors"
    years_working: int = Field(0, ge=0)
    custom_factor: float = Field(1.0, gt=0)


class MahrRange(BaseModel):
    suggested_min: int
    suggested_max: int
    average: int
    factors: Dict[str, float]
