"""Pydantic schemas for the dashboard."""

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel

ReadinessStatus = Literal["not_started", "beginning", "in_progress", "almost_ready", "ready"]


class Counts(BaseModel):
    completed: int
    total: int
    percent: int


class BudgetSnapshot(BaseModel):
    has_budget: bool
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    surplus: Decimal = Decimal("0")
    on_track: bool = True


class Readiness(BaseModel):
    overall_percent: int
    status: ReadinessStatus
    checklist: int
    modules: int
    discussions: int


class Dashboard(BaseModel):
    first_name: Optional[str] = None
    days_until_wedding: Optional[int] = None
    checklist: Counts
    modules: Counts
    discussions: Counts
    budget: BudgetSnapshot
    readiness: Readiness
    has_partner: bool
    unread_notifications: int
