"""
Financial calculations.

Pure functions over plain values; the forms and the calculator endpoints
both call into here. Amounts are Decimals, percentages are floats.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional

from dateutil.relativedelta import relativedelta

from components.core.forms import as_decimal
from components.core.progress import round_half_up
from components.financial.models import (
    EXPENSE_FIELDS,
    INCOME_FIELDS,
    SAVINGS_GOALS,
    WEDDING_CATEGORIES,
)

ZERO = Decimal("0")


def percentage(part: Any, whole: Any) -> float:
    """part / whole * 100, or 0 when whole is not positive."""
    whole = as_decimal(whole)
    if whole <= 0:
        return 0.0
    return float(as_decimal(part) / whole * 100)


# Monthly budget

def budget_summary(record: Mapping[str, Any]) -> Dict[str, Any]:
    total_income = sum((as_decimal(record.get(f)) for f in INCOME_FIELDS), ZERO)
    total_expenses = sum((as_decimal(record.get(f)) for f in EXPENSE_FIELDS), ZERO)
    surplus = total_income - total_expenses
    return {
        "total_income": total_income,
        "total_expenses": total_expenses,
        "surplus": surplus,
        "on_track": surplus >= 0,
    }


# Mahr

def mahr_status(amount: Any, amount_paid: Any) -> str:
    amount = as_decimal(amount)
    paid = as_decimal(amount_paid)
    if amount > 0 and paid >= amount:
        return "Paid"
    if paid > 0:
        return "Partial"
    return "Pending"


def mahr_summary(record: Mapping[str, Any]) -> Dict[str, Any]:
    amount = as_decimal(record.get("amount"))
    paid = as_decimal(record.get("amount_paid"))
    return {
        "remaining": max(ZERO, amount - paid),
        "progress": percentage(paid, amount),
        "status": mahr_status(amount, paid),
    }


def calculate_mahr_range(
    region_average: Any,
    education_level: str,
    years_working: int,
    custom_factor: float = 1.0,
) -> Dict[str, Any]:
    """Suggest a mahr range from a regional average adjusted for education and experience."""
    education_multipliers = {
        "high_school": 1.0,
        "bachelors": 1.2,
        "masters": 1.4,
        "doctorate": 1.6,
    }
    education_factor = education_multipliers.get(education_level, 1.0)
    experience_factor = 1 + min(years_working * 0.02, 0.3)  # capped at +30%
    adjusted = float(as_decimal(region_average)) * education_factor * experience_factor * (custom_factor or 1.0)
    return {
        "suggested_min": round_half_up(adjusted * 0.8),
        "suggested_max": round_half_up(adjusted * 1.2),
        "average": round_half_up(adjusted),
        "factors": {
            "education": education_factor,
            "experience": experience_factor,
            "region": 1.0,
        },
    }


# Wedding budget

def wedding_budget_summary(record: Mapping[str, Any]) -> Dict[str, Any]:
    categories = []
    warnings = {}
    total_planned = ZERO
    total_spent = ZERO
    for name in WEDDING_CATEGORIES:
        planned = as_decimal(record.get(f"{name}_planned"))
        spent = as_decimal(record.get(f"{name}_spent"))
        remaining = planned - spent
        total_planned += planned
        total_spent += spent
        categories.append({
            "category": name,
            "planned": planned,
            "spent": spent,
            "remaining": remaining,
            "percentage": percentage(spent, planned),
            "over_budget": remaining < 0,
        })
        if remaining < 0:
            warnings[f"{name}_spent"] = f"Over budget by ${-remaining:,.2f}"

    remaining = total_planned - total_spent
    return {
        "categories": categories,
        "total_planned": total_planned,
        "total_spent": total_spent,
        "remaining": remaining,
        "percentage_spent": percentage(total_spent, total_planned),
        "over_budget": remaining < 0,
        "warnings": warnings,
    }


def calculate_wedding_breakdown(
    total_budget: Any,
    guest_count: int,
    venue_type: str,
    include_photography: bool,
    include_videography: bool,
    include_live_music: bool,
) -> Dict[str, Any]:
    """Split a total wedding budget across categories by typical shares."""
    total = float(as_decimal(total_budget))
    shares = {
        "venue": {"luxury": 0.35, "moderate": 0.30}.get(venue_type, 0.25),
        "catering": 0.30,
        "photography": 0.10 if include_photography else 0,
        "videography": 0.08 if include_videography else 0,
        "attire": 0.08,
        "decorations": 0.07,
        "music": 0.05 if include_live_music else 0.02,
        "invitations": 0.02,
        "transportation": 0.03,
    }
    # whatever is left over goes to miscellaneous
    shares["miscellaneous"] = max(0.0, 1 - sum(shares.values()))

    breakdown = {name: round_half_up(total * share) for name, share in shares.items()}
    breakdown["total"] = total_budget
    breakdown["per_guest"] = round_half_up(total / guest_count) if guest_count > 0 else 0
    return breakdown


# Savings goals

def goal_progress(goal: Any, current: Any) -> Dict[str, Any]:
    goal = as_decimal(goal)
    current = as_decimal(current)
    return {
        "goal": goal,
        "current": current,
        "progress": min(100.0, percentage(current, goal)),
        "remaining": max(ZERO, goal - current),
        "is_complete": goal > 0 and current >= goal,
    }


def savings_summary(record: Mapping[str, Any]) -> Dict[str, Any]:
    goals = []
    for label, goal_field, current_field in SAVINGS_GOALS:
        goals.append({"name": label, **goal_progress(record.get(goal_field), record.get(current_field))})
    if record.get("other_goal_name") or as_decimal(record.get("other_goal_amount")) > 0:
        goals.append({
            "name": record.get("other_goal_name") or "Other",
            **goal_progress(record.get("other_goal_amount"), record.get("other_goal_current")),
        })

    total_goal = sum((g["goal"] for g in goals), ZERO)
    total_saved = sum((g["current"] for g in goals), ZERO)
    return {
        "goals": goals,
        "total_goal": total_goal,
        "total_saved": total_saved,
        "overall_progress": min(100.0, percentage(total_saved, total_goal)),
        "completed_goals": sum(1 for g in goals if g["is_complete"]),
    }


def calculate_savings_plan(
    target_amount: Any,
    current_savings: Any,
    monthly_income: Any,
    monthly_expenses: Any,
    target_date: date,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Project how long a savings target takes at the current disposable income."""
    today = today or date.today()
    remaining = float(as_decimal(target_amount) - as_decimal(current_savings))
    income = float(as_decimal(monthly_income))
    disposable = income - float(as_decimal(monthly_expenses))

    months_until_target = max(1, (target_date.year - today.year) * 12 + (target_date.month - today.month))
    monthly_required = remaining / months_until_target

    if disposable > 0:
        months_to_goal = max(0, math.ceil(remaining / disposable))
        projected_date = today + relativedelta(months=months_to_goal)
    else:
        months_to_goal = None  # never, at the current rate
        projected_date = None

    return {
        "monthly_required": round_half_up(monthly_required),
        "months_to_goal": months_to_goal,
        "is_achievable": monthly_required <= disposable,
        "disposable_income": round_half_up(disposable),
        "savings_rate": round_half_up(disposable / income * 100) if income > 0 else 0,
        "projected_date": projected_date,
    }


# Cost split

def calculate_cost_split(
    total_cost: Any,
    bride_contribution: Any,
    groom_contribution: Any,
    family_contributions: Iterable[Mapping[str, Any]] = (),
) -> Dict[str, Any]:
    """Who pays what share of the wedding, and what is still uncovered."""
    total = as_decimal(total_cost)
    bride = as_decimal(bride_contribution)
    groom = as_decimal(groom_contribution)
    family = [(f["name"], as_decimal(f["amount"])) for f in family_contributions]
    family_total = sum((amount for _, amount in family), ZERO)
    remaining = max(ZERO, total - (bride + groom + family_total))

    breakdown: List[Dict[str, Any]] = [
        {"name": "Bride", "amount": bride, "percent": percentage(bride, total)},
        {"name": "Groom", "amount": groom, "percent": percentage(groom, total)},
    ]
    breakdown.extend(
        {"name": name, "amount": amount, "percent": percentage(amount, total)} for name, amount in family
    )
    return {
        "remaining": round_half_up(float(remaining)),
        "bride_percent": round_half_up(percentage(bride, total)),
        "groom_percent": round_half_up(percentage(groom, total)),
        "family_percent": round_half_up(percentage(family_total, total)),
        "is_fully_covered": remaining == 0,
        "breakdown": breakdown,
    }


REGIONAL_MAHR_AVERAGES = {
    "North America": 10000,
    "Europe": 8000,
    "Middle East": 25000,
    "South Asia": 5000,
    "Southeast Asia": 3000,
    "Africa": 2000,
    "Australia": 12000,
}
