"""Single-row forms for the four financial trackers."""

from typing import Any, Dict, List

from components.core.config import get_settings
from components.core.forms import SingleRowForm, as_decimal
from components.core.validation import format_currency, validate_amount, validate_paid_amount
from components.financial import calculations
from components.financial.models import (
    EXPENSE_FIELDS,
    INCOME_FIELDS,
    SAVINGS_GOALS,
    WEDDING_CATEGORIES,
)
from components.financial.repository import (
    BudgetRepository,
    MahrRepository,
    SavingsGoalsRepository,
    WeddingBudgetRepository,
)

settings = get_settings()

MAHR_MAX_AMOUNT = 100_000_000


def field_label(field: str) -> str:
    """``expense_housing`` -> ``Housing``; ``venue_planned`` -> ``Venue planned``."""
    name = field[len("expense_"):] if field.startswith("expense_") else field
    return name.replace("_", " ").capitalize()


def check_amounts(values: Dict[str, Any], fields, max_value=None) -> Dict[str, str]:
    errors = {}
    max_value = settings.CURRENCY_MAX if max_value is None else max_value
    for field in fields:
        result = validate_amount(values.get(field), 0, max_value, field_name=field_label(field))
        if not result.is_valid:
            errors[field] = result.error
    return errors


class FinancialForm(SingleRowForm):
    """Adds CSV export rows to the generic form."""

    feature: str

    def export_rows(self, record: Dict[str, Any], summary: Dict[str, Any]) -> List[Dict[str, Any]]:
        raise NotImplementedError


class BudgetForm(FinancialForm):
    repository_class = BudgetRepository
    table = "budgets"
    feature = "budget"

    def validate(self, values):
        return check_amounts(values, INCOME_FIELDS + EXPENSE_FIELDS)

    def summarize(self, record):
        return calculations.budget_summary(record)

    def export_rows(self, record, summary):
        rows = [
            {"Item": "Total Income", "Amount": format_currency(summary["total_income"])},
            {"Item": "Total Expenses", "Amount": format_currency(summary["total_expenses"])},
            {"Item": "Surplus/Deficit", "Amount": format_currency(summary["surplus"])},
        ]
        rows.extend(
            {"Item": field_label(field), "Amount": format_currency(record.get(field))}
            for field in EXPENSE_FIELDS
        )
        return rows


class MahrForm(FinancialForm):
    repository_class = MahrRepository
    table = "mahr"
    feature = "mahr"

    def validate(self, values):
        errors = {}
        amount = validate_amount(
            values.get("amount"), 0, MAHR_MAX_AMOUNT, required=True, field_name="Mahr amount"
        )
        if not amount.is_valid:
            errors["amount"] = amount.error
            return errors
        paid = validate_paid_amount(values.get("amount_paid") or 0, values["amount"])
        if not paid.is_valid:
            errors["amount_paid"] = paid.error
        return errors

    def prepare(self, values):
        # status always follows the amounts, whatever the client sent
        values["status"] = calculations.mahr_status(values.get("amount"), values.get("amount_paid"))
        return values

    def summarize(self, record):
        return calculations.mahr_summary(record)

    def export_rows(self, record, summary):
        return [{
            "Total Mahr": format_currency(record.get("amount")),
            "Amount Paid": format_currency(record.get("amount_paid")),
            "Remaining": format_currency(summary["remaining"]),
            "Progress %": f"{summary['progress']:.1f}%",
            "Status": summary["status"],
            "Deferred Schedule": record.get("deferred_schedule") or "",
            "Notes": record.get("notes") or "",
        }]


class WeddingBudgetForm(FinancialForm):
    repository_class = WeddingBudgetRepository
    table = "wedding_budgets"
    feature = "wedding-budget"

    def validate(self, values):
        fields = [f"{c}_{kind}" for c in WEDDING_CATEGORIES for kind in ("planned", "spent")]
        return check_amounts(values, fields)

    def summarize(self, record):
        return calculations.wedding_budget_summary(record)

    def export_rows(self, record, summary):
        rows = []
        for category in summary["categories"]:
            rows.append({
                "Category": category["category"].capitalize(),
                "Planned": format_currency(category["planned"]),
                "Spent": format_currency(category["spent"]),
                "Remaining": format_currency(category["remaining"]),
                "Over Budget": format_currency(-category["remaining"]) if category["over_budget"] else "",
            })
        rows.append({
            "Category": "TOTAL",
            "Planned": format_currency(summary["total_planned"]),
            "Spent": format_currency(summary["total_spent"]),
            "Remaining": format_currency(summary["remaining"]),
            "Over Budget": format_currency(-summary["remaining"]) if summary["over_budget"] else "",
        })
        return rows


class SavingsGoalsForm(FinancialForm):
    repository_class = SavingsGoalsRepository
    table = "savings_goals"
    feature = "savings-goals"

    def validate(self, values):
        fields = [f for _, goal, current in SAVINGS_GOALS for f in (goal, current)]
        fields += ["other_goal_amount", "other_goal_current"]
        errors = check_amounts(values, fields)
        name = (values.get("other_goal_name") or "").strip()
        if "other_goal_amount" not in errors and as_decimal(values.get("other_goal_amount")) > 0 and not name:
            errors["other_goal_name"] = "Goal name is required when a goal amount is set"
        return errors

    def prepare(self, values):
        values["other_goal_name"] = (values.get("other_goal_name") or "").strip() or None
        return values

    def summarize(self, record):
        return calculations.savings_summary(record)

    def export_rows(self, record, summary):
        return [
            {
                "Goal": goal["name"],
                "Target": format_currency(goal["goal"]),
                "Current": format_currency(goal["current"]),
                "Progress %": f"{goal['progress']:.1f}%",
                "Remaining": format_currency(goal["remaining"]),
                "Complete": "Yes" if goal["is_complete"] else "No",
            }
            for goal in summary["goals"]
        ]


FORMS = {form.feature: form for form in (BudgetForm, MahrForm, WeddingBudgetForm, SavingsGoalsForm)}
