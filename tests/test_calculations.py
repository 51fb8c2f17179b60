from datetime import date
from decimal import Decimal

from components.core.progress import completion_percent, round_half_up
from components.financial import calculations


class TestBudget:
    def test_totals_and_surplus(self):
        record = {
            "income_his": Decimal("4000"),
            "income_hers": Decimal("3000"),
            "expense_housing": Decimal("2000"),
            "expense_food": Decimal("600"),
            "expense_charity": Decimal("100"),
        }
        summary = calculations.budget_summary(record)
        assert summary["total_income"] == Decimal("7000")
        assert summary["total_expenses"] == Decimal("2700")
        assert summary["surplus"] == summary["total_income"] - summary["total_expenses"]
        assert summary["on_track"] is True

    def test_deficit(self):
        summary = calculations.budget_summary({"income_his": 100, "expense_housing": 250})
        assert summary["surplus"] == Decimal("-150")
        assert summary["on_track"] is False


class TestMahr:
    def test_status(self):
        assert calculations.mahr_status(5000, 5000) == "Paid"
        assert calculations.mahr_status(5000, 2000) == "Partial"
        assert calculations.mahr_status(5000, 0) == "Pending"
        assert calculations.mahr_status(0, 0) == "Pending"

    def test_summary(self):
        summary = calculations.mahr_summary({"amount": Decimal("5000"), "amount_paid": Decimal("1250")})
        assert summary["remaining"] == Decimal("3750")
        assert summary["progress"] == 25.0
        assert summary["status"] == "Partial"

    def test_summary_of_zero_amount(self):
        summary = calculations.mahr_summary({"amount": 0, "amount_paid": 0})
        assert summary["progress"] == 0.0
        assert summary["remaining"] == 0

    def test_range(self):
        result = calculations.calculate_mahr_range(10000, "bachelors", 5)
        # 10000 * 1.2 * 1.1
        assert result["average"] == 13200
        assert result["suggested_min"] == 10560
        assert result["suggested_max"] == 15840
        assert result["factors"]["education"] == 1.2

    def test_experience_factor_is_capped(self):
        result = calculations.calculate_mahr_range(1000, "high_school", 40)
        assert result["factors"]["experience"] == 1.3


class TestWeddingBudget:
    def test_over_budget_is_reported_as_warning(self):
        summary = calculations.wedding_budget_summary({
            "venue_planned": Decimal("5000"),
            "venue_spent": Decimal("5500"),
            "catering_planned": Decimal("3000"),
            "catering_spent": Decimal("1000"),
        })
        venue = summary["categories"][0]
        assert venue["category"] == "venue"
        assert venue["over_budget"] is True
        assert summary["warnings"] == {"venue_spent": "Over budget by $500.00"}
        assert summary["total_planned"] == Decimal("8000")
        assert summary["total_spent"] == Decimal("6500")
        assert summary["remaining"] == Decimal("1500")
        assert summary["percentage_spent"] == 81.25

    def test_breakdown(self):
        result = calculations.calculate_wedding_breakdown(20000, 100, "moderate", True, False, False)
        assert result["venue"] == 6000
        assert result["catering"] == 6000
        assert result["videography"] == 0
        assert result["music"] == 400
        assert result["per_guest"] == 200
        assert result["miscellaneous"] >= 0


class TestSavings:
    def test_goal_progress(self):
        progress = calculations.goal_progress(1000, 250)
        assert progress["progress"] == 25.0
        assert progress["remaining"] == Decimal("750")
        assert progress["is_complete"] is False
        assert calculations.goal_progress(1000, 1000)["is_complete"] is True

    def test_progress_is_capped_at_100(self):
        assert calculations.goal_progress(100, 150)["progress"] == 100.0

    def test_zero_goal_is_never_complete(self):
        progress = calculations.goal_progress(0, 50)
        assert progress["progress"] == 0.0
        assert progress["is_complete"] is False

    def test_summary_includes_named_other_goal(self):
        summary = calculations.savings_summary({
            "emergency_fund_goal": 1000,
            "emergency_fund_current": 1000,
            "house_goal": 3000,
            "house_current": 0,
            "other_goal_name": "Hajj",
            "other_goal_amount": 1000,
            "other_goal_current": 500,
        })
        assert [g["name"] for g in summary["goals"]] == ["Emergency Fund", "House Down Payment", "Hajj"]
        assert summary["total_goal"] == Decimal("5000")
        assert summary["total_saved"] == Decimal("1500")
        assert summary["overall_progress"] == 30.0
        assert summary["completed_goals"] == 1

    def test_savings_plan(self):
        plan = calculations.calculate_savings_plan(
            12000, 2000, 5000, 4000, date(2025, 11, 1), today=date(2025, 1, 15)
        )
        assert plan["monthly_required"] == 1000
        assert plan["months_to_goal"] == 10
        assert plan["projected_date"] == date(2025, 11, 15)
        assert plan["is_achievable"] is True
        assert plan["savings_rate"] == 20

    def test_savings_plan_without_disposable_income(self):
        plan = calculations.calculate_savings_plan(1000, 0, 2000, 2500, date(2026, 1, 1), today=date(2025, 1, 1))
        assert plan["months_to_goal"] is None
        assert plan["projected_date"] is None
        assert plan["is_achievable"] is False


def test_cost_split():
    result = calculations.calculate_cost_split(
        10000, 2000, 3000, [{"name": "Bride's family", "amount": 4000}]
    )
    assert result["bride_percent"] == 20
    assert result["groom_percent"] == 30
    assert result["family_percent"] == 40
    assert result["remaining"] == 1000
    assert result["is_fully_covered"] is False
    assert [entry["name"] for entry in result["breakdown"]] == ["Bride", "Groom", "Bride's family"]


def test_rounding_and_completion():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert completion_percent(1, 3) == 33
    assert completion_percent(2, 3) == 67
    assert completion_percent(0, 0) == 0
