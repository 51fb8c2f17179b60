"""Financial tracker models: monthly budget, mahr, wedding budget, savings goals."""

from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, Numeric, String, Text

from components.core.database import Base, TimestampMixin

MAHR_STATUSES = ("Paid", "Pending", "Partial")

INCOME_FIELDS = ("income_his", "income_hers")
FIXED_EXPENSE_FIELDS = (
    "expense_housing",
    "expense_utilities",
    "expense_transportation",
    "expense_food",
    "expense_insurance",
    "expense_debt",
)
VARIABLE_EXPENSE_FIELDS = (
    "expense_entertainment",
    "expense_dining",
    "expense_clothing",
    "expense_gifts",
    "expense_charity",
)
EXPENSE_FIELDS = FIXED_EXPENSE_FIELDS + VARIABLE_EXPENSE_FIELDS

WEDDING_CATEGORIES = ("venue", "catering", "photography", "clothing", "decor", "invitations", "other")

# (label, goal column, current column)
SAVINGS_GOALS = (
    ("Emergency Fund", "emergency_fund_goal", "emergency_fund_current"),
    ("House Down Payment", "house_goal", "house_current"),
)


def _money():
    return Column(Numeric(12, 2), nullable=False, default=0)


def _owner():
    return Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )


class Budget(TimestampMixin, Base):
    """Monthly household budget, one per user."""
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = _owner()

    income_his = _money()
    income_hers = _money()

    expense_housing = _money()
    expense_utilities = _money()
    expense_transportation = _money()
    expense_food = _money()
    expense_insurance = _money()
    expense_debt = _money()

    expense_entertainment = _money()
    expense_dining = _money()
    expense_clothing = _money()
    expense_gifts = _money()
    expense_charity = _money()


class Mahr(TimestampMixin, Base):
    """Mahr agreement and its payment state, one per user."""
    __tablename__ = "mahr"
    __table_args__ = (
        CheckConstraint("status IN ('Paid', 'Pending', 'Partial')", name="ck_mahr_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = _owner()
    amount = _money()
    amount_paid = _money()
    status = Column(String(10), nullable=False, default="Pending")
    deferred_schedule = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)


class WeddingBudget(TimestampMixin, Base):
    """Planned versus spent per wedding category, one per user."""
    __tablename__ = "wedding_budgets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = _owner()

    venue_planned = _money()
    venue_spent = _money()
    catering_planned = _money()
    catering_spent = _money()
    photography_planned = _money()
    photography_spent = _money()
    clothing_planned = _money()
    clothing_spent = _money()
    decor_planned = _money()
    decor_spent = _money()
    invitations_planned = _money()
    invitations_spent = _money()
    other_planned = _money()
    other_spent = _money()


class SavingsGoals(TimestampMixin, Base):
    """Two predefined savings goals plus one named custom goal, one row per user."""
    __tablename__ = "savings_goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = _owner()

    emergency_fund_goal = _money()
    emergency_fund_current = _money()
    house_goal = _money()
    house_current = _money()

    other_goal_name = Column(String(100), nullable=True)
    other_goal_amount = _money()
    other_goal_current = _money()
