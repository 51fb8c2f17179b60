"""Repositories for the financial trackers."""

from components.core.repository import UserScopedRepository
from components.financial.models import Budget, Mahr, SavingsGoals, WeddingBudget


class BudgetRepository(UserScopedRepository[Budget]):
    model = Budget


class MahrRepository(UserScopedRepository[Mahr]):
    model = Mahr


class WeddingBudgetRepository(UserScopedRepository[WeddingBudget]):
    model = WeddingBudget


class SavingsGoalsRepository(UserScopedRepository[SavingsGoals]):
    model = SavingsGoals
