"""Optimistic sync between the local BudgetStore and the Finny API"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Awaitable, Callable, Optional, Set

from finny.domain.exceptions import FinnyAPIError
from finny.domain.gamification import EXPENSE_ENTRY_XP, INCOME_SETTINGS_XP, income_entry_xp
from finny.domain.models import Frequency, GamificationState
from finny.domain.store import BudgetStore, locate, new_entry
from finny.infrastructure.clients.finny_api import FinnyAPIClient


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a synced mutation; `error` is set when the server call failed"""

    ok: bool
    value: Any = None
    error: Optional[str] = None


class BudgetSync:
    """
    Applies store mutations immediately and confirms them with the server.

    Every mutation follows the same shape: apply locally, await the API,
    and on failure restore the previous local state. XP is only awarded
    after the server accepted the change. Level/experience changes are
    pushed to the server in the background.
    """

    def __init__(self, store: BudgetStore, client: FinnyAPIClient):
        self.store = store
        self.client = client
        self._pending: Set[asyncio.Task] = set()
        store.on_experience_change(self._schedule_experience_sync)

    async def _optimistic(
        self,
        action: str,
        apply: Callable[[], None],
        call: Callable[[], Awaitable[Any]],
        rollback: Callable[[], None],
    ) -> MutationResult:
        apply()
        try:
            value = await call()
        except FinnyAPIError as e:
            rollback()
            logging.error(f"{action} failed, local change rolled back: {e}", extra={"step": action})
            return MutationResult(ok=False, error=str(e))
        return MutationResult(ok=True, value=value)

    async def load(self) -> MutationResult:
        """Replace local state with the user's profile, incomes and expenses"""
        try:
            user = await self.client.get_user()
            experience = await self.client.get_experience()
            incomes = await self.client.list_incomes()
            expenses = await self.client.list_expenses()
        except FinnyAPIError as e:
            logging.error(f"Loading budget failed: {e}", extra={"step": "load"})
            return MutationResult(ok=False, error=str(e))

        self.store.set_employment_mode(user["employment_mode"])
        self.store.set_gamification(experience["level"], experience["experience"], experience.get("streak", 0))
        self.store.set_incomes(incomes)
        self.store.set_expenses(expenses)
        return MutationResult(ok=True, value=self.store.state)

    # Incomes

    async def add_income(
        self,
        amount: float,
        source: str,
        frequency: str = Frequency.MONTHLY.value,
        description: Optional[str] = None,
        received_on: Optional[date] = None,
    ) -> MutationResult:
        """Add an income (shown at once), then swap in the server id and award XP"""
        entry = new_entry(amount, source, frequency, description)
        on = (received_on or date.today()).isoformat()

        result = await self._optimistic(
            "add_income",
            apply=lambda: self.store.add_income(entry),
            call=lambda: self.client.create_income(entry, on),
            rollback=lambda: self.store.remove_income(entry.id),
        )
        if result.ok:
            self.store.replace_income(entry.id, result.value)
            self.store.add_experience(income_entry_xp(amount))
        return result

    async def remove_income(self, income_id: str) -> MutationResult:
        incomes = self.store.state.incomes
        index = locate(incomes, income_id)
        if index is None:
            return MutationResult(ok=False, error=f"Income {income_id} not found")

        return await self._optimistic(
            "remove_income",
            apply=lambda: self.store.remove_income(income_id),
            call=lambda: self.client.delete_income(income_id),
            rollback=lambda: self.store.insert_income(index, incomes[index]),
        )

    # Expenses

    async def add_expense(
        self,
        amount: float,
        category: str,
        frequency: str = Frequency.MONTHLY.value,
        description: Optional[str] = None,
    ) -> MutationResult:
        entry = new_entry(amount, category, frequency, description)

        result = await self._optimistic(
            "add_expense",
            apply=lambda: self.store.add_expense(entry),
            call=lambda: self.client.create_expense(entry),
            rollback=lambda: self.store.remove_expense(entry.id),
        )
        if result.ok:
            self.store.replace_expense(entry.id, result.value)
            self.store.add_experience(EXPENSE_ENTRY_XP)
        return result

    async def remove_expense(self, expense_id: str) -> MutationResult:
        expenses = self.store.state.expenses
        index = locate(expenses, expense_id)
        if index is None:
            return MutationResult(ok=False, error=f"Expense {expense_id} not found")

        return await self._optimistic(
            "remove_expense",
            apply=lambda: self.store.remove_expense(expense_id),
            call=lambda: self.client.delete_expense(expense_id),
            rollback=lambda: self.store.insert_expense(index, expenses[index]),
        )

    # Settings

    async def save_income_settings(
        self,
        income: float,
        employment_mode: str,
        income_frequency: str = Frequency.MONTHLY.value,
    ) -> MutationResult:
        """Switch employment mode (taxes recompute at once) and persist the declared income"""
        previous_mode = self.store.state.employment_mode

        result = await self._optimistic(
            "save_income_settings",
            apply=lambda: self.store.set_employment_mode(employment_mode),
            call=lambda: self.client.update_income_settings(income, employment_mode, income_frequency),
            rollback=lambda: self.store.set_employment_mode(previous_mode),
        )
        if result.ok:
            self.store.add_experience(INCOME_SETTINGS_XP)
        return result

    # Experience

    def _schedule_experience_sync(self, state: GamificationState) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logging.warning("No running event loop, experience not synced", extra={"step": "experience_sync"})
            return

        task = loop.create_task(self.client.update_experience(state.level, state.experience))
        self._pending.add(task)
        task.add_done_callback(self._experience_synced)

    def _experience_synced(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logging.error(f"Experience sync failed: {error}", extra={"step": "experience_sync"})

    async def drain(self) -> None:
        """Wait for background experience syncs to finish"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
