"""Budget store - explicit client state with synchronous recomputation and subscribers"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, List, Optional, Sequence, Tuple
from finny.domain.models import EmploymentMode, FinancialCalculations, Frequency, GamificationState, MoneyEntry
from finny.domain.calculations import calculate_financials
from finny.domain.gamification import add_experience, health_score_for, initial_state


@dataclass(frozen=True)
class BudgetState:
    """Snapshot of everything the dashboard renders"""

    employment_mode: str = EmploymentMode.FULL_TIME.value
    incomes: Tuple[MoneyEntry, ...] = ()
    expenses: Tuple[MoneyEntry, ...] = ()
    calculations: FinancialCalculations = field(default_factory=FinancialCalculations)
    gamification: GamificationState = field(default_factory=initial_state)


Listener = Callable[[BudgetState], None]
ExperienceListener = Callable[[GamificationState], None]


def new_entry(
    amount: float,
    label: str,
    frequency: str = Frequency.MONTHLY.value,
    description: Optional[str] = None,
) -> MoneyEntry:
    """Entry with a locally generated id, replaced by the server id once saved"""
    return MoneyEntry(
        id=f"local-{uuid.uuid4().hex[:9]}",
        amount=amount,
        frequency=frequency,
        label=label,
        description=description,
    )


def recompute(state: BudgetState) -> BudgetState:
    """Rebuild calculations and health score from the entity lists"""
    calculations = calculate_financials(state.incomes, state.expenses, state.employment_mode)
    health_score = health_score_for(calculations, state.incomes, state.expenses)
    return replace(
        state,
        calculations=calculations,
        gamification=replace(state.gamification, health_score=health_score),
    )


def locate(entries: Sequence[MoneyEntry], entry_id: str) -> Optional[int]:
    """Index of the most recently added entry with `entry_id`"""
    for index in range(len(entries) - 1, -1, -1):
        if entries[index].id == entry_id:
            return index
    return None


def _without(entries: Tuple[MoneyEntry, ...], entry_id: str) -> Tuple[MoneyEntry, ...]:
    """Drop only the last entry with `entry_id` so an earlier duplicate survives"""
    index = locate(entries, entry_id)
    if index is None:
        return entries
    return entries[:index] + entries[index + 1 :]


def _inserted(entries: Tuple[MoneyEntry, ...], index: int, entry: MoneyEntry) -> Tuple[MoneyEntry, ...]:
    return entries[:index] + (entry,) + entries[index:]


def _swap(entries: Iterable[MoneyEntry], entry_id: str, entry: MoneyEntry) -> Tuple[MoneyEntry, ...]:
    return tuple(entry if e.id == entry_id else e for e in entries)


class BudgetStore:
    """
    Holds incomes, expenses, employment mode, calculations and gamification.

    Every entity mutation replaces the whole state in one step (lists,
    calculations and health score together) and then notifies subscribers.
    XP changes go through `add_experience`, which additionally notifies the
    experience listeners so the new level can be persisted.
    """

    def __init__(self, state: BudgetState | None = None):
        self._state = recompute(state or BudgetState())
        self._listeners: List[Listener] = []
        self._experience_listeners: List[ExperienceListener] = []

    @property
    def state(self) -> BudgetState:
        return self._state

    @property
    def calculations(self) -> FinancialCalculations:
        return self._state.calculations

    @property
    def gamification(self) -> GamificationState:
        return self._state.gamification

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a state listener; returns the matching unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def on_experience_change(self, listener: ExperienceListener) -> None:
        self._experience_listeners.append(listener)

    def _commit(self, state: BudgetState) -> None:
        self._state = recompute(state)
        for listener in list(self._listeners):
            listener(self._state)

    # Incomes

    def add_income(self, income: MoneyEntry) -> None:
        self._commit(replace(self._state, incomes=self._state.incomes + (income,)))

    def remove_income(self, income_id: str) -> None:
        self._commit(replace(self._state, incomes=_without(self._state.incomes, income_id)))

    def insert_income(self, index: int, income: MoneyEntry) -> None:
        """Put an income back at its previous position"""
        self._commit(replace(self._state, incomes=_inserted(self._state.incomes, index, income)))

    def replace_income(self, income_id: str, income: MoneyEntry) -> None:
        self._commit(replace(self._state, incomes=_swap(self._state.incomes, income_id, income)))

    def set_incomes(self, incomes: Iterable[MoneyEntry]) -> None:
        self._commit(replace(self._state, incomes=tuple(incomes)))

    def clear_incomes(self) -> None:
        self.set_incomes(())

    # Expenses

    def add_expense(self, expense: MoneyEntry) -> None:
        self._commit(replace(self._state, expenses=self._state.expenses + (expense,)))

    def remove_expense(self, expense_id: str) -> None:
        self._commit(replace(self._state, expenses=_without(self._state.expenses, expense_id)))

    def insert_expense(self, index: int, expense: MoneyEntry) -> None:
        self._commit(replace(self._state, expenses=_inserted(self._state.expenses, index, expense)))

    def replace_expense(self, expense_id: str, expense: MoneyEntry) -> None:
        self._commit(replace(self._state, expenses=_swap(self._state.expenses, expense_id, expense)))

    def set_expenses(self, expenses: Iterable[MoneyEntry]) -> None:
        self._commit(replace(self._state, expenses=tuple(expenses)))

    def clear_expenses(self) -> None:
        self.set_expenses(())

    # Settings and gamification

    def set_employment_mode(self, mode: str) -> None:
        self._commit(replace(self._state, employment_mode=getattr(mode, "value", mode)))

    def set_gamification(self, level: int, experience: int, streak: int = 0) -> None:
        """Load persisted XP state without notifying experience listeners"""
        loaded = replace(initial_state(level, experience, streak), health_score=self.gamification.health_score)
        self._commit(replace(self._state, gamification=loaded))

    def add_experience(self, amount: int) -> GamificationState:
        gamification = add_experience(self._state.gamification, amount)
        self._commit(replace(self._state, gamification=gamification))
        for listener in list(self._experience_listeners):
            listener(self.gamification)
        return self.gamification
