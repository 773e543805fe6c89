"""Unit tests for the client-side budget store"""

import pytest
from finny.domain.store import BudgetState, BudgetStore, new_entry
from helpers import entry


def test_new_entry_has_local_id():
    created = new_entry(100, "Food")

    assert created.id.startswith("local-")
    assert created.frequency == "monthly"
    assert new_entry(100, "Food").id != created.id


def test_add_income_recomputes_calculations_and_health():
    store = BudgetStore()
    store.add_income(entry(5000, "Salary"))

    assert store.calculations.total_monthly_income == 5000
    assert store.calculations.monthly_balance == pytest.approx(3900)
    assert store.gamification.health_score == 64


def test_add_then_remove_expense_restores_totals():
    store = BudgetStore(BudgetState(incomes=(entry(5000, "Salary"),)))
    before = store.calculations

    food = entry(120, "Food")
    store.add_expense(food)
    assert store.calculations.total_monthly_expenses == 120

    store.remove_expense(food.id)
    assert store.calculations == before


def test_remove_unknown_id_changes_nothing():
    store = BudgetStore(BudgetState(expenses=(entry(50, "Fun"),)))
    store.remove_expense("missing")

    assert len(store.state.expenses) == 1


def test_remove_duplicate_id_drops_only_latest_entry():
    fun = entry(50, "Fun", entry_id="x")
    store = BudgetStore(BudgetState(expenses=(fun,)))
    before = store.calculations

    store.add_expense(entry(120, "Food", entry_id="x"))
    store.remove_expense("x")

    assert store.state.expenses == (fun,)
    assert store.calculations.total_monthly_expenses == 50
    assert store.calculations == before


def test_insert_income_restores_position():
    first, second = entry(0.1, "Tips", entry_id="a"), entry(0.2, "Tips", entry_id="b")
    store = BudgetStore(BudgetState(incomes=(first, second)))

    store.remove_income("a")
    store.insert_income(0, first)

    assert store.state.incomes == (first, second)


def test_replace_income_swaps_temporary_id():
    store = BudgetStore()
    temporary = new_entry(1000, "Freelance")
    store.add_income(temporary)

    saved = entry(1000, "Freelance", entry_id="server-id")
    store.replace_income(temporary.id, saved)

    assert [i.id for i in store.state.incomes] == ["server-id"]


def test_employment_mode_changes_taxes():
    store = BudgetStore(BudgetState(incomes=(entry(5000, "Clients"),)))
    full_time = store.calculations.monthly_balance

    store.set_employment_mode("contract")

    assert store.state.employment_mode == "contract"
    assert store.calculations.monthly_balance == pytest.approx(full_time - 382.5)


def test_subscribers_see_each_change_until_unsubscribed():
    store = BudgetStore()
    seen = []
    unsubscribe = store.subscribe(lambda state: seen.append(state.calculations.total_monthly_expenses))

    store.add_expense(entry(100, "Food"))
    store.add_expense(entry(50, "Fun"))
    unsubscribe()
    store.clear_expenses()

    assert seen == [100, 150]


def test_set_gamification_does_not_notify_experience_listeners():
    store = BudgetStore()
    calls = []
    store.on_experience_change(calls.append)

    store.set_gamification(level=3, experience=40, streak=2)

    assert calls == []
    assert store.gamification.level == 3
    assert store.gamification.next_level_experience == 450
    assert store.gamification.streak == 2


def test_add_experience_notifies_listeners():
    store = BudgetStore()
    store.set_gamification(level=1, experience=90)
    calls = []
    store.on_experience_change(calls.append)

    state = store.add_experience(20)

    assert state.level == 2
    assert state.experience == 10
    assert calls == [state]
