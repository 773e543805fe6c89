"""Unit tests for the gamification engine"""

import pytest
from finny.domain.gamification import (
    add_experience,
    calculate_health_score,
    health_score_for,
    income_entry_xp,
    initial_state,
    level_for_experience,
    level_threshold,
    next_level_experience,
)
from finny.domain.calculations import calculate_financials
from finny.domain.exceptions import InvalidExperienceError
from helpers import entry


def test_initial_state():
    state = initial_state()

    assert state.level == 1
    assert state.experience == 0
    assert state.next_level_experience == 100


def test_experience_accumulates_below_target():
    state = add_experience(initial_state(), 50)

    assert state.level == 1
    assert state.experience == 50
    assert state.next_level_experience == 100


def test_level_up_keeps_only_overflow():
    """Level 1 with 90/100 XP gaining 20 -> level 2 with 10 XP"""
    state = add_experience(initial_state(1, 90), 20)

    assert state.level == 2
    assert state.experience == 10
    assert state.next_level_experience == 250


def test_reaching_target_exactly_levels_up():
    state = add_experience(initial_state(), 100)

    assert state.level == 2
    assert state.experience == 0


def test_large_gain_skips_levels():
    # 460 total covers the level 4 threshold (450)
    state = add_experience(initial_state(), 460)

    assert state.level == 4
    assert state.experience == 360
    assert state.next_level_experience == 700


def test_streak_is_untouched_by_experience():
    state = add_experience(initial_state(2, 0, streak=4), 30)

    assert state.streak == 4


def test_negative_experience_rejected():
    with pytest.raises(InvalidExperienceError):
        add_experience(initial_state(), -5)


def test_thresholds_past_table():
    """Beyond level 10 every level costs a flat 350 XP"""
    assert level_threshold(10) == 2700
    assert level_threshold(11) == 3500
    assert level_threshold(12) == 3850
    assert next_level_experience(10) == 3500
    assert next_level_experience(11) == 3850


@pytest.mark.parametrize(
    "experience,level",
    [(0, 1), (99, 1), (100, 2), (449, 3), (2700, 10), (3499, 10), (3500, 11), (3850, 12)],
)
def test_level_for_experience(experience, level):
    assert level_for_experience(experience) == level


def test_level_up_past_table():
    state = add_experience(initial_state(10, 3450), 100)

    assert state.level == 11
    assert state.experience == 50
    assert state.next_level_experience == 3850


@pytest.mark.parametrize("amount,xp", [(50, 10), (250, 12), (2000, 30), (5000, 30)])
def test_income_entry_xp(amount, xp):
    assert income_entry_xp(amount) == xp


def test_health_score_without_expenses():
    # ratio 100 (no expenses), 1 source, 0 expenses, balance capped at 100
    score = calculate_health_score(5000, 0, 3900, income_source_count=1, expense_count=0)

    assert score == 64


def test_health_score_without_income():
    assert calculate_health_score(0, 0, 0, income_source_count=0, expense_count=0) == 40


def test_health_score_in_deficit():
    # ratio 25, diversity 20, tracking 10, balance floored at 0
    score = calculate_health_score(1000, 2000, -1000, income_source_count=1, expense_count=1)

    assert score == 16


def test_health_score_caps_at_100():
    score = calculate_health_score(10_000, 1000, 5000, income_source_count=7, expense_count=15)

    assert score == 100


def test_health_score_counts_distinct_income_sources():
    incomes = [entry(2000, "Acme", entry_id="1"), entry(500, "Acme", entry_id="2")]
    calculations = calculate_financials(incomes, [])

    single = health_score_for(calculations, incomes, [])
    diversified = health_score_for(calculations, incomes + [entry(0.01, "Etsy")], [])

    assert diversified - single == 4
