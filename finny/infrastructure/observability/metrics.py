"""Prometheus metrics for monitoring budgeting activity and gamification"""

from prometheus_client import Counter, Histogram

# Entry metrics
entries_created_counter = Counter(
    "finny_entries_created_total",
    "Income, expense and bill entries created",
    ["kind"],  # income | expense | bill
)

entries_deleted_counter = Counter(
    "finny_entries_deleted_total",
    "Income, expense and bill entries deleted",
    ["kind"],
)

# Bill payment metrics
bill_payment_counter = Counter(
    "finny_bill_payments_total",
    "Recorded bill payments",
    ["timeliness"],  # on_time | late
)

# Gamification metrics
experience_awarded_counter = Counter(
    "finny_experience_awarded_total",
    "XP granted to users",
    ["source"],  # bill_payment
)

level_up_counter = Counter(
    "finny_level_ups_total",
    "Level-ups resolved by the gamification engine",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_bill_payment(on_time: bool, experience_gained: int, leveled_up: bool) -> None:
    """Record payment timeliness and the XP it produced"""
    bill_payment_counter.labels(timeliness="on_time" if on_time else "late").inc()

    if experience_gained:
        experience_awarded_counter.labels(source="bill_payment").inc(experience_gained)
    if leveled_up:
        level_up_counter.inc()
