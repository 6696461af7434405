"""Services for queue scoring, workload balancing, arrivals and analytics."""

from .arrivals import arrivals_in_minute, exponential_gap, random_drink, sample_customer_type
from .scoring import PriorityBreakdown, calculate_fairness_penalty, calculate_priority, score_components
from .workload import choose_for_workload, workload_ratio

__all__ = [
    "arrivals_in_minute",
    "exponential_gap",
    "random_drink",
    "sample_customer_type",
    "PriorityBreakdown",
    "calculate_fairness_penalty",
    "calculate_priority",
    "score_components",
    "choose_for_workload",
    "workload_ratio",
]
