from ._models import AggregationResult, Hit, Results

__all__ = [
    "AggregationResult",
    "Hit",
    "Results",
]
