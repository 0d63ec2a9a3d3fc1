from ._models import (
    Aggregation,
    AvgAggregation,
    MaxAggregation,
    MinAggregation,
    NestedAggregation,
    TermsAggregation,
)

__all__ = [
    "Aggregation",
    "AvgAggregation",
    "MaxAggregation",
    "MinAggregation",
    "NestedAggregation",
    "TermsAggregation",
]
