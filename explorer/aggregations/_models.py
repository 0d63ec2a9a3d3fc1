from __future__ import annotations

from abc import abstractmethod
from typing import Any

from explorer.core import DataModel


class Aggregation(DataModel):
    """Aggregation definition."""

    @abstractmethod
    def build(self) -> dict[str, Any]:
        raise NotImplementedError


class TermsAggregation(Aggregation):
    """Bucket per distinct field value.

    Attributes:
        field: Field name.
        size: Number of buckets returned.
    """

    field: str
    size: int = 10

    def __init__(self, field: str, size: int = 10, **kwargs: Any):
        super().__init__(field=field, size=size, **kwargs)

    def build(self) -> dict[str, Any]:
        return {"terms": {"field": self.field, "size": self.size}}


class _MetricAggregation(Aggregation):
    field: str

    def __init__(self, field: str, **kwargs: Any):
        super().__init__(field=field, **kwargs)


class MaxAggregation(_MetricAggregation):
    def build(self) -> dict[str, Any]:
        return {"max": {"field": self.field}}


class MinAggregation(_MetricAggregation):
    def build(self) -> dict[str, Any]:
        return {"min": {"field": self.field}}


class AvgAggregation(_MetricAggregation):
    def build(self) -> dict[str, Any]:
        return {"avg": {"field": self.field}}


class NestedAggregation(Aggregation):
    """Aggregations evaluated on nested documents.

    Attributes:
        path: Path of the nested field.
        aggregations: Child aggregations keyed by name.
    """

    path: str
    aggregations: dict[str, Aggregation] = {}

    def __init__(
        self,
        path: str,
        aggregations: dict[str, Aggregation] | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            path=path, aggregations=dict(aggregations or {}), **kwargs
        )

    def build(self) -> dict[str, Any]:
        return {
            "nested": {"path": self.path},
            "aggs": {
                name: aggregation.build()
                for name, aggregation in self.aggregations.items()
            },
        }
