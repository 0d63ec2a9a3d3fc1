from __future__ import annotations

from typing import Any, Iterator, Mapping

from pydantic import ValidationError as PydanticValidationError

from explorer.core import DataModel
from explorer.core.exceptions import ResponseFormatError


class Hit(DataModel):
    """Search hit.

    Attributes:
        id: Document id.
        index: Index the document was found in.
        score: Match score. None when sorting on other fields.
        source: Document source.
        fields: Values of the requested field projection.
    """

    id: str | None = None
    index: str | None = None
    score: float | None = None
    source: dict[str, Any] = {}
    fields: dict[str, Any] | None = None


class AggregationResult(DataModel):
    """Result of a single aggregation.

    Attributes:
        name: Aggregation name.
        buckets: Raw buckets of a bucket aggregation.
        value: Value of a metric aggregation.
    """

    name: str
    buckets: list[dict[str, Any]] = []
    value: Any = None

    def values(self) -> list[dict[str, Any]]:
        return self.buckets


class Results:
    """Search results.

    Iterating yields the returned hits; every iteration starts over
    from the response held by the instance.
    """

    raw: dict[str, Any]

    _total: int
    _hits: list[Hit]
    _aggregations: list[AggregationResult]

    def __init__(self, raw: Mapping[str, Any]):
        if not isinstance(raw, Mapping):
            raise ResponseFormatError(
                f"Expected a response document. Got: {type(raw).__name__}"
            )
        self.raw = dict(raw)
        hits_block = self.raw.get("hits")
        if not isinstance(hits_block, Mapping):
            raise ResponseFormatError("Response does not contain hits")
        self._total = self._convert_total(hits_block.get("total"))
        hits = hits_block.get("hits")
        if not isinstance(hits, list):
            raise ResponseFormatError("Response does not contain a hit list")
        self._hits = [self._convert_hit(hit) for hit in hits]
        self._aggregations = self._convert_aggregations(
            self.raw.get("aggregations", {})
        )

    def count(self) -> int:
        """Total number of matching documents."""
        return self._total

    def hits(self) -> list[Hit]:
        return list(self._hits)

    def aggregations(self) -> list[AggregationResult]:
        return list(self._aggregations)

    def __iter__(self) -> Iterator[Hit]:
        return iter(self._hits)

    def __len__(self) -> int:
        return len(self._hits)

    def _convert_total(self, total: Any) -> int:
        if isinstance(total, Mapping):
            total = total.get("value")
        if isinstance(total, bool) or not isinstance(total, int):
            raise ResponseFormatError("Response does not contain a hit total")
        return total

    def _convert_hit(self, hit: Any) -> Hit:
        if not isinstance(hit, Mapping):
            raise ResponseFormatError("Response hit format error")
        try:
            return Hit(
                id=hit.get("_id"),
                index=hit.get("_index"),
                score=hit.get("_score"),
                source=hit.get("_source", {}),
                fields=hit.get("fields"),
            )
        except PydanticValidationError as e:
            raise ResponseFormatError("Response hit format error") from e

    def _convert_aggregations(
        self, aggregations: Any
    ) -> list[AggregationResult]:
        if not isinstance(aggregations, Mapping):
            raise ResponseFormatError("Response aggregations format error")
        results: list[AggregationResult] = []
        for name, aggregation in aggregations.items():
            if not isinstance(aggregation, Mapping):
                raise ResponseFormatError(
                    f"Response aggregation {name} format error"
                )
            # Nested aggregations carry their children next to doc_count.
            if "doc_count" in aggregation and "buckets" not in aggregation:
                for child_name, child in aggregation.items():
                    if isinstance(child, Mapping):
                        results.append(
                            self._convert_aggregation(child_name, child)
                        )
                continue
            results.append(self._convert_aggregation(name, aggregation))
        return results

    def _convert_aggregation(
        self, name: str, aggregation: Mapping[str, Any]
    ) -> AggregationResult:
        try:
            return AggregationResult(
                name=name,
                buckets=aggregation.get("buckets", []),
                value=aggregation.get("value"),
            )
        except PydanticValidationError as e:
            raise ResponseFormatError(
                f"Response aggregation {name} format error"
            ) from e
