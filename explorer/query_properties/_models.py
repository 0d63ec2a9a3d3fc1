from __future__ import annotations

from abc import abstractmethod
from typing import Any

from explorer.core import DataModel


class QueryProperty(DataModel):
    """Top-level request property.

    A property renders zero or more top-level keys that are merged
    into the request document next to "query".
    """

    @abstractmethod
    def build(self) -> dict[str, Any]:
        raise NotImplementedError


class SourceFilter(QueryProperty):
    """Source projection.

    Attributes:
        includes: Field patterns to return.
        excludes: Field patterns to leave out.
    """

    includes: list[str] = []
    excludes: list[str] = []

    @staticmethod
    def empty() -> SourceFilter:
        return SourceFilter()

    def include(self, *fields: str) -> SourceFilter:
        return self.model_copy(
            update={"includes": [*self.includes, *fields]}
        )

    def exclude(self, *fields: str) -> SourceFilter:
        return self.model_copy(
            update={"excludes": [*self.excludes, *fields]}
        )

    def build(self) -> dict[str, Any]:
        source: dict[str, Any] = {}
        if self.includes:
            source["include"] = list(self.includes)
        if self.excludes:
            source["exclude"] = list(self.excludes)
        if not source:
            return {}
        return {"_source": source}


class TrackTotalHits(QueryProperty):
    """Accuracy of the total hit count.

    Attributes:
        value:
            True to count every hit, False to skip counting,
            or the number of hits to count accurately.
    """

    value: bool | int = True

    def __init__(self, value: bool | int = True, **kwargs: Any):
        super().__init__(value=value, **kwargs)

    @staticmethod
    def all() -> TrackTotalHits:
        return TrackTotalHits(True)

    @staticmethod
    def none() -> TrackTotalHits:
        return TrackTotalHits(False)

    def build(self) -> dict[str, Any]:
        return {"track_total_hits": self.value}
