from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from explorer.aggregations import Aggregation
from explorer.core import DataModel
from explorer.query_properties import QueryProperty
from explorer.syntax import BoolQuery, SortOrder, SyntaxNode


@runtime_checkable
class SearchableModel(Protocol):
    """Model bound to a search index."""

    def searchable_as(self) -> str: ...


@runtime_checkable
class SearchableFields(Protocol):
    """Model declaring the fields a free-text query searches by default."""

    def get_searchable_fields(self) -> list[str]: ...


class Order(DataModel):
    """Column ordering of a higher-level query.

    Attributes:
        column: Column (field) name.
        direction: "asc" or "desc".
    """

    column: str
    direction: str = SortOrder.ASC.value


class SearchSource(DataModel):
    """Higher-level query a search command is wrapped from.

    Attributes:
        index: Index name. Falls back to the model's index.
        model: Model bound to the index.
        query: Free-text query.
        must: Must clauses.
        should: Should clauses.
        filter: Filter clauses.
        wheres: Field equality conditions.
        where_ins: Field membership conditions.
        limit: Maximum number of hits.
        offset: Number of hits to skip.
        orders: Column orderings.
        fields: Field projection.
        aggregations: Aggregations keyed by name.
        minimum_should_match: Should clause threshold.
        compound: Bool query the command starts from.
        query_properties: Top-level request properties.
        callback: Called once with the populated command.
    """

    index: str | None = None
    model: Any = None
    query: str | None = None
    must: list[SyntaxNode] = []
    should: list[SyntaxNode] = []
    filter: list[SyntaxNode] = []
    wheres: dict[str, Any] = {}
    where_ins: dict[str, list[Any]] = {}
    limit: int | None = None
    offset: int | None = None
    orders: list[Order] = []
    fields: list[str] = []
    aggregations: dict[str, Aggregation] = {}
    minimum_should_match: str | int | None = None
    compound: BoolQuery | None = None
    query_properties: list[QueryProperty] = []
    callback: Callable[[Any], None] | None = None
