from __future__ import annotations

from enum import Enum
from typing import Any, Iterable

from explorer.core import Validator
from explorer.core.exceptions import InvalidArgumentError

from ._models import SyntaxNode


class QueryType(str, Enum):
    """Clause group of a bool query.

    Attributes:
        MUST: Required, contributes to the score.
        SHOULD: Optional, contributes to the score.
        FILTER: Required, does not affect the score.
    """

    MUST = "must"
    SHOULD = "should"
    FILTER = "filter"


class BoolQuery(SyntaxNode):
    """Bool compound query.

    Attributes:
        must: Must clauses.
        should: Should clauses.
        filter: Filter clauses.
        min_should_match:
            Minimum number or percentage of should clauses
            that have to match.
    """

    must: list[SyntaxNode] = []
    should: list[SyntaxNode] = []
    filter: list[SyntaxNode] = []
    min_should_match: str | int | None = None

    def add(
        self,
        query_type: QueryType | str,
        query: SyntaxNode,
    ) -> BoolQuery:
        clause = self._get_clause(query_type)
        clause.append(Validator.instance_of(query, SyntaxNode))
        return self

    def add_many(
        self,
        query_type: QueryType | str,
        queries: Iterable[SyntaxNode],
    ) -> BoolQuery:
        clause = self._get_clause(query_type)
        clause.extend(Validator.all_instance_of(queries, SyntaxNode))
        return self

    def minimum_should_match(self, value: str | int | None) -> BoolQuery:
        self.min_should_match = value
        return self

    def clone(self) -> BoolQuery:
        return self.model_copy(
            update={
                "must": list(self.must),
                "should": list(self.should),
                "filter": list(self.filter),
            }
        )

    def build(self) -> dict[str, Any]:
        query: dict[str, Any] = {
            QueryType.MUST.value: [q.build() for q in self.must],
            QueryType.SHOULD.value: [q.build() for q in self.should],
            QueryType.FILTER.value: [q.build() for q in self.filter],
        }
        if self.min_should_match is not None:
            query["minimum_should_match"] = self.min_should_match
        return {"bool": query}

    def _get_clause(self, query_type: QueryType | str) -> list[SyntaxNode]:
        try:
            query_type = QueryType(query_type)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Expected one of: "
                f"{', '.join(repr(q.value) for q in QueryType)}. "
                f"Got: {query_type!r}"
            ) from e
        return getattr(self, query_type.value)
