from __future__ import annotations

from typing import Any, Iterable, Mapping

from explorer.aggregations import Aggregation
from explorer.core import Validator, debug, warn
from explorer.core.exceptions import InvalidArgumentError, MissingIndexError
from explorer.query_properties import QueryProperty
from explorer.syntax import (
    BoolQuery,
    MultiMatch,
    QueryType,
    Sort,
    SyntaxNode,
    Term,
    Terms,
)

from ._models import SearchableFields, SearchableModel, SearchSource


class SearchCommand:
    """Search request under construction.

    A command is populated once, either directly or through `wrap`,
    and rendered by `build_query` into the request document.
    """

    index: str | None
    offset: int | None
    limit: int | None
    query: str
    default_search_fields: list[str]
    fields: list[str]
    sort: list[Sort]
    must: list[SyntaxNode]
    should: list[SyntaxNode]
    filter: list[SyntaxNode]
    wheres: dict[str, Any]
    where_ins: dict[str, list[Any]]
    aggregations: dict[str, Aggregation]
    minimum_should_match: str | int | None
    query_properties: list[QueryProperty]

    _bool_query: BoolQuery | None

    def __init__(self, index: str | None = None):
        self.index = index
        self.offset = None
        self.limit = None
        self.query = ""
        self.default_search_fields = []
        self.fields = []
        self.sort = []
        self.must = []
        self.should = []
        self.filter = []
        self.wheres = dict()
        self.where_ins = dict()
        self.aggregations = dict()
        self.minimum_should_match = None
        self.query_properties = []
        self._bool_query = None

    @classmethod
    def wrap(cls, source: SearchSource | Mapping[str, Any]) -> SearchCommand:
        """Create a command from a higher-level query.

        Args:
            source:
                Query to copy from. The callback, if any,
                runs once after every other property is copied.

        Returns:
            Populated search command.

        Raises:
            MissingIndexError:
                Neither the source nor its model names an index.
        """
        if not isinstance(source, SearchSource):
            source = SearchSource.from_dict(dict(source))

        command = cls()
        model = source.model

        index = source.index
        if not index and isinstance(model, SearchableModel):
            index = model.searchable_as()
        if not index:
            raise MissingIndexError("Search source does not define an index")
        command.set_index(index)

        command.set_limit(source.limit)
        command.set_offset(source.offset)
        command.set_sort(
            [Sort(order.column, order.direction) for order in source.orders]
        )
        command.set_fields(source.fields)

        if isinstance(model, SearchableFields):
            command.set_default_search_fields(model.get_searchable_fields())

        command.set_query(source.query or "")
        command.set_must(source.must)
        command.set_should(source.should)
        command.set_filter(source.filter)
        command.set_wheres(source.wheres)
        command.set_where_ins(source.where_ins)
        command.set_aggregations(source.aggregations)
        command.set_minimum_should_match(source.minimum_should_match)
        if source.compound is not None:
            command.set_bool_query(source.compound)
        command.set_query_properties(source.query_properties)

        if source.callback is not None:
            source.callback(command)
        return command

    def get_index(self) -> str:
        if not self.index:
            raise MissingIndexError("Index name is not set")
        return self.index

    def set_index(self, index: str) -> None:
        self.index = index

    def get_offset(self) -> int | None:
        return self.offset

    def set_offset(self, offset: int | None) -> None:
        self.offset = Validator.non_negative(offset, "offset")

    def get_limit(self) -> int | None:
        return self.limit

    def set_limit(self, limit: int | None) -> None:
        self.limit = Validator.non_negative(limit, "limit")

    def get_query(self) -> str:
        return self.query

    def set_query(self, query: str) -> None:
        self.query = query

    def get_default_search_fields(self) -> list[str]:
        return self.default_search_fields

    def set_default_search_fields(self, fields: Iterable[str]) -> None:
        self.default_search_fields = list(fields)

    def get_fields(self) -> list[str]:
        return self.fields

    def set_fields(self, fields: Iterable[str]) -> None:
        self.fields = list(fields)

    def has_fields(self) -> bool:
        return len(self.fields) > 0

    def get_sort(self) -> list[dict[str, str]]:
        return [sort.build() for sort in self.sort]

    def set_sort(self, sort: Iterable[Sort]) -> None:
        self.sort = Validator.all_instance_of(_values(sort), Sort)

    def has_sort(self) -> bool:
        return len(self.sort) > 0

    def get_must(self) -> list[SyntaxNode]:
        return self.must

    def set_must(self, must: Iterable[SyntaxNode]) -> None:
        self.must = Validator.all_instance_of(must, SyntaxNode)

    def get_should(self) -> list[SyntaxNode]:
        return self.should

    def set_should(self, should: Iterable[SyntaxNode]) -> None:
        self.should = Validator.all_instance_of(should, SyntaxNode)

    def get_filter(self) -> list[SyntaxNode]:
        return self.filter

    def set_filter(self, filter: Iterable[SyntaxNode]) -> None:
        self.filter = Validator.all_instance_of(filter, SyntaxNode)

    def get_wheres(self) -> dict[str, Any]:
        return self.wheres

    def set_wheres(self, wheres: Mapping[str, Any]) -> None:
        self.wheres = {
            field: Validator.scalar(value, field)
            for field, value in wheres.items()
        }

    def get_where_ins(self) -> dict[str, list[Any]]:
        return self.where_ins

    def set_where_ins(self, where_ins: Mapping[str, Iterable[Any]]) -> None:
        self.where_ins = {
            field: [Validator.scalar(value, field) for value in values]
            for field, values in where_ins.items()
        }

    def get_aggregations(self) -> dict[str, Aggregation]:
        return self.aggregations

    def set_aggregations(self, aggregations: Mapping[str, Aggregation]) -> None:
        Validator.all_instance_of(aggregations.values(), Aggregation)
        self.aggregations = dict(aggregations)

    def get_minimum_should_match(self) -> str | int | None:
        return self.minimum_should_match

    def set_minimum_should_match(self, value: str | int | None) -> None:
        self.minimum_should_match = value

    def get_query_properties(self) -> list[QueryProperty]:
        return self.query_properties

    def set_query_properties(
        self, query_properties: Iterable[QueryProperty]
    ) -> None:
        self.query_properties = Validator.all_instance_of(
            query_properties, QueryProperty
        )

    def add_query_properties(self, *query_properties: QueryProperty) -> None:
        self.query_properties.extend(
            Validator.all_instance_of(query_properties, QueryProperty)
        )

    def get_bool_query(self) -> BoolQuery:
        if self._bool_query is None:
            self._bool_query = BoolQuery()
        return self._bool_query

    def set_bool_query(self, bool_query: BoolQuery) -> None:
        self._bool_query = Validator.instance_of(bool_query, BoolQuery)

    def build_query(self) -> dict[str, Any]:
        compound = self.get_bool_query().clone()

        compound.add_many(QueryType.MUST, self.must)
        compound.add_many(QueryType.SHOULD, self.should)
        compound.add_many(QueryType.FILTER, self.filter)

        if self.query:
            compound.add(
                QueryType.MUST,
                MultiMatch(self.query, self.default_search_fields or None),
            )

        for field, value in self.wheres.items():
            compound.add(QueryType.FILTER, Term(field, value))

        for field, values in self.where_ins.items():
            compound.add(QueryType.FILTER, Terms(field, values))

        if self.minimum_should_match is not None:
            compound.minimum_should_match(self.minimum_should_match)

        query: dict[str, Any] = {"query": compound.build()}

        if self.offset is not None:
            query["from"] = self.offset
        if self.limit is not None:
            query["size"] = self.limit
        if self.has_sort():
            query["sort"] = self.get_sort()
        if self.has_fields():
            query["fields"] = list(self.fields)
        if self.aggregations:
            query["aggs"] = {
                name: aggregation.build()
                for name, aggregation in self.aggregations.items()
            }

        for query_property in self.query_properties:
            fragment = query_property.build()
            for key in fragment.keys() & query.keys():
                warn(
                    "Query property %s overrides request key %s",
                    type(query_property).__name__,
                    key,
                )
            query.update(fragment)

        debug("Built search request with keys %s", list(query.keys()))
        return query


def _values(values: Iterable[Any] | Mapping[Any, Any]) -> list[Any]:
    if isinstance(values, Mapping):
        return list(values.values())
    return list(values)
