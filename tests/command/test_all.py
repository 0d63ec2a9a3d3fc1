import random
import re
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from explorer.aggregations import TermsAggregation
from explorer.command import Order, SearchCommand, SearchSource
from explorer.core.exceptions import (
    InvalidArgumentError,
    MissingIndexError,
    ValidationError,
)
from explorer.query_properties import SourceFilter, TrackTotalHits
from explorer.syntax import (
    BoolQuery,
    MatchAll,
    MultiMatch,
    QueryType,
    Sort,
    Term,
)

from ._data import (
    EMPTY_QUERY,
    TEST_INDEX,
    TEST_SEARCHABLE_FIELDS,
    Post,
    SearchablePost,
)


def build_command_params():
    return [
        ("must", [Term("field", "value")]),
        ("should", [Term("field", "value")]),
        ("filter", [Term("field", "value")]),
        ("wheres", {"field": "value"}),
        ("where_ins", {"field": ["value1", "value2"]}),
        ("query", "Lorem Ipsum"),
    ]


def test_throw_exception_on_missing_index():
    command = SearchCommand()
    with pytest.raises(MissingIndexError):
        command.get_index()


@pytest.mark.parametrize("name,expected", build_command_params())
def test_getters_and_setters(name: str, expected):
    command = SearchCommand()

    assert not getattr(command, f"get_{name}")()

    getattr(command, f"set_{name}")(expected)

    assert getattr(command, f"get_{name}")() == expected


def test_set_sort_order():
    command = SearchCommand()

    assert command.has_sort() is False

    command.set_sort([Sort("id")])

    assert command.has_sort() is True
    assert command.get_sort() == [{"id": "asc"}]

    command.set_sort([])

    assert command.has_sort() is False
    assert command.get_sort() == []

    command.set_sort([Sort("id", "desc")])

    assert command.has_sort() is True
    assert command.get_sort() == [{"id": "desc"}]

    with pytest.raises(
        ValidationError,
        match=re.escape('Expected one of: "asc", "desc". Got: "invalid"'),
    ):
        command.set_sort([Sort("id", "invalid")])


def test_accept_only_sort_classes():
    command = SearchCommand()

    with pytest.raises(
        InvalidArgumentError,
        match=re.escape(
            "Expected an instance of explorer.syntax.Sort. Got: str"
        ),
    ):
        command.set_sort({"not": "a class"})


def test_set_fields():
    fields = ["specific.field", "*.length"]
    command = SearchCommand()

    assert command.has_fields() is False
    assert command.get_fields() == []

    command.set_fields(fields)

    assert command.has_fields() is True
    assert command.get_fields() == fields

    command.set_fields([])

    assert command.has_fields() is False
    assert command.get_fields() == []


def test_reject_negative_pagination():
    command = SearchCommand()
    with pytest.raises(InvalidArgumentError):
        command.set_limit(-1)
    with pytest.raises(InvalidArgumentError):
        command.set_offset(-5)


def test_reject_invalid_aggregations():
    command = SearchCommand()
    with pytest.raises(InvalidArgumentError):
        command.set_aggregations({"name": {"terms": {"field": "x"}}})


@pytest.mark.parametrize(
    "value",
    [None, ["a", "b"], {"nested": "value"}, datetime(2024, 1, 1)],
)
def test_reject_non_scalar_wheres(value):
    command = SearchCommand()
    command.set_wheres({"status": "published"})

    with pytest.raises(
        InvalidArgumentError,
        match="Expected a string, number or boolean for deleted_at",
    ):
        command.set_wheres({"deleted_at": value})

    assert command.get_wheres() == {"status": "published"}


def test_reject_non_scalar_where_ins():
    command = SearchCommand()

    with pytest.raises(InvalidArgumentError):
        command.set_where_ins({"tags": ["a", None]})

    assert command.get_where_ins() == {}


def test_reject_invalid_clauses():
    command = SearchCommand()
    with pytest.raises(InvalidArgumentError):
        command.set_must(["not a node"])


def test_custom_compound():
    command = SearchCommand()
    compound = BoolQuery()

    command.set_bool_query(compound)

    assert command.get_bool_query() is compound


def test_default_compound_is_created_once():
    command = SearchCommand()

    compound = command.get_bool_query()

    assert isinstance(compound, BoolQuery)
    assert command.get_bool_query() is compound


def test_build_query():
    assert SearchCommand().build_query() == EMPTY_QUERY


def test_build_query_with_limit():
    command = SearchCommand()
    command.set_limit(5)

    assert command.build_query() == {"size": 5, **EMPTY_QUERY}


def test_build_query_with_zero_offset():
    command = SearchCommand()
    command.set_offset(0)

    assert command.build_query() == {"from": 0, **EMPTY_QUERY}


def test_build_query_with_input():
    command = SearchCommand()
    sort = Sort("sortfield", Sort.DESCENDING)
    fields = ["test.field", "other.field"]

    command.set_offset(10)
    command.set_limit(30)
    command.set_sort([sort])
    command.set_fields(fields)

    assert command.build_query() == {
        **EMPTY_QUERY,
        "from": 10,
        "size": 30,
        "sort": [sort.build()],
        "fields": fields,
    }


def test_accept_minimum_match():
    command = SearchCommand()
    command.set_minimum_should_match("50%")

    assert command.build_query() == {
        "query": {
            "bool": {
                "must": [],
                "should": [],
                "filter": [],
                "minimum_should_match": "50%",
            }
        }
    }


def test_add_properties_to_bool_query():
    bool_query = MagicMock(spec=BoolQuery)
    bool_query.clone.return_value = bool_query
    bool_query.build.return_value = {"return": "query"}

    command = SearchCommand()
    term = Term("field", "value")

    command.set_default_search_fields(["description", "name"])
    command.set_query("myQuery")
    command.set_must([term])
    command.set_filter([term])
    command.set_should([term])
    command.set_bool_query(bool_query)
    command.set_wheres({"whereField": "whereValue"})
    command.set_minimum_should_match("50%")

    assert command.build_query() == {"query": {"return": "query"}}

    bool_query.clone.assert_called_once_with()
    bool_query.add_many.assert_any_call(QueryType.MUST, [term])
    bool_query.add_many.assert_any_call(QueryType.SHOULD, [term])
    bool_query.add_many.assert_any_call(QueryType.FILTER, [term])
    bool_query.minimum_should_match.assert_called_once_with("50%")

    (must_type, must_query), (filter_type, filter_query) = [
        c.args for c in bool_query.add.call_args_list
    ]
    assert must_type == QueryType.MUST
    assert isinstance(must_query, MultiMatch)
    assert must_query.fields == ["description", "name"]
    assert filter_type == QueryType.FILTER
    assert filter_query == Term("whereField", "whereValue")


def test_free_text_query_uses_default_fields_once():
    command = SearchCommand()
    command.set_must([MatchAll()])
    command.set_default_search_fields(TEST_SEARCHABLE_FIELDS)
    command.set_query("lorem")

    must = command.build_query()["query"]["bool"]["must"]

    multi_matches = [q for q in must if "multi_match" in q]
    assert len(must) == 2
    assert len(multi_matches) == 1
    assert multi_matches[0]["multi_match"]["fields"] == TEST_SEARCHABLE_FIELDS


def test_free_text_query_without_default_fields():
    command = SearchCommand()
    command.set_query("lorem")

    must = command.build_query()["query"]["bool"]["must"]

    assert must == [MultiMatch("lorem").build()]
    assert "fields" not in must[0]["multi_match"]


def test_wheres_render_terms_in_order():
    wheres = {"a": 1, "b": "two", "c": True}
    command = SearchCommand()
    command.set_wheres(wheres)

    filters = command.build_query()["query"]["bool"]["filter"]

    assert filters == [Term(k, v).build() for k, v in wheres.items()]


def test_where_ins_render_terms_filter():
    command = SearchCommand()
    command.set_wheres({"status": "published"})
    command.set_where_ins({"tags": ["a", "b"]})

    filters = command.build_query()["query"]["bool"]["filter"]

    assert filters == [
        {"term": {"status": {"value": "published", "boost": 1.0}}},
        {"terms": {"tags": ["a", "b"], "boost": 1.0}},
    ]


def test_build_does_not_mutate_compound():
    compound = BoolQuery().add(QueryType.SHOULD, Term("field", "value"))
    command = SearchCommand()
    command.set_bool_query(compound)
    command.set_must([MatchAll()])
    command.set_query("lorem")
    command.set_wheres({"status": "published"})
    command.set_minimum_should_match(1)

    query = command.build_query()

    assert compound.build() == {
        "bool": {
            "must": [],
            "should": [Term("field", "value").build()],
            "filter": [],
        }
    }
    assert query["query"]["bool"]["should"] == [
        Term("field", "value").build()
    ]
    assert len(query["query"]["bool"]["must"]) == 2
    assert query["query"]["bool"]["minimum_should_match"] == 1
    assert command.build_query() == query


def test_build_query_with_aggregations():
    command = SearchCommand()
    command.set_aggregations({":name:": TermsAggregation(":field:")})

    assert command.build_query() == {
        **EMPTY_QUERY,
        "aggs": {":name:": {"terms": {"field": ":field:", "size": 10}}},
    }


def test_build_query_with_query_property():
    command = SearchCommand()
    command.add_query_properties(SourceFilter.empty().include("*"))

    assert command.build_query() == {
        **EMPTY_QUERY,
        "_source": {"include": ["*"]},
    }


def test_empty_query_property_adds_nothing():
    command = SearchCommand()
    command.add_query_properties(SourceFilter.empty())

    assert command.build_query() == EMPTY_QUERY


def test_later_query_property_wins():
    command = SearchCommand()
    command.add_query_properties(TrackTotalHits(100), TrackTotalHits(True))

    assert command.build_query()["track_total_hits"] is True


def test_wrap_index_from_model():
    command = SearchCommand.wrap(SearchSource(model=Post()))

    assert command.get_index() == TEST_INDEX


def test_wrap_index_from_source():
    command = SearchCommand.wrap(SearchSource(index="other", model=Post()))

    assert command.get_index() == "other"


def test_wrap_without_index():
    with pytest.raises(MissingIndexError):
        SearchCommand.wrap(SearchSource())


def test_wrap_from_mapping():
    command = SearchCommand.wrap({"index": TEST_INDEX, "limit": 5})

    assert command.get_index() == TEST_INDEX
    assert command.build_query() == {"size": 5, **EMPTY_QUERY}


def test_wrap_searchable_fields():
    command = SearchCommand.wrap(SearchSource(model=SearchablePost()))

    assert command.get_default_search_fields() == TEST_SEARCHABLE_FIELDS


def test_wrap_without_searchable_fields():
    command = SearchCommand.wrap(SearchSource(model=Post()))

    assert command.get_default_search_fields() == []


@pytest.mark.parametrize("name,expected", build_command_params())
def test_set_data_from_source(name: str, expected):
    source = SearchSource(index=TEST_INDEX, **{name: expected})

    command = SearchCommand.wrap(source)

    assert getattr(command, f"get_{name}")() == expected


def test_wrap_sort():
    source = SearchSource(
        index=TEST_INDEX,
        orders=[Order(column="id", direction="asc")],
    )

    command = SearchCommand.wrap(source)

    assert command.get_sort() == [{"id": "asc"}]


def test_wrap_invalid_sort_direction():
    source = SearchSource(
        index=TEST_INDEX,
        orders=[Order(column="id", direction="sideways")],
    )

    with pytest.raises(ValidationError):
        SearchCommand.wrap(source)


def test_wrap_fields():
    fields = ["my.field", "your.field"]

    command = SearchCommand.wrap(SearchSource(index=TEST_INDEX, fields=fields))

    assert command.get_fields() == fields


def test_wrap_limit():
    command = SearchCommand.wrap(SearchSource(index=TEST_INDEX, limit=5))

    assert command.build_query() == {"size": 5, **EMPTY_QUERY}


def test_wrap_custom_compound():
    compound = BoolQuery()

    command = SearchCommand.wrap(
        SearchSource(index=TEST_INDEX, compound=compound)
    )

    assert command.get_bool_query() is compound


def test_wrap_default_compound():
    command = SearchCommand.wrap(SearchSource(index=TEST_INDEX))

    assert isinstance(command.get_bool_query(), BoolQuery)


def test_wrap_aggregations():
    aggregations = {":name:": TermsAggregation(":field:")}

    command = SearchCommand.wrap(
        SearchSource(index=TEST_INDEX, aggregations=aggregations)
    )

    assert command.get_aggregations() == aggregations


def test_wrap_minimum_should_match():
    command = SearchCommand.wrap(
        SearchSource(index=TEST_INDEX, minimum_should_match="50%")
    )

    assert command.get_minimum_should_match() == "50%"


def test_wrap_query_properties():
    query_properties = [SourceFilter.empty().exclude("*.id")]

    command = SearchCommand.wrap(
        SearchSource(index=TEST_INDEX, query_properties=query_properties)
    )

    assert command.get_query_properties() == query_properties


def test_wrap_calls_callback():
    limit = random.randint(1, 1000)
    offset = random.randint(1, 1000)
    calls = []

    def callback(command: SearchCommand) -> None:
        calls.append(command)
        command.set_limit(limit)
        command.set_offset(offset)

    command = SearchCommand.wrap(
        SearchSource(index=TEST_INDEX, limit=1, callback=callback)
    )

    assert calls == [command]
    assert command.get_limit() == limit
    assert command.get_offset() == offset
