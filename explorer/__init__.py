from explorer.aggregations import (
    Aggregation,
    AvgAggregation,
    MaxAggregation,
    MinAggregation,
    NestedAggregation,
    TermsAggregation,
)
from explorer.command import Order, SearchCommand, SearchSource
from explorer.core.exceptions import (
    BadRequestError,
    BaseError,
    InvalidArgumentError,
    MissingIndexError,
    ResponseFormatError,
    TransportError,
    ValidationError,
)
from explorer.elastic import (
    ElasticClientBuilder,
    ElasticTransport,
    ExplorerConfig,
    Finder,
)
from explorer.query_properties import (
    QueryProperty,
    SourceFilter,
    TrackTotalHits,
)
from explorer.results import AggregationResult, Hit, Results
from explorer.syntax import (
    BoolQuery,
    Exists,
    Invert,
    Match,
    MatchAll,
    MatchPhrase,
    MultiMatch,
    Nested,
    QueryString,
    QueryType,
    Range,
    Sort,
    SyntaxNode,
    Term,
    Terms,
    Wildcard,
)

__all__ = [
    "Aggregation",
    "AggregationResult",
    "AvgAggregation",
    "BadRequestError",
    "BaseError",
    "BoolQuery",
    "ElasticClientBuilder",
    "ElasticTransport",
    "Exists",
    "ExplorerConfig",
    "Finder",
    "Hit",
    "InvalidArgumentError",
    "Invert",
    "Match",
    "MatchAll",
    "MatchPhrase",
    "MaxAggregation",
    "MinAggregation",
    "MissingIndexError",
    "MultiMatch",
    "Nested",
    "NestedAggregation",
    "Order",
    "QueryProperty",
    "QueryString",
    "QueryType",
    "Range",
    "ResponseFormatError",
    "Results",
    "SearchCommand",
    "SearchSource",
    "Sort",
    "SourceFilter",
    "SyntaxNode",
    "Term",
    "Terms",
    "TermsAggregation",
    "TrackTotalHits",
    "TransportError",
    "ValidationError",
    "Wildcard",
]
