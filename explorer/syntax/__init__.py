from ._models import (
    Exists,
    Invert,
    Match,
    MatchAll,
    MatchPhrase,
    MultiMatch,
    Nested,
    Operator,
    QueryString,
    Range,
    ScoreMode,
    Sort,
    SortOrder,
    SyntaxNode,
    Term,
    Terms,
    Wildcard,
)
from .compound import BoolQuery, QueryType

__all__ = [
    "BoolQuery",
    "Exists",
    "Invert",
    "Match",
    "MatchAll",
    "MatchPhrase",
    "MultiMatch",
    "Nested",
    "Operator",
    "QueryString",
    "QueryType",
    "Range",
    "ScoreMode",
    "Sort",
    "SortOrder",
    "SyntaxNode",
    "Term",
    "Terms",
    "Wildcard",
]
