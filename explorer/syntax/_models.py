from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Any, ClassVar

from pydantic import field_validator, model_validator

from explorer.core import DataModel, Validator
from explorer.core.exceptions import ValidationError


class Operator(str, Enum):
    """Default boolean operator of a full-text query.

    Attributes:
        AND: All terms must match.
        OR: Any term may match.
    """

    AND = "AND"
    OR = "OR"


class SortOrder(str, Enum):
    """Sort order.

    Attributes:
        ASC: Ascending.
        DESC: Descending.
    """

    ASC = "asc"
    DESC = "desc"


class ScoreMode(str, Enum):
    AVG = "avg"
    MAX = "max"
    MIN = "min"
    SUM = "sum"
    NONE = "none"


def _one_of(value: Any, enum: type[Enum]) -> str:
    Validator.one_of(value, [e.value for e in enum])
    return enum(value).value


class SyntaxNode(DataModel):
    """Query syntax node.

    A node renders itself into a request-document fragment whose single
    top-level key names the clause kind.
    """

    @abstractmethod
    def build(self) -> dict[str, Any]:
        raise NotImplementedError


class Term(SyntaxNode):
    """Exact value match on a single field.

    Attributes:
        field: Field name.
        value: Value to match.
        boost: Relevance boost.
    """

    field: str
    value: str | int | float | bool
    boost: float = 1.0

    def __init__(
        self,
        field: str,
        value: str | int | float | bool,
        boost: float = 1.0,
        **kwargs: Any,
    ):
        super().__init__(field=field, value=value, boost=boost, **kwargs)

    def build(self) -> dict[str, Any]:
        return {
            "term": {
                self.field: {
                    "value": self.value,
                    "boost": self.boost,
                }
            }
        }


class Terms(SyntaxNode):
    """Match any of several exact values on a single field.

    Attributes:
        field: Field name.
        values: Accepted values.
        boost: Relevance boost.
    """

    field: str
    values: list[str | int | float | bool]
    boost: float = 1.0

    def __init__(
        self,
        field: str,
        values: list[str | int | float | bool],
        boost: float = 1.0,
        **kwargs: Any,
    ):
        super().__init__(
            field=field, values=list(values), boost=boost, **kwargs
        )

    def build(self) -> dict[str, Any]:
        return {"terms": {self.field: list(self.values), "boost": self.boost}}


class MultiMatch(SyntaxNode):
    """Full-text match over several fields.

    Attributes:
        query: Free-text query.
        fields:
            Fields to match. Omitted from the fragment when empty,
            which lets the engine match every field.
        operator: Default boolean operator.
        boost: Relevance boost.
        fuzziness: Optional fuzziness, e.g. "auto".
    """

    query: str
    fields: list[str] | None = None
    operator: str = Operator.OR.value
    boost: float = 1.0
    fuzziness: str | int | None = None

    def __init__(
        self,
        query: str,
        fields: list[str] | None = None,
        operator: str = Operator.OR.value,
        boost: float = 1.0,
        fuzziness: str | int | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            query=query,
            fields=list(fields) if fields is not None else None,
            operator=operator,
            boost=boost,
            fuzziness=fuzziness,
            **kwargs,
        )

    @field_validator("operator", mode="before")
    @classmethod
    def _validate_operator(cls, value: Any) -> str:
        return _one_of(value, Operator)

    def build(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query}
        if self.fields:
            body["fields"] = list(self.fields)
        body["operator"] = self.operator
        body["boost"] = self.boost
        if self.fuzziness is not None:
            body["fuzziness"] = self.fuzziness
        return {"multi_match": body}


class QueryString(SyntaxNode):
    """Lucene syntax query.

    Attributes:
        query: Query in Lucene syntax.
        default_operator: Operator used between unqualified terms.
        boost: Relevance boost.
        fields: Fields to search. Omitted from the fragment when empty.
    """

    OP_AND: ClassVar[str] = Operator.AND.value
    OP_OR: ClassVar[str] = Operator.OR.value

    query: str
    default_operator: str = Operator.OR.value
    boost: float = 1.0
    fields: list[str] = []

    def __init__(
        self,
        query: str,
        default_operator: str = Operator.OR.value,
        boost: float = 1.0,
        fields: list[str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            query=query,
            default_operator=default_operator,
            boost=boost,
            fields=list(fields or []),
            **kwargs,
        )

    @field_validator("default_operator", mode="before")
    @classmethod
    def _validate_operator(cls, value: Any) -> str:
        return _one_of(value, Operator)

    def build(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "query": self.query,
            "default_operator": self.default_operator,
            "boost": self.boost,
        }
        if self.fields:
            body["fields"] = list(self.fields)
        return {"query_string": body}


class Match(SyntaxNode):
    """Full-text match on a single field."""

    field: str
    query: str | int | float | bool
    fuzziness: str | int | None = None
    boost: float = 1.0

    def __init__(
        self,
        field: str,
        query: str | int | float | bool,
        fuzziness: str | int | None = None,
        boost: float = 1.0,
        **kwargs: Any,
    ):
        super().__init__(
            field=field,
            query=query,
            fuzziness=fuzziness,
            boost=boost,
            **kwargs,
        )

    def build(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query, "boost": self.boost}
        if self.fuzziness is not None:
            body["fuzziness"] = self.fuzziness
        return {"match": {self.field: body}}


class MatchPhrase(SyntaxNode):
    """Phrase match on a single field."""

    field: str
    query: str
    slop: int | None = None

    def __init__(
        self,
        field: str,
        query: str,
        slop: int | None = None,
        **kwargs: Any,
    ):
        super().__init__(field=field, query=query, slop=slop, **kwargs)

    def build(self) -> dict[str, Any]:
        body: dict[str, Any] = {"query": self.query}
        if self.slop is not None:
            body["slop"] = self.slop
        return {"match_phrase": {self.field: body}}


class MatchAll(SyntaxNode):
    boost: float = 1.0

    def build(self) -> dict[str, Any]:
        return {"match_all": {"boost": self.boost}}


class Range(SyntaxNode):
    """Range condition on a single field.

    Attributes:
        field: Field name.
        gt: Exclusive lower bound.
        gte: Inclusive lower bound.
        lt: Exclusive upper bound.
        lte: Inclusive upper bound.
        boost: Relevance boost.
    """

    BOUNDS: ClassVar[tuple[str, ...]] = ("gt", "gte", "lt", "lte")

    field: str
    gt: Any = None
    gte: Any = None
    lt: Any = None
    lte: Any = None
    boost: float = 1.0

    def __init__(self, field: str, **kwargs: Any):
        super().__init__(field=field, **kwargs)

    @model_validator(mode="after")
    def _validate_bounds(self) -> Range:
        if all(getattr(self, bound) is None for bound in self.BOUNDS):
            raise ValidationError(
                "Expected at least one of: "
                + ", ".join(f'"{b}"' for b in self.BOUNDS)
            )
        return self

    def build(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        for bound in self.BOUNDS:
            value = getattr(self, bound)
            if value is not None:
                body[bound] = value
        body["boost"] = self.boost
        return {"range": {self.field: body}}


class Exists(SyntaxNode):
    field: str

    def __init__(self, field: str, **kwargs: Any):
        super().__init__(field=field, **kwargs)

    def build(self) -> dict[str, Any]:
        return {"exists": {"field": self.field}}


class Wildcard(SyntaxNode):
    """Wildcard pattern match on a single field."""

    field: str
    value: str
    boost: float = 1.0

    def __init__(
        self,
        field: str,
        value: str,
        boost: float = 1.0,
        **kwargs: Any,
    ):
        super().__init__(field=field, value=value, boost=boost, **kwargs)

    def build(self) -> dict[str, Any]:
        return {
            "wildcard": {
                self.field: {"value": self.value, "boost": self.boost}
            }
        }


class Nested(SyntaxNode):
    """Query on a nested object field.

    Attributes:
        path: Path of the nested field.
        query: Query applied to the nested documents.
        score_mode: How nested scores feed the parent score.
    """

    path: str
    query: SyntaxNode
    score_mode: str = ScoreMode.AVG.value

    def __init__(
        self,
        path: str,
        query: SyntaxNode,
        score_mode: str = ScoreMode.AVG.value,
        **kwargs: Any,
    ):
        super().__init__(
            path=path, query=query, score_mode=score_mode, **kwargs
        )

    @field_validator("score_mode", mode="before")
    @classmethod
    def _validate_score_mode(cls, value: Any) -> str:
        return _one_of(value, ScoreMode)

    def build(self) -> dict[str, Any]:
        return {
            "nested": {
                "path": self.path,
                "query": self.query.build(),
                "score_mode": self.score_mode,
            }
        }


class Invert(SyntaxNode):
    """Negation of a query."""

    query: SyntaxNode

    def __init__(self, query: SyntaxNode, **kwargs: Any):
        super().__init__(query=query, **kwargs)

    def build(self) -> dict[str, Any]:
        return {"bool": {"must_not": [self.query.build()]}}


class Sort(SyntaxNode):
    """Sort on a single field.

    Attributes:
        field: Field name.
        order: "asc" or "desc".
    """

    ASCENDING: ClassVar[str] = SortOrder.ASC.value
    DESCENDING: ClassVar[str] = SortOrder.DESC.value

    field: str
    order: str = SortOrder.ASC.value

    def __init__(
        self,
        field: str,
        order: str = SortOrder.ASC.value,
        **kwargs: Any,
    ):
        super().__init__(field=field, order=order, **kwargs)

    @field_validator("order", mode="before")
    @classmethod
    def _validate_order(cls, value: Any) -> str:
        return _one_of(value, SortOrder)

    def build(self) -> dict[str, Any]:
        return {self.field: self.order}
