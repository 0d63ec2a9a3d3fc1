__all__ = [
    "BaseError",
    "BadRequestError",
    "InvalidArgumentError",
    "MissingIndexError",
    "ResponseFormatError",
    "TransportError",
    "ValidationError",
]


class BaseError(Exception):
    status_code: int


class BadRequestError(BaseError):
    status_code = 400


class ValidationError(BadRequestError):
    """An enumerated constructor argument is outside its accepted values.

    Not derived from ValueError so that pydantic validators propagate
    it unchanged.
    """


class InvalidArgumentError(BadRequestError):
    """A setter received a value of the wrong node type."""


class MissingIndexError(BadRequestError):
    """An index name is required but was never set."""


class ResponseFormatError(BaseError):
    status_code = 502


class TransportError(BaseError):
    status_code = 503
