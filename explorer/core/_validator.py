from typing import Any, Iterable

from .exceptions import InvalidArgumentError, ValidationError


def _quote(value: Any) -> str:
    return f'"{value}"'


def _type_name(value: Any) -> str:
    cls = value if isinstance(value, type) else type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    module = cls.__module__.split("._")[0]
    return f"{module}.{cls.__qualname__}"


class Validator:
    @staticmethod
    def one_of(value: Any, allowed: Iterable[Any]) -> Any:
        allowed = list(allowed)
        if value not in allowed:
            raise ValidationError(
                f"Expected one of: {', '.join(_quote(a) for a in allowed)}. "
                f"Got: {_quote(value)}"
            )
        return value

    @staticmethod
    def instance_of(value: Any, cls: type) -> Any:
        if not isinstance(value, cls):
            raise InvalidArgumentError(
                f"Expected an instance of {_type_name(cls)}. "
                f"Got: {_type_name(value)}"
            )
        return value

    @staticmethod
    def all_instance_of(values: Iterable[Any], cls: type) -> list:
        values = list(values)
        for value in values:
            Validator.instance_of(value, cls)
        return values

    @staticmethod
    def non_negative(value: int | None, name: str) -> int | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentError(
                f"Expected an integer for {name}. Got: {_type_name(value)}"
            )
        if value < 0:
            raise InvalidArgumentError(
                f"Expected a non-negative {name}. Got: {value}"
            )
        return value

    @staticmethod
    def scalar(value: Any, name: str) -> Any:
        if not isinstance(value, (str, int, float, bool)):
            raise InvalidArgumentError(
                f"Expected a string, number or boolean for {name}. "
                f"Got: {_type_name(value)}"
            )
        return value
