"""
SQL parameter binding utilities.

Provides the placeholder flattener: a single ``?`` bound to a collection is
rewritten into a run of ``?`` placeholders, one per element, while the bind
values are flattened into a single positional sequence that stays aligned
with the rewritten SQL text.
"""

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple, Union

from ..errors import (
    ArgumentOverflowError,
    ArgumentUnderflowError,
    MissingNamedParameterError,
)

_NON_CONTAINER_TYPES = (str, bytes, bytearray, memoryview)


@dataclass(frozen=True)
class ParameterizedClause:
    """SQL text plus the positional parameters for each of its placeholders."""

    sql: str
    parameters: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def to_list(self) -> List[Any]:
        return list(self.parameters)


@dataclass(frozen=True)
class Scalar:
    """A bind value that always occupies exactly one placeholder."""

    value: Any


@dataclass(frozen=True, init=False)
class Container:
    """A bind value whose elements each occupy one placeholder."""

    values: Tuple[Any, ...]

    def __init__(self, values: Iterable[Any]):
        object.__setattr__(self, "values", tuple(values))


BoundValue = Union[Scalar, Container]


def bind_value(value: Any) -> BoundValue:
    """
    Classify a raw bind value as a scalar or an expandable container.

    Lists, tuples, sets and other sized collections expand; strings, bytes and
    mappings never do. Values already wrapped in ``Scalar`` or ``Container``
    are returned unchanged.

    Examples:
        >>> bind_value([1, 2])
        Container(values=(1, 2))
        >>> bind_value("abc")
        Scalar(value='abc')
    """
    if isinstance(value, (Scalar, Container)):
        return value
    if isinstance(value, _NON_CONTAINER_TYPES) or isinstance(value, Mapping):
        return Scalar(value)
    if isinstance(value, Collection):
        return Container(value)
    return Scalar(value)


def placeholders(count: int) -> str:
    """
    Build a comma separated run of ``count`` positional placeholders.

    Examples:
        >>> placeholders(3)
        '?, ?, ?'
        >>> placeholders(0)
        ''
    """
    return ", ".join(["?"] * count)


def flatten(sql: str, args: Sequence[Any] = ()) -> ParameterizedClause:
    """
    Expand collection-valued arguments into runs of positional placeholders.

    Each ``?`` in ``sql`` consumes the next element of ``args``. A scalar is
    appended to the output parameters as-is; a container of N elements
    replaces its ``?`` with N comma separated placeholders and contributes its
    elements in iteration order.

    Args:
        sql: SQL text using ``?`` placeholders
        args: One bind value per placeholder

    Returns:
        ParameterizedClause with the rewritten SQL and flat parameters

    Raises:
        ArgumentUnderflowError: If there are more placeholders than arguments
        ArgumentOverflowError: If arguments remain after the last placeholder

    Examples:
        >>> flatten("id IN (?) AND kind = ?", [[5, 6, 7], "x"])
        ParameterizedClause(sql='id IN (?, ?, ?) AND kind = ?', parameters=(5, 6, 7, 'x'))
    """
    supplied = len(args)
    consumed = 0
    parameters: List[Any] = []
    chunks: List[str] = []
    last_start = 0

    for index, char in enumerate(sql):
        if char != "?":
            continue
        if consumed >= supplied:
            raise ArgumentUnderflowError(consumed, supplied)
        bound = bind_value(args[consumed])
        consumed += 1
        if isinstance(bound, Container):
            chunks.append(sql[last_start:index])
            chunks.append(placeholders(len(bound.values)))
            last_start = index + 1
            parameters.extend(bound.values)
        else:
            parameters.append(bound.value)

    if consumed != supplied:
        raise ArgumentOverflowError(consumed, supplied)

    chunks.append(sql[last_start:])
    return ParameterizedClause("".join(chunks), tuple(parameters))


def split_on_placeholders(sql: str) -> List[str]:
    """
    Split SQL text around every ``?`` that sits outside a quoted literal.

    Single and double quoted text is kept whole, so the result always holds
    one more chunk than there are bindable placeholders.

    Examples:
        >>> split_on_placeholders("a = ? AND b = 'why?'")
        ['a = ', " AND b = 'why?'"]
    """
    chunks: List[str] = []
    quote_char = None
    last_start = 0

    for index, char in enumerate(sql):
        if quote_char is not None:
            if char == quote_char:
                quote_char = None
        elif char in ("'", '"'):
            quote_char = char
        elif char == "?":
            chunks.append(sql[last_start:index])
            last_start = index + 1

    chunks.append(sql[last_start:])
    return chunks


def _is_name_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_name_part(char: str) -> bool:
    return char.isalnum() or char == "_"


def flatten_named(sql: str, named: Mapping[str, Any]) -> ParameterizedClause:
    """
    Rewrite ``:name`` placeholders into flattened positional placeholders.

    Text inside single or double quotes and PostgreSQL ``::`` casts are left
    alone. A name may be referenced more than once; its value is bound at
    every occurrence. Names in ``named`` that the SQL never references are
    ignored.

    Args:
        sql: SQL text using ``:name`` placeholders
        named: Bind values keyed by placeholder name

    Returns:
        ParameterizedClause using ``?`` placeholders

    Raises:
        MissingNamedParameterError: If a referenced name has no value

    Examples:
        >>> flatten_named("id IN (:ids) AND ts > now()::date", {"ids": [1, 2]})
        ParameterizedClause(sql='id IN (?, ?) AND ts > now()::date', parameters=(1, 2))
    """
    parameters: List[Any] = []
    chunks: List[str] = []
    length = len(sql)
    quote_char = None
    last_start = 0
    i = 0

    while i < length:
        char = sql[i]
        if quote_char is not None:
            if char == quote_char:
                quote_char = None
            i += 1
            continue
        if char in ("'", '"'):
            quote_char = char
            i += 1
            continue
        if char == ":" and i + 1 < length and sql[i + 1] == ":":
            i += 2
            continue
        if char == ":" and i + 1 < length and _is_name_start(sql[i + 1]):
            end = i + 2
            while end < length and _is_name_part(sql[end]):
                end += 1
            name = sql[i + 1 : end]
            if name not in named:
                raise MissingNamedParameterError(name)
            bound = bind_value(named[name])
            chunks.append(sql[last_start:i])
            if isinstance(bound, Container):
                chunks.append(placeholders(len(bound.values)))
                parameters.extend(bound.values)
            else:
                chunks.append("?")
                parameters.append(bound.value)
            last_start = end
            i = end
            continue
        i += 1

    chunks.append(sql[last_start:])
    return ParameterizedClause("".join(chunks), tuple(parameters))
