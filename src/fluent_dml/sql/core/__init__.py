"""Core SQL utilities package."""

from .identifier import quote_identifier, strip_quotes
from .parameters import (
    Container,
    ParameterizedClause,
    Scalar,
    bind_value,
    flatten,
    flatten_named,
    placeholders,
    split_on_placeholders,
)
from .partition import explicit_batch_size, partition

__all__ = [
    "quote_identifier",
    "strip_quotes",
    "Container",
    "ParameterizedClause",
    "Scalar",
    "bind_value",
    "flatten",
    "flatten_named",
    "placeholders",
    "split_on_placeholders",
    "explicit_batch_size",
    "partition",
]
