"""
SQL identifier handling utilities.

Provides dialect-neutral quoting of table and column names, including
schema-qualified names such as ``schema.table``.
"""

from typing import Iterable


def strip_quotes(identifier: str, quote_chars: Iterable[str]) -> str:
    """
    Remove every occurrence of the given quote characters.

    Examples:
        >>> strip_quotes("[dbo].[users]", "[]")
        'dbo.users'
    """
    chars = set(quote_chars)
    return "".join(ch for ch in identifier if ch not in chars)


def quote_identifier(identifier: str, open_quote: str, close_quote: str) -> str:
    """
    Quote a (possibly schema-qualified) SQL identifier.

    Surrounding whitespace is trimmed and quote characters already present are
    dropped, so quoting an already quoted identifier yields the same result
    instead of nesting quotes. Each dot separated part is wrapped on its own.

    Args:
        identifier: Table or column name, optionally ``schema.name``
        open_quote: Opening quote character for the dialect
        close_quote: Closing quote character for the dialect

    Returns:
        Properly quoted identifier

    Raises:
        ValueError: If identifier is empty

    Examples:
        >>> quote_identifier("schema.table", "[", "]")
        '[schema].[table]'
        >>> quote_identifier(" `users` ", "`", "`")
        '`users`'
        >>> quote_identifier('"public"."年金计划"', '"', '"')
        '"public"."年金计划"'
    """
    if not identifier or not isinstance(identifier, str) or not identifier.strip():
        raise ValueError("Identifier must be a non-empty string")

    bare = strip_quotes(identifier.strip(), {open_quote, close_quote})
    return ".".join(f"{open_quote}{part}{close_quote}" for part in bare.split("."))
