"""
Batch partitioning for dialects that insert many rows in one statement.
"""

from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def partition(rows: Sequence[T], size: int) -> List[List[T]]:
    """
    Split rows into consecutive partitions of at most ``size`` rows.

    Order is preserved, every partition is non-empty and only the last one may
    be shorter than ``size``. An empty input yields no partitions.

    Examples:
        >>> [len(p) for p in partition(list(range(2500)), 1000)]
        [1000, 1000, 500]
    """
    if size <= 0:
        raise ValueError(f"Partition size must be positive, got {size}")
    return [list(rows[start : start + size]) for start in range(0, len(rows), size)]


def explicit_batch_size(
    row_count: int,
    params_per_row: int,
    max_parameters: Optional[int],
    max_rows: Optional[int],
) -> int:
    """
    Number of rows that fit in one multi-row VALUES statement.

    The tighter of the two dialect limits wins: ``max_parameters //
    params_per_row`` rows and ``max_rows`` rows. Rows that bind no parameters
    at all are only limited by ``max_rows``.

    Args:
        row_count: Total rows to insert
        params_per_row: Placeholders rendered for each row
        max_parameters: Dialect parameter limit per statement (None = unlimited)
        max_rows: Dialect row limit per statement (None = unlimited)

    Returns:
        Rows per statement, never larger than ``row_count`` (and at least 1
        when ``row_count`` is positive)

    Raises:
        ValueError: If a single row needs more parameters than allowed

    Examples:
        >>> explicit_batch_size(5000, 3, 2098, 999)
        699
        >>> explicit_batch_size(5000, 2, 2098, 999)
        999
    """
    batch_size = row_count
    if max_parameters is not None and params_per_row > 0:
        if params_per_row > max_parameters:
            raise ValueError(
                f"A single row binds {params_per_row} parameters, "
                f"exceeding the limit of {max_parameters} per statement"
            )
        batch_size = min(batch_size, max_parameters // params_per_row)
    if max_rows is not None:
        batch_size = min(batch_size, max_rows)
    return batch_size
