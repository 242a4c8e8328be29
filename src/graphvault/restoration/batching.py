"""Order-preserving batch splitting for bulk uploads."""

from collections.abc import Iterator, Sequence
from typing import TypeVar

from graphvault.constants import MAX_BATCH_SIZE

T = TypeVar("T")


def iter_batches(records: Sequence[T], batch_size: int = MAX_BATCH_SIZE) -> Iterator[list[T]]:
    """Yield contiguous slices of at most ``batch_size`` records, in order.

    Every batch except possibly the last has exactly ``batch_size`` records, and
    concatenating the batches reproduces ``records``. An empty input yields no
    batch.

    Args:
        records: Records decoded from one dump line
        batch_size: Maximum records per batch (1 to MAX_BATCH_SIZE)

    Yields:
        Lists of records

    Raises:
        ValueError: If batch_size is outside 1..MAX_BATCH_SIZE
    """
    if not 1 <= batch_size <= MAX_BATCH_SIZE:
        raise ValueError(f"batch_size must be between 1 and {MAX_BATCH_SIZE}, got {batch_size}")

    for start in range(0, len(records), batch_size):
        yield list(records[start : start + batch_size])
