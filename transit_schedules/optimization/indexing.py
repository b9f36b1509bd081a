"""Indexing structures for fast lookups."""

import logging
from collections import defaultdict
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import TypeVar

logger = logging.getLogger(__name__)

R = TypeVar("R")


def build_index(records: Sequence[R], key: Callable[[R], str]) -> Mapping[str, tuple[int, ...]]:
    """Map each key to the positions of the records carrying it, in table order.

    Duplicate rows produce duplicate positions; nothing is sorted or deduplicated.
    """
    buckets: dict[str, list[int]] = defaultdict(list)
    for position, record in enumerate(records):
        buckets[key(record)].append(position)

    logger.debug(f"Built index with {len(buckets)} keys over {len(records)} records")

    return MappingProxyType({k: tuple(positions) for k, positions in buckets.items()})
