# catalog_diff/sampler.py
from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence, TypeVar

from .models import REMOVED, ChangeRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


def random_sample(items: Sequence[T], count: int, rng: Optional[random.Random] = None) -> List[T]:
    """
    Pick `count` items uniformly at random using a Fisher-Yates shuffle.

    When there are `count` items or fewer the input comes back unchanged,
    order included.

    Args:
        items (Sequence): Items to sample from. Not modified.
        count (int): Number of items to keep.
        rng (random.Random): Optional generator, used for reproducible runs.

    Returns:
        list: The sampled items.
    """
    if count < 0:
        raise ValueError(f"Sample size must be non-negative, got {count}")
    if len(items) <= count:
        return list(items)

    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled[:count]


def sample_changes(
    records: Sequence[ChangeRecord],
    sample_size: Optional[int],
    rng: Optional[random.Random] = None,
) -> List[ChangeRecord]:
    """
    Cap the number of non-removed records passed on to enrichment.

    Removed records are always kept in full. When the added, modified and
    moved records together exceed `sample_size`, a random subset of that size
    is kept. Surviving records stay in their original relative order.

    Args:
        records: Classified records.
        sample_size (int | None): Threshold and sample size; None disables sampling.
        rng (random.Random): Optional generator for reproducible sampling.
    """
    if sample_size is None:
        return list(records)

    non_removed = [record for record in records if record.change_type != REMOVED]
    if len(non_removed) <= sample_size:
        return list(records)

    removed_count = len(records) - len(non_removed)
    logger.info(
        f"Found {len(non_removed)} non-removed changes. Randomly sampling {sample_size} "
        f"(keeping all {removed_count} removed) before enrichment"
    )
    kept_ids = {id(record) for record in random_sample(non_removed, sample_size, rng)}
    return [
        record for record in records
        if record.change_type == REMOVED or id(record) in kept_ids
    ]
