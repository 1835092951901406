# catalog_diff/classifier.py
from __future__ import annotations

import logging
from typing import Iterable, List

from .models import ADDED, MODIFIED, MOVED, REMOVED, ChangeRecord, EntitySnapshot, FieldSpec
from .normalizer import SnapshotPair

logger = logging.getLogger(__name__)


def _is_empty(value: str) -> bool:
    return not value or value.strip() == ""


def determine_change_type(before: EntitySnapshot, after: EntitySnapshot, spec: FieldSpec) -> str:
    """
    Decide how an entry changed between two snapshots.

    The key field (product) decides added/removed. When both sides have it,
    a change in any grouping field (location, category) makes the entry
    "moved", which wins over a change in the key or detail fields
    ("modified"). Comparison is exact on the raw cell values.

    Rows where nothing differs, or where both key fields are empty, are
    labelled "modified" as well.
    """
    before_has_key = not _is_empty(before.get(spec.key_field))
    after_has_key = not _is_empty(after.get(spec.key_field))

    if not before_has_key and after_has_key:
        return ADDED

    if before_has_key and not after_has_key:
        return REMOVED

    if before_has_key and after_has_key:
        if any(before.get(name) != after.get(name) for name in spec.grouping_fields):
            return MOVED

    # Key or detail field changed, nothing changed, or both keys empty
    return MODIFIED


def is_unchanged(before: EntitySnapshot, after: EntitySnapshot, spec: FieldSpec) -> bool:
    """Return True when no tracked field differs between the two snapshots."""
    return all(before.get(name) == after.get(name) for name in spec.fields)


def classify_rows(
    pairs: Iterable[SnapshotPair],
    spec: FieldSpec,
    drop_unchanged: bool = False,
) -> List[ChangeRecord]:
    """
    Classify normalized snapshot pairs into change records.

    Args:
        pairs: (before, after) snapshots from the normalizer.
        spec (FieldSpec): Column shape of the report.
        drop_unchanged (bool): Skip pairs where no tracked field differs instead
            of reporting them under the "modified" fallback.

    Returns:
        list[ChangeRecord]: One record per kept pair, in input order.
    """
    records: List[ChangeRecord] = []
    skipped = 0
    for before, after in pairs:
        if drop_unchanged and is_unchanged(before, after, spec):
            skipped += 1
            continue
        records.append(ChangeRecord(
            before=before,
            after=after,
            change_type=determine_change_type(before, after, spec),
        ))

    if skipped:
        logger.info(f"Skipped {skipped} unchanged {spec.label.lower()} row(s)")
    return records
