# catalog_diff/normalizer.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .field_parser import parse_attributes_field, parse_field
from .models import EntitySnapshot, FieldSpec, ParsedField

logger = logging.getLogger(__name__)

SnapshotPair = Tuple[EntitySnapshot, EntitySnapshot]


def _cell(row: Sequence, index: int) -> str:
    if index >= len(row):
        return ""
    value = row[index]
    return "" if value is None else str(value)


def build_snapshot(values: Dict[str, str], spec: FieldSpec) -> EntitySnapshot:
    """Attach parsed id/name sub-fields to a set of raw field values."""
    parsed: Dict[str, ParsedField] = {}
    for name in spec.fields:
        value = values.get(name, "")
        if name in spec.attributes_fields:
            parsed[name] = parse_attributes_field(value)
        else:
            parsed[name] = parse_field(value)
    return EntitySnapshot(values=dict(values), parsed=parsed)


def normalize_row(row: Sequence, spec: FieldSpec) -> Optional[SnapshotPair]:
    """
    Map one flat export row into before/after snapshots.

    The first F cells are the "before" state and the next F cells the "after"
    state, where F is the number of fields tracked by the report type. Cells
    beyond 2F are ignored.

    Args:
        row (Sequence): Cell values for one data line.
        spec (FieldSpec): Column shape of the report.

    Returns:
        tuple | None: (before, after) snapshots, or None when the row has fewer than 2F cells.
    """
    count = spec.field_count
    if row is None or len(row) < 2 * count:
        return None

    before = {name: _cell(row, i) for i, name in enumerate(spec.fields)}
    after = {name: _cell(row, count + i) for i, name in enumerate(spec.fields)}
    return build_snapshot(before, spec), build_snapshot(after, spec)


def normalize_rows(rows: Iterable[Sequence], spec: FieldSpec) -> List[SnapshotPair]:
    """Normalize every row, silently dropping the ones that are too short."""
    pairs: List[SnapshotPair] = []
    dropped = 0
    for row in rows:
        pair = normalize_row(row, spec)
        if pair is None:
            dropped += 1
            continue
        pairs.append(pair)

    if dropped:
        logger.debug(f"Dropped {dropped} row(s) with fewer than {2 * spec.field_count} columns")
    return pairs
