# catalog_diff/report.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .models import ADDED, CHANGE_TYPES, MODIFIED, MOVED, REMOVED, ChangeRecord

logger = logging.getLogger(__name__)


@dataclass
class Report:
    """
    Classified changes split into the four buckets, plus their counts.
    """
    added: List[ChangeRecord] = field(default_factory=list)
    removed: List[ChangeRecord] = field(default_factory=list)
    modified: List[ChangeRecord] = field(default_factory=list)
    moved: List[ChangeRecord] = field(default_factory=list)

    def bucket(self, change_type: str) -> List[ChangeRecord]:
        if change_type not in CHANGE_TYPES:
            raise ValueError(f"Unknown change type: {change_type}")
        return getattr(self, change_type)

    @property
    def total(self) -> int:
        return len(self.added) + len(self.removed) + len(self.modified) + len(self.moved)

    @property
    def summary(self) -> Dict[str, int]:
        return {
            'total': self.total,
            'added': len(self.added),
            'removed': len(self.removed),
            'modified': len(self.modified),
            'moved': len(self.moved)
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary,
            'changes': {
                change_type: [record.to_dict() for record in self.bucket(change_type)]
                for change_type in (ADDED, REMOVED, MODIFIED, MOVED)
            }
        }

    def to_json(self) -> str:
        """Serialize with a fixed key order so identical input gives identical text."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


def assemble_report(records: Iterable[ChangeRecord]) -> Report:
    """
    Partition records into buckets in a single pass, keeping their relative order.

    Raises:
        ValueError: If a record carries an unknown change type.
    """
    report = Report()
    for record in records:
        report.bucket(record.change_type).append(record)
    return report


def save_report(report: Report, output_dir: str, filename: str = "changes.json") -> str:
    """
    Write the report JSON to `output_dir/filename`, creating the directory if needed.

    Returns:
        str: Path of the written file.
    """
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, filename)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(report.to_json() + "\n")
    logger.info(f"Changes saved to: {output_path}")
    return output_path
