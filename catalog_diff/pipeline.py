# catalog_diff/pipeline.py
from __future__ import annotations

import asyncio
import logging
import random
from typing import Iterable, Optional, Sequence

from .catalog_lookup import CatalogLookup
from .classifier import classify_rows
from .enricher import enrich_with_menu_items, ensure_lookup
from .models import FieldSpec
from .normalizer import normalize_rows
from .report import Report, assemble_report
from .row_source import read_rows
from .sampler import sample_changes

logger = logging.getLogger(__name__)

# Marker meaning "use the report type's own sample size"
SPEC_DEFAULT = object()


async def run_pipeline(
    rows: Iterable[Sequence],
    spec: FieldSpec,
    lookup: Optional[CatalogLookup] = None,
    sample_size=SPEC_DEFAULT,
    rng: Optional[random.Random] = None,
    drop_unchanged: bool = False,
) -> Report:
    """
    Classify, sample, enrich and assemble one batch of snapshot rows.

    Args:
        rows: Raw export rows (before cells followed by after cells).
        spec (FieldSpec): Column shape of the report.
        lookup (CatalogLookup): Catalog service; enrichment is skipped when None.
        sample_size (int | None): Cap on non-removed changes. Defaults to
            `spec.default_sample_size`; None disables sampling.
        rng (random.Random): Optional generator for reproducible sampling.
        drop_unchanged (bool): Leave out rows where no tracked field differs.

    Returns:
        Report: The bucketed changes. When sampling applied, counts are post-sampling.

    Raises:
        ConfigurationError: If `lookup` is given but unusable. Raised before any row is processed.
    """
    if lookup is not None:
        ensure_lookup(lookup)
    if sample_size is SPEC_DEFAULT:
        sample_size = spec.default_sample_size

    pairs = normalize_rows(rows, spec)
    logger.info(f"Total {spec.label.lower()} rows found: {len(pairs)}")

    records = classify_rows(pairs, spec, drop_unchanged=drop_unchanged)
    records = sample_changes(records, sample_size, rng=rng)

    if lookup is not None:
        logger.info(f"Enriching added and modified {spec.label.lower()} with menu item details...")
        records = await enrich_with_menu_items(records, lookup)

    report = assemble_report(records)
    logger.info(
        f"{spec.label} changes: added={len(report.added)}, removed={len(report.removed)}, "
        f"modified={len(report.modified)}, moved={len(report.moved)}, total={report.total}"
    )
    return report


def process_file(file_path: str, spec: FieldSpec, **kwargs) -> Report:
    """Read a snapshot export from disk and run it through the pipeline."""
    logger.info(f"Processing {spec.label.lower()} file: {file_path}")
    rows = read_rows(file_path)
    return asyncio.run(run_pipeline(rows, spec, **kwargs))
