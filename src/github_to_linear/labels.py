"""
Label reconciliation between GitHub and Linear.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import LinearAPIError
from .models import DEFAULT_LABEL_COLOR, LabelReconciliation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import SourceLabel
    from .protocols import IssueDestination

logger: logging.Logger = logging.getLogger(__name__)


def label_color(source_label: SourceLabel) -> str:
    """Return the Linear color for a GitHub label ("#" + hex, black if unset)."""
    return f"#{(source_label.color or DEFAULT_LABEL_COLOR).lstrip('#')}"


def reconcile_labels(client: IssueDestination, source_labels: Sequence[SourceLabel]) -> LabelReconciliation:
    """Find or create a Linear label for each GitHub label.

    Matching with existing Linear labels is case-insensitive. Missing labels are
    created with the GitHub color. Labels are best-effort: if listing or creating
    fails, processing stops, a warning is logged, and the ids resolved so far are
    returned. A label that Linear does not return on creation is skipped with a
    warning.

    Args:
        client: The Linear client
        source_labels: Labels of the GitHub issue, in order

    Returns:
        LabelReconciliation with the Linear label ids and the names of created labels
    """
    label_ids: list[str] = []
    created: list[str] = []
    warnings: list[str] = []

    logger.info(f"Processing {len(source_labels)} labels...")

    try:
        # Existing Linear labels (case-insensitive lookup: lowercase name -> id)
        existing: dict[str, str] = {}
        for label in client.list_labels():
            existing.setdefault(label.name.lower(), label.id)

        for source_label in source_labels:
            if not source_label.name:
                continue

            label_id = existing.get(source_label.name.lower())
            if label_id is not None:
                logger.debug(f"Using existing label: {source_label.name}")
                label_ids.append(label_id)
                continue

            logger.info(f"Creating label: {source_label.name}")
            new_label = client.create_label(source_label.name, label_color(source_label))
            if new_label is None:
                warning = f"Linear returned no label for {source_label.name}, skipping it"
                logger.warning(warning)
                warnings.append(warning)
                continue

            # Later duplicates of this name reuse the new label
            existing[source_label.name.lower()] = new_label.id
            created.append(new_label.name)
            label_ids.append(new_label.id)

    except LinearAPIError as e:
        warning = f"Could not process labels: {e}"
        logger.warning(warning)
        warnings.append(warning)

    return LabelReconciliation(label_ids=label_ids, created=created, warning="; ".join(warnings) or None)
