# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""Partitioning of usage data and plain-text table rendering."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from ollama_audit.i18n import t
from ollama_audit.models.manifest import ModelIndexEntry
from ollama_audit.models.usage import ModelUsage, UnloggedModel

GAP = "  "


@dataclass
class AuditReport:
    """The three views of one audit, each already sorted."""

    active: list[ModelUsage] = field(default_factory=list)
    unlogged: list[UnloggedModel] = field(default_factory=list)
    deleted: list[ModelUsage] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.active or self.unlogged or self.deleted)


def _by_recency(usages: list[ModelUsage]) -> list[ModelUsage]:
    return sorted(usages, key=lambda u: (u.last_used, u.usage_count), reverse=True)


def partition_usages(
    usages: dict[str, ModelUsage],
) -> tuple[list[ModelUsage], list[ModelUsage]]:
    """Splits usages into (active, deleted), most recently used first."""
    active = [u for u in usages.values() if not u.deleted]
    deleted = [u for u in usages.values() if u.deleted]
    return _by_recency(active), _by_recency(deleted)


def find_unlogged(
    index: dict[str, ModelIndexEntry],
    usages: dict[str, ModelUsage],
) -> list[UnloggedModel]:
    """Installed names that never appear in a load event, sorted by name."""
    logged = {alias for usage in usages.values() for alias in usage.aliases}
    unlogged = [
        UnloggedModel(name=alias, size=entry.size)
        for entry in index.values()
        for alias in entry.aliases
        if alias not in logged
    ]
    return sorted(unlogged, key=lambda m: m.name)


def build_report(
    usages: dict[str, ModelUsage],
    index: dict[str, ModelIndexEntry],
) -> AuditReport:
    active, deleted = partition_usages(usages)
    return AuditReport(
        active=active,
        unlogged=find_unlogged(index, usages),
        deleted=deleted,
    )


def format_size(size: int) -> str:
    """Human-readable size with binary units (e.g., '4.7 GB', '512.0 MB')."""
    gb = size / (1024**3)
    if gb >= 1:
        return f"{gb:.1f} GB"
    mb = size / (1024**2)
    return f"{mb:.1f} MB"


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def render_table(
    title: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    right_aligned: Sequence[bool],
) -> list[str]:
    """
    Renders a fixed-width table.

    Each column is as wide as its header or its widest cell. An empty
    table renders as nothing at all, title included.
    """
    if not rows:
        return []

    widths = [
        max([len(header)] + [len(row[i]) for row in rows])
        for i, header in enumerate(headers)
    ]

    def _line(cells: Sequence[str]) -> str:
        return GAP.join(
            cell.rjust(width) if right else cell.ljust(width)
            for cell, width, right in zip(cells, widths, right_aligned)
        )

    lines = ["", title, _line(headers), GAP.join("-" * width for width in widths)]
    lines.extend(_line(row) for row in rows)
    return lines


def _usage_table(title: str, usages: list[ModelUsage], show_size: bool) -> list[str]:
    headers = [t("columns.model"), t("columns.last_used"), t("columns.usage_count")]
    right_aligned = [False, False, True]
    if show_size:
        headers.append(t("columns.size"))
        right_aligned.append(True)

    rows = []
    for usage in usages:
        row = [usage.name, format_date(usage.last_used), str(usage.usage_count)]
        if show_size:
            row.append(format_size(usage.size))
        rows.append(row)
    return render_table(title, headers, rows, right_aligned)


def render_report(report: AuditReport) -> str:
    """
    Active, unlogged and deleted tables, separated by blank lines.

    The unlogged title is underlined, and a non-empty report ends with a
    newline so the terminal shows a trailing blank line.
    """
    lines = _usage_table(t("report.active_title"), report.active, show_size=True)

    unlogged_title = t("report.unlogged_title")
    unlogged = render_table(
        unlogged_title,
        [t("columns.model"), t("columns.size")],
        [[m.name, format_size(m.size)] for m in report.unlogged],
        [False, True],
    )
    if unlogged:
        unlogged.insert(2, "-" * len(unlogged_title.rstrip(":")))
    lines += unlogged

    # Deleted blobs have no manifest left to read a size from
    lines += _usage_table(t("report.deleted_title"), report.deleted, show_size=False)
    return "\n".join(lines + [""]) if lines else ""
