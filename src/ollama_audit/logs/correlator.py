# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""
Correlation of server log load events with the model index.

Each log file is read in full, line by line, keeping the most recent
timestamp seen in that file. A load event is attributed to that timestamp,
or to the file's modification time when no timestamp line preceded it.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from ollama_audit.exceptions import LogReadError
from ollama_audit.logs.parser import parse_load_event, parse_timestamp
from ollama_audit.models.manifest import ModelIndexEntry
from ollama_audit.models.usage import ModelUsage, deleted_name

logger = logging.getLogger("ollama_audit")


def _file_mtime(path: Path) -> datetime:
    try:
        return datetime.fromtimestamp(path.stat().st_mtime).astimezone()
    except OSError as e:
        raise LogReadError(path, e.strerror or str(e)) from e


def _read_load_events(path: Path) -> list[tuple[str, datetime]]:
    """(digest, timestamp) for every load event of one log file, in order."""
    fallback = _file_mtime(path)
    cursor: datetime | None = None
    events = []

    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.rstrip("\r\n")
                timestamp = parse_timestamp(line)
                if timestamp is not None:
                    cursor = timestamp
                    continue
                digest = parse_load_event(line)
                if digest is not None:
                    events.append((digest, cursor or fallback))
    except OSError as e:
        raise LogReadError(path, e.strerror or str(e)) from e

    logger.debug("%s: %d load events", path, len(events))
    return events


def correlate(
    index: dict[str, ModelIndexEntry],
    log_paths: Iterable[Path],
    dedupe: bool = False,
) -> dict[str, ModelUsage]:
    """
    Aggregates load events per display name.

    Args:
        index: Model index from ``build_index``.
        log_paths: Log files, newest first.
        dedupe: Skip a (digest, timestamp) load already counted from an
            earlier file, for rotated logs that overlap.

    Returns:
        Usage keyed by display name. Blobs missing from the index are
        reported under ``<hash prefix>...-deleted`` with size 0.

    Raises:
        LogReadError: If a log file cannot be opened, read or stat'ed.
    """
    usages: dict[str, ModelUsage] = {}
    counted: set[tuple[str, datetime]] = set()

    for path in log_paths:
        events = _read_load_events(path)

        for digest, timestamp in events:
            if dedupe and (digest, timestamp) in counted:
                continue

            entry = index.get(digest)
            name = entry.name if entry else deleted_name(digest)
            usage = usages.get(name)
            if usage is None:
                usage = ModelUsage(
                    name=name,
                    last_used=timestamp,
                    digest=digest,
                    size=entry.size if entry else 0,
                    aliases=tuple(entry.aliases) if entry else (),
                )
                usages[name] = usage
            usage.record_load(timestamp)

        if dedupe:
            counted.update(events)

    return usages
