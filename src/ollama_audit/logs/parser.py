# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""
Line recognition for Ollama server logs.

Two kinds of lines carry a timestamp:
  - the server's structured lines:  ``time=2024-06-01T10:00:00.000+02:00 level=INFO ...``
  - llama.cpp runner lines:         ``2024/06/01 10:00:00 routes.go:1008: ...``

Model loads are announced by the runner's loader, e.g.::

    llama_model_loader: loaded meta data with 29 key-value pairs and 291 tensors
    from /root/.ollama/models/blobs/sha256-6a0746a1ec1a... (version GGUF V3 (latest))
"""

import re
from datetime import datetime

TIME_KEY = "time="
SLASH_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
SLASH_DATE_LENGTH = 19
LOAD_MARKER = "llama_model_loader: loaded meta data"

_BLOB_HASH_RE = re.compile(r"sha256-([0-9a-f]{64})(?![0-9a-f])")


def _parse_time_value(line: str) -> datetime | None:
    value = line[len(TIME_KEY):].split(maxsplit=1)
    if not value:
        return None
    try:
        timestamp = datetime.fromisoformat(value[0].strip('"'))
    except ValueError:
        return None
    if timestamp.tzinfo is None:
        return None
    return timestamp.astimezone()


def _parse_slash_date(line: str) -> datetime | None:
    if len(line) < SLASH_DATE_LENGTH or line[4] != "/" or line[7] != "/":
        return None
    try:
        naive = datetime.strptime(line[:SLASH_DATE_LENGTH], SLASH_DATE_FORMAT)
    except ValueError:
        return None
    # Runner lines are written in the machine's local time
    return naive.astimezone()


def parse_timestamp(line: str) -> datetime | None:
    """Timestamp carried by a log line, as a local aware datetime."""
    if line.startswith(TIME_KEY):
        return _parse_time_value(line)
    return _parse_slash_date(line)


def parse_load_event(line: str) -> str | None:
    """Hex digest of the blob loaded on this line, if it is a load event."""
    if LOAD_MARKER not in line:
        return None
    match = _BLOB_HASH_RE.search(line)
    return match.group(1) if match else None
