# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""Per-model usage aggregated from the server logs."""

from dataclasses import dataclass, field
from datetime import datetime

DELETED_SUFFIX = "-deleted"


def deleted_name(digest: str) -> str:
    """Placeholder name for a blob that was loaded but has no manifest anymore."""
    return f"{digest[:8]}...{DELETED_SUFFIX}"


@dataclass
class ModelUsage:
    """Load statistics for one display name."""

    name: str
    last_used: datetime  # timezone-aware, local
    digest: str
    usage_count: int = 0
    size: int = 0  # 0 when the blob is no longer indexed
    aliases: tuple[str, ...] = field(default_factory=tuple)

    @property
    def deleted(self) -> bool:
        """Deleted models are recognised by name, even an installed tag ending in -deleted."""
        return self.name.endswith(DELETED_SUFFIX)

    def record_load(self, timestamp: datetime) -> None:
        self.usage_count += 1
        if timestamp > self.last_used:
            self.last_used = timestamp


@dataclass
class UnloggedModel:
    """An installed model name with no load event in any log."""

    name: str
    size: int
