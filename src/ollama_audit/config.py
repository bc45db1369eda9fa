# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""Path configuration for ollama-audit."""

import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ollama_audit.exceptions import UnsupportedPlatformError

logger = logging.getLogger("ollama_audit")

# Same variable the Ollama daemon reads to relocate its model store
MODELS_ENV_VAR = "OLLAMA_MODELS"
SERVER_LOG_PATTERN = "server*.log"


class Platform(Enum):
    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"

    @classmethod
    def detect(cls, sys_platform: str | None = None) -> "Platform":
        """Maps a ``sys.platform`` value to a supported platform."""
        value = sys_platform or sys.platform
        if value == "darwin":
            return cls.MACOS
        if value in ("win32", "cygwin"):
            return cls.WINDOWS
        if value.startswith("linux"):
            return cls.LINUX
        raise UnsupportedPlatformError(value)


@dataclass(frozen=True)
class PlatformPaths:
    """Where the daemon keeps its model store and server logs."""

    models_dir: Path
    log_dir: Path | None = None  # None: the platform has no file logs
    log_pattern: str = SERVER_LOG_PATTERN

    def discover_logs(self) -> list[Path]:
        """
        Lists the server logs, newest first.

        The daemon rotates ``server.log`` into ``server-1.log``,
        ``server-2.log``..., so a descending sort by file name puts the
        current log first.
        """
        if self.log_dir is None or not self.log_dir.is_dir():
            return []
        paths = [p for p in self.log_dir.glob(self.log_pattern) if p.is_file()]
        return sorted(paths, key=lambda p: p.name, reverse=True)


def resolve_platform_paths(
    platform: Platform,
    home: Path,
    environ: Mapping[str, str],
) -> PlatformPaths:
    """Default model store and log locations for each platform."""
    if platform == Platform.MACOS:
        return PlatformPaths(
            models_dir=home / ".ollama" / "models",
            log_dir=home / ".ollama" / "logs",
        )

    if platform == Platform.WINDOWS:
        local_app_data = environ.get("LOCALAPPDATA")
        return PlatformPaths(
            models_dir=home / ".ollama" / "models",
            log_dir=Path(local_app_data) / "Ollama" if local_app_data else None,
        )

    # The Linux service logs to journald, not to files
    return PlatformPaths(models_dir=Path("/usr/share/ollama/.ollama/models"))


@dataclass
class AuditConfig:
    """Resolved inputs for one audit run."""

    # Explicit overrides (CLI options); None means "use the defaults"
    models_dir_override: Path | None = None
    log_paths: list[Path] | None = None

    # Count a (hash, timestamp) load only once across rotated log files
    dedupe: bool = False

    platform: Platform | None = None
    home_dir: Path = field(default_factory=Path.home)
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)

    def platform_paths(self) -> PlatformPaths:
        platform = self.platform or Platform.detect()
        return resolve_platform_paths(platform, self.home_dir, self.environ)

    @property
    def models_dir(self) -> Path:
        if self.models_dir_override is not None:
            return self.models_dir_override
        custom = self.environ.get(MODELS_ENV_VAR)
        if custom:
            return Path(custom)
        return self.platform_paths().models_dir

    @property
    def manifests_dir(self) -> Path:
        return self.models_dir / "manifests"

    def discover_logs(self) -> list[Path]:
        """Log files to correlate, in processing order."""
        if self.log_paths:
            return list(self.log_paths)
        paths = self.platform_paths().discover_logs()
        if not paths:
            logger.info("No server logs found for this platform")
        return paths
