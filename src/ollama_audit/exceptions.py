# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""
Exception hierarchy for ollama-audit.

Only fatal conditions are raised. Content that is merely not recognised
(a file in the manifests tree that is not a manifest, a log line without a
timestamp or load event) is skipped by the caller instead.
"""

from pathlib import Path


class AuditError(Exception):
    """Base exception for every ollama-audit error."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n{self.details}"
        return self.message


# --- Manifest errors ---


class ManifestError(AuditError):
    """Error while indexing the manifests directory."""

    pass


class ManifestScanError(ManifestError):
    """The manifests directory tree could not be enumerated."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Cannot scan manifests directory: {path}", reason)
        self.path = Path(path)


class ManifestReadError(ManifestError):
    """A manifest file was found but its contents could not be read."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Cannot read manifest file: {path}", reason)
        self.path = Path(path)


# --- Log errors ---


class LogError(AuditError):
    """Error while reading runtime logs."""

    pass


class LogReadError(LogError):
    """A log file could not be opened, read or stat'ed."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Cannot read log file: {path}", reason)
        self.path = Path(path)


# --- Configuration errors ---


class ConfigurationError(AuditError):
    """Configuration error."""

    pass


class UnsupportedPlatformError(ConfigurationError):
    """No default paths are known for the requested platform."""

    def __init__(self, platform: str):
        super().__init__(
            f"Unsupported platform: {platform}",
            "Set OLLAMA_MODELS or pass --models-dir and --log explicitly.",
        )
        self.platform = platform
