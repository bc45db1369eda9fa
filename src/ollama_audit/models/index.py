# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""
Index of installed models, keyed by the hash of their weights blob.

The daemon stores one manifest per tag under
``<models>/manifests/<registry>/<namespace>/<model>/<tag>``. Several tags
can point to the same blob (``llama3:8b`` and ``llama3:latest``), so each
index entry collects every name the blob is installed under.
"""

import logging
import os
from pathlib import Path, PurePath

from pydantic import ValidationError

from ollama_audit.exceptions import ManifestReadError, ManifestScanError
from ollama_audit.models.manifest import DIGEST_PREFIX, ManifestRecord, ModelIndexEntry

logger = logging.getLogger("ollama_audit")

DEFAULT_NAMESPACE = "library"


def normalize_digest(digest: str) -> str:
    """Strips the ``sha256:`` prefix. Bare digests are returned unchanged."""
    if digest.startswith(DIGEST_PREFIX):
        return digest[len(DIGEST_PREFIX):]
    return digest


def display_name_from_path(relative_path: PurePath) -> str | None:
    """
    Builds the name users type (``ollama run <name>``) from a manifest path.

    Only the last four components matter: registry, namespace, model and
    tag. Models of the default namespace drop the namespace prefix.

    Returns:
        ``model:tag`` or ``namespace/model:tag``, or None for paths with
        fewer than four components.
    """
    parts = relative_path.parts
    if len(parts) < 4:
        return None
    _registry, namespace, model, tag = parts[-4:]
    prefix = "" if namespace == DEFAULT_NAMESPACE else f"{namespace}/"
    return f"{prefix}{model}:{tag}"


def parse_manifest(data: bytes) -> ManifestRecord | None:
    """Parses manifest JSON; None if the content is not a manifest."""
    try:
        return ManifestRecord.model_validate_json(data)
    except ValidationError:
        return None


def _raise_scan_error(error: OSError) -> None:
    raise ManifestScanError(error.filename or "?", error.strerror or str(error)) from error


def _iter_manifest_files(manifests_dir: Path) -> list[Path]:
    """Every regular file below ``manifests_dir``, sorted by path."""
    files = []
    for dirpath, _dirnames, filenames in os.walk(manifests_dir, onerror=_raise_scan_error):
        for filename in filenames:
            path = Path(dirpath) / filename
            if path.is_file():
                files.append(path)
    # os.walk order depends on the filesystem; sorting keeps alias order
    # and the size kept for a hash stable between runs
    return sorted(files)


def build_index(manifests_dir: Path) -> dict[str, ModelIndexEntry]:
    """
    Indexes every manifest below ``manifests_dir``.

    Files that are not manifests, manifests without a model layer and paths
    too short to name a model are skipped.

    Raises:
        ManifestScanError: If the directory tree cannot be enumerated.
        ManifestReadError: If a manifest file cannot be read.
    """
    index: dict[str, ModelIndexEntry] = {}

    if not manifests_dir.exists():
        logger.warning("Manifests directory not found: %s", manifests_dir)
        return index
    if not manifests_dir.is_dir():
        raise ManifestScanError(manifests_dir, "Not a directory")

    for path in _iter_manifest_files(manifests_dir):
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ManifestReadError(path, e.strerror or str(e)) from e

        record = parse_manifest(data)
        if record is None:
            logger.debug("Skipping non-manifest file: %s", path)
            continue

        layer = record.weights_layer()
        if layer is None:
            logger.debug("Skipping manifest without model layer: %s", path)
            continue

        name = display_name_from_path(path.relative_to(manifests_dir))
        if name is None:
            logger.debug("Skipping manifest outside registry layout: %s", path)
            continue

        digest = normalize_digest(layer.digest)
        entry = index.setdefault(digest, ModelIndexEntry(digest=digest))
        entry.aliases.append(name)
        entry.size = layer.size

    logger.debug("Indexed %d model blobs from %s", len(index), manifests_dir)
    return index
