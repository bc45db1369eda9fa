"""
Global pytest configuration and shared fixtures.
"""

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

LLAMA3_DIGEST = "6a0746a1ec1aef3e7ec53868f220ff6e389f6f8ef87a01d77c96807de94ca2aa"
CUSTOM_DIGEST = "c1864a5eb19305c40519da12cc543519e48a0697ecd30e15d5ac228644957d12"
GONE_DIGEST = "deadbeef" * 8


@pytest.fixture(autouse=True)
def english(monkeypatch):
    """Reports are asserted in English regardless of the machine locale."""
    from ollama_audit.i18n import get_language

    monkeypatch.setenv("OLLAMA_AUDIT_LANG", "en")
    get_language.cache_clear()
    yield
    get_language.cache_clear()


@pytest.fixture
def temp_dir():
    """Temporary directory for a test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def models_dir(temp_dir):
    """Empty Ollama models directory."""
    d = temp_dir / "models"
    (d / "manifests").mkdir(parents=True)
    return d


def write_manifest(
    models_dir: Path,
    namespace: str,
    model: str,
    tag: str,
    digest: str,
    size: int,
    registry: str = "registry.ollama.ai",
) -> Path:
    """Writes a manifest the way the daemon lays them out on disk."""
    path = models_dir / "manifests" / registry / namespace / model / tag
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(
            {
                "schemaVersion": 2,
                "mediaType": "application/vnd.docker.distribution.manifest.v2+json",
                "config": {
                    "mediaType": "application/vnd.docker.container.image.v1+json",
                    "digest": "sha256:" + "0" * 64,
                    "size": 485,
                },
                "layers": [
                    {
                        "mediaType": "application/vnd.ollama.image.model",
                        "digest": f"sha256:{digest}",
                        "size": size,
                    },
                    {
                        "mediaType": "application/vnd.ollama.image.license",
                        "digest": "sha256:" + "1" * 64,
                        "size": 12403,
                    },
                ],
            }
        )
    )
    return path


def load_line(digest: str) -> str:
    """A llama.cpp loader line announcing the given blob."""
    return (
        "llama_model_loader: loaded meta data with 29 key-value pairs and 291 tensors "
        f"from /root/.ollama/models/blobs/sha256-{digest} (version GGUF V3 (latest))"
    )


def slash_line(when: datetime, text: str = "routes.go:1008: INFO server config") -> str:
    return f"{when.strftime('%Y/%m/%d %H:%M:%S')} {text}"


def write_log(path: Path, lines: list[str], mtime: datetime | None = None) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    if mtime is not None:
        ts = mtime.timestamp()
        os.utime(path, (ts, ts))
    return path


@pytest.fixture
def populated_models(models_dir):
    """
    Two tags of llama3 sharing one blob, plus one user model.
    """
    write_manifest(models_dir, "library", "llama3", "8b", LLAMA3_DIGEST, 4_661_224_676)
    write_manifest(models_dir, "library", "llama3", "latest", LLAMA3_DIGEST, 4_661_224_676)
    write_manifest(models_dir, "alice", "custom", "v1", CUSTOM_DIGEST, 734_003_200)
    return models_dir
