# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""Manifest records and the per-hash index entries built from them."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

MODEL_MEDIA_TYPE = "application/vnd.ollama.image.model"
DIGEST_PREFIX = "sha256:"


class ManifestLayer(BaseModel):
    """One content layer (weights, template, params...) of a manifest."""

    model_config = ConfigDict(populate_by_name=True)

    media_type: str = Field(alias="mediaType")
    digest: str  # sha256:<hex>
    size: int = Field(ge=0)  # bytes


class ManifestRecord(BaseModel):
    """A manifest file as written by the daemon. Extra keys are ignored."""

    layers: list[ManifestLayer]

    def weights_layer(self) -> ManifestLayer | None:
        """The layer holding the model weights, if any."""
        for layer in self.layers:
            if layer.media_type == MODEL_MEDIA_TYPE:
                return layer
        return None


@dataclass
class ModelIndexEntry:
    """All names under which one weights blob is installed."""

    digest: str  # bare hex, no "sha256:" prefix
    aliases: list[str] = field(default_factory=list)  # e.g. ["llama3:8b", "llama3:latest"]
    size: int = 0

    @property
    def name(self) -> str:
        """Display name; several tags of the same blob are comma-joined."""
        return ", ".join(self.aliases)
