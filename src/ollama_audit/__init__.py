# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""ollama-audit: usage report for locally cached Ollama models."""

__version__ = "0.1.0"
