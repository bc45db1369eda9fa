# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""
Translations for report titles, column headers and CLI messages.

Usage:
    from ollama_audit.i18n import t

    t("report.active_title")            # "Active Models:" or "Modelos activos:"
    t("cli.error", message="boom")      # "Error: boom"

Language selection, first match wins:
    1. OLLAMA_AUDIT_LANG environment variable (e.g. "es", "es_ES")
    2. System locale
    3. English

Only the report text is translated; model names and sizes are printed as is.
"""

import json
import locale
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

LANG_ENV_VAR = "OLLAMA_AUDIT_LANG"
SUPPORTED_LANGUAGES = {"en", "es"}
DEFAULT_LANGUAGE = "en"

LOCALES_DIR = Path(__file__).parent / "locales"


def _language_code(value: str) -> str | None:
    """'es_ES.UTF-8' -> 'es', if supported."""
    code = value.split(".")[0].split("_")[0].split("-")[0].lower().strip()
    return code if code in SUPPORTED_LANGUAGES else None


def _system_language() -> str | None:
    lang = locale.getlocale()[0]
    if lang and _language_code(lang):
        return _language_code(lang)
    for env_var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(env_var, "")
        if value and _language_code(value):
            return _language_code(value)
    return None


@lru_cache(maxsize=1)
def get_language() -> str:
    """Current language code ("en" or "es")."""
    configured = os.environ.get(LANG_ENV_VAR, "")
    if configured and _language_code(configured):
        return _language_code(configured)
    return _system_language() or DEFAULT_LANGUAGE


@lru_cache(maxsize=None)
def _load_catalog(lang: str) -> dict[str, Any]:
    with open(LOCALES_DIR / f"{lang}.json", encoding="utf-8") as f:
        return json.load(f)


def _lookup(catalog: dict[str, Any], key: str) -> str | None:
    node: Any = catalog
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def t(key: str, **kwargs: Any) -> str:
    """
    Translates a dotted key, falling back to English and then to the key.

    Args:
        key: e.g. "columns.usage_count"
        **kwargs: Values for ``str.format`` placeholders.
    """
    lang = get_language()
    value = _lookup(_load_catalog(lang), key)
    if value is None and lang != DEFAULT_LANGUAGE:
        value = _lookup(_load_catalog(DEFAULT_LANGUAGE), key)
    if value is None:
        return key
    return value.format(**kwargs) if kwargs else value
