"""Tests for the internationalization (i18n) module."""

import json

import pytest

from ollama_audit.i18n import LOCALES_DIR, get_language, t


def _keys(data, prefix=""):
    for key, value in data.items():
        if isinstance(value, dict):
            yield from _keys(value, f"{prefix}{key}.")
        else:
            yield f"{prefix}{key}"


class TestLanguageSelection:
    """Tests for get_language."""

    def test_env_english(self, monkeypatch):
        monkeypatch.setenv("OLLAMA_AUDIT_LANG", "en")
        get_language.cache_clear()

        assert get_language() == "en"

    def test_env_spanish_with_region(self, monkeypatch):
        monkeypatch.setenv("OLLAMA_AUDIT_LANG", "es_ES.UTF-8")
        get_language.cache_clear()

        assert get_language() == "es"

    def test_unsupported_falls_back(self, monkeypatch):
        """Unsupported language falls back to the system locale or English."""
        monkeypatch.setenv("OLLAMA_AUDIT_LANG", "fr")
        get_language.cache_clear()

        assert get_language() in ("en", "es")


class TestTranslate:
    """Tests for t()."""

    def test_english(self):
        assert t("report.active_title") == "Active Models:"
        assert t("report.unlogged_title") == "Unlogged Models:"
        assert t("report.deleted_title") == "Deleted Models:"
        assert t("columns.usage_count") == "Usage Count"

    def test_spanish(self, monkeypatch):
        monkeypatch.setenv("OLLAMA_AUDIT_LANG", "es")
        get_language.cache_clear()

        assert t("report.active_title") == "Modelos activos:"
        assert t("columns.size") == "Tamaño"

    def test_interpolation(self):
        assert t("cli.version", version="9.9.9") == "ollama-audit v9.9.9"

    def test_unknown_key_returned_as_is(self):
        assert t("does.not.exist") == "does.not.exist"

    def test_partial_key_returned_as_is(self):
        """A key naming a section, not a string, is not a translation."""
        assert t("report") == "report"


class TestLocaleFiles:
    """Both catalogs define the same keys."""

    @pytest.mark.parametrize("lang", ["en", "es"])
    def test_valid_json(self, lang):
        with open(LOCALES_DIR / f"{lang}.json", encoding="utf-8") as f:
            assert isinstance(json.load(f), dict)

    def test_same_keys(self):
        with open(LOCALES_DIR / "en.json", encoding="utf-8") as f:
            en = set(_keys(json.load(f)))
        with open(LOCALES_DIR / "es.json", encoding="utf-8") as f:
            es = set(_keys(json.load(f)))

        assert en == es
