import pytest
from pydantic import ValidationError

from backend.biblehub_linker.config import Settings
from backend.biblehub_linker.utils.reference_parser import Citation
from backend.biblehub_linker.utils.rewriter import FragmentRewriter


def test_defaults():
    settings = Settings()
    assert settings.base_url == "https://biblehub.com"
    assert settings.default_version == "nlt"
    assert settings.excluded_tags == ["a", "pre", "code", "script", "style"]


def test_values_are_normalized():
    settings = Settings(base_url="https://example.org/", default_version="KJV", excluded_tags=["A", "Pre"])
    assert settings.base_url == "https://example.org"
    assert settings.default_version == "kjv"
    assert settings.excluded_tags == ["a", "pre"]


def test_unknown_default_version():
    with pytest.raises(ValidationError):
        Settings(default_version="msg")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("BHL_BASE_URL", "https://mirror.example")
    monkeypatch.setenv("BHL_DEFAULT_VERSION", "esv")
    settings = Settings()
    assert settings.base_url == "https://mirror.example"
    assert settings.default_version == "esv"


def test_rewriter_from_settings():
    rewriter = FragmentRewriter.from_settings(Settings(default_version="web"))
    link = rewriter.builder.build(Citation(book="psalms", chapter=23))
    assert link.href == "https://biblehub.com/web/psalms/23.htm"
