from pathlib import Path

import pytest

from translatable_fields.core.config.locales_config import (
    LocaleConfigError,
    TranslatableConfig,
    flatten_locales,
    load_locales_file,
)


def test_flatten_plain_list():
    assert flatten_locales(["en", "pt"]) == ["en", "pt"]


def test_flatten_nested_countries():
    assert flatten_locales(["en", {"es": ["MX", "CO"]}, "pt"]) == ["en", "es", "es-MX", "es-CO", "pt"]


def test_flatten_mapping():
    assert flatten_locales({"en": ["US", "GB"], "pt": None}) == ["en", "en-US", "en-GB", "pt"]


def test_flatten_empty():
    assert flatten_locales(None) == []
    assert flatten_locales([]) == []


def test_flatten_rejects_bad_entries():
    with pytest.raises(LocaleConfigError):
        flatten_locales(["en", 3])
    with pytest.raises(LocaleConfigError):
        flatten_locales({"en": "US"})


def test_load_locales_file(tmp_path: Path):
    p = tmp_path / "locales.yaml"
    p.write_text("locales:\n  - en\n  - es: [MX]\n", encoding="utf-8")
    assert flatten_locales(load_locales_file(p)) == ["en", "es", "es-MX"]


def test_load_locales_file_invalid(tmp_path: Path):
    p = tmp_path / "locales.yaml"
    p.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(LocaleConfigError):
        load_locales_file(p)


def test_load_locales_file_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_locales_file(tmp_path / "nope.yaml")


def test_config_from_env(monkeypatch, tmp_path: Path):
    p = tmp_path / "locales.yaml"
    p.write_text("- fr\n", encoding="utf-8")
    monkeypatch.setenv("TRANSLATABLE_LOCALES", "en, pt ,")
    monkeypatch.setenv("TRANSLATABLE_CONFIG", str(p))

    cfg = TranslatableConfig.from_env()

    assert cfg.default_locales == ["en", "pt"]
    assert cfg.locales_config == ["fr"]


def test_config_from_env_empty():
    cfg = TranslatableConfig.from_env()
    assert cfg.default_locales == []
    assert cfg.locales_config is None


def test_flatten_rejects_yaml_booleans_with_quote_hint():
    for config in ([True], ["en", False], {False: None}, {"nb": [False]}):
        try:
            flatten_locales(config)
            assert False, f"expected LocaleConfigError for {config!r}"
        except LocaleConfigError as e:
            assert "quote" in str(e)


def test_load_locales_file_unquoted_no(tmp_path: Path):
    p = tmp_path / "locales.yaml"
    p.write_text("locales: [en, no]\n", encoding="utf-8")
    try:
        load_locales_file(p)
        assert False, "expected LocaleConfigError"
    except LocaleConfigError as e:
        assert "quote" in str(e)


def test_load_locales_file_quoted_no(tmp_path: Path):
    p = tmp_path / "locales.yaml"
    p.write_text("locales: [en, 'no']\n", encoding="utf-8")
    assert flatten_locales(load_locales_file(p)) == ["en", "no"]


def test_load_locales_file_bad_yaml(tmp_path: Path):
    p = tmp_path / "locales.yaml"
    p.write_text("locales: [en\n", encoding="utf-8")
    try:
        load_locales_file(p)
        assert False, "expected LocaleConfigError"
    except LocaleConfigError as e:
        assert "invalid YAML" in str(e)
