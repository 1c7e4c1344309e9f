"""Locale configuration.

The locale list is the one piece of configuration every expander needs. It
comes from, in order: the expander itself, ``TranslatableConfig.default_locales``,
or ``TranslatableConfig.locales_config`` (the external ``translatable.locales``
setting, usually loaded from YAML).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml


DisplayNameCallback = Callable[[Any, str], str]

LocalesConfig = Union[list[Any], dict[str, Any]]

ENV_LOCALES = "TRANSLATABLE_LOCALES"
ENV_CONFIG_FILE = "TRANSLATABLE_CONFIG"


class LocaleConfigError(ValueError):
    pass


@dataclass
class TranslatableConfig:
    default_locales: list[str] = field(default_factory=list)
    display_name: Optional[DisplayNameCallback] = None
    locales_config: Optional[LocalesConfig] = None

    def default_locales_to(self, locales: list[str]) -> "TranslatableConfig":
        self.default_locales = list(locales)
        return self

    def display_localized_name_by_default_using(self, callback: DisplayNameCallback) -> "TranslatableConfig":
        self.display_name = callback
        return self

    @classmethod
    def from_env(cls) -> "TranslatableConfig":
        """Build a config from TRANSLATABLE_LOCALES and TRANSLATABLE_CONFIG."""
        cfg = cls()
        raw = (os.getenv(ENV_LOCALES, "") or "").strip()
        if raw:
            cfg.default_locales = [x.strip() for x in raw.split(",") if x.strip()]
        config_file = (os.getenv(ENV_CONFIG_FILE, "") or "").strip()
        if config_file:
            cfg.locales_config = load_locales_file(config_file)
        return cfg


def load_locales_file(path: str | Path) -> LocalesConfig:
    """Load a locales configuration from YAML.

    Accepted formats:
      locales: [en, pt, {es: [MX, CO]}]
    or a bare top-level list / mapping of the same entries:
      en: [US, GB]
      pt: []

    Returns the raw (unflattened) configuration; see flatten_locales.
    """
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise LocaleConfigError(f"invalid YAML in {p}: {e}") from e
    if raw is None:
        return []
    if isinstance(raw, dict) and "locales" in raw:
        raw = raw["locales"]
    if not isinstance(raw, (list, dict)):
        raise LocaleConfigError("locales file must be a list or a mapping of language -> countries")
    # Validate eagerly so a bad file fails at load time, not on first expansion.
    flatten_locales(raw)
    return raw


def flatten_locales(config: Optional[LocalesConfig]) -> list[str]:
    """Flatten nested language/country entries.

    ``[en, {es: [MX, CO]}]`` and ``{en: [], es: [MX, CO]}`` both list the
    language first and then ``language-country`` for each country:
    ``['en', 'es', 'es-MX', 'es-CO']``.
    """
    if not config:
        return []

    if isinstance(config, dict):
        items: list[Any] = [{k: v} for k, v in config.items()]
    elif isinstance(config, list):
        items = config
    else:
        raise LocaleConfigError("locales must be a list or a mapping")

    out: list[str] = []
    for item in items:
        _reject_yaml_bool(item)
        if isinstance(item, str):
            if not item.strip():
                raise LocaleConfigError("locale codes must be non-empty strings")
            out.append(item.strip())
            continue
        if isinstance(item, dict):
            for lang, countries in item.items():
                _reject_yaml_bool(lang)
                if not isinstance(lang, str) or not lang.strip():
                    raise LocaleConfigError("language codes must be non-empty strings")
                lang = lang.strip()
                out.append(lang)
                if countries is None:
                    continue
                if not isinstance(countries, list):
                    raise LocaleConfigError(f"countries for '{lang}' must be a list")
                for country in countries:
                    _reject_yaml_bool(country)
                    if not isinstance(country, str) or not country.strip():
                        raise LocaleConfigError(f"country codes for '{lang}' must be non-empty strings")
                    out.append(f"{lang}-{country.strip()}")
            continue
        raise LocaleConfigError(f"unsupported locale entry: {item!r}")
    return out


def _reject_yaml_bool(value: Any) -> None:
    # Unquoted no/yes/on/off load as booleans in YAML; `no` is Norwegian.
    if isinstance(value, bool):
        raise LocaleConfigError(
            f"locale code {value!r} was read as a YAML boolean; quote the code (e.g. 'no')"
        )
