"""Application-owned default configuration.

Expanders built without an explicit ``config=`` read the registered config
when they are constructed. Applications set it once at startup; tests reset
it between cases.
"""
from __future__ import annotations

from translatable_fields.core.config.locales_config import TranslatableConfig


_config: TranslatableConfig = TranslatableConfig()


def get_config() -> TranslatableConfig:
    return _config


def set_config(config: TranslatableConfig) -> TranslatableConfig:
    global _config
    _config = config
    return _config


def reset_config() -> TranslatableConfig:
    return set_config(TranslatableConfig())
