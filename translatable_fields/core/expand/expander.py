from __future__ import annotations

import logging
from itertools import product
from typing import Any, Mapping, Optional, Sequence, Union

from translatable_fields.core.config.locales_config import (
    DisplayNameCallback,
    TranslatableConfig,
    flatten_locales,
)
from translatable_fields.core.config.registry import get_config
from translatable_fields.core.errors import LocalesNotDefined
from translatable_fields.core.expand.keys import TranslationBinding
from translatable_fields.core.model import (
    RENDER_CONTEXTS,
    Field,
    RenderContext,
    TranslatableModel,
    TranslatedField,
)


log = logging.getLogger(__name__)

AnyField = Union[Field, TranslatedField]


def default_display_name(field: Field, locale: str) -> str:
    name = field.name
    return f"{name[:1].upper()}{name[1:]} ({locale})"


class Translatable:
    """Expand fields into one field per locale.

    Resolution order for locales: ``locales=`` → ``config.default_locales`` →
    ``config.locales_config`` (flattened). For the display name: ``display_name=`` →
    ``config.display_name`` → ``"<Name> (<locale>)"``.

    ``data`` holds the produced fields, ordered locale-major, field-minor.
    """

    def __init__(
        self,
        fields: Sequence[Field] = (),
        *,
        locales: Optional[Sequence[str]] = None,
        display_name: Optional[DisplayNameCallback] = None,
        context: RenderContext = "detail",
        panel: Optional[str] = None,
        config: Optional[TranslatableConfig] = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self.original_fields: list[Field] = list(fields)
        self.panel = panel
        self.context: RenderContext = _check_context(context)
        self._locales = self._init_locales(locales)
        self._display_name: DisplayNameCallback = (
            display_name or self.config.display_name or default_display_name
        )
        self.data: list[AnyField] = []

        self.create_translatable_fields()

    @classmethod
    def make(cls, fields: Sequence[Field] = (), **kwargs: Any) -> "Translatable":
        return cls(fields, **kwargs)

    def _init_locales(self, locales: Optional[Sequence[str]]) -> list[str]:
        if locales:
            return list(locales)
        if self.config.default_locales:
            return list(self.config.default_locales)

        resolved = flatten_locales(self.config.locales_config)
        if not resolved:
            raise LocalesNotDefined(
                code="E_LOCALES_NOT_DEFINED",
                message="no locales configured: pass locales=, set default locales, "
                "or provide a translatable.locales configuration",
                path="locales",
            )
        return resolved

    @property
    def resolved_locales(self) -> list[str]:
        return list(self._locales)

    def locales(self, locales: Sequence[str]) -> "Translatable":
        self._locales = list(locales)
        self.create_translatable_fields()
        return self

    def display_localized_name_using(self, callback: DisplayNameCallback) -> "Translatable":
        self._display_name = callback
        self.create_translatable_fields()
        return self

    def with_context(self, context: RenderContext) -> "Translatable":
        self.context = _check_context(context)
        self.create_translatable_fields()
        return self

    def on_index_page(self) -> bool:
        return self.context == "index"

    def create_translatable_fields(self) -> list[AnyField]:
        if self.on_index_page():
            self.data = list(self.original_fields)
        else:
            self.data = [
                self.create_translated_field(f, locale)
                for locale, f in product(self._locales, self.original_fields)
            ]

        log.debug(
            "expanded %d field(s) x %d locale(s) -> %d (context=%s)",
            len(self.original_fields),
            len(self._locales),
            len(self.data),
            self.context,
        )
        return self.data

    def create_translated_field(self, template: Field, locale: str) -> TranslatedField:
        name = self._display_name(template, locale) if len(self._locales) > 1 else template.name
        return TranslatedField(
            template=template,
            binding=TranslationBinding(locale=locale, attribute=template.attribute),
            name=name,
            panel=self.panel if self.panel is not None else template.panel,
        )

    def resolve(self, model: TranslatableModel) -> dict[str, Any]:
        return {f.attribute: f.resolve(model) for f in self.data}

    def fill(self, request: Mapping[str, Any], model: TranslatableModel) -> None:
        for f in self.data:
            f.fill(request, model)

    def __iter__(self):
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)


def _check_context(context: str) -> RenderContext:
    if context not in RENDER_CONTEXTS:
        raise ValueError(f"unknown render context: {context} (choose one of: {', '.join(RENDER_CONTEXTS)})")
    return context  # type: ignore[return-value]
