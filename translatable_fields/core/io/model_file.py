"""A document-backed model for previewing fields from the CLI.

Format:
  attributes:
    slug: hello-world
  translations:
    en: {title: Hello}
    pt: {title: Olá}

Document values live in a private mapping so a document attribute can never
shadow the model's own methods (``translate``, ``to_dict``, ...).
"""
from __future__ import annotations

from typing import Any, Optional

import yaml

from translatable_fields.core.errors import FieldLoadError
from translatable_fields.core.io.load_fields import load_document


class _AttributeBag:
    _values: dict[str, Any]

    def __init__(self, values: Optional[dict[str, Any]] = None) -> None:
        object.__setattr__(self, "_values", dict(values or {}))

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, so methods always win.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._values[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            raise AttributeError(f"'{name}' is reserved on {type(self).__name__}")
        self._values[name] = value


class TranslationRecord(_AttributeBag):
    def __init__(self, locale: str, values: Optional[dict[str, Any]] = None) -> None:
        super().__init__(values)
        object.__setattr__(self, "_locale", locale)

    @property
    def locale(self) -> str:
        return self._locale

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)


class DocumentModel(_AttributeBag):
    def __init__(
        self,
        attributes: Optional[dict[str, Any]] = None,
        translations: Optional[dict[str, dict[str, Any]]] = None,
    ) -> None:
        super().__init__(attributes)
        object.__setattr__(
            self,
            "_translations",
            {locale: TranslationRecord(locale, values) for locale, values in (translations or {}).items()},
        )

    @property
    def translations(self) -> dict[str, TranslationRecord]:
        return self._translations

    def translate(self, locale: str) -> Optional[TranslationRecord]:
        return self._translations.get(locale)

    def translate_or_new(self, locale: str) -> TranslationRecord:
        if locale not in self._translations:
            self._translations[locale] = TranslationRecord(locale)
        return self._translations[locale]

    def to_dict(self) -> dict[str, Any]:
        return {
            "attributes": dict(self._values),
            "translations": {locale: rec.to_dict() for locale, rec in self._translations.items()},
        }


def load_model(path: str) -> DocumentModel:
    data = load_document(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FieldLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="model document must be a mapping/object",
            file=path,
        )

    attributes = data.get("attributes") or {}
    translations = data.get("translations") or {}
    if not isinstance(attributes, dict):
        raise FieldLoadError(code="E_INVALID_MODEL", message="attributes must be an object", file=path, path="attributes")
    if not isinstance(translations, dict) or any(
        not isinstance(v, dict) for v in translations.values()
    ):
        raise FieldLoadError(
            code="E_INVALID_MODEL",
            message="translations must map locale -> object",
            file=path,
            path="translations",
        )

    # YAML reads bare yes/no/on/off as booleans; `no` is also Norwegian.
    for section, mapping in [("attributes", attributes), ("translations", translations)] + [
        (f"translations.{k}", v) for k, v in translations.items() if isinstance(k, str)
    ]:
        for k in mapping:
            if not isinstance(k, str):
                raise FieldLoadError(
                    code="E_INVALID_MODEL",
                    message=f"key {k!r} is not a string; quote it (e.g. 'no')",
                    file=path,
                    path=section,
                )

    return DocumentModel(
        attributes=dict(attributes),
        translations={k: dict(v) for k, v in translations.items()},
    )


def dump_model_yaml(model: DocumentModel, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(model.to_dict(), f, sort_keys=False, default_flow_style=False, allow_unicode=True)
