from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional, Protocol

from translatable_fields.core.expand.keys import TranslationBinding


RenderContext = Literal["index", "detail", "edit"]

RENDER_CONTEXTS: tuple[str, ...] = ("index", "detail", "edit")


class TranslatableModel(Protocol):
    """What a model must offer for its fields to be translated.

    Records returned by either method expose one attribute per translated
    field (``record.title``), readable and writable.
    """

    def translate(self, locale: str) -> Optional[Any]: ...

    def translate_or_new(self, locale: str) -> Any: ...


@dataclass(frozen=True)
class Field:
    name: str
    attribute: str
    component: str = "text"
    panel: Optional[str] = None
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def make(cls, name: str, attribute: Optional[str] = None, **kwargs: Any) -> "Field":
        if attribute is None:
            attribute = name.lower().replace(" ", "_")
        return cls(name=name, attribute=attribute, **kwargs)

    def resolve(self, model: Any) -> Any:
        return getattr(model, self.attribute, None)

    def fill(self, request: Mapping[str, Any], model: Any) -> None:
        if self.attribute in request:
            setattr(model, self.attribute, request[self.attribute])


@dataclass(frozen=True)
class TranslatedField:
    """A field bound to one locale of one translated attribute.

    Built from an untouched ``Field`` template; the template's attribute is
    kept in the binding and the public ``attribute`` becomes the composite
    request key.
    """

    template: Field
    binding: TranslationBinding
    name: str
    panel: Optional[str] = None

    @property
    def attribute(self) -> str:
        return self.binding.key

    @property
    def locale(self) -> str:
        return self.binding.locale

    @property
    def original_attribute(self) -> str:
        return self.binding.attribute

    @property
    def component(self) -> str:
        return self.template.component

    @property
    def meta(self) -> dict[str, Any]:
        return self.template.meta

    def resolve(self, model: TranslatableModel) -> Any:
        record = model.translate(self.locale)
        if record is None:
            return None
        return getattr(record, self.original_attribute, None)

    def fill(self, request: Mapping[str, Any], model: TranslatableModel) -> None:
        if self.attribute not in request:
            return
        record = model.translate_or_new(self.locale)
        setattr(record, self.original_attribute, request[self.attribute])
