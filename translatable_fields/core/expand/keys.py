"""Composite request keys for translated fields.

A translated field is submitted by the admin form under a single flat key:

    translations_<attribute>_<locale>

e.g. ``translations_meta_title_pt``. Attributes may contain underscores;
locales may not (``en-US`` is fine, ``en_US`` is not).
"""
from __future__ import annotations

from dataclasses import dataclass

from translatable_fields.core.errors import KeyParseError


TRANSLATIONS_PREFIX = "translations"
SEPARATOR = "_"


@dataclass(frozen=True)
class TranslationBinding:
    locale: str
    attribute: str

    @property
    def key(self) -> str:
        return composite_key(self.attribute, self.locale)


def composite_key(attribute: str, locale: str) -> str:
    return SEPARATOR.join([TRANSLATIONS_PREFIX, attribute, locale])


def parse_request_attribute(key: str) -> TranslationBinding:
    """Decode a composite key back into its (locale, attribute) pair.

    The last segment is the locale; the leading prefix and the locale are
    dropped and the remaining segments are rejoined as the attribute.
    """

    parts = key.split(SEPARATOR)
    if len(parts) < 3 or parts[0] != TRANSLATIONS_PREFIX:
        raise KeyParseError(
            code="E_KEY_MALFORMED",
            message=f"expected '{TRANSLATIONS_PREFIX}_<attribute>_<locale>', got '{key}'",
            path=key,
        )

    locale = parts[-1]
    attribute = SEPARATOR.join(parts[1:-1])
    if not locale or not attribute:
        raise KeyParseError(
            code="E_KEY_MALFORMED",
            message=f"empty locale or attribute in '{key}'",
            path=key,
        )
    return TranslationBinding(locale=locale, attribute=attribute)
