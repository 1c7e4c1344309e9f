from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TranslatableError(Exception):
    """Base error envelope. The CLI prints these; library callers may catch them by code."""

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<translatable>"
        return f"{loc}: {self.code}: {self.message}"


class LocalesNotDefined(TranslatableError):
    pass


class FieldLoadError(TranslatableError):
    pass


class KeyParseError(TranslatableError):
    pass
