from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from translatable_fields.core.errors import FieldLoadError
from translatable_fields.core.model import Field


def load_document(path: str) -> Any:
    """Load a YAML/JSON document, wrapping every failure in FieldLoadError."""

    p = Path(path)
    if not p.exists():
        raise FieldLoadError(
            code="E_FILE_NOT_FOUND",
            message="file does not exist",
            file=str(p),
        )

    suffix = p.suffix.lower()
    try:
        raw_text = p.read_text(encoding="utf-8")
    except Exception as e:  # pragma: no cover
        raise FieldLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e

    try:
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(raw_text)
        if suffix == ".json":
            return json.loads(raw_text)
        raise FieldLoadError(
            code="E_UNSUPPORTED_FORMAT",
            message="supported formats are .yaml/.yml and .json",
            file=str(p),
        )
    except FieldLoadError:
        raise
    except Exception as e:
        code = "E_YAML_PARSE" if suffix in {".yaml", ".yml"} else "E_JSON_PARSE"
        raise FieldLoadError(code=code, message=str(e), file=str(p)) from e


def load_fields(path: str) -> list[Field]:
    """Load field declarations.

    Format:
      fields:
        - name: Title
        - name: Meta title
          attribute: meta_title
          component: textarea
          panel: SEO
    """

    data = load_document(path)
    if not isinstance(data, dict):
        raise FieldLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="top-level document must be a mapping/object",
            file=path,
        )

    raw_fields = data.get("fields")
    if not isinstance(raw_fields, list):
        raise FieldLoadError(
            code="E_INVALID_FIELD",
            message="fields is required and must be an array",
            file=path,
            path="fields",
        )

    out: list[Field] = []
    for i, raw in enumerate(raw_fields):
        field_path = f"fields[{i}]"
        if isinstance(raw, str):
            raw = {"name": raw}
        if not isinstance(raw, dict):
            raise FieldLoadError(
                code="E_INVALID_FIELD",
                message="field must be a string or an object",
                file=path,
                path=field_path,
            )

        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            raise FieldLoadError(
                code="E_INVALID_FIELD",
                message="name is required and must be a non-empty string",
                file=path,
                path=f"{field_path}.name",
            )

        kwargs: dict[str, Any] = {}
        for key in ("attribute", "component", "panel"):
            value = raw.get(key)
            if value is None:
                continue
            if not isinstance(value, str) or not value.strip():
                raise FieldLoadError(
                    code="E_INVALID_FIELD",
                    message=f"{key} must be a non-empty string",
                    file=path,
                    path=f"{field_path}.{key}",
                )
            kwargs[key] = value.strip()

        meta = raw.get("meta")
        if meta is not None:
            if not isinstance(meta, dict):
                raise FieldLoadError(
                    code="E_INVALID_FIELD",
                    message="meta must be an object",
                    file=path,
                    path=f"{field_path}.meta",
                )
            kwargs["meta"] = dict(meta)

        out.append(Field.make(name.strip(), **kwargs))
    return out


def load_form(path: str) -> dict[str, Any]:
    """Load submitted form values (a flat mapping of request keys)."""

    data = load_document(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FieldLoadError(
            code="E_INVALID_TOP_LEVEL",
            message="form document must be a mapping/object",
            file=path,
        )
    return {str(k): v for k, v in data.items()}
