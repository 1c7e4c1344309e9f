from __future__ import annotations

import json
import logging
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from translatable_fields.core.config.locales_config import (
    DisplayNameCallback,
    LocaleConfigError,
    TranslatableConfig,
    load_locales_file,
)
from translatable_fields.core.context import context_from_controller
from translatable_fields.core.errors import (
    FieldLoadError,
    KeyParseError,
    LocalesNotDefined,
    TranslatableError,
)
from translatable_fields.core.expand.expander import AnyField, Translatable
from translatable_fields.core.expand.keys import TRANSLATIONS_PREFIX, parse_request_attribute
from translatable_fields.core.io.load_fields import load_fields, load_form
from translatable_fields.core.io.model_file import dump_model_yaml, load_model
from translatable_fields.core.logging_config import setup_logging
from translatable_fields.core.model import RENDER_CONTEXTS, Field, TranslatedField

app = typer.Typer(add_completion=False, no_args_is_help=True)

log = logging.getLogger(__name__)


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log expansion details to stderr"),
) -> None:
    """Translatable fields CLI."""
    if verbose:
        setup_logging(debug=True)


@app.command("locales")
def locales_cmd(
    locale: Optional[list[str]] = typer.Option(None, "--locale", "-l", help="Locale (repeatable); overrides configuration"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML locales file"),
) -> None:
    """Print the resolved locale set."""
    expander = _build_expander([], locale=locale, config_file=config_file, context="detail")
    typer.echo("Locales:")
    for code in expander.resolved_locales:
        typer.echo(f"- {code}")


@app.command("expand")
def expand(
    path: str = typer.Argument(..., help="Path to a fields file (.yaml/.yml/.json)"),
    locale: Optional[list[str]] = typer.Option(None, "--locale", "-l", help="Locale (repeatable); overrides configuration"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML locales file"),
    context: str = typer.Option("detail", "--context", help="Render context: index|detail|edit"),
    controller: Optional[str] = typer.Option(
        None,
        "--controller",
        help="Routed controller action (Class@method); the resource index controller renders as index",
    ),
    name_format: Optional[str] = typer.Option(
        None,
        "--name-format",
        help="Display name format, e.g. '{locale}-{name}' (placeholders: name, attribute, locale)",
    ),
    panel: Optional[str] = typer.Option(None, "--panel", help="Assign every produced field to this panel"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Expand declared fields into one field per locale."""
    _check_format(format, code="E_EXPAND_UNKNOWN_FORMAT")
    fields = _load_fields_or_exit(path)
    expander = _build_expander(
        fields,
        locale=locale,
        config_file=config_file,
        context=context,
        controller=controller,
        name_format=name_format,
        panel=panel,
    )

    if format == "json":
        payload = {
            "tool": "translatable",
            "command": "expand",
            "context": expander.context,
            "locales": expander.resolved_locales,
            "field_count": len(expander.data),
            "fields": [_field_to_item(f) for f in expander.data],
        }
        typer.echo(json.dumps(payload, indent=2, sort_keys=True))
        return

    table = Table(title=f"translatable expand ({expander.context})")
    table.add_column("Attribute", no_wrap=True)
    table.add_column("Name", no_wrap=True)
    table.add_column("Locale")
    table.add_column("Panel")
    table.add_column("Component")
    for f in expander.data:
        item = _field_to_item(f)
        table.add_row(
            item["attribute"],
            item["name"],
            item["locale"] or "-",
            item["panel"] or "-",
            item["component"],
        )
    Console().print(table)


@app.command("resolve")
def resolve(
    path: str = typer.Argument(..., help="Path to a fields file (.yaml/.yml/.json)"),
    model_path: str = typer.Argument(..., help="Path to a model document (.yaml/.yml/.json)"),
    locale: Optional[list[str]] = typer.Option(None, "--locale", "-l", help="Locale (repeatable); overrides configuration"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML locales file"),
    context: str = typer.Option("detail", "--context", help="Render context: index|detail|edit"),
    controller: Optional[str] = typer.Option(
        None,
        "--controller",
        help="Routed controller action (Class@method); the resource index controller renders as index",
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Show the value each produced field resolves to for a model."""
    _check_format(format, code="E_RESOLVE_UNKNOWN_FORMAT")
    fields = _load_fields_or_exit(path)
    model = _load_or_exit(load_model, model_path)
    expander = _build_expander(
        fields, locale=locale, config_file=config_file, context=context, controller=controller
    )

    values = expander.resolve(model)
    if format == "json":
        typer.echo(json.dumps(values, indent=2, sort_keys=False, default=str))
        return
    for attribute, value in values.items():
        typer.echo(f"{attribute}: {'' if value is None else value}")


@app.command("fill")
def fill(
    path: str = typer.Argument(..., help="Path to a fields file (.yaml/.yml/.json)"),
    model_path: str = typer.Argument(..., help="Path to a model document (.yaml/.yml/.json)"),
    form_path: str = typer.Argument(..., help="Submitted form values keyed by request attribute"),
    out: str = typer.Option(..., "--out", help="Path to write the updated model YAML"),
    locale: Optional[list[str]] = typer.Option(None, "--locale", "-l", help="Locale (repeatable); overrides configuration"),
    config_file: Optional[str] = typer.Option(None, "--config", help="YAML locales file"),
) -> None:
    """Apply a submitted edit form to a model's translations."""
    fields = _load_fields_or_exit(path)
    model = _load_or_exit(load_model, model_path)
    form = _load_or_exit(load_form, form_path)
    expander = _build_expander(fields, locale=locale, config_file=config_file, context="edit")

    known = {f.attribute for f in expander.data}
    errors: list[TranslatableError] = []
    for key in form:
        if not key.startswith(f"{TRANSLATIONS_PREFIX}_"):
            log.info("ignoring non-translated form key %s", key)
            continue
        try:
            binding = parse_request_attribute(key)
        except KeyParseError as e:
            errors.append(KeyParseError(code=e.code, message=e.message, file=form_path, path=key))
            continue
        if binding.key not in known:
            errors.append(
                KeyParseError(
                    code="E_FILL_UNKNOWN_KEY",
                    message=f"no field for attribute '{binding.attribute}' in locale '{binding.locale}'",
                    file=form_path,
                    path=key,
                )
            )
    if errors:
        _print_errors(errors)
        raise typer.Exit(code=2)

    expander.fill(form, model)
    dump_model_yaml(model, out)
    typer.echo(f"OK: wrote {out}")


def _build_expander(
    fields: list[Field],
    *,
    locale: Optional[list[str]],
    config_file: Optional[str],
    context: str,
    controller: Optional[str] = None,
    name_format: Optional[str] = None,
    panel: Optional[str] = None,
) -> Translatable:
    if context not in RENDER_CONTEXTS:
        _print_errors(
            [
                TranslatableError(
                    code="E_UNKNOWN_CONTEXT",
                    message=f"unknown context: {context} (choose one of: {', '.join(RENDER_CONTEXTS)})",
                    path="context",
                )
            ]
        )
        raise typer.Exit(code=2)
    if controller is not None:
        context = context_from_controller(controller, default=context)  # type: ignore[arg-type]

    try:
        config = TranslatableConfig.from_env()
        if config_file:
            config.locales_config = load_locales_file(config_file)
    except FileNotFoundError as e:
        _print_errors(
            [
                FieldLoadError(
                    code="E_LOCALES_FILE_NOT_FOUND",
                    message=f"locales file not found: {e.filename}",
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except LocaleConfigError as e:
        _print_errors([TranslatableError(code="E_LOCALES_FILE_INVALID", message=str(e), path="config")])
        raise typer.Exit(code=2)

    display_name: Optional[DisplayNameCallback] = None
    if name_format is not None:
        display_name = _format_callback(name_format)

    try:
        return Translatable.make(
            fields,
            locales=locale or None,
            display_name=display_name,
            context=context,  # type: ignore[arg-type]
            panel=panel,
            config=config,
        )
    except LocalesNotDefined as e:
        _print_errors([e])
        raise typer.Exit(code=2)
    except (KeyError, IndexError, ValueError) as e:
        _print_errors(
            [
                TranslatableError(
                    code="E_NAME_FORMAT_INVALID",
                    message=f"bad --name-format {name_format!r}: {e}",
                    path="name_format",
                )
            ]
        )
        raise typer.Exit(code=2)


def _format_callback(fmt: str) -> DisplayNameCallback:
    def _display_name(field: Field, locale: str) -> str:
        return fmt.format(name=field.name, attribute=field.attribute, locale=locale)

    return _display_name


def _field_to_item(f: AnyField) -> dict[str, Any]:
    if isinstance(f, TranslatedField):
        return {
            "name": f.name,
            "attribute": f.attribute,
            "original_attribute": f.original_attribute,
            "locale": f.locale,
            "panel": f.panel,
            "component": f.component,
        }
    return {
        "name": f.name,
        "attribute": f.attribute,
        "original_attribute": f.attribute,
        "locale": None,
        "panel": f.panel,
        "component": f.component,
    }


def _check_format(format: str, *, code: str) -> None:
    if format not in ("text", "json"):
        _print_errors(
            [
                TranslatableError(
                    code=code,
                    message=f"unknown format: {format} (choose one of: text, json)",
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)


def _load_fields_or_exit(path: str) -> list[Field]:
    return _load_or_exit(load_fields, path)


def _load_or_exit(loader, path: str):
    try:
        return loader(path)
    except FieldLoadError as e:
        _print_errors([e])
        raise typer.Exit(code=1)


def _print_errors(errors: list[TranslatableError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="translatable")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
