import json
from pathlib import Path

import yaml
from typer.testing import CliRunner

from translatable_fields.cli import app

runner = CliRunner()

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"
FIELDS = str(EXAMPLES / "fields.yaml")
POST = str(EXAMPLES / "post.yaml")


def test_resolve_json():
    r = runner.invoke(app, ["resolve", FIELDS, POST, "-l", "en", "-l", "pt", "--format", "json"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.stdout) == {
        "translations_title_en": "Hello",
        "translations_meta_title_en": "Hello | Blog",
        "translations_title_pt": None,
        "translations_meta_title_pt": None,
    }


def test_resolve_text():
    r = runner.invoke(app, ["resolve", FIELDS, POST, "-l", "en"])
    assert r.exit_code == 0, r.output
    assert "translations_title_en: Hello" in r.output


def test_fill_writes_translations(tmp_path: Path):
    out = tmp_path / "post.yaml"
    r = runner.invoke(
        app,
        ["fill", FIELDS, POST, str(EXAMPLES / "edit-form.yaml"), "-l", "en", "-l", "pt", "--out", str(out)],
    )
    assert r.exit_code == 0, r.output

    got = yaml.safe_load(out.read_text(encoding="utf-8"))
    assert got["translations"]["pt"] == {"title": "Olá", "meta_title": "Olá | Blog"}
    assert got["translations"]["en"]["title"] == "Hello"
    assert got["attributes"] == {"slug": "hello-world"}


def test_fill_rejects_unknown_locale(tmp_path: Path):
    form = tmp_path / "form.yaml"
    form.write_text("translations_title_fr: Bonjour\n", encoding="utf-8")
    r = runner.invoke(app, ["fill", FIELDS, POST, str(form), "-l", "en", "--out", str(tmp_path / "out.yaml")])
    assert r.exit_code == 2
    assert "E_FILL_UNKNOWN_KEY" in r.output
    assert not (tmp_path / "out.yaml").exists()


def test_fill_rejects_malformed_key(tmp_path: Path):
    form = tmp_path / "form.yaml"
    form.write_text("translations_pt: x\n", encoding="utf-8")
    r = runner.invoke(app, ["fill", FIELDS, POST, str(form), "-l", "pt", "--out", str(tmp_path / "out.yaml")])
    assert r.exit_code == 2
    assert "E_KEY_MALFORMED" in r.output


def test_resolve_index_controller_reads_plain_attributes():
    controller = "Laravel\\Nova\\Http\\Controllers\\ResourceIndexController@handle"
    r = runner.invoke(app, ["resolve", FIELDS, POST, "-l", "en", "--controller", controller, "--format", "json"])
    assert r.exit_code == 0, r.output
    assert json.loads(r.stdout) == {"title": None, "meta_title": None}
