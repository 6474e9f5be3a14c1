from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs the controller in-process with logging bootstrap disabled and checks
exit codes, rendered output and configuration layering.
"""

import json
import os
from pathlib import Path

import pytest

from locsync.interface.cli import app


def _write(path: Path, data) -> str:
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return str(path)


@pytest.fixture(autouse=True)
def no_logging_bootstrap(monkeypatch):
    """Keep the root logger untouched while the controller runs."""
    monkeypatch.setattr(app, "configure_logging", lambda cfg: None)


@pytest.fixture
def pair(tmp_path: Path):
    reference = _write(tmp_path / "en.json", {"greeting": "Hello", "farewell": "Bye"})
    target = _write(tmp_path / "fr.json", {"greeting": "Hello", "farewell": "Salut"})
    return reference, target


def test_check_reports_coverage(pair, capsys):
    reference, target = pair

    code = app.main(["check", reference, target, "--use-defaults", "--list"])

    out = capsys.readouterr().out
    assert code == app.EXIT_OK
    assert "fr: 1/2 untranslated (50.0% translated)" in out
    assert "  - greeting" in out


def test_check_strict_fails_on_untranslated(pair):
    reference, target = pair
    assert app.main(["check", reference, target, "--use-defaults", "--strict"]) == app.EXIT_FAILURE


def test_missing_reference_is_bad_input(tmp_path, capsys):
    code = app.main(["check", str(tmp_path / "nope.json"), str(tmp_path / "fr.json"), "--use-defaults"])

    assert code == app.EXIT_BAD_INPUT
    assert "Path does not exist" in capsys.readouterr().err


def test_apply_conditional_json_output(pair, tmp_path, capsys):
    reference, target = pair
    patch = _write(tmp_path / "patch.json", {"greeting": "Bonjour", "farewell": "Adieu"})

    code = app.main([
        "apply", reference, target, "-p", patch,
        "--policy", "conditional", "--use-defaults", "--json",
    ])

    payload = json.loads(capsys.readouterr().out)
    assert code == app.EXIT_OK
    assert payload[0]["applied"] == 1
    assert payload[0]["skipped"] == 1
    assert payload[0]["coverage"] == 100.0
    assert json.loads(Path(target).read_text(encoding="utf-8")) == {
        "greeting": "Bonjour",
        "farewell": "Salut",
    }


def test_malformed_target_fails(pair, tmp_path, capsys):
    reference, _ = pair
    broken = tmp_path / "de.json"
    broken.write_text("{ nope", encoding="utf-8")

    code = app.main(["check", reference, str(broken), "--use-defaults"])

    assert code == app.EXIT_FAILURE
    assert "ERROR: de:" in capsys.readouterr().err


def test_dump_config_layers_file_and_flags(tmp_path, capsys):
    config = _write(tmp_path / "locsync.json", {"policy": "conditional", "indent": 4})

    code = app.main(["sync", "--config", config, "--dry-run", "--dump-config"])

    conf = json.loads(capsys.readouterr().out)
    assert code == app.EXIT_OK
    assert conf["policy"] == "conditional"
    assert conf["indent"] == 4
    assert conf["dry_run"] is True


def test_unexpected_error_maps_to_failure(pair, monkeypatch, capsys):
    reference, target = pair

    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(app.sync, "check_locale", boom)

    assert app.main(["check", reference, target, "--use-defaults"]) == app.EXIT_FAILURE
    assert "disk on fire" in capsys.readouterr().err


def test_keyboard_interrupt_maps_to_130(pair, monkeypatch):
    reference, target = pair

    def interrupt(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(app.sync, "check_locale", interrupt)

    assert app.main(["check", reference, target, "--use-defaults"]) == app.EXIT_INTERRUPTED


def test_merge_config_ignores_unknown_and_none():
    merged = app._merge_config({"policy": "unconditional"}, {"policy": None, "other": 1})
    assert merged == {"policy": "unconditional"}


def test_log_file_flag_without_value_uses_default_log_path(pair, tmp_path, monkeypatch):
    reference, target = pair
    default_log = str(tmp_path / "data" / "logs" / "locsync.log")
    captured = []
    monkeypatch.setattr(app, "configure_logging", captured.append)
    monkeypatch.setattr(app, "get_default_log_path", lambda: default_log)

    assert app.main(["check", reference, target, "--use-defaults", "--log-file"]) == app.EXIT_OK
    assert captured[0].log_file == default_log


def test_relative_paths_are_reported_absolute(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    code = app.main(["check", "nope.json", "fr.json", "--use-defaults"])

    assert code == app.EXIT_BAD_INPUT
    assert os.path.join(str(tmp_path), "nope.json") in capsys.readouterr().err
