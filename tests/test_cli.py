"""Tests for the doctag command line."""

import io
import json
import logging
import sys
from pathlib import Path

import pytest

from doctag.cli import _separator_arg, build_parser, main, resolve_settings

FIXTURES = Path(__file__).parent / "fixtures"


class _Tty(io.StringIO):
    def isatty(self):
        return True


def _run(argv):
    buf = io.StringIO()
    status = main(argv, dest=buf)
    return status, buf.getvalue()


# ---------------------------------------------------------------------------
# Argument handling
# ---------------------------------------------------------------------------

def test_separator_arg():
    assert _separator_arg(None) is None
    assert _separator_arg("") == "/"
    assert _separator_arg("::") == ":"

def test_flags_default_to_settings():
    args = build_parser().parse_args(["doc.txt"])
    settings = resolve_settings(args)
    assert settings.hierarchical is False
    assert settings.sanitize_keys is True

def test_flags_override_config(tmp_path):
    cfg = tmp_path / "doctag.yaml"
    cfg.write_text("hierarchical: false\ntrim: true\n", encoding="utf-8")
    args = build_parser().parse_args(
        ["doc.txt", "--config", str(cfg), "--hierarchy", "--raw-keys", "--tag-separator", "."]
    )
    settings = resolve_settings(args)
    assert settings.hierarchical is True
    assert settings.trim is True
    assert settings.sanitize_keys is False
    assert settings.separator == "."

def test_negated_flags_override_config(tmp_path):
    cfg = tmp_path / "doctag.yaml"
    cfg.write_text("hierarchical: true\ntrim: true\npretty: true\nwarn: true\n", encoding="utf-8")
    args = build_parser().parse_args(
        ["doc.txt", "--config", str(cfg), "--no-hierarchy", "--no-trim", "--no-pretty", "--no-warn"]
    )
    settings = resolve_settings(args)
    assert settings.hierarchical is False
    assert settings.trim is False
    assert settings.pretty is False
    assert settings.warn is False

def test_no_hierarchical_output(tmp_path):
    cfg = tmp_path / "doctag.yaml"
    cfg.write_text("hierarchical: true\n", encoding="utf-8")
    status, out = _run([str(FIXTURES / "page.txt"), "--config", str(cfg), "--no-hierarchical"])
    assert status == 0
    assert "page_title" in json.loads(out)

@pytest.mark.parametrize("word", ["help", "/?"])
def test_help_words(word):
    status, out = _run([word])
    assert status == 0
    assert "usage: doctag" in out

def test_help_flag():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0

def test_no_input(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", _Tty())
    status, out = _run([])
    assert status == 1
    assert out == ""
    assert "usage: doctag" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def test_flat_output():
    status, out = _run([str(FIXTURES / "page.txt"), "--trim"])
    assert status == 0
    assert json.loads(out)["page_content"] == "Some stuff about people"

def test_hierarchical_output():
    status, out = _run([str(FIXTURES / "page.txt"), "--hierarchical", "--trim"])
    assert status == 0
    assert json.loads(out)["page"]["keywords"] == ["awesome", "stuff", "aboutpeople"]

def test_pretty_output():
    status, out = _run([str(FIXTURES / "nested.txt"), "--hierarchy", "--pretty"])
    assert status == 0
    assert out.startswith('{\n  "nums": [\n')
    assert out.endswith("}\n")

def test_inspect_output():
    status, out = _run([str(FIXTURES / "nested.txt"), "--hierarchy", "--trim", "--inspect"])
    assert status == 0
    assert "nums:" in out
    assert '    name  : "Dave"' in out

def test_output_file(tmp_path):
    target = tmp_path / "out.json"
    status, out = _run([str(FIXTURES / "page.txt"), "--hierarchy", "--output", str(target)])
    assert status == 0
    assert out == ""
    assert "links" in json.loads(target.read_text(encoding="utf-8"))["page"]

def test_custom_delimiters(tmp_path):
    doc = tmp_path / "doc.txt"
    doc.write_text("-- title --Hello", encoding="utf-8")
    status, out = _run([str(doc), "--tag-prefix", "-- ", "--tag-suffix", " --"])
    assert status == 0
    assert json.loads(out) == {"title": "Hello"}

def test_stdin(monkeypatch):
    stdin = io.TextIOWrapper(io.BytesIO("<{ a/b }>v".encode("utf-8")), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stdin)
    status, out = _run(["-", "--hierarchy"])
    assert status == 0
    assert json.loads(out) == {"a": {"b": "v"}}

def test_piped_stdin_without_file(monkeypatch):
    stdin = io.TextIOWrapper(io.BytesIO(b"<{a}>v"), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stdin)
    status, out = _run([])
    assert status == 0
    assert json.loads(out) == {"a": "v"}


# ---------------------------------------------------------------------------
# Warnings and errors
# ---------------------------------------------------------------------------

def test_warn_logs_diagnostics(caplog):
    with caplog.at_level(logging.WARNING, logger="doctag"):
        status, _ = _run([str(FIXTURES / "page.txt"), "--warn"])
    assert status == 0
    assert "skipping doctag" in caplog.text

def test_no_warn_is_quiet(caplog):
    with caplog.at_level(logging.WARNING, logger="doctag"):
        status, _ = _run([str(FIXTURES / "page.txt")])
    assert status == 0
    assert caplog.records == []

def test_transform_error(tmp_path, capsys):
    doc = tmp_path / "doc.txt"
    doc.write_text("<{ page/# }>x", encoding="utf-8")
    status, out = _run([str(doc), "--hierarchy"])
    assert status == 1
    assert out == ""
    assert "doctag: error: Line: 1, Column: 1 :: Path cannot equal '#'" in capsys.readouterr().err

def test_same_prefix_and_suffix(tmp_path, capsys):
    doc = tmp_path / "doc.txt"
    doc.write_text("x", encoding="utf-8")
    status, _ = _run([str(doc), "--tag-prefix", "!", "--tag-suffix", "!"])
    assert status == 1
    assert "cannot be the same" in capsys.readouterr().err

def test_missing_file(tmp_path, capsys):
    status, _ = _run([str(tmp_path / "missing.txt")])
    assert status == 1
    assert "doctag: error:" in capsys.readouterr().err

def test_bad_config(tmp_path, capsys):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("colour: red\n", encoding="utf-8")
    status, _ = _run([str(FIXTURES / "page.txt"), "--config", str(cfg)])
    assert status == 1
    assert "unknown setting" in capsys.readouterr().err
