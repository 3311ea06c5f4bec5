"""Tests for the olm-contacts command."""

from __future__ import annotations

from pathlib import Path

import pytest

from olmcontacts import __version__
from olmcontacts.cli import main, parse_args


def test_parse_args_defaults():
    ns = parse_args(["backup.olm"])
    assert ns.input == "backup.olm"
    assert ns.output_dir is None
    assert ns.extract_from_preview is None
    assert ns.quiet is False


def test_parse_args_all_options():
    ns = parse_args(["./dir", "./out", "--extract-from-preview", "-q"])
    assert ns.output_dir == "./out"
    assert ns.extract_from_preview is True
    assert ns.quiet is True


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--version"])
    assert exc.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_main_writes_all_outputs(tmp_path, monkeypatch, make_olm, record, capsys):
    monkeypatch.chdir(tmp_path)
    path = make_olm(
        {
            "m1.xml": record(sender=("from@example.com", ""), to=[("to@example.com", "To Name")]),
            "m2.xml": record(
                to=[("to@example.com", "")],
                preview="From: Preview Name &lt;preview@example.com&gt;",
            ),
        }
    )
    out = tmp_path / "out"
    assert main([str(path), str(out), "--extract-from-preview"]) == 0

    csv_text = (out / "contacts.csv").read_text(encoding="utf-8")
    assert csv_text.splitlines()[1] == "to@example.com,To Name,to,2"
    assert (out / "contacts-frequent.csv").read_text(encoding="utf-8") == "Email,Name,Source,Message Count"
    assert (out / "contacts.vcf").read_bytes().count(b"BEGIN:VCARD") == 3

    printed = capsys.readouterr().out
    assert "Found 3 unique email addresses" in printed
    assert "1. to@example.com (To Name) - 2 messages" in printed


def test_main_uses_env_output_dir(tmp_path, monkeypatch, make_olm, record):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OLM_OUTPUT_DIR", str(tmp_path / "from_env"))
    path = make_olm({"m.xml": record(to=[("a@example.com", "")])})
    assert main([str(path), "-q"]) == 0
    assert (tmp_path / "from_env" / "contacts.csv").exists()


def test_main_missing_input(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([str(tmp_path / "nope.olm")]) == 1
    assert "not found" in capsys.readouterr().err


def test_main_empty_archive(tmp_path, monkeypatch, make_olm, capsys):
    monkeypatch.chdir(tmp_path)
    path = make_olm({"readme.txt": "x"})
    assert main([str(path), str(tmp_path / "out")]) == 1
    assert "No XML files found in .olm archive" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_main_loads_env_next_to_package(tmp_path, monkeypatch, make_olm, record):
    from olmcontacts import cli

    seen = []
    monkeypatch.setattr(cli, "load_env", seen.append)
    monkeypatch.chdir(tmp_path)
    path = make_olm({"m.xml": record(to=[("a@example.com", "")])})
    assert main([str(path), str(tmp_path / "out"), "-q"]) == 0
    assert seen == [Path(cli.__file__).resolve().parent]
