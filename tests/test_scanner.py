from __future__ import annotations

from pathlib import Path

import pytest

from scaffer.errors import TemplateIOError
from scaffer.scanner import INIT_HOOK_FILENAME, VariableScanner, read_text_or_none


def test_scan_collects_path_and_content_variables(make_template):
    root = make_template(
        {
            "src/ScfProject/scf-module.rs": "pub struct ScfWidget;",
            "README.md": "# SCF_TITLE\n",
            "empty/": "",
        }
    )

    assert VariableScanner().scan(root) == {"project", "module", "widget", "title"}


def test_scan_skips_content_of_binary_files(make_template):
    root = make_template(
        {
            "assets/scf-logo.bin": b"\xff\xfe\x00ScfHidden",
            "notes.txt": "plain text",
        }
    )

    assert VariableScanner().scan(root) == {"logo"}


def test_scan_includes_init_hook_contents(make_template):
    root = make_template({INIT_HOOK_FILENAME: "# uses scf-secret\n", "a.txt": "x"})

    assert "secret" in VariableScanner().scan(root)


def test_scan_only_looks_at_paths_relative_to_root(tmp_path: Path, make_template):
    root = make_template({"file.txt": "no placeholders"}, root=tmp_path / "scf-outer" / "template")

    assert VariableScanner().scan(root) == set()


def test_scan_requires_a_directory(tmp_path: Path):
    with pytest.raises(TemplateIOError):
        VariableScanner().scan(tmp_path / "missing")


def test_read_text_or_none(tmp_path: Path):
    text_file = tmp_path / "a.txt"
    text_file.write_text("hello", encoding="utf-8")
    binary_file = tmp_path / "b.bin"
    binary_file.write_bytes(b"\x80\x81")

    assert read_text_or_none(text_file) == "hello"
    assert read_text_or_none(binary_file) is None
