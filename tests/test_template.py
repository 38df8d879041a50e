from __future__ import annotations

from pathlib import Path

import pytest

from scaffer.errors import TemplateIOError, TextDecodeError
from scaffer.template import RESERVED_PATH_CHARACTERS, TemplateRenderer, read_template_text, sanitize_path


@pytest.fixture()
def renderer() -> TemplateRenderer:
    return TemplateRenderer({"project": "my-app"})


def test_variable_names_are_canonicalized():
    renderer = TemplateRenderer({"MyProject": "first"})
    renderer.set_variable("my_project", "second")
    assert renderer.values == {"my-project": "second"}


def test_missing_returns_sorted_names(renderer: TemplateRenderer):
    assert renderer.missing({"zeta", "project", "alpha"}) == ["alpha", "zeta"]


def test_render_string(renderer: TemplateRenderer):
    assert renderer.render_string("class ScfProject: name = 'scf-project'") == (
        "class ScfMyApp: name = 'scf-my-app'"
    )


def test_render_path(renderer: TemplateRenderer):
    assert renderer.render_path("src/ScfProject/scf-project.rs") == "src/ScfMyApp/scf-my-app.rs"
    assert renderer.render_path(Path("docs") / "SCF_PROJECT.md") == "docs/SCF_MY_APP.md"


@pytest.mark.parametrize("character", list('<>:"|?*'))
def test_sanitize_path_replaces_reserved_characters(character):
    assert sanitize_path(f"dir/a{character}b") == "dir/a_b"


def test_reserved_characters_are_the_ones_sanitized():
    assert RESERVED_PATH_CHARACTERS == '<>:"|?*'
    assert sanitize_path(f"x{RESERVED_PATH_CHARACTERS}y") == "x_______y"


def test_render_path_sanitizes_substituted_values():
    renderer = TemplateRenderer({"name": "a:b", "title": "what?"})
    assert renderer.render_path("scf-name/ScfTitle.txt") == "scf-a_b/ScfWhat_.txt"


def test_render_string_does_not_sanitize():
    renderer = TemplateRenderer({"name": "a:b"})
    assert renderer.render_string("scf-name") == "scf-a:b"


def test_render_file_writes_target(tmp_path: Path, renderer: TemplateRenderer):
    template_path = tmp_path / "template.txt"
    template_path.write_bytes(b"SCF_PROJECT=1\r\n")
    output_path = tmp_path / "nested" / "output.txt"

    rendered = renderer.render_file(template_path, target=output_path)

    assert rendered == "SCF_MY_APP=1\r\n"
    assert output_path.read_bytes() == b"SCF_MY_APP=1\r\n"


def test_render_file_rejects_binary_content(tmp_path: Path, renderer: TemplateRenderer):
    template_path = tmp_path / "image.bin"
    template_path.write_bytes(b"\xff\xfe\x00scf-project")

    with pytest.raises(TextDecodeError):
        renderer.render_file(template_path)


def test_render_file_missing_template(tmp_path: Path, renderer: TemplateRenderer):
    with pytest.raises(TemplateIOError):
        renderer.render_file(tmp_path / "missing.txt")


def test_read_template_text_missing_file(tmp_path: Path):
    with pytest.raises(TemplateIOError):
        read_template_text(tmp_path / "missing.txt")
