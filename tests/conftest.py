from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
for entry in (ROOT, SRC):
    if str(entry) not in sys.path:
        sys.path.insert(0, str(entry))

from tests.fixtures.http_fake import FakeOpener, build_zip  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``HOME`` at an empty directory so no real ``~/.scaffer.json`` leaks in."""

    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture()
def make_template(tmp_path: Path):
    """Write a template tree from a mapping of relative paths to contents."""

    def _make(files: dict[str, str | bytes], root: Path | None = None) -> Path:
        base = root if root is not None else tmp_path / "template"
        base.mkdir(parents=True, exist_ok=True)
        for relative, content in files.items():
            path = base / relative
            if relative.endswith("/"):
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return base

    return _make


@pytest.fixture()
def zip_opener():
    """Build a :class:`FakeOpener` serving a zip archive of the given entries."""

    def _make(entries: dict[str, str | bytes]) -> FakeOpener:
        return FakeOpener(build_zip(entries))

    return _make
