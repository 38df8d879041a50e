"""Rewrite text and paths by substituting branded placeholders."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, MutableMapping

from .errors import TemplateIOError, TextDecodeError
from .naming import canonicalize, substitute

__all__ = [
    "RESERVED_PATH_CHARACTERS",
    "TemplateRenderer",
    "read_template_text",
    "sanitize_path",
]


RESERVED_PATH_CHARACTERS = '<>:"|?*'
_RESERVED_PATTERN = re.compile(f"[{re.escape(RESERVED_PATH_CHARACTERS)}]")


def sanitize_path(path: str) -> str:
    """Replace characters that are invalid in path segments with ``_``."""

    return _RESERVED_PATTERN.sub("_", path)


def read_template_text(path: str | Path, *, encoding: str = "utf-8") -> str:
    """Read ``path`` as text, failing with :class:`TextDecodeError` on binary data."""

    path = Path(path)
    try:
        return path.read_bytes().decode(encoding)
    except UnicodeDecodeError as exc:
        raise TextDecodeError(f"{path} is not a {encoding} text file") from exc
    except OSError as exc:
        raise TemplateIOError(f"failed to read template file {path}: {exc}") from exc


@dataclass(slots=True)
class TemplateRenderer:
    """Render template text and paths for a fixed set of variable values."""

    values: MutableMapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        supplied = dict(self.values)
        self.values = {}
        self.set_variables(supplied)

    def set_variable(self, name: str, value: str) -> None:
        """Store ``value`` under the canonical form of ``name``."""

        self.values[canonicalize(name)] = value

    def set_variables(self, values: Mapping[str, str]) -> None:
        for name, value in values.items():
            self.set_variable(name, value)

    def missing(self, required: set[str] | frozenset[str]) -> list[str]:
        """Return the names in ``required`` without a value, sorted."""

        return sorted(name for name in required if name not in self.values)

    def render_string(self, template: str) -> str:
        """Return ``template`` with every known placeholder replaced."""

        return substitute(template, self.values)

    def render_path(self, relative_path: str | Path) -> str:
        """Render a relative path and sanitise reserved characters.

        Path separators are normalised to ``/`` before substitution so the
        result is stable across platforms.
        """

        text = str(relative_path).replace("\\", "/")
        return sanitize_path(self.render_string(text))

    def render_file(
        self,
        template_path: str | Path,
        *,
        target: str | Path | None = None,
        encoding: str = "utf-8",
    ) -> str:
        """Render ``template_path`` and optionally write the result to ``target``."""

        template_path = Path(template_path)
        if not template_path.is_file():
            raise TemplateIOError(f"template file {template_path} does not exist")

        rendered = self.render_string(read_template_text(template_path, encoding=encoding))

        if target is not None:
            target_path = Path(target)
            try:
                target_path.parent.mkdir(parents=True, exist_ok=True)
                target_path.write_text(rendered, encoding=encoding, newline="")
            except OSError as exc:
                raise TemplateIOError(f"failed to write {target_path}: {exc}") from exc

        return rendered
