"""Discover the variables a template tree needs before it can be rendered."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import TemplateIOError
from .naming import detect_occurrences

__all__ = ["INIT_HOOK_FILENAME", "VariableScanner", "read_text_or_none"]


LOGGER = logging.getLogger(__name__)

INIT_HOOK_FILENAME = "scaffer_init.py"


def read_text_or_none(path: Path, *, encoding: str = "utf-8") -> str | None:
    """Return the text content of ``path`` or ``None`` when it is not text."""

    try:
        return path.read_bytes().decode(encoding)
    except UnicodeDecodeError:
        return None


@dataclass(slots=True)
class VariableScanner:
    """Collect canonical variable names from paths and file contents."""

    encoding: str = "utf-8"

    def scan(self, root: str | Path) -> set[str]:
        """Return every canonical variable name referenced under ``root``.

        Relative entry paths are always scanned. File contents are scanned
        when they decode as text; undecodable files are skipped silently and
        remain eligible for path substitution. The initialization hook file is
        scanned like any other file.
        """

        root = Path(root)
        if not root.is_dir():
            raise TemplateIOError(f"template root {root} is not a directory")

        variables: set[str] = set()
        try:
            entries = sorted(root.rglob("*"))
            for entry in entries:
                relative = entry.relative_to(root).as_posix()
                variables |= detect_occurrences(relative)
                if not entry.is_file():
                    continue
                content = read_text_or_none(entry, encoding=self.encoding)
                if content is None:
                    LOGGER.debug("Skipping content scan of non-text file %s", relative)
                    continue
                variables |= detect_occurrences(content)
        except OSError as exc:
            raise TemplateIOError(f"failed to scan template {root}: {exc}") from exc

        LOGGER.debug("Found %d variable(s) in %s: %s", len(variables), root, sorted(variables))
        return variables
