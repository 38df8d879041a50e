"""Turn a template reference into a concrete template root on disk."""

from __future__ import annotations

import logging
import shutil
import tempfile
import urllib.error
import urllib.request
import zipfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from .config import ConfigStore
from .errors import ArchiveCorrupt, DownloadFailed, TemplateNotFound
from .naming import contains_placeholder
from .scanner import INIT_HOOK_FILENAME, read_text_or_none

__all__ = [
    "SourceOrigin",
    "TemplateSource",
    "TemplateSourceResolver",
    "extract_zip",
    "fetch_bytes",
    "find_template_root",
    "is_template_directory",
    "is_url",
]


LOGGER = logging.getLogger(__name__)

USER_AGENT = "scaffer"
DEFAULT_TIMEOUT = 60.0

Opener = Callable[..., Any]


class SourceOrigin(str, Enum):
    """Where a resolved template came from."""

    LOCAL = "local"
    NAMED = "named"
    REMOTE = "remote"


@dataclass(slots=True)
class TemplateSource:
    """A resolved template root.

    Remote sources own a temporary workspace holding the downloaded archive and
    its extraction; :meth:`close` discards it. Use the source as a context
    manager to guarantee cleanup.
    """

    root_path: Path
    origin: SourceOrigin
    reference: str = ""
    workspace: tempfile.TemporaryDirectory | None = field(default=None, repr=False)

    def close(self) -> None:
        if self.workspace is not None:
            self.workspace.cleanup()
            self.workspace = None

    def __enter__(self) -> "TemplateSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def is_url(reference: str) -> bool:
    return reference.startswith(("http://", "https://"))


def fetch_bytes(
    url: str,
    *,
    opener: Opener | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> bytes:
    """Download ``url`` and return the response body.

    ``opener`` defaults to :func:`urllib.request.urlopen` and is called with the
    prepared request and a ``timeout`` keyword.
    """

    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    opener_func = opener if opener is not None else urllib.request.urlopen
    try:
        with opener_func(request, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise DownloadFailed(f"failed to download template from {url}: HTTP {status}")
            return response.read()
    except urllib.error.HTTPError as exc:
        raise DownloadFailed(f"failed to download template from {url}: HTTP {exc.code}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise DownloadFailed(f"failed to download template from {url}: {exc}") from exc


def extract_zip(zip_path: str | Path, dest_dir: str | Path) -> Path:
    """Extract ``zip_path`` into ``dest_dir`` preserving member paths verbatim.

    Members ending in ``/`` become directories. Members that would land outside
    ``dest_dir`` are rejected.
    """

    dest_dir = Path(dest_dir)
    base = dest_dir.resolve()
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(zip_path) as archive:
            for member in archive.infolist():
                target = dest_dir / member.filename
                if not target.resolve().is_relative_to(base):
                    raise ArchiveCorrupt(f"archive member '{member.filename}' escapes the extraction directory")
                if member.filename.endswith("/"):
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(member) as source, target.open("wb") as sink:
                    shutil.copyfileobj(source, sink)
    except (zipfile.BadZipFile, NotImplementedError, EOFError, OSError) as exc:
        raise ArchiveCorrupt(f"failed to extract template archive {zip_path}: {exc}") from exc
    return dest_dir


def is_template_directory(directory: str | Path) -> bool:
    """Return ``True`` when ``directory`` looks like a template root.

    Checks, in order: the initialization hook file is present, an entry name
    holds a placeholder, a text file's content holds a placeholder, or there is
    more than one entry. An empty directory is never a template root.
    """

    entries = sorted(Path(directory).iterdir())
    if not entries:
        return False

    if any(entry.name == INIT_HOOK_FILENAME for entry in entries):
        return True

    if any(contains_placeholder(entry.name) for entry in entries):
        return True

    for entry in entries:
        if not entry.is_file():
            continue
        content = read_text_or_none(entry)
        if content is not None and contains_placeholder(content):
            return True

    return len(entries) > 1


def find_template_root(extract_dir: str | Path) -> Path:
    """Locate the real template root inside an extracted archive."""

    extract_dir = Path(extract_dir)
    subdirectories: list[Path] = []
    try:
        if is_template_directory(extract_dir):
            return extract_dir

        subdirectories = sorted(entry for entry in extract_dir.iterdir() if entry.is_dir())
        for candidate in subdirectories:
            if is_template_directory(candidate):
                return candidate
    except OSError as exc:
        raise ArchiveCorrupt(f"failed to inspect extracted template {extract_dir}: {exc}") from exc

    if subdirectories:
        return subdirectories[0]
    return extract_dir


@dataclass(slots=True)
class TemplateSourceResolver:
    """Resolve URLs, configured names and paths into :class:`TemplateSource` objects."""

    config: ConfigStore = field(default_factory=ConfigStore)
    opener: Opener | None = None
    timeout: float = DEFAULT_TIMEOUT

    def resolve(self, reference: str) -> TemplateSource:
        """Resolve ``reference``.

        The lookup order is: an ``http(s)`` URL, a named template from the
        configuration, an existing filesystem path, and finally a subdirectory
        named ``reference`` inside one of the configured template directories.
        """

        if is_url(reference):
            return self._download(reference, SourceOrigin.REMOTE, reference)

        urls = self.config.get_template_urls()
        if reference in urls:
            target = urls[reference]
            if is_url(target):
                return self._download(target, SourceOrigin.NAMED, reference)
            return self._local(Path(target).expanduser(), SourceOrigin.NAMED, reference)

        direct = Path(reference).expanduser()
        if direct.exists():
            return self._local(direct, SourceOrigin.LOCAL, reference)

        for directory in self.config.get_template_directories():
            candidate = directory / reference
            if candidate.is_dir():
                LOGGER.debug("Found template '%s' in %s", reference, directory)
                return TemplateSource(candidate, SourceOrigin.NAMED, reference)

        raise TemplateNotFound(f"Template '{reference}' not found")

    def _local(self, path: Path, origin: SourceOrigin, reference: str) -> TemplateSource:
        if path.is_dir():
            return TemplateSource(path, origin, reference)
        if path.is_file() and zipfile.is_zipfile(path):
            return self._unpack(path, origin, reference)
        raise TemplateNotFound(f"Template '{reference}' does not point to a directory: {path}")

    def _download(self, url: str, origin: SourceOrigin, reference: str) -> TemplateSource:
        LOGGER.info("Downloading template from %s", url)
        payload = fetch_bytes(url, opener=self.opener, timeout=self.timeout)
        return self._unpack(payload, origin, reference)

    def _unpack(self, archive: bytes | Path, origin: SourceOrigin, reference: str) -> TemplateSource:
        workspace = tempfile.TemporaryDirectory(prefix="scaffer-")
        try:
            if isinstance(archive, bytes):
                archive_path = Path(workspace.name) / "template.zip"
                try:
                    archive_path.write_bytes(archive)
                except OSError as exc:
                    raise ArchiveCorrupt(f"failed to store downloaded archive: {exc}") from exc
            else:
                archive_path = archive
            root = find_template_root(extract_zip(archive_path, Path(workspace.name) / "extracted"))
        except BaseException:
            workspace.cleanup()
            raise
        LOGGER.debug("Template root for '%s' is %s", reference, root)
        return TemplateSource(root, origin, reference, workspace)
