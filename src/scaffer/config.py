"""Project-local and user-global configuration of template locations."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

__all__ = [
    "GLOBAL_CONFIG_FILENAME",
    "LOCAL_CONFIG_FILENAME",
    "MANIFEST_FILENAME",
    "ConfigStore",
    "ScafferConfig",
    "find_local_config",
    "load_config_file",
    "write_config_file",
]


LOGGER = logging.getLogger(__name__)

LOCAL_CONFIG_FILENAME = "scaffer.json"
GLOBAL_CONFIG_FILENAME = ".scaffer.json"
MANIFEST_FILENAME = "package.json"
MANIFEST_KEY = "scaffer"


class ScafferConfig(BaseModel):
    """Contents of a ``scaffer.json`` file (or the ``scaffer`` manifest key)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    directories: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("scaffer", "directories"),
        serialization_alias="scaffer",
        description="Directories whose subdirectories are templates.",
    )
    template_urls: Optional[Dict[str, str]] = Field(
        None,
        validation_alias=AliasChoices("scaffer_template_urls", "templateUrls"),
        serialization_alias="scaffer_template_urls",
        description="Named templates mapped to an archive URL or a filesystem path.",
    )

    def add_directory(self, path: str) -> None:
        self.directories.append(path)

    def add_url(self, name: str, url: str) -> None:
        if self.template_urls is None:
            self.template_urls = {}
        self.template_urls[name] = url

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def load_config_file(path: Path) -> ScafferConfig:
    """Parse a dedicated configuration file, raising :class:`ConfigError` on failure."""

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"failed to read {path}: {exc}") from exc
    try:
        return ScafferConfig.model_validate_json(text)
    except ValidationError as exc:
        raise ConfigError(f"failed to parse {path}: {exc}") from exc


def write_config_file(path: Path, config: ScafferConfig) -> Path:
    try:
        path.write_text(config.to_json() + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to write {path}: {exc}") from exc
    return path


def _load_manifest_section(path: Path) -> ScafferConfig | None:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        LOGGER.debug("Ignoring unreadable manifest %s", path)
        return None
    if not isinstance(payload, dict) or not isinstance(payload.get(MANIFEST_KEY), dict):
        return None
    try:
        return ScafferConfig.model_validate(payload[MANIFEST_KEY])
    except ValidationError:
        LOGGER.debug("Ignoring invalid '%s' section in %s", MANIFEST_KEY, path)
        return None


def find_local_config(start: Path) -> tuple[ScafferConfig, Path] | None:
    """Walk from ``start`` up to the filesystem root looking for configuration.

    At each level ``scaffer.json`` wins over a ``package.json`` carrying a
    ``scaffer`` object. Returns the configuration and the file it came from.
    """

    for directory in (start, *start.parents):
        candidate = directory / LOCAL_CONFIG_FILENAME
        if candidate.is_file():
            return load_config_file(candidate), candidate

        manifest = directory / MANIFEST_FILENAME
        if manifest.is_file():
            section = _load_manifest_section(manifest)
            if section is not None:
                return section, manifest

    return None


def _resolve_entry(entry: str, base: Path | None) -> Path:
    path = Path(entry).expanduser()
    if base is not None and not path.is_absolute():
        return base / path
    return path


@dataclass(slots=True)
class ConfigStore:
    """Merged view over the project-local and user-global configuration.

    Relative directory entries are resolved against the directory holding the
    file that declared them.
    """

    local: ScafferConfig = field(default_factory=ScafferConfig)
    user: ScafferConfig = field(default_factory=ScafferConfig)
    local_path: Path | None = None
    global_path: Path | None = None

    @classmethod
    def load(cls, cwd: str | Path | None = None, home: str | Path | None = None) -> "ConfigStore":
        """Load both configuration tiers. Missing files fall back to defaults."""

        start = Path(cwd) if cwd is not None else Path.cwd()
        if home is None:
            try:
                home = Path.home()
            except RuntimeError as exc:
                raise ConfigError("cannot determine the user's home directory") from exc
        global_path = Path(home) / GLOBAL_CONFIG_FILENAME

        found = find_local_config(start.resolve())
        if found is None:
            local, local_path = ScafferConfig(), None
        else:
            local, local_path = found
            LOGGER.debug("Loaded project configuration from %s", local_path)

        if global_path.is_file():
            user = load_config_file(global_path)
            LOGGER.debug("Loaded user configuration from %s", global_path)
        else:
            user = ScafferConfig()

        return cls(local=local, user=user, local_path=local_path, global_path=global_path)

    def get_template_directories(self) -> list[Path]:
        """Return local directories followed by global ones, duplicates kept."""

        local_base = self.local_path.parent if self.local_path is not None else None
        global_base = self.global_path.parent if self.global_path is not None else None
        directories = [_resolve_entry(entry, local_base) for entry in self.local.directories]
        directories.extend(_resolve_entry(entry, global_base) for entry in self.user.directories)
        return directories

    def get_template_urls(self) -> dict[str, str]:
        """Return named templates; local entries override global ones."""

        urls: dict[str, str] = {}
        urls.update(self.user.template_urls or {})
        urls.update(self.local.template_urls or {})
        return urls

    def list_template_names(self) -> list[str]:
        """Return the sorted, deduplicated names of every known template."""

        names: set[str] = set()
        for directory in self.get_template_directories():
            if not directory.is_dir():
                continue
            try:
                names.update(entry.name for entry in directory.iterdir() if entry.is_dir())
            except OSError as exc:
                raise ConfigError(f"failed to read template directory {directory}: {exc}") from exc
        names.update(self.get_template_urls())
        return sorted(names)

    def add_template_directory(self, path: str | Path) -> None:
        """Append ``path`` to the user-global directory list."""

        self.user.add_directory(str(path))

    def add_template_url(self, name: str, url: str) -> None:
        """Register a named template in the user-global configuration."""

        self.user.add_url(name, url)

    def save_global(self) -> Path:
        if self.global_path is None:
            raise ConfigError("no user configuration path is known")
        return write_config_file(self.global_path, self.user)

    def save_local(self, directory: str | Path) -> Path:
        return write_config_file(Path(directory) / LOCAL_CONFIG_FILENAME, self.local)
