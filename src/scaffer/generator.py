"""Generate a project tree from a template.

The :class:`GenerationPipeline` walks through the states of
:class:`PipelineState`: the template reference is resolved, the template is
scanned for variables, missing values are collected from the prompter and the
tree is rendered into the destination directory. Files written before a
failure are left in place; there is no rollback.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping

from .errors import TemplateIOError, TemplateNotFound
from .naming import canonicalize
from .prompts import Prompter
from .scanner import INIT_HOOK_FILENAME, VariableScanner
from .sources import TemplateSource, TemplateSourceResolver
from .template import TemplateRenderer

__all__ = [
    "GenerationPipeline",
    "GenerationReport",
    "PipelineState",
    "build_variable_map",
    "parse_variable_pairs",
]


LOGGER = logging.getLogger(__name__)


class PipelineState(str, Enum):
    RESOLVING_SOURCE = "resolving-source"
    SCANNING_VARIABLES = "scanning-variables"
    COLLECTING_VALUES = "collecting-values"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class GenerationReport:
    """Outcome of a single generation run."""

    dry_run: bool = False
    created: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)

    @property
    def files_created(self) -> int:
        return len(self.created)

    @property
    def files_skipped(self) -> int:
        return len(self.skipped)

    def summary(self) -> list[str]:
        """Return the human readable lines printed at the end of a run."""

        lines = ["Template processing complete!", f"Files created: {self.files_created}"]
        if self.skipped:
            lines.append(f"Files skipped: {self.files_skipped}")
        if self.dry_run:
            lines.append("This was a dry run - no files were actually created.")
        return lines


def parse_variable_pairs(pairs: Iterable[str]) -> dict[str, str]:
    """Split ``NAME=VALUE`` strings into a mapping. Later pairs win."""

    values: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"invalid variable '{pair}'. Expected NAME=VALUE syntax.")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("variable names must not be empty")
        values[key] = value
    return values


def build_variable_map(values: Mapping[str, str]) -> dict[str, str]:
    """Key ``values`` by canonical variable name. Later duplicates win."""

    return {canonicalize(name): value for name, value in values.items()}


@dataclass(slots=True)
class GenerationPipeline:
    """Resolve, scan, collect values and render a template into a directory."""

    resolver: TemplateSourceResolver
    prompter: Prompter
    scanner: VariableScanner = field(default_factory=VariableScanner)
    state: PipelineState = PipelineState.RESOLVING_SOURCE

    def run(
        self,
        reference: str | None,
        values: Mapping[str, str] | None = None,
        *,
        destination: str | Path | None = None,
        force: bool = False,
        dry_run: bool = False,
    ) -> GenerationReport:
        """Generate ``reference`` into ``destination`` (the working directory by default).

        Parameters
        ----------
        reference:
            URL, configured template name or filesystem path. When ``None`` the
            prompter is asked to choose among the configured templates.
        values:
            Explicit variable values. Names are canonicalized; variables the
            template needs but ``values`` lacks are requested from the prompter
            in sorted order.
        force:
            Overwrite existing files without asking.
        dry_run:
            Resolve, scan and report without touching the destination.
        """

        target = Path(destination) if destination is not None else Path.cwd()
        self.state = PipelineState.RESOLVING_SOURCE
        try:
            if reference is None:
                reference = self._select_template()
            with self.resolver.resolve(reference) as source:
                report = self._generate(source, values or {}, target, force=force, dry_run=dry_run)
        except BaseException:
            self.state = PipelineState.FAILED
            raise
        self.state = PipelineState.DONE
        return report

    def _select_template(self) -> str:
        names = self.resolver.config.list_template_names()
        if not names:
            raise TemplateNotFound(
                "No templates found. Run 'scaffer setup' or 'scaffer add' to configure template directories."
            )
        return self.prompter.choose("Select a template", names)

    def _generate(
        self,
        source: TemplateSource,
        values: Mapping[str, str],
        target: Path,
        *,
        force: bool,
        dry_run: bool,
    ) -> GenerationReport:
        root = source.root_path
        if (root / INIT_HOOK_FILENAME).exists():
            LOGGER.info("Found %s - custom initialization scripts are not executed", INIT_HOOK_FILENAME)

        self.state = PipelineState.SCANNING_VARIABLES
        required = self.scanner.scan(root)

        self.state = PipelineState.COLLECTING_VALUES
        renderer = TemplateRenderer(build_variable_map(values))
        for name in renderer.missing(required):
            renderer.set_variable(name, self.prompter.ask(f"Enter value for '{name}'"))

        self.state = PipelineState.RENDERING
        return self._render(root, renderer, target, force=force, dry_run=dry_run)

    def _render(
        self,
        root: Path,
        renderer: TemplateRenderer,
        target: Path,
        *,
        force: bool,
        dry_run: bool,
    ) -> GenerationReport:
        report = GenerationReport(dry_run=dry_run)
        LOGGER.info("Processing template from: %s", root)
        if dry_run:
            LOGGER.info("DRY RUN - No files will be created")

        base = target.resolve()
        try:
            entries = sorted(root.rglob("*"))
        except OSError as exc:
            raise TemplateIOError(f"failed to read template {root}: {exc}") from exc

        for entry in entries:
            relative = renderer.render_path(entry.relative_to(root).as_posix())
            destination = target / relative
            if not destination.resolve().is_relative_to(base):
                raise TemplateIOError(f"rendered path '{relative}' escapes {target}")

            if entry.is_dir():
                if not dry_run:
                    try:
                        destination.mkdir(parents=True, exist_ok=True)
                    except OSError as exc:
                        raise TemplateIOError(f"failed to create directory {destination}: {exc}") from exc
                LOGGER.info("Created directory: %s", relative)
                report.directories.append(relative)
                continue

            if not entry.is_file() or entry.name == INIT_HOOK_FILENAME:
                continue

            if destination.exists() and not force:
                if dry_run:
                    LOGGER.info("Would skip existing file: %s", relative)
                    report.skipped.append(relative)
                    continue
                if not self.prompter.confirm(f"File '{relative}' already exists. Overwrite?", default=False):
                    LOGGER.info("Skipped: %s", relative)
                    report.skipped.append(relative)
                    continue

            renderer.render_file(entry, target=None if dry_run else destination)
            LOGGER.info("Created file: %s", relative)
            report.created.append(relative)

        return report
