"""Generate project trees from templates with branded case-aware placeholders.

A template is an ordinary directory (local, configured by name, or downloaded as
a zip archive) whose file names and contents carry placeholders such as
``ScfMyProject`` or ``scf-my-project``. Generating the template replaces each
placeholder with a caller supplied value written in the same case convention.
"""

from __future__ import annotations

from .config import ConfigStore, ScafferConfig
from .errors import (
    ArchiveCorrupt,
    ConfigError,
    DownloadFailed,
    InteractionError,
    ScafferError,
    TemplateIOError,
    TemplateNotFound,
    TextDecodeError,
)
from .generator import GenerationPipeline, GenerationReport, PipelineState
from .naming import CaseFamily, canonicalize, detect_occurrences, render, substitute
from .prompts import ConsolePrompter, Prompter, ScriptedPrompter
from .scanner import VariableScanner
from .sources import SourceOrigin, TemplateSource, TemplateSourceResolver
from .template import TemplateRenderer

__all__ = [
    "ArchiveCorrupt",
    "CaseFamily",
    "ConfigError",
    "ConfigStore",
    "ConsolePrompter",
    "DownloadFailed",
    "GenerationPipeline",
    "GenerationReport",
    "InteractionError",
    "PipelineState",
    "Prompter",
    "ScafferConfig",
    "ScafferError",
    "ScriptedPrompter",
    "SourceOrigin",
    "TemplateIOError",
    "TemplateNotFound",
    "TemplateRenderer",
    "TemplateSource",
    "TemplateSourceResolver",
    "TextDecodeError",
    "VariableScanner",
    "canonicalize",
    "detect_occurrences",
    "render",
    "substitute",
]

__version__ = "0.1.0"
