"""Case-convention helpers for the branded ``scf`` placeholder identifiers.

A placeholder is a fixed sentinel (``Scf``, ``SCF_``, ``scf-`` ...) followed by
a variable fragment written in the casing family the sentinel implies. The nine
families are described once in :data:`FAMILIES`; every matcher and renderer in
this module is driven from that table.

Canonical names are kebab-case. Word boundaries are only recognised at
lowercase/digit to uppercase transitions and at ``_`` or ``-`` separators, so
``"my.project"`` and ``"myproject"`` are canonical names of their own and are
never folded into ``"my-project"``. Rendering a hyphenated canonical name into
the dot or flat families loses its hyphens (``"my-project"`` becomes
``"my.project"`` or ``"myproject"``); those two families therefore only
round-trip through :func:`canonicalize` for names without a hyphen.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

__all__ = [
    "CaseFamily",
    "FAMILIES",
    "FamilyRule",
    "canonicalize",
    "contains_placeholder",
    "detect_occurrences",
    "render",
    "render_fragment",
    "split_words",
    "substitute",
]


_SEPARATORS = re.compile(r"[\s_\-]+")
_HUMP = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


class CaseFamily(str, Enum):
    """The nine sentinel and casing combinations recognised in templates."""

    PASCAL_BRANDED = "PascalBranded"
    UPPER_SNAKE_BRANDED = "UpperSnakeBranded"
    UPPER_KEBAB_BRANDED = "UpperKebabBranded"
    UPPER_DOT_BRANDED = "UpperDotBranded"
    LOWER_SNAKE_BRANDED = "LowerSnakeBranded"
    LOWER_KEBAB_BRANDED = "LowerKebabBranded"
    LOWER_DOT_BRANDED = "LowerDotBranded"
    LOWER_FLAT_BRANDED = "LowerFlatBranded"
    UPPER_FLAT_BRANDED = "UpperFlatBranded"


@dataclass(frozen=True, slots=True)
class FamilyRule:
    """Declarative description of one :class:`CaseFamily`.

    Attributes
    ----------
    family:
        The family this rule describes.
    sentinel:
        Literal text introducing a placeholder of this family.
    fragment:
        Regular expression character class accepted after the sentinel.
    separator:
        Text placed between words when rendering a fragment.
    casing:
        One of ``"pascal"``, ``"upper"`` or ``"lower"``.
    """

    family: CaseFamily
    sentinel: str
    fragment: str
    separator: str
    casing: str

    @property
    def pattern(self) -> re.Pattern[str]:
        return _DETECTION_PATTERNS[self.family]

    def render_words(self, words: Iterable[str]) -> str:
        if self.casing == "pascal":
            return self.separator.join(word[:1].upper() + word[1:].lower() for word in words)
        if self.casing == "upper":
            return self.separator.join(word.upper() for word in words)
        return self.separator.join(word.lower() for word in words)


# Replacement order is part of the contract: substitution walks this tuple
# front to back for every variable.
FAMILIES: tuple[FamilyRule, ...] = (
    FamilyRule(CaseFamily.PASCAL_BRANDED, "Scf", r"[A-Z][a-zA-Z0-9]*", "", "pascal"),
    FamilyRule(CaseFamily.UPPER_SNAKE_BRANDED, "SCF_", r"[A-Z][A-Z0-9_]*", "_", "upper"),
    FamilyRule(CaseFamily.UPPER_KEBAB_BRANDED, "SCF-", r"[A-Z][A-Z0-9-]*", "-", "upper"),
    FamilyRule(CaseFamily.UPPER_DOT_BRANDED, "SCF.", r"[A-Z][A-Z0-9.]*", ".", "upper"),
    FamilyRule(CaseFamily.LOWER_SNAKE_BRANDED, "scf_", r"[a-z][a-z0-9_]*", "_", "lower"),
    FamilyRule(CaseFamily.LOWER_KEBAB_BRANDED, "scf-", r"[a-z][a-z0-9-]*", "-", "lower"),
    FamilyRule(CaseFamily.LOWER_DOT_BRANDED, "scf.", r"[a-z][a-z0-9.]*", ".", "lower"),
    FamilyRule(CaseFamily.LOWER_FLAT_BRANDED, "scf", r"[a-z][a-z0-9]*", "", "lower"),
    FamilyRule(CaseFamily.UPPER_FLAT_BRANDED, "SCF", r"[A-Z][A-Z0-9]*", "", "upper"),
)

_RULES: dict[CaseFamily, FamilyRule] = {rule.family: rule for rule in FAMILIES}

_DETECTION_PATTERNS: dict[CaseFamily, re.Pattern[str]] = {
    rule.family: re.compile(rf"\b{re.escape(rule.sentinel)}(?P<fragment>{rule.fragment})\b")
    for rule in FAMILIES
}


def _continuation_guard(rule: FamilyRule) -> str:
    # ``-`` and ``.`` are not word characters, so ``\b`` alone would let
    # ``scf-app`` match the head of ``scf-app-name``.
    if rule.separator in {"-", "."}:
        return rf"(?!{re.escape(rule.separator)}[A-Za-z0-9])"
    return ""


def split_words(text: str) -> list[str]:
    """Split ``text`` into words on humps and on ``_``, ``-`` or whitespace."""

    words: list[str] = []
    for chunk in _SEPARATORS.split(text):
        words.extend(part for part in _HUMP.split(chunk) if part)
    return words


def canonicalize(fragment: str) -> str:
    """Reduce ``fragment`` to its kebab-case canonical name.

    Dots are kept as-is and a run without any boundary stays flat::

        >>> canonicalize("MyProject"), canonicalize("MY_PROJECT")
        ('my-project', 'my-project')
        >>> canonicalize("my.project"), canonicalize("myproject")
        ('my.project', 'myproject')
    """

    return "-".join(word.lower() for word in split_words(fragment))


def render_fragment(canonical_name: str, family: CaseFamily | str) -> str:
    """Return ``canonical_name`` written in ``family`` without its sentinel."""

    rule = _RULES[CaseFamily(family)]
    return rule.render_words(split_words(canonical_name))


def render(canonical_name: str, family: CaseFamily | str) -> str:
    """Return the full placeholder for ``canonical_name`` in ``family``."""

    rule = _RULES[CaseFamily(family)]
    return rule.sentinel + rule.render_words(split_words(canonical_name))


def detect_occurrences(text: str) -> set[str]:
    """Return the canonical names of every placeholder found in ``text``."""

    found: set[str] = set()
    for rule in FAMILIES:
        for match in rule.pattern.finditer(text):
            found.add(canonicalize(match.group("fragment")))
    return found


def contains_placeholder(text: str) -> bool:
    """Return ``True`` when ``text`` holds at least one placeholder."""

    return any(rule.pattern.search(text) for rule in FAMILIES)


def substitute(text: str, values: Mapping[str, str]) -> str:
    """Replace every placeholder of ``values`` in ``text``.

    Parameters
    ----------
    text:
        The text to rewrite.
    values:
        Mapping of canonical variable names to replacement values. Variables
        are applied in sorted name order and, for each variable, the families
        are applied in :data:`FAMILIES` order. Each occurrence is replaced by
        the value rendered in the same family as the placeholder it replaces.
    """

    result = text
    for name in sorted(values):
        words = split_words(name)
        if not words:
            continue
        value_words = split_words(values[name])
        for rule in FAMILIES:
            target = rule.sentinel + rule.render_words(words)
            replacement = rule.sentinel + rule.render_words(value_words)
            pattern = re.compile(rf"\b{re.escape(target)}\b{_continuation_guard(rule)}")
            result = pattern.sub(lambda _match, new=replacement: new, result)
    return result
