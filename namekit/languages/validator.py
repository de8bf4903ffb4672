#!/usr/bin/env python3
"""
Language Data Validator
=======================
Checks raw (parsed JSON/YAML) language data and builds an immutable
LanguageDefinition from it.

Problems are collected rather than raised:
- Fatal issues on top-level fields or syllable groups reject the language.
- A broken pattern drops only that pattern; a category left with no
  patterns is dropped with a warning.
- Sparse groups and malformed optional sections become warnings.

The language is rejected only when no category survives.
"""

import re
import math
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import LanguageValidationError
from ..generators.patterns import split_template
from ..settings import require_setting
from .models import LanguageDefinition, LanguageMetadata, Pattern, Phonotactics

logger = logging.getLogger(__name__)


REQUIRED_FIELDS = (
    ('id', str),
    ('name', str),
    ('syllables', Mapping),
    ('patterns', Mapping),
)


@dataclass(frozen=True)
class ValidationIssue:
    """One problem found in language data."""
    kind: str
    message: str
    path: str = ""
    fatal: bool = True

    def __str__(self) -> str:
        prefix = f"{self.path}: " if self.path else ""
        return f"{prefix}{self.message}"


@dataclass
class ValidationResult:
    """Outcome of validation: the usable language (if any) plus every issue."""
    language: Optional[LanguageDefinition] = None
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.language is not None

    @property
    def fatal_errors(self) -> List[ValidationIssue]:
        return [e for e in self.errors if e.fatal]

    @property
    def dropped(self) -> List[ValidationIssue]:
        """Non-fatal errors: patterns that were stripped from the language."""
        return [e for e in self.errors if not e.fatal]

    def unwrap(self) -> LanguageDefinition:
        """Return the language or raise LanguageValidationError."""
        if self.language is None:
            summary = '; '.join(str(e) for e in self.fatal_errors) or "invalid language data"
            raise LanguageValidationError(f"Language rejected: {summary}", self.errors)
        return self.language


class _Collector:
    """Accumulates issues while the validator walks the data."""

    def __init__(self):
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []

    def fatal(self, kind: str, message: str, path: str = ""):
        self.errors.append(ValidationIssue(kind, message, path, fatal=True))

    def drop(self, kind: str, message: str, path: str = ""):
        self.errors.append(ValidationIssue(kind, message, path, fatal=False))
        logger.debug(f"Dropped {path}: {message}")

    def warn(self, kind: str, message: str, path: str = ""):
        self.warnings.append(ValidationIssue(kind, message, path, fatal=False))
        logger.debug(f"Warning {path}: {message}")

    @property
    def has_fatal(self) -> bool:
        return any(e.fatal for e in self.errors)


# =============================================================================
# Section Checks
# =============================================================================

def _check_required(raw: Mapping, issues: _Collector):
    for name, expected in REQUIRED_FIELDS:
        if name not in raw:
            issues.fatal('missing_field', f"Required field '{name}' is missing", name)
        elif not isinstance(raw[name], expected):
            type_name = 'mapping' if expected is Mapping else expected.__name__
            issues.fatal('wrong_type', f"Field '{name}' must be a {type_name}", name)


def _check_id(language_id: str, issues: _Collector):
    id_pattern = require_setting('validation.id_pattern')
    if not re.fullmatch(id_pattern, language_id):
        issues.fatal(
            'invalid_id',
            f"Language id '{language_id}' must be lowercase letters, digits or hyphens",
            'id',
        )


def _is_syllable(value: Any, joiner: str) -> bool:
    """Non-empty string with text left after any leading joiner marker."""
    if not isinstance(value, str):
        return False
    if joiner and value.startswith(joiner):
        value = value[len(joiner):]
    return bool(value)


def _check_syllables(raw_groups: Mapping, issues: _Collector) -> Dict[str, Tuple[str, ...]]:
    recommended = int(require_setting('validation.recommended_group_size'))
    joiner = str(require_setting('patterns.joiner'))
    groups: Dict[str, Tuple[str, ...]] = {}

    if not raw_groups:
        issues.fatal('empty_group', "At least one syllable group is required", 'syllables')
        return groups

    for group, values in raw_groups.items():
        path = f"syllables.{group}"
        if not isinstance(group, str) or not group.strip():
            issues.fatal('wrong_type', "Group identifiers must be non-empty strings", path)
            continue
        if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
            issues.fatal('wrong_type', f"Group '{group}' must be a list of syllables", path)
            continue
        if not values:
            issues.fatal('empty_group', f"Group '{group}' has no syllables", path)
            continue

        bad = [v for v in values if not _is_syllable(v, joiner)]
        if bad:
            issues.fatal(
                'invalid_syllable',
                f"Group '{group}' contains empty, joiner-only or non-string syllables: {bad!r}",
                path,
            )
            continue

        if len(values) < recommended:
            issues.warn(
                'sparse_group',
                f"Group '{group}' has {len(values)} syllable(s); at least {recommended} recommended",
                path,
            )
        groups[group] = tuple(values)

    return groups


def _check_weight(weight: Any) -> Optional[float]:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        return None
    try:
        value = float(weight)
    except OverflowError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def _optional_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _check_pattern(entry: Any, groups: Mapping[str, Tuple[str, ...]],
                   path: str, issues: _Collector) -> Optional[Pattern]:
    if not isinstance(entry, Mapping):
        issues.drop('invalid_pattern', "Pattern entry must be a mapping", path)
        return None

    template = entry.get('pattern')
    if not isinstance(template, str) or not template.strip():
        issues.drop('invalid_pattern', "Pattern entry needs a non-empty 'pattern' string", path)
        return None

    tokens = split_template(template)
    missing = [t for t in tokens if not t or t not in groups]
    if missing:
        shown = ', '.join(repr(t) for t in missing)
        issues.drop('unknown_group', f"Pattern '{template}' references unknown group(s): {shown}", path)
        return None

    weight = _check_weight(entry.get('weight'))
    if weight is None:
        issues.drop(
            'invalid_weight',
            f"Pattern '{template}' weight must be a finite number > 0, got {entry.get('weight')!r}",
            path,
        )
        return None

    return Pattern(
        template=template,
        weight=weight,
        description=_optional_str(entry.get('description')),
        example=_optional_str(entry.get('example')),
    )


def _check_patterns(raw_patterns: Mapping, groups: Mapping[str, Tuple[str, ...]],
                    issues: _Collector) -> Dict[str, Tuple[Pattern, ...]]:
    categories: Dict[str, Tuple[Pattern, ...]] = {}

    for category, entries in raw_patterns.items():
        path = f"patterns.{category}"
        if not isinstance(category, str) or not category:
            issues.warn('empty_category', "Category names must be non-empty strings", path)
            continue
        if isinstance(entries, (str, bytes)) or not isinstance(entries, (list, tuple)):
            issues.warn('empty_category', f"Category '{category}' must be a list of patterns", path)
            continue

        kept = []
        for index, entry in enumerate(entries):
            pattern = _check_pattern(entry, groups, f"{path}[{index}]", issues)
            if pattern is not None:
                kept.append(pattern)

        if kept:
            categories[category] = tuple(kept)
        else:
            issues.warn('empty_category', f"Category '{category}' has no valid patterns", path)

    if not categories:
        issues.fatal('no_usable_patterns', "No category has a valid pattern", 'patterns')
    return categories


def _string_tuple(value: Any) -> Optional[Tuple[str, ...]]:
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        return None
    if not all(isinstance(v, str) and v for v in value):
        return None
    return tuple(value)


def _check_phonotactics(raw: Any, issues: _Collector) -> Optional[Phonotactics]:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        issues.warn('invalid_phonotactics', "Phonotactics must be a mapping; constraints ignored", 'phonotactics')
        return None

    allowed = _string_tuple(raw.get('allowed_clusters'))
    forbidden = _string_tuple(raw.get('forbidden'))
    harmony = raw.get('vowel_harmony', False)
    if allowed is None or forbidden is None or not isinstance(harmony, bool):
        issues.warn(
            'invalid_phonotactics',
            "Phonotactics needs string lists and a boolean vowel_harmony; constraints ignored",
            'phonotactics',
        )
        return None

    constraints = Phonotactics(
        allowed_clusters=tuple(c.lower() for c in allowed),
        forbidden=tuple(f.lower() for f in forbidden),
        vowel_harmony=harmony,
    )
    return constraints if constraints.active else None


def _check_metadata(raw: Any, issues: _Collector) -> LanguageMetadata:
    if raw is None:
        return LanguageMetadata()
    if not isinstance(raw, Mapping):
        issues.warn('invalid_metadata', "Metadata must be a mapping; ignored", 'metadata')
        return LanguageMetadata()

    themes = _string_tuple(raw.get('themes'))
    if themes is None:
        issues.warn('invalid_metadata', "Metadata themes must be a list of strings; ignored", 'metadata.themes')
        themes = ()
    return LanguageMetadata(
        themes=themes,
        difficulty=_optional_str(raw.get('difficulty')),
        cultural_note=_optional_str(raw.get('cultural_note')),
    )


# =============================================================================
# Entry Point
# =============================================================================

def validate_language(raw: Any) -> ValidationResult:
    """
    Validate parsed language data.

    Parameters
    ----------
    raw : Any
        Data as loaded from JSON or YAML

    Returns
    -------
    ValidationResult
        ``language`` is set when the data is usable; ``errors`` lists fatal
        issues and dropped patterns, ``warnings`` lists soft issues
    """
    issues = _Collector()

    if not isinstance(raw, Mapping):
        issues.fatal('not_a_mapping', "Language data must be a mapping")
        return ValidationResult(errors=issues.errors, warnings=issues.warnings)

    _check_required(raw, issues)
    if issues.has_fatal:
        return ValidationResult(errors=issues.errors, warnings=issues.warnings)

    _check_id(raw['id'], issues)
    groups = _check_syllables(raw['syllables'], issues)
    if issues.has_fatal:
        return ValidationResult(errors=issues.errors, warnings=issues.warnings)

    patterns = _check_patterns(raw['patterns'], groups, issues)
    phonotactics = _check_phonotactics(raw.get('phonotactics'), issues)
    metadata = _check_metadata(raw.get('metadata'), issues)

    if issues.has_fatal:
        return ValidationResult(errors=issues.errors, warnings=issues.warnings)

    language = LanguageDefinition(
        id=raw['id'],
        name=raw['name'],
        syllables=groups,
        patterns=patterns,
        description=_optional_str(raw.get('description')),
        version=_optional_str(raw.get('version')),
        phonotactics=phonotactics,
        metadata=metadata,
    )
    if issues.errors or issues.warnings:
        logger.debug(
            f"Language '{language.id}' loaded with {len(issues.errors)} dropped pattern(s) "
            f"and {len(issues.warnings)} warning(s)"
        )
    return ValidationResult(language=language, errors=issues.errors, warnings=issues.warnings)


__all__ = [
    'ValidationIssue',
    'ValidationResult',
    'validate_language',
]
