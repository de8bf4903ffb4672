#!/usr/bin/env python3
"""
Language Loader
===============
Loads language definitions from JSON or YAML files, validates them and
caches the immutable result for the life of the process.

Usage:
    from namekit.languages import list_languages, load_language

    for language_id in list_languages():
        language = load_language(language_id)
        print(language.name, language.categories)
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..errors import LanguageNotFoundError, LanguageValidationError
from ..settings import languages_dir
from .models import (
    GeneratedName,
    LanguageDefinition,
    LanguageMetadata,
    Pattern,
    Phonotactics,
)
from .validator import ValidationIssue, ValidationResult, validate_language

logger = logging.getLogger(__name__)


LANGUAGE_SUFFIXES = ('.yaml', '.yml', '.json')


# =============================================================================
# File Access
# =============================================================================

def read_language_file(path: Path) -> Any:
    """Parse a JSON or YAML language file."""
    path = Path(path)
    text = path.read_text(encoding='utf-8')
    if path.suffix.lower() == '.json':
        return json.loads(text)
    return yaml.safe_load(text)


def _language_files(directory: Optional[Path] = None) -> Dict[str, Path]:
    directory = Path(directory) if directory is not None else languages_dir()
    files: Dict[str, Path] = {}
    if not directory.is_dir():
        return files
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix.lower() in LANGUAGE_SUFFIXES:
            files.setdefault(path.stem, path)
    return files


def list_languages(directory: Optional[Path] = None) -> List[str]:
    """Ids of all language files in the languages directory, sorted."""
    return sorted(_language_files(directory))


def load_language_file(path: Path) -> ValidationResult:
    """
    Parse and validate a language file without caching it.

    Undecodable bytes and parse failures are reported as a fatal
    ``not_a_mapping`` issue so the caller sees one result shape for every
    kind of bad file.
    """
    path = Path(path)
    try:
        raw = read_language_file(path)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        issue = ValidationIssue('not_a_mapping', f"Could not parse {path.name}: {e}")
        return ValidationResult(errors=[issue])
    return validate_language(raw)


@lru_cache(maxsize=None)
def _load_cached(directory: Path, language_id: str) -> LanguageDefinition:
    files = _language_files(directory)
    path = files.get(language_id)
    if path is None:
        raise LanguageNotFoundError(language_id, sorted(files))

    result = load_language_file(path)
    language = result.unwrap()
    if language.id != language_id:
        raise LanguageValidationError(
            f"Language file '{path.name}' declares id '{language.id}'; expected '{language_id}'",
            result.errors,
        )
    for warning in result.warnings:
        logger.debug(f"{language_id}: {warning}")
    logger.debug(f"Loaded language '{language_id}' from {path}")
    return language


def load_language(language_id: str, directory: Optional[Path] = None) -> LanguageDefinition:
    """
    Load a validated language by id.

    Raises
    ------
    LanguageNotFoundError
        No file with that stem in the languages directory
    LanguageValidationError
        The file was rejected by the validator
    """
    directory = Path(directory) if directory is not None else languages_dir()
    return _load_cached(directory.resolve(), language_id)


def reload_languages():
    """Clear the language cache so files are read again."""
    _load_cached.cache_clear()


__all__ = [
    # Models
    'LanguageDefinition',
    'Pattern',
    'Phonotactics',
    'LanguageMetadata',
    'GeneratedName',
    # Validation
    'ValidationIssue',
    'ValidationResult',
    'validate_language',
    # Loading
    'read_language_file',
    'list_languages',
    'load_language',
    'load_language_file',
    'reload_languages',
]
