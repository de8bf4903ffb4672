#!/usr/bin/env python3
"""
namekit - Fictional Language Name Generator
===========================================

Generates pronounceable fictional names by combining syllable groups
according to weighted patterns defined per language. Generation is seeded:
the same language, category and seed always give the same names.

Quick Start
-----------
    from namekit import load_language, generate

    elvish = load_language('elvish')
    result = generate(elvish, 'person_names', seed='moonlight', count=5)
    if result.ok:
        print(result.strings(), result.seed)
    else:
        print(result.error_kind, result.error)

Modules
-------
    namekit.generators - Seeded RNG, pattern resolution, assembly, facade
    namekit.languages  - Language model, validator and file loader
    namekit.errors     - Error taxonomy
    namekit.settings   - app.yaml settings

CLI Usage
---------
    python -m namekit generate elvish person_names -n 5 --seed moonlight
    python -m namekit languages
    python -m namekit validate my_language.yaml
"""

__version__ = "0.1.0"
__author__ = "namekit"

# Generators first: the language validator imports the pattern splitter
from . import generators
from . import languages
from . import errors

from .errors import (
    NameKitError,
    LanguageValidationError,
    LanguageNotFoundError,
    UnknownCategoryError,
    UnknownGroupError,
    EmptyInputError,
    InvalidWeightError,
    InvalidCountError,
)
from .generators import (
    SeededRandom,
    create_rng,
    weighted_pick,
    resolve_pattern,
    NameAssembler,
    NameGenerator,
    GenerationResult,
    generate,
    generate_names,
    categories,
)
from .languages import (
    LanguageDefinition,
    Pattern,
    Phonotactics,
    LanguageMetadata,
    GeneratedName,
    ValidationIssue,
    ValidationResult,
    validate_language,
    list_languages,
    load_language,
    load_language_file,
    reload_languages,
)

__all__ = [
    '__version__',
    # Errors
    'NameKitError',
    'LanguageValidationError',
    'LanguageNotFoundError',
    'UnknownCategoryError',
    'UnknownGroupError',
    'EmptyInputError',
    'InvalidWeightError',
    'InvalidCountError',
    # Generation
    'SeededRandom',
    'create_rng',
    'weighted_pick',
    'resolve_pattern',
    'NameAssembler',
    'NameGenerator',
    'GenerationResult',
    'generate',
    'generate_names',
    'categories',
    # Languages
    'LanguageDefinition',
    'Pattern',
    'Phonotactics',
    'LanguageMetadata',
    'GeneratedName',
    'ValidationIssue',
    'ValidationResult',
    'validate_language',
    'list_languages',
    'load_language',
    'load_language_file',
    'reload_languages',
]
