#!/usr/bin/env python3
"""
Name Generator
==============
The entry point front ends call: validate the language, pick a weighted
pattern for the category, resolve it and assemble a name, repeated per name
on one RNG handle.

Usage:
    gen = NameGenerator(load_language('elvish'), seed='moonlight')
    names = gen.generate('person_names', count=5)
    for name in names:
        print(name.name, name.pattern)

    # Same seed, same names
    result = generate(load_language('elvish'), 'person_names', seed='moonlight', count=5)
    assert result.strings() == [n.name for n in names]
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from ..errors import InvalidCountError, NameKitError, UnknownCategoryError
from ..languages.models import GeneratedName, LanguageDefinition, Pattern
from ..languages.validator import ValidationIssue, validate_language
from ..settings import require_setting
from .assembler import NameAssembler
from .entropy import SeededRandom
from .patterns import resolve_pattern

logger = logging.getLogger(__name__)


LanguageInput = Union[LanguageDefinition, Mapping[str, Any]]


def _as_language(language: LanguageInput) -> LanguageDefinition:
    """Pass validated languages through; validate raw mappings first."""
    if isinstance(language, LanguageDefinition):
        return language
    return validate_language(language).unwrap()


def categories(language: LanguageInput) -> List[str]:
    """Category names with at least one usable pattern, in declared order."""
    return list(_as_language(language).categories)


def _check_count(count: int) -> int:
    max_count = int(require_setting('generation.max_count'))
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidCountError(f"count must be an integer, got {count!r}")
    if count < 1 or count > max_count:
        raise InvalidCountError(f"count must be between 1 and {max_count}, got {count}")
    return count


class NameGenerator:
    """
    One generation session over a language.

    Holds a single RNG handle; every call advances it, so
    ``generate(cat, 3)`` equals three ``next_name(cat)`` calls in a row.
    Do not share an instance between threads; create one per request.
    """

    def __init__(self, language: LanguageInput, seed: Optional[str] = None,
                 rng: Optional[SeededRandom] = None):
        self.language = _as_language(language)
        if rng is not None and seed is not None and rng.seed != seed:
            raise ValueError("Pass either seed or rng, not both")
        self._rng = rng if rng is not None else SeededRandom(seed)
        self._assembler = NameAssembler(self.language.phonotactics)

    @property
    def seed(self) -> str:
        return self._rng.seed

    @property
    def rng(self) -> SeededRandom:
        return self._rng

    def _patterns_for(self, category: str):
        patterns = self.language.get_patterns(category)
        if not patterns:
            raise UnknownCategoryError(category, self.language.id, list(self.language.categories))
        return patterns

    def pick_pattern(self, category: str) -> Pattern:
        """Weighted pick of one of the category's patterns (one draw)."""
        patterns = self._patterns_for(category)
        return self._rng.weighted_choice((p, p.weight) for p in patterns)

    def next_name(self, category: str) -> GeneratedName:
        """Generate the next name in this session."""
        pattern = self.pick_pattern(category)
        groups = resolve_pattern(pattern, self.language.syllables)
        assembled = self._assembler.assemble(groups, self._rng)
        return GeneratedName(
            name=assembled.text,
            language_id=self.language.id,
            category=category,
            seed=self.seed,
            pattern=pattern.template,
            fragments=assembled.fragments,
            constraint_violation=assembled.constraint_violation,
        )

    def generate(self, category: str, count: int = 1) -> List[GeneratedName]:
        """
        Generate a batch of names.

        Parameters
        ----------
        category : str
            Category to draw patterns from (e.g. ``"person_names"``)
        count : int
            Number of names

        Returns
        -------
        list[GeneratedName]
            Names in draw order

        Raises
        ------
        UnknownCategoryError
            Category missing or without usable patterns
        InvalidCountError
            Count outside 1..generation.max_count
        """
        _check_count(count)
        self._patterns_for(category)
        return [self.next_name(category) for _ in range(count)]


# =============================================================================
# Result-returning facade
# =============================================================================

@dataclass
class GenerationResult:
    """Names from one ``generate`` call, or the error that stopped it."""
    names: List[GeneratedName] = field(default_factory=list)
    seed: Optional[str] = None
    error: Optional[NameKitError] = None
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error is not None else None

    def strings(self) -> List[str]:
        return [n.name for n in self.names]


def generate(language: LanguageInput,
             category: str,
             seed: Optional[str] = None,
             count: int = 1) -> GenerationResult:
    """
    Generate ``count`` names for a category.

    Accepts a LanguageDefinition or raw language data (validated first, with
    its warnings copied onto the result). Engine errors come back in
    ``result.error`` rather than being raised.
    """
    warnings: List[ValidationIssue] = []
    try:
        if not isinstance(language, LanguageDefinition):
            validation = validate_language(language)
            warnings = list(validation.warnings)
            language = validation.unwrap()
        session = NameGenerator(language, seed=seed)
        names = session.generate(category, count)
    except NameKitError as e:
        logger.debug(f"Generation failed ({e.kind}): {e}")
        return GenerationResult(seed=seed, error=e, warnings=warnings)
    return GenerationResult(names=names, seed=session.seed, warnings=warnings)


def generate_names(language: LanguageInput,
                   category: str,
                   seed: Optional[str] = None,
                   count: int = 1) -> List[str]:
    """Plain-string variant of ``generate``; raises NameKitError on failure."""
    return [n.name for n in NameGenerator(language, seed=seed).generate(category, count)]


__all__ = [
    'NameGenerator',
    'GenerationResult',
    'generate',
    'generate_names',
    'categories',
]
