#!/usr/bin/env python3
"""
Language Data Model
===================
Immutable value types produced by the validator and consumed by the
generators. Once built, a LanguageDefinition is never mutated, so one cached
instance can be read by any number of sessions at once.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Pattern:
    """A weighted template of group identifiers, e.g. ``"A.B.C"``."""
    template: str
    weight: float
    description: str = ""
    example: str = ""


@dataclass(frozen=True)
class Phonotactics:
    """Optional constraints checked against assembled names."""
    allowed_clusters: Tuple[str, ...] = ()
    forbidden: Tuple[str, ...] = ()
    vowel_harmony: bool = False

    @property
    def active(self) -> bool:
        return bool(self.allowed_clusters or self.forbidden or self.vowel_harmony)


@dataclass(frozen=True)
class LanguageMetadata:
    """Display hints for front ends; unused by generation."""
    themes: Tuple[str, ...] = ()
    difficulty: str = ""
    cultural_note: str = ""


@dataclass(frozen=True)
class LanguageDefinition:
    """
    A validated fictional language.

    ``syllables`` maps group identifiers to their syllable fragments and
    ``patterns`` maps category names to their usable patterns. Both keep the
    declaration order of the source file.
    """
    id: str
    name: str
    syllables: Mapping[str, Tuple[str, ...]]
    patterns: Mapping[str, Tuple[Pattern, ...]]
    description: str = ""
    version: str = ""
    phonotactics: Optional[Phonotactics] = None
    metadata: LanguageMetadata = field(default_factory=LanguageMetadata)

    def __post_init__(self):
        # Freeze the mappings so cached definitions cannot be edited in place
        if not isinstance(self.syllables, MappingProxyType):
            object.__setattr__(self, 'syllables', MappingProxyType(
                {group: tuple(values) for group, values in self.syllables.items()}
            ))
        if not isinstance(self.patterns, MappingProxyType):
            object.__setattr__(self, 'patterns', MappingProxyType(
                {category: tuple(values) for category, values in self.patterns.items()}
            ))

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self.patterns)

    def get_patterns(self, category: str) -> Tuple[Pattern, ...]:
        return self.patterns.get(category, ())


@dataclass(frozen=True)
class GeneratedName:
    """A generated name plus the inputs that produced it."""
    name: str
    language_id: str
    category: str
    seed: str
    pattern: str
    fragments: Tuple[str, ...] = ()
    constraint_violation: bool = False

    def __str__(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'language': self.language_id,
            'category': self.category,
            'seed': self.seed,
            'pattern': self.pattern,
            'fragments': list(self.fragments),
            'constraint_violation': self.constraint_violation,
        }


__all__ = [
    'Pattern',
    'Phonotactics',
    'LanguageMetadata',
    'LanguageDefinition',
    'GeneratedName',
]
