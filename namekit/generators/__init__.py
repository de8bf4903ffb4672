#!/usr/bin/env python3
"""
Name Generators
===============
Seeded, pattern-driven name generation:
- Entropy: seeded RNG handles and weighted selection
- Patterns: template resolution against syllable groups
- Assembler: syllable drawing, joining and phonotactic retries
- NameGenerator: the session facade tying them together
"""

from .entropy import (
    SeededRandom,
    create_rng,
    derive_seed,
    weighted_pick,
)
from .patterns import (
    pattern_separator,
    split_template,
    resolve_pattern,
)
from .assembler import (
    AssembledName,
    NameAssembler,
    join_fragments,
    capitalize_first,
    check_phonotactics,
)
from .name_generator import (
    NameGenerator,
    GenerationResult,
    generate,
    generate_names,
    categories,
)

__all__ = [
    # Entropy
    'SeededRandom',
    'create_rng',
    'derive_seed',
    'weighted_pick',
    # Patterns
    'pattern_separator',
    'split_template',
    'resolve_pattern',
    # Assembly
    'AssembledName',
    'NameAssembler',
    'join_fragments',
    'capitalize_first',
    'check_phonotactics',
    # Facade
    'NameGenerator',
    'GenerationResult',
    'generate',
    'generate_names',
    'categories',
]
