#!/usr/bin/env python3
"""
Name Assembler
==============
Draws one syllable per resolved group and joins them into a name.

Join rules:
- A syllable starting with the joiner marker (``-`` by default) is attached
  to the previous fragment with a literal hyphen.
- Anything else is concatenated directly, with no case changes.
- The first character of the finished name is upper-cased.

When the language declares phonotactic constraints, a failing name is
reassembled with fresh draws, up to a fixed number of attempts. If every
attempt fails, the last one is returned and flagged instead of raising.
"""

import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..languages.models import Phonotactics
from ..settings import require_setting
from .entropy import SeededRandom

logger = logging.getLogger(__name__)


FRONT_VOWELS = set('ei')
BACK_VOWELS = set('aou')

_CONSONANT_RUN = re.compile(r'[b-df-hj-np-tv-xz]{2,}')


@dataclass(frozen=True)
class AssembledName:
    """Result of one assembly: the text, its fragments and constraint status."""
    text: str
    fragments: Tuple[str, ...]
    attempts: int = 1
    constraint_violation: bool = False


def join_fragments(fragments: Sequence[str], joiner: str = "-") -> str:
    """Concatenate fragments, turning a leading joiner marker into a hyphen."""
    result = ""
    for fragment in fragments:
        if joiner and fragment.startswith(joiner):
            body = fragment[len(joiner):]
            # A leading marker on the first fragment has nothing to join to
            result = f"{result}-{body}" if result else body
        else:
            result += fragment
    return result


def capitalize_first(text: str) -> str:
    """Upper-case the first character only; str.capitalize() would lower the rest."""
    return text[:1].upper() + text[1:]


def check_phonotactics(name: str, constraints: Optional[Phonotactics]) -> List[str]:
    """
    Check an assembled name against phonotactic constraints.

    Returns a list of human-readable violations (empty when the name passes).
    """
    if constraints is None or not constraints.active:
        return []

    violations = []
    lowered = name.lower()

    for forbidden in constraints.forbidden:
        if forbidden in lowered:
            violations.append(f"contains forbidden '{forbidden}'")

    if constraints.allowed_clusters:
        allowed = set(constraints.allowed_clusters)
        for match in _CONSONANT_RUN.finditer(lowered):
            if match.group() not in allowed:
                violations.append(f"cluster '{match.group()}' not allowed")

    if constraints.vowel_harmony:
        letters = set(lowered)
        if letters & FRONT_VOWELS and letters & BACK_VOWELS:
            violations.append("mixes front and back vowels")

    return violations


class NameAssembler:
    """
    Builds names from resolved syllable groups.

    Usage:
        assembler = NameAssembler(language.phonotactics)
        assembled = assembler.assemble(resolve_pattern(pattern, language.syllables), rng)
    """

    def __init__(self,
                 phonotactics: Optional[Phonotactics] = None,
                 max_attempts: Optional[int] = None,
                 joiner: Optional[str] = None):
        self.phonotactics = phonotactics
        if max_attempts is None:
            max_attempts = int(require_setting('generation.max_phonotactic_attempts'))
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.joiner = str(require_setting('patterns.joiner')) if joiner is None else joiner

    def draw(self, groups: Sequence[Sequence[str]], rng: SeededRandom) -> Tuple[str, ...]:
        """Draw one syllable per group, left to right (one ``next()`` each)."""
        return tuple(rng.choice(group) for group in groups)

    def assemble(self, groups: Sequence[Sequence[str]], rng: SeededRandom) -> AssembledName:
        """
        Assemble a name from resolved groups.

        Parameters
        ----------
        groups : sequence of syllable sequences
            Output of ``resolve_pattern``
        rng : SeededRandom
            Session handle to draw from

        Returns
        -------
        AssembledName
            Capitalized name; ``constraint_violation`` is set when every
            attempt broke the language's phonotactics
        """
        attempts = self.max_attempts if self.phonotactics and self.phonotactics.active else 1

        for attempt in range(1, attempts + 1):
            fragments = self.draw(groups, rng)
            text = join_fragments(fragments, self.joiner)
            violations = check_phonotactics(text, self.phonotactics)
            if not violations:
                return AssembledName(capitalize_first(text), fragments, attempt)

        logger.warning(
            f"'{text}' still violates phonotactics after {attempts} attempts: {'; '.join(violations)}"
        )
        return AssembledName(capitalize_first(text), fragments, attempts, constraint_violation=True)


__all__ = [
    'AssembledName',
    'NameAssembler',
    'join_fragments',
    'capitalize_first',
    'check_phonotactics',
]
