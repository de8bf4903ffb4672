#!/usr/bin/env python3
"""
Pattern Resolver
================
Turns a pattern template such as ``"A.B.C"`` into the ordered syllable
groups it references.
"""

from typing import List, Mapping, Optional, Sequence, Tuple

from ..errors import UnknownGroupError
from ..settings import require_setting


def pattern_separator() -> str:
    return str(require_setting('patterns.separator'))


def split_template(template: str, separator: Optional[str] = None) -> List[str]:
    """Split a template into group tokens, keeping their literal order."""
    if separator is None:
        separator = pattern_separator()
    return [token.strip() for token in template.split(separator)]


def resolve_pattern(pattern,
                    syllables: Mapping[str, Sequence[str]],
                    separator: Optional[str] = None) -> List[Tuple[str, ...]]:
    """
    Map each token of a pattern to its group's syllables.

    Parameters
    ----------
    pattern : Pattern or str
        Pattern whose template to resolve (a bare template string also works)
    syllables : mapping
        Group identifier -> syllable sequence
    separator : str, optional
        Token separator; defaults to ``patterns.separator`` from app.yaml

    Returns
    -------
    list[tuple[str, ...]]
        One syllable sequence per token, left to right

    Raises
    ------
    UnknownGroupError
        A token is empty or names a group missing from ``syllables``
    """
    template = pattern if isinstance(pattern, str) else pattern.template
    resolved = []
    for token in split_template(template, separator):
        if not token or token not in syllables:
            raise UnknownGroupError(token, template)
        resolved.append(tuple(syllables[token]))
    return resolved


__all__ = [
    'pattern_separator',
    'split_template',
    'resolve_pattern',
]
