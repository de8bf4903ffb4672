#!/usr/bin/env python3
"""
Error Taxonomy
==============
Exceptions raised inside the generation engine.

Every error carries a stable ``kind`` string so a caller can map it to a
user-facing message without matching on class names. The boundary functions
(``validate_language`` and ``generate``) catch these and hand them back as
result values instead of letting them escape.
"""

from typing import List, Optional


class NameKitError(Exception):
    """Base class for all engine errors."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LanguageValidationError(NameKitError):
    """Language data failed validation with one or more fatal issues."""

    kind = "validation"

    def __init__(self, message: str, issues: Optional[List] = None):
        super().__init__(message)
        self.issues = list(issues or [])


class LanguageNotFoundError(NameKitError):
    """No language file exists for the requested id."""

    kind = "language_not_found"

    def __init__(self, language_id: str, available: Optional[List[str]] = None):
        self.language_id = language_id
        self.available = list(available or [])
        message = f"Unknown language '{language_id}'"
        if self.available:
            message += f". Available languages: {', '.join(self.available)}"
        super().__init__(message)


class UnknownCategoryError(NameKitError):
    """Category is absent (or has no usable patterns) for a language."""

    kind = "unknown_category"

    def __init__(self, category: str, language_id: str = "", available: Optional[List[str]] = None):
        self.category = category
        self.language_id = language_id
        self.available = list(available or [])
        message = f"Unknown category '{category}'"
        if language_id:
            message += f" for language '{language_id}'"
        if self.available:
            message += f". Available categories: {', '.join(self.available)}"
        super().__init__(message)


class UnknownGroupError(NameKitError):
    """A pattern references a syllable group that does not exist."""

    kind = "unknown_group"

    def __init__(self, group: str, template: str = ""):
        self.group = group
        self.template = template
        message = f"Unknown syllable group '{group}'"
        if template:
            message += f" in pattern '{template}'"
        super().__init__(message)


class EmptyInputError(NameKitError):
    """A random choice was requested from an empty sequence."""

    kind = "empty_input"


class InvalidWeightError(NameKitError):
    """Weighted selection received negative, non-finite or all-zero weights."""

    kind = "invalid_weight"


class InvalidCountError(NameKitError):
    """Requested batch size is outside the configured bounds."""

    kind = "invalid_count"


__all__ = [
    'NameKitError',
    'LanguageValidationError',
    'LanguageNotFoundError',
    'UnknownCategoryError',
    'UnknownGroupError',
    'EmptyInputError',
    'InvalidWeightError',
    'InvalidCountError',
]
