#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pattern matching module for character recognition.

Looks a normalized glyph pattern up in a template dictionary under an explicit
matching rule. There is no scoring: a glyph either maps to one character or to
nothing.
"""

from enum import Enum
from typing import Optional

from utils.logging import get_logger
from .errors import InvalidArgument
from .normalization import GlyphPattern
from .template_manager import TemplateDictionary

log = get_logger()


class MatchPolicy(str, Enum):
    """How a glyph pattern is compared against dictionary keys."""

    # The whole pattern must equal a key
    EXACT = "exact"
    # Ink cells are visited row by row; the first one that is a one-cell key decides
    ANY_CELL = "any_cell"

    @classmethod
    def parse(cls, value) -> "MatchPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise InvalidArgument(f"Unknown match policy {value!r} (expected one of: {choices})") from None


def match_character(pattern: GlyphPattern,
                    templates: TemplateDictionary,
                    policy: MatchPolicy = MatchPolicy.EXACT) -> Optional[str]:
    """
    Match a glyph pattern against a template dictionary.

    Args:
        pattern: Normalized glyph pattern
        templates: Loaded template dictionary
        policy: Matching rule

    Returns:
        The mapped character, or None if nothing matches
    """
    if not pattern:
        return None

    if policy is MatchPolicy.EXACT:
        character = templates.get(pattern)
    else:
        character = None
        for x, y in sorted(pattern, key=lambda cell: (cell[1], cell[0])):
            character = templates.get(frozenset(((x, y),)))
            if character is not None:
                log.trace(f"Cell ({x}, {y}) decided '{character}'")
                break

    if character is None:
        log.debug(f"No template for {len(pattern)}-cell pattern ({policy.value})")
    return character
