#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exceptions raised by the character recognition pipeline.

Configuration problems (bad language, bad color, bad image handle) are errors.
A glyph that matches no template is not: it becomes UNKNOWN_CHARACTER.
"""

from pathlib import Path
from typing import Optional, Union


class CharacterRecognitionError(Exception):
    """Base class for every recognition error."""


class InvalidArgument(CharacterRecognitionError, ValueError):
    """A required input is missing or has an unusable shape."""


class UnreadableImage(InvalidArgument):
    """The image source could not be decoded into a pixel grid."""

    def __init__(self, source, reason: str = "could not be decoded"):
        self.source = source
        super().__init__(f"Illegal image {source}: {reason}")


class InvalidLanguage(CharacterRecognitionError, ValueError):
    """The requested language pack is missing or malformed."""

    def __init__(self, language):
        self.language = language
        super().__init__(f"Illegal language: {language}")


class TemplateStoreError(CharacterRecognitionError):
    """Base class for language pack loading failures."""


class LanguagePackNotFound(TemplateStoreError):
    """No language pack exists for the requested name."""

    def __init__(self, language, path: Optional[Union[str, Path]] = None):
        self.language = language
        self.path = path
        where = f" (looked for {path})" if path else ""
        super().__init__(f"No language pack for {language!r}{where}")


class MalformedTemplateRecord(TemplateStoreError):
    """A language pack record does not follow the `x, y<TAB>...<TAB>c` format."""

    def __init__(self, source, line_number: int, line: str, reason: str):
        self.source = source
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"{source}:{line_number}: {reason}: {line!r}")
