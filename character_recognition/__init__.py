#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Character Recognition Module

Pattern matching-based handwriting recognition. Segments a line into character
columns, normalizes each character to a 9x9 glyph pattern and looks it up in a
language pack.
"""

from .errors import (
    CharacterRecognitionError,
    InvalidArgument,
    InvalidLanguage,
    LanguagePackNotFound,
    MalformedTemplateRecord,
    TemplateStoreError,
    UnreadableImage,
)
from .image_source import decode_grid, load_grid, parse_color
from .matcher import MatchPolicy, match_character
from .normalization import normalize_region
from .pixel_grid import InkRegion
from .recognizer import CharacterRecognizer, RecognizedCharacter
from .segmentation import segment_image
from .template_manager import TemplateDictionary, TemplateManager

__all__ = [
    'CharacterRecognizer',
    'RecognizedCharacter',
    'segment_image',
    'normalize_region',
    'TemplateManager',
    'TemplateDictionary',
    'match_character',
    'MatchPolicy',
    'InkRegion',
    'load_grid',
    'decode_grid',
    'parse_color',
    'CharacterRecognitionError',
    'InvalidArgument',
    'InvalidLanguage',
    'LanguagePackNotFound',
    'MalformedTemplateRecord',
    'TemplateStoreError',
    'UnreadableImage',
]
