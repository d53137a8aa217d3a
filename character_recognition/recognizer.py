#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Character recognizer for pattern matching-based text recognition.

Reads one line of handwriting: segments the image into character columns,
normalizes each into a 9x9 glyph pattern and looks it up in the template
dictionary of the current language.
"""

import os
import threading
import time
from dataclasses import dataclass
from typing import List, Optional

from config import (
    DEFAULT_BACKGROUND,
    DEFAULT_LANGUAGE,
    DEFAULT_MATCH_POLICY,
    UNKNOWN_CHARACTER,
)
from utils.logging import get_logger, log_status
from .errors import InvalidArgument, InvalidLanguage, TemplateStoreError
from .image_source import load_grid
from .matcher import MatchPolicy, match_character
from .normalization import GlyphPattern, normalize_region
from .pixel_grid import Color, InkRegion, as_pixel_grid, validate_color
from .segmentation import segment_image
from .template_manager import TemplateDictionary, TemplateManager

log = get_logger()


@dataclass(frozen=True)
class RecognizerConfig:
    """Everything a read depends on; replaced as a whole, never mutated."""
    language: str
    templates: TemplateDictionary
    background: Color


@dataclass(frozen=True)
class RecognizedCharacter:
    """Outcome for one segmented region."""
    region: InkRegion
    pattern: GlyphPattern
    character: Optional[str]


class CharacterRecognizer:
    """Character recognition using pattern matching with a template dictionary."""

    def __init__(self, language: str = DEFAULT_LANGUAGE,
                 background: Color = DEFAULT_BACKGROUND,
                 template_manager: Optional[TemplateManager] = None,
                 match_policy=DEFAULT_MATCH_POLICY,
                 unknown_character: str = UNKNOWN_CHARACTER,
                 measure_time: bool = False):
        """
        Initialize character recognizer.

        Args:
            language: Language pack to load
            background: Background color; every other color is ink
            template_manager: Source of template dictionaries (default: shipped packs)
            match_policy: MatchPolicy or its name ("exact", "any_cell")
            unknown_character: Emitted for glyphs that match no template
            measure_time: Enable timing measurements for recognition operations

        Raises:
            InvalidArgument: if language is not a str, or background is missing or unusable
            InvalidLanguage: if the language pack is missing or malformed
        """
        if language is None:
            raise InvalidArgument("Language cannot be None...")
        if not isinstance(language, str):
            raise InvalidArgument(f"Language must be a name, got {language!r}")
        background = validate_color(background)

        self.template_manager = template_manager or TemplateManager()
        self.match_policy = MatchPolicy.parse(match_policy)
        self.unknown_character = unknown_character
        self.measure_time = measure_time

        # Writers serialize on this lock; readers just take self._config
        self._config_lock = threading.Lock()
        self._config = RecognizerConfig(language, self._load_templates(language), background)

        # Timing statistics; reads may run concurrently
        self._stats_lock = threading.Lock()
        self.last_recognition_time = 0.0
        self.avg_recognition_time = 0.0
        self.recognition_call_count = 0

        log.info(f"Character recognizer initialized: language={language}, "
                 f"background={background}, policy={self.match_policy.value}")

    def _load_templates(self, language: str) -> TemplateDictionary:
        try:
            return self.template_manager.load(language)
        except TemplateStoreError as e:
            raise InvalidLanguage(language) from e

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_language(self, language: str):
        """
        Switch to another language pack.

        The pack is loaded first; the recognizer only changes once it parsed
        cleanly, otherwise the previous language stays in place.

        Raises:
            InvalidArgument: if language is None or not a str
            InvalidLanguage: if the language pack is missing or malformed
        """
        if language is None:
            raise InvalidArgument("Language cannot be None...")
        if not isinstance(language, str):
            raise InvalidArgument(f"Language must be a name, got {language!r}")
        templates = self._load_templates(language)
        with self._config_lock:
            old = self._config
            self._config = RecognizerConfig(language, templates, old.background)
        log_status(log, "Language", f"{old.language} -> {language}", "🔤")

    def get_language(self) -> str:
        """Returns the current language of this recognizer."""
        return self._config.language

    def set_background(self, background: Color):
        """
        Set the background color.

        Raises:
            InvalidArgument: if background is None or not a color
        """
        background = validate_color(background)
        with self._config_lock:
            old = self._config
            self._config = RecognizerConfig(old.language, old.templates, background)
        log.debug(f"Background changed: {old.background} -> {background}")

    def get_background(self) -> Color:
        """Returns the current background color of this recognizer."""
        return self._config.background

    def get_templates(self) -> TemplateDictionary:
        """Returns the template dictionary currently in use."""
        return self._config.templates

    # ------------------------------------------------------------------
    # Recognition
    # ------------------------------------------------------------------

    def _resolve_grid(self, source):
        if source is None:
            raise InvalidArgument("Image cannot be None...")
        if isinstance(source, (str, os.PathLike)):
            return load_grid(source)
        return as_pixel_grid(source)

    def read_characters(self, source) -> List[RecognizedCharacter]:
        """
        Recognize each character of a line, keeping per-region detail.

        Args:
            source: Pixel grid (ndarray) or path of an image file

        Returns:
            One RecognizedCharacter per segmented region, left to right;
            character is None where no template matched

        Raises:
            InvalidArgument: if source is None or not a pixel grid
            UnreadableImage: if source is a path that cannot be decoded
        """
        grid = self._resolve_grid(source)
        config = self._config

        segmentation_start = time.perf_counter() if self.measure_time else 0
        regions = segment_image(grid, config.background)
        if self.measure_time:
            segmentation_time = (time.perf_counter() - segmentation_start) * 1000
            log.debug(f"[CHAR:timing] Character segmentation: {segmentation_time:.2f}ms")

        if not regions:
            log.debug("No characters found in image")
            return []

        results = []
        for region in regions:
            pattern = normalize_region(grid, region, config.background)
            character = match_character(pattern, config.templates, self.match_policy)
            if character is not None:
                log.debug(f"Recognized character: '{character}' at x={region.lo}..{region.hi}")
            else:
                log.debug(f"Character not recognized at x={region.lo}..{region.hi}")
            results.append(RecognizedCharacter(region, pattern, character))
        return results

    def read(self, source) -> str:
        """
        Returns the text pictured in source.

        Glyphs that match no template come out as the unknown character; a
        blank image reads as "".

        Args:
            source: Pixel grid (ndarray) or path of an image file

        Returns:
            Recognized text string

        Raises:
            InvalidArgument: if source is None or not a pixel grid
            UnreadableImage: if source is a path that cannot be decoded
        """
        start_time = time.perf_counter() if self.measure_time else 0

        recognized = self.read_characters(source)
        text = "".join(
            r.character if r.character is not None else self.unknown_character
            for r in recognized
        )

        if self.measure_time:
            total_time = (time.perf_counter() - start_time) * 1000
            with self._stats_lock:
                self.last_recognition_time = total_time
                self.recognition_call_count += 1
                count = self.recognition_call_count
                self.avg_recognition_time = ((self.avg_recognition_time * (count - 1))
                                             + total_time) / count
                avg = self.avg_recognition_time
            log.info(f"[CHAR:timing] Total recognition time: {total_time:.2f}ms | "
                     f"Avg: {avg:.2f}ms | Count: {count}")

        if text:
            log.debug(f"Detected text: '{text}'")
        return text

    def get_timing_stats(self) -> dict:
        """
        Get recognition timing statistics.

        Returns:
            Dictionary with timing statistics:
            - last_recognition_time: Time of last recognition operation (ms)
            - avg_recognition_time: Average recognition operation time (ms)
            - recognition_call_count: Total number of recognition calls
        """
        with self._stats_lock:
            return {
                'last_recognition_time': self.last_recognition_time,
                'avg_recognition_time': self.avg_recognition_time,
                'recognition_call_count': self.recognition_call_count,
                'measure_time': self.measure_time
            }

    def reset_timing_stats(self):
        """Reset recognition timing statistics."""
        with self._stats_lock:
            self.last_recognition_time = 0.0
            self.avg_recognition_time = 0.0
            self.recognition_call_count = 0
        log.info("[CHAR:timing] Timing statistics reset")

    def get_template_stats(self) -> dict:
        """Statistics of the template dictionary currently in use."""
        return self._config.templates.get_statistics()
