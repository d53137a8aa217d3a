#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Template manager for character recognition.

Loads language packs from the languages directory and parses them into
immutable template dictionaries for pattern lookup.

Language pack format, one record per line, tokens separated by tabs:

    4, 0<TAB>4, 1<TAB>4, 2<TAB>...<TAB>4, 8<TAB>1

Every token but the last is an "x, y" cell of the SCALE_SIZE x SCALE_SIZE grid,
the last token is the character. Each cell is registered on its own as a
one-cell pattern mapping to the line's character; when a cell appears again on
a later line, the later line wins.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from config import (
    LANGUAGES_DIR,
    LANGUAGE_COORD_SEPARATOR,
    LANGUAGE_FILE_ENCODING,
    LANGUAGE_FILE_SUFFIX,
    LANGUAGE_RECORD_SEPARATOR,
    SCALE_SIZE,
)
from utils.logging import get_logger
from .errors import LanguagePackNotFound, MalformedTemplateRecord

log = get_logger()

Cell = Tuple[int, int]
GlyphPattern = FrozenSet[Cell]


class TemplateDictionary(Mapping):
    """Read-only mapping from glyph pattern to character."""

    def __init__(self, entries: Union[Mapping, Iterable[Tuple[Iterable[Cell], str]], None] = None,
                 language: Optional[str] = None):
        """
        Args:
            entries: Mapping or (pattern, character) pairs; patterns may be any
                     iterable of (x, y) cells and are frozen on the way in
            language: Name of the pack the entries came from, if any
        """
        self.language = language
        items = entries.items() if isinstance(entries, Mapping) else (entries or ())
        self._templates: Dict[GlyphPattern, str] = {}
        for pattern, character in items:
            self._templates[frozenset((int(x), int(y)) for x, y in pattern)] = character

    def __getitem__(self, pattern) -> str:
        return self._templates[frozenset(pattern)]

    def __contains__(self, pattern) -> bool:
        try:
            return frozenset(pattern) in self._templates
        except TypeError:
            return False

    def __iter__(self) -> Iterator[GlyphPattern]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"TemplateDictionary(language={self.language!r}, templates={len(self)})"

    def get_all_characters(self) -> List[str]:
        """Distinct characters, in first-seen order."""
        return list(dict.fromkeys(self._templates.values()))

    def get_statistics(self) -> Dict:
        """
        Get statistics about the loaded templates.

        Returns:
            Dictionary with template statistics
        """
        distribution: Dict[str, int] = {}
        for character in self._templates.values():
            distribution[character] = distribution.get(character, 0) + 1
        return {
            'language': self.language,
            'total_templates': len(self._templates),
            'character_count': len(distribution),
            'character_distribution': distribution,
        }


def _parse_int(text: str) -> Optional[int]:
    """Plain base-10 integer with an optional minus sign, nothing else."""
    digits = text[1:] if text.startswith("-") else text
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    return int(text)


def parse_record(line: str, source, line_number: int) -> Tuple[List[Cell], str]:
    """
    Parse one language pack record.

    Args:
        line: Record text without its line terminator
        source: File name (or other label) for error messages
        line_number: 1-based line number for error messages

    Returns:
        Tuple of (cells, character)

    Raises:
        MalformedTemplateRecord: if the record breaks the format
    """
    tokens = line.split(LANGUAGE_RECORD_SEPARATOR)
    if len(tokens) < 2:
        raise MalformedTemplateRecord(source, line_number, line, "no coordinate tokens")

    character = tokens[-1]
    if len(character) != 1:
        raise MalformedTemplateRecord(
            source, line_number, line,
            f"character token must be exactly one character, got {character!r}"
        )

    cells = []
    for token in tokens[:-1]:
        parts = token.split(LANGUAGE_COORD_SEPARATOR)
        if len(parts) != 2:
            raise MalformedTemplateRecord(
                source, line_number, line,
                f"coordinate token {token!r} is not 'x{LANGUAGE_COORD_SEPARATOR}y'"
            )
        x, y = _parse_int(parts[0]), _parse_int(parts[1])
        if x is None or y is None:
            raise MalformedTemplateRecord(
                source, line_number, line, f"coordinate token {token!r} is not numeric"
            )
        if not (0 <= x < SCALE_SIZE and 0 <= y < SCALE_SIZE):
            raise MalformedTemplateRecord(
                source, line_number, line,
                f"coordinate {x, y} outside the {SCALE_SIZE}x{SCALE_SIZE} grid"
            )
        cells.append((x, y))
    return cells, character


def parse_language_pack(lines: Iterable[str], source="<memory>",
                        language: Optional[str] = None) -> TemplateDictionary:
    """
    Parse language pack lines into a template dictionary.

    Blank lines are skipped. Every coordinate token of a record becomes its own
    one-cell pattern.

    Args:
        lines: Lines of the pack, with or without line terminators
        source: Label used in error messages
        language: Language name stored on the result

    Returns:
        TemplateDictionary of one-cell patterns

    Raises:
        MalformedTemplateRecord: on the first bad record
    """
    entries: Dict[GlyphPattern, str] = {}
    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if not line:
            continue
        cells, character = parse_record(line, source, line_number)
        for cell in cells:
            pattern = frozenset((cell,))
            previous = entries.get(pattern)
            if previous is not None and previous != character:
                log.trace(f"{source}:{line_number}: cell {cell} remapped '{previous}' -> '{character}'")
            entries[pattern] = character
    return TemplateDictionary(entries, language=language)


class TemplateManager:
    """Locates and loads language packs; holds nothing but its directory."""

    def __init__(self, languages_dir: Union[str, Path, None] = None):
        """
        Initialize template manager.

        Args:
            languages_dir: Directory with one <language>.txt pack per language
        """
        self.languages_dir = Path(languages_dir) if languages_dir is not None else LANGUAGES_DIR

    def language_path(self, language: str) -> Path:
        """Path where the pack for language would live."""
        return self.languages_dir / f"{language}{LANGUAGE_FILE_SUFFIX}"

    def available_languages(self) -> List[str]:
        """
        Get list of all language packs in the languages directory.

        Returns:
            Sorted list of language names
        """
        if not self.languages_dir.is_dir():
            log.warning(f"Languages directory does not exist: {self.languages_dir}")
            return []
        return sorted(p.stem for p in self.languages_dir.glob(f"*{LANGUAGE_FILE_SUFFIX}") if p.is_file())

    def load(self, language: str) -> TemplateDictionary:
        """
        Load the template dictionary for a language.

        Args:
            language: Language name, addressing <languages_dir>/<language>.txt

        Returns:
            Freshly parsed TemplateDictionary

        Raises:
            LanguagePackNotFound: if no pack exists for language
            MalformedTemplateRecord: if a record of the pack is malformed
        """
        if (not isinstance(language, str) or not language
                or "/" in language or "\\" in language or language in (".", "..")):
            raise LanguagePackNotFound(language)

        path = self.language_path(language)
        if not path.is_file():
            log.warning(f"Language pack not found: {path}")
            raise LanguagePackNotFound(language, path)

        log.debug(f"Loading language pack '{language}' from {path}")
        try:
            with open(path, "r", encoding=LANGUAGE_FILE_ENCODING) as f:
                templates = parse_language_pack(f, source=path.name, language=language)
        except MalformedTemplateRecord as e:
            log.error(f"Malformed language pack '{language}': {e}")
            raise
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Could not read language pack {path}: {e}")
            raise LanguagePackNotFound(language, path) from e

        stats = templates.get_statistics()
        log.info(f"Loaded {stats['total_templates']} templates for "
                 f"{stats['character_count']} characters ({language})")
        for character, count in stats['character_distribution'].items():
            log.trace(f"Character '{character}': {count} templates")
        return templates
