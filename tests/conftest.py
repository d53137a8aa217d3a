"""Shared pytest fixtures for the recognition test suite.

Fixtures:
    blank_grid: factory for RGB pixel grids filled with one color
    paint: factory that fills an inclusive rectangle of a grid with ink
    bar_line_grid: 40x60 grid holding a vertical bar then a horizontal bar
    languages_dir: temporary directory with small language packs
    dict_template_manager: template source serving in-memory dictionaries

Markers:
    integration: exercises the command line and image files end to end
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from character_recognition.errors import LanguagePackNotFound  # noqa: E402
from character_recognition.template_manager import TemplateDictionary  # noqa: E402

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# Normalized patterns of a vertical and a horizontal bar
VERTICAL_BAR = frozenset((4, y) for y in range(9))
HORIZONTAL_BAR = frozenset((x, 4) for x in range(9))
FULL_GRID = frozenset((x, y) for x in range(9) for y in range(9))


def _record(cells, character):
    return "\t".join(f"{x}, {y}" for x, y in cells) + "\t" + character


@pytest.fixture
def blank_grid():
    """Factory: blank_grid(height, width, color) -> (H, W, 3) uint8 grid."""
    def _make(height=40, width=60, color=WHITE):
        return np.full((height, width, 3), color, dtype=np.uint8)
    return _make


@pytest.fixture
def paint():
    """Factory: paint(grid, x0, y0, x1, y1, color) fills the inclusive box."""
    def _paint(grid, x0, y0, x1, y1, color=BLACK):
        grid[y0:y1 + 1, x0:x1 + 1] = color
        return grid
    return _paint


@pytest.fixture
def bar_line_grid(blank_grid, paint):
    """A 2x20 vertical bar at x=5..6 and a 20x2 horizontal bar at x=20..39."""
    grid = blank_grid(40, 60)
    paint(grid, 5, 5, 6, 24)
    paint(grid, 20, 10, 39, 11)
    return grid


@pytest.fixture
def languages_dir(tmp_path):
    """Directory with Bars ('1', '-'), Letters ('l', '_') and a Broken pack."""
    root = tmp_path / "languages"
    root.mkdir()
    (root / "Bars.txt").write_text(
        _record(sorted(HORIZONTAL_BAR), "-") + "\n" + _record(sorted(VERTICAL_BAR), "1") + "\n",
        encoding="utf-8",
    )
    (root / "Letters.txt").write_text(
        _record(sorted(HORIZONTAL_BAR), "_") + "\n" + _record(sorted(VERTICAL_BAR), "l") + "\n",
        encoding="utf-8",
    )
    (root / "Broken.txt").write_text("0, 0\t0,0\n", encoding="utf-8")
    return root


class DictTemplateManager:
    """Template source serving prebuilt dictionaries by language name."""

    def __init__(self, packs):
        self.packs = {name: TemplateDictionary(entries, language=name) for name, entries in packs.items()}
        self.loads = []

    def load(self, language):
        self.loads.append(language)
        if language not in self.packs:
            raise LanguagePackNotFound(language)
        return self.packs[language]


@pytest.fixture
def dict_template_manager():
    """Template source with whole-shape keys: 'Shapes' and 'Filled'."""
    return DictTemplateManager({
        "Shapes": {VERTICAL_BAR: "|", HORIZONTAL_BAR: "-"},
        "Filled": {FULL_GRID: "#"},
    })
