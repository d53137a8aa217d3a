#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Glyph normalization for pattern matching recognition.

Turns the ink of one character region into a SCALE_SIZE x SCALE_SIZE glyph
pattern: crop to the ink, pad to a centered square, then resample by area.
"""

from typing import FrozenSet, Optional, Tuple

import cv2
import numpy as np

from config import SCALE_SIZE
from utils.logging import get_logger
from .errors import InvalidArgument
from .pixel_grid import Color, InkRegion, as_pixel_grid, ink_mask

log = get_logger()

GlyphPattern = FrozenSet[Tuple[int, int]]

EMPTY_PATTERN: GlyphPattern = frozenset()


def ink_bounding_box(mask: np.ndarray) -> Optional[Tuple[int, int, int, int]]:
    """
    Smallest box holding every ink pixel of mask.

    Returns:
        (top, bottom, left, right), inclusive, or None if mask has no ink
    """
    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(mask.any(axis=0))
    return int(rows[0]), int(rows[-1]), int(cols[0]), int(cols[-1])


def pad_to_square(mask: np.ndarray) -> np.ndarray:
    """
    Pad the shorter side of mask with background so it becomes square.

    The ink stays exactly centered. When the leftover is odd, mask is first
    doubled along both axes so the padding splits evenly; resample_to_grid
    only sees proportions, so the result is the same as half-pixel padding.
    """
    mask = mask.astype(np.uint8)
    height, width = mask.shape
    diff = abs(height - width)
    if diff == 0:
        return mask

    if diff % 2:
        mask = np.repeat(np.repeat(mask, 2, axis=0), 2, axis=1)
        diff *= 2

    half = diff // 2
    if height > width:
        top, bottom, left, right = 0, 0, half, half
    else:
        top, bottom, left, right = half, half, 0, 0
    return cv2.copyMakeBorder(mask, top, bottom, left, right,
                              cv2.BORDER_CONSTANT, value=0)


def _area_weights(source_size: int, target_size: int) -> np.ndarray:
    """
    Overlap lengths between target cells and source pixels.

    Both axes are stretched to source_size * target_size units: a target cell
    spans source_size units, a source pixel spans target_size units.
    Row i sums to source_size.
    """
    cell_lo = np.arange(target_size, dtype=np.int64)[:, None] * source_size
    pixel_lo = np.arange(source_size, dtype=np.int64)[None, :] * target_size
    overlap = (np.minimum(cell_lo + source_size, pixel_lo + target_size)
               - np.maximum(cell_lo, pixel_lo))
    return np.clip(overlap, 0, None)


def resample_to_grid(square: np.ndarray, size: int = SCALE_SIZE) -> np.ndarray:
    """
    Resample a square ink mask to size x size cells by exact area averaging.

    Same weighting as cv2.INTER_AREA, done in integers so that a cell sitting
    exactly half on ink resolves to ink rather than to rounding noise. Works
    for both shrinking and enlarging.

    Args:
        square: (N, N) mask, nonzero = ink
        size: Output side length

    Returns:
        (size, size) bool array, True where at least half the cell is ink
    """
    n = square.shape[0]
    if square.shape != (n, n) or n == 0:
        raise InvalidArgument(f"Expected a non-empty square mask, got shape {square.shape}")

    weights = _area_weights(n, size)
    ink = (square != 0).astype(np.int64)
    ink_area = weights @ ink @ weights.T
    # Each cell covers n * n units; ties go to ink
    return 2 * ink_area >= n * n


def normalize_mask(mask: np.ndarray, size: int = SCALE_SIZE) -> GlyphPattern:
    """
    Normalize a boolean ink mask into a glyph pattern.

    Args:
        mask: (H, W) bool array, True = ink
        size: Side of the normalized grid

    Returns:
        Frozenset of (x, y) ink cells; empty if mask holds no ink
    """
    box = ink_bounding_box(mask)
    if box is None:
        return EMPTY_PATTERN

    top, bottom, left, right = box
    cropped = mask[top:bottom + 1, left:right + 1]
    square = pad_to_square(cropped)
    cells = resample_to_grid(square, size)

    pattern = frozenset((int(x), int(y)) for y, x in np.argwhere(cells))
    log.trace(f"Normalized {cropped.shape[1]}x{cropped.shape[0]} ink box "
              f"(square {square.shape[0]}) to {len(pattern)} cells")
    return pattern


def normalize_region(grid, region: InkRegion, background: Color,
                     size: int = SCALE_SIZE) -> GlyphPattern:
    """
    Normalize the ink of one region of a pixel grid into a glyph pattern.

    Args:
        grid: Pixel grid, (H, W) or (H, W, C)
        region: Region to read; must lie inside the grid
        background: Background color, everything else is ink
        size: Side of the normalized grid

    Returns:
        Frozenset of (x, y) cells of the size x size grid holding ink
    """
    grid = as_pixel_grid(grid)
    height, width = grid.shape[:2]
    if not (0 <= region.lo <= region.hi < width and 0 <= region.top <= region.bottom < height):
        raise InvalidArgument(f"Region {region} outside {width}x{height} grid")

    window = grid[region.top:region.bottom + 1, region.lo:region.hi + 1]
    return normalize_mask(ink_mask(window, background), size)


def pattern_to_array(pattern: GlyphPattern, size: int = SCALE_SIZE) -> np.ndarray:
    """Render a glyph pattern as a size x size uint8 image (255 = ink)."""
    img = np.zeros((size, size), dtype=np.uint8)
    for x, y in pattern:
        img[y, x] = 255
    return img
