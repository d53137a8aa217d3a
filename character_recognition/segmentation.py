#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Character segmentation module for pattern matching recognition.

Splits a single line of handwriting into per-character column spans using a
vertical projection: every run of columns holding ink is one character.
Characters that touch (no blank column between them) come out as one region.
"""

from pathlib import Path
from typing import List, Optional, Union

import cv2
import numpy as np

from config import MIN_SPAN_WIDTH
from utils.logging import get_logger
from .pixel_grid import Color, InkRegion, as_pixel_grid, ink_mask

log = get_logger()


def ink_columns(grid, background: Color) -> np.ndarray:
    """
    Vertical projection of a pixel grid.

    Returns:
        (W,) bool array, True for columns with at least one ink pixel
    """
    grid = as_pixel_grid(grid)
    return ink_mask(grid, background).any(axis=0)


def column_runs(columns: np.ndarray) -> List[tuple]:
    """
    Maximal runs of True in a 1D bool array.

    Returns:
        List of (lo, hi) inclusive index pairs, left to right
    """
    padded = np.concatenate(([False], columns.astype(bool), [False]))
    edges = np.flatnonzero(np.diff(padded.astype(np.int8)))
    # edges alternate: run start, one past run end
    return [(int(lo), int(hi) - 1) for lo, hi in zip(edges[::2], edges[1::2])]


def segment_image(grid, background: Color, min_width: int = MIN_SPAN_WIDTH) -> List[InkRegion]:
    """
    Segment a pixel grid into individual character regions.

    Args:
        grid: Pixel grid, (H, W) or (H, W, C)
        background: Background color, everything else is ink
        min_width: Spans narrower than this many columns are dropped as noise

    Returns:
        List of InkRegion sorted by column (left to right reading order),
        non-overlapping; empty for a blank grid
    """
    grid = as_pixel_grid(grid)
    height = grid.shape[0]
    columns = ink_columns(grid, background)

    regions = []
    for lo, hi in column_runs(columns):
        width = hi - lo + 1
        if width < min_width:
            log.trace(f"Dropped {width}px ink span at x={lo} (min width {min_width})")
            continue
        regions.append(InkRegion(lo=lo, hi=hi, top=0, bottom=height - 1))

    log.debug(f"Segmented {len(regions)} characters from image")
    return regions


def draw_regions(grid, regions: List[InkRegion], background: Color) -> np.ndarray:
    """
    Render regions over the ink of a grid for visual inspection.

    Returns:
        BGR image: ink in black on white, one green box and index per region
    """
    mask = ink_mask(as_pixel_grid(grid), background)
    debug_img = np.full(mask.shape + (3,), 255, dtype=np.uint8)
    debug_img[mask] = (0, 0, 0)

    for i, region in enumerate(regions):
        cv2.rectangle(debug_img, (region.lo, region.top), (region.hi, region.bottom), (0, 255, 0), 1)
        cv2.putText(debug_img, str(i), (region.lo, max(region.top + 10, 10)),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.35, (0, 160, 0), 1)
    return debug_img


def segment_image_with_debug(grid, background: Color,
                             min_width: int = MIN_SPAN_WIDTH,
                             debug_output_path: Optional[Union[str, Path]] = None) -> List[InkRegion]:
    """
    Segment image with optional debug visualization.

    Args:
        grid: Pixel grid
        background: Background color
        min_width: Minimum span width
        debug_output_path: Optional path to save debug visualization

    Returns:
        Same regions as segment_image
    """
    regions = segment_image(grid, background, min_width)

    if debug_output_path:
        debug_img = draw_regions(grid, regions, background)
        if cv2.imwrite(str(debug_output_path), debug_img):
            log.info(f"Debug segmentation saved to: {debug_output_path}")
        else:
            log.warning(f"Failed to save debug segmentation: {debug_output_path}")

    return regions
