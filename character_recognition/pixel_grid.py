#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pixel grid helpers shared by segmentation and normalization.

A pixel grid is a numpy array of shape (H, W) for gray images or (H, W, C) for
color images. A pixel is ink when it differs from the background color in at
least one channel.
"""

from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from .errors import InvalidArgument

Color = Union[int, Tuple[int, ...]]


@dataclass(frozen=True)
class InkRegion:
    """Column span [lo, hi] (inclusive) holding one character, rows [top, bottom]."""
    lo: int
    hi: int
    top: int
    bottom: int

    @property
    def width(self) -> int:
        return self.hi - self.lo + 1

    @property
    def height(self) -> int:
        return self.bottom - self.top + 1


def as_pixel_grid(grid) -> np.ndarray:
    """Validate and return grid as an ndarray of shape (H, W) or (H, W, C)."""
    if grid is None:
        raise InvalidArgument("Pixel grid cannot be None...")
    arr = np.asarray(grid)
    if arr.ndim not in (2, 3):
        raise InvalidArgument(f"Pixel grid must be 2D or 3D, got shape {arr.shape}")
    if arr.shape[0] < 1 or arr.shape[1] < 1:
        raise InvalidArgument(f"Pixel grid must be at least 1x1, got shape {arr.shape}")
    if arr.ndim == 3 and arr.shape[2] < 1:
        raise InvalidArgument(f"Pixel grid has no channels, shape {arr.shape}")
    return arr


def validate_color(color) -> Color:
    """Return color as an int or a tuple of ints; reject None and other types."""
    if color is None:
        raise InvalidArgument("Background color cannot be None...")
    if isinstance(color, (bool, np.bool_)):
        raise InvalidArgument(f"Illegal color: {color!r}")
    if isinstance(color, (int, np.integer)):
        return int(color)
    try:
        channels = tuple(color)
    except TypeError:
        raise InvalidArgument(f"Illegal color: {color!r}") from None
    if not channels or not all(
        isinstance(c, (int, np.integer)) and not isinstance(c, (bool, np.bool_))
        for c in channels
    ):
        raise InvalidArgument(f"Illegal color: {color!r}")
    return tuple(int(c) for c in channels)


def ink_mask(grid: np.ndarray, background: Color) -> np.ndarray:
    """
    Boolean mask of ink pixels.

    Args:
        grid: Pixel grid, (H, W) or (H, W, C)
        background: int or per-channel tuple; a gray grid takes a tuple only if
                    all of its channels are equal

    Returns:
        (H, W) bool array, True where the pixel is not the background color
    """
    background = validate_color(background)

    if grid.ndim == 2:
        if isinstance(background, tuple):
            if len(set(background)) != 1:
                raise InvalidArgument(
                    f"Color {background} cannot be the background of a gray image"
                )
            background = background[0]
        return grid != np.asarray(background)

    channels = grid.shape[2]
    if isinstance(background, int):
        background = (background,) * channels
    if len(background) != channels:
        raise InvalidArgument(
            f"Background {background} has {len(background)} channels, image has {channels}"
        )
    return np.any(grid != np.asarray(background), axis=2)
