#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Image decoding for the recognizer.

Turns image files (or encoded image bytes) into RGB pixel grids and parses
background colors given as text.
"""

import os
from pathlib import Path
from typing import Tuple, Union

import cv2
import numpy as np

from config import NAMED_COLORS
from utils.logging import get_logger
from .errors import InvalidArgument, UnreadableImage

log = get_logger()


def _to_rgb(img: np.ndarray) -> np.ndarray:
    """Convert an OpenCV BGR/BGRA/gray image to RGB or gray."""
    if img.ndim == 2:
        return img
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGB)
    return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)


def load_grid(path: Union[str, os.PathLike]) -> np.ndarray:
    """
    Decode an image file into a pixel grid.

    Args:
        path: Image file readable by OpenCV (PNG, JPEG, BMP, ...)

    Returns:
        (H, W, 3) RGB uint8 array

    Raises:
        UnreadableImage: if the file is missing or cannot be decoded
    """
    if path is None:
        raise InvalidArgument("Filename cannot be None...")
    path = Path(path)
    if not path.is_file():
        raise UnreadableImage(path, "no such file")

    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise UnreadableImage(path)

    log.debug(f"Loaded image {path.name}: {img.shape[1]}x{img.shape[0]}")
    return _to_rgb(img)


def decode_grid(data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes (e.g. a PNG rendered by a drawing surface).

    Returns:
        (H, W, 3) RGB uint8 array

    Raises:
        UnreadableImage: if the bytes are not a decodable image
    """
    if data is None:
        raise InvalidArgument("Image data cannot be None...")
    buffer = np.frombuffer(bytes(data), dtype=np.uint8)
    img = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
    if img is None or img.size == 0:
        raise UnreadableImage(f"<{len(buffer)} bytes>")
    return _to_rgb(img)


def parse_color(text: str) -> Tuple[int, int, int]:
    """
    Parse an RGB color from text.

    Accepts "r,g,b", "#rrggbb" or a name from NAMED_COLORS.

    Raises:
        InvalidArgument: if text is not a color
    """
    if text is None:
        raise InvalidArgument("Color cannot be None...")
    value = text.strip().lower()

    if value in NAMED_COLORS:
        return NAMED_COLORS[value]

    if value.startswith("#"):
        hex_digits = value[1:]
        if len(hex_digits) == 6:
            try:
                return tuple(int(hex_digits[i:i + 2], 16) for i in (0, 2, 4))
            except ValueError:
                pass
        raise InvalidArgument(f"Illegal color: {text!r}")

    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidArgument(f"Illegal color: {text!r}")
    channels = tuple(int(p) for p in parts)
    if any(c > 255 for c in channels):
        raise InvalidArgument(f"Illegal color: {text!r} (channels are 0-255)")
    return channels
