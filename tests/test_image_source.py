"""Unit tests for character_recognition.image_source."""

import cv2
import numpy as np
import pytest

from character_recognition.errors import InvalidArgument, UnreadableImage
from character_recognition.image_source import decode_grid, load_grid, parse_color


@pytest.fixture
def red_dot_png(tmp_path):
    """White 4x6 PNG with one pure red pixel at (x=2, y=1)."""
    rgb = np.full((4, 6, 3), 255, dtype=np.uint8)
    rgb[1, 2] = (255, 0, 0)
    path = tmp_path / "red_dot.png"
    assert cv2.imwrite(str(path), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    return path


class TestLoadGrid:
    """Tests for load_grid."""

    def test_channels_come_back_as_rgb(self, red_dot_png):
        grid = load_grid(red_dot_png)
        assert grid.shape == (4, 6, 3)
        assert tuple(grid[1, 2]) == (255, 0, 0)
        assert tuple(grid[0, 0]) == (255, 255, 255)

    def test_accepts_str_path(self, red_dot_png):
        assert load_grid(str(red_dot_png)).shape == (4, 6, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(UnreadableImage) as excinfo:
            load_grid(tmp_path / "missing.png")
        assert "no such file" in str(excinfo.value)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "notes.png"
        path.write_text("just text", encoding="utf-8")
        with pytest.raises(UnreadableImage):
            load_grid(path)

    def test_none(self):
        with pytest.raises(InvalidArgument):
            load_grid(None)


class TestDecodeGrid:
    """Tests for decode_grid."""

    def test_png_bytes(self, red_dot_png):
        grid = decode_grid(red_dot_png.read_bytes())
        assert tuple(grid[1, 2]) == (255, 0, 0)

    def test_encoded_in_memory(self):
        bgr = np.zeros((3, 3, 3), dtype=np.uint8)
        bgr[:, :, 0] = 200  # blue channel in OpenCV order
        ok, encoded = cv2.imencode(".png", bgr)
        assert ok
        grid = decode_grid(encoded.tobytes())
        assert tuple(grid[0, 0]) == (0, 0, 200)

    @pytest.mark.parametrize("data", [b"", b"\x89PNG garbage"])
    def test_garbage(self, data):
        with pytest.raises(UnreadableImage):
            decode_grid(data)

    def test_none(self):
        with pytest.raises(InvalidArgument):
            decode_grid(None)


class TestParseColor:
    """Tests for parse_color."""

    @pytest.mark.parametrize("text, expected", [
        ("white", (255, 255, 255)),
        (" Black ", (0, 0, 0)),
        ("#ff8000", (255, 128, 0)),
        ("#FF8000", (255, 128, 0)),
        ("12,34,56", (12, 34, 56)),
        ("12, 34, 56", (12, 34, 56)),
        ("0,0,0", (0, 0, 0)),
    ])
    def test_valid(self, text, expected):
        assert parse_color(text) == expected

    @pytest.mark.parametrize("text", [
        "mauve", "#fff", "#gg0000", "1,2", "1,2,3,4", "256,0,0", "-1,0,0", "a,b,c", "", "１,2,3",
    ])
    def test_invalid(self, text):
        with pytest.raises(InvalidArgument):
            parse_color(text)

    def test_none(self):
        with pytest.raises(InvalidArgument):
            parse_color(None)
