"""End-to-end tests for the command line entry point."""

import cv2
import pytest

from main import main

pytestmark = pytest.mark.integration


@pytest.fixture
def line_png(tmp_path, bar_line_grid):
    path = tmp_path / "line.png"
    assert cv2.imwrite(str(path), cv2.cvtColor(bar_line_grid, cv2.COLOR_RGB2BGR))
    return path


def run(languages_dir, *argv):
    return main(["--no-log-file", "--languages-dir", str(languages_dir), *argv])


class TestMain:
    """Tests for main()."""

    def test_reads_image(self, languages_dir, line_png, capsys):
        code = run(languages_dir, "--language", "Bars", "--match-policy", "any_cell", str(line_png))
        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["1-"]

    def test_any_cell_policy_by_default(self, languages_dir, line_png, capsys):
        assert run(languages_dir, "--language", "Bars", str(line_png)) == 0
        assert capsys.readouterr().out.splitlines() == ["1-"]

    def test_exact_policy(self, languages_dir, line_png, capsys):
        assert run(languages_dir, "--language", "Bars", "--match-policy", "exact", str(line_png)) == 0
        assert capsys.readouterr().out.splitlines() == ["??"]

    def test_one_line_per_image(self, languages_dir, line_png, capsys):
        code = run(languages_dir, "--language", "Letters", "--match-policy", "any_cell",
                   str(line_png), str(line_png))
        assert code == 0
        assert capsys.readouterr().out.splitlines() == ["l_", "l_"]

    def test_list_languages(self, languages_dir, capsys):
        assert run(languages_dir, "--list-languages") == 0
        assert capsys.readouterr().out.splitlines() == ["Bars", "Broken", "Letters"]

    def test_unknown_language(self, languages_dir, line_png, capsys):
        assert run(languages_dir, "--language", "Klingon", str(line_png)) == 2
        assert capsys.readouterr().out == ""

    def test_malformed_language(self, languages_dir, line_png):
        assert run(languages_dir, "--language", "Broken", str(line_png)) == 2

    def test_bad_background(self, languages_dir, line_png):
        assert run(languages_dir, "--language", "Bars", "--background", "mauve", str(line_png)) == 2

    def test_no_images(self, languages_dir):
        assert run(languages_dir, "--language", "Bars") == 2

    def test_unreadable_image_does_not_stop_the_rest(self, languages_dir, line_png, tmp_path, capsys):
        code = run(languages_dir, "--language", "Bars", "--match-policy", "any_cell",
                   str(tmp_path / "missing.png"), str(line_png))
        assert code == 2
        assert capsys.readouterr().out.splitlines() == ["1-"]

    def test_debug_output(self, languages_dir, line_png, tmp_path):
        out_dir = tmp_path / "debug"
        assert run(languages_dir, "--language", "Bars", "--debug-output", str(out_dir), str(line_png)) == 0
        assert (out_dir / "line_segments.png").exists()

    def test_verbose_mode(self, languages_dir, line_png, capsys):
        assert run(languages_dir, "--verbose", "--language", "Bars", "--match-policy", "any_cell",
                   str(line_png)) == 0
        assert capsys.readouterr().out.splitlines() == ["1-"]
