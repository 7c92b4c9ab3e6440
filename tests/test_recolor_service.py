"""Tests for BackgroundRecolorer."""
import numpy as np
import pytest

from conftest import solid
from xkcd_wallpaper.models.classification_map import ClassificationMap
from xkcd_wallpaper.models.color import Color
from xkcd_wallpaper.models.contrast_mode import ContrastMode
from xkcd_wallpaper.models.image import Image
from xkcd_wallpaper.services.classification_service import ColorClassifier
from xkcd_wallpaper.services.recolor_service import BackgroundRecolorer

GREEN = Color.from_hex("#1F241F")
BLACK = Color(0, 0, 0)


@pytest.fixture
def recolorer():
    return BackgroundRecolorer(line_art_threshold=0.1)


def line_on_white() -> Image:
    pixels = np.full((5, 5, 4), 255, dtype=np.uint8)
    pixels[2, :, :3] = 0
    return Image(pixels)


class TestBackgroundRecolorer:
    def test_pure_background_becomes_target(self, recolorer):
        img = solid(4, 3, (255, 255, 255))
        out = recolorer.recolor(img, ClassificationMap(np.ones((3, 4))), GREEN, ContrastMode.DARK)
        assert np.all(out.pixels == np.array(GREEN.rgba(), dtype=np.uint8))

    def test_dark_mode_keeps_line_art(self, recolorer):
        img = line_on_white()
        cmap = ColorClassifier().classify(img)
        out = recolorer.recolor(img, cmap, GREEN, ContrastMode.DARK)
        assert np.all(out.pixels[2, :, :3] == 0)
        assert np.all(out.pixels[0, :, :3] == GREEN.rgb())

    def test_light_mode_inverts_line_art(self, recolorer):
        img = line_on_white()
        cmap = ColorClassifier().classify(img)
        out = recolorer.recolor(img, cmap, BLACK, ContrastMode.LIGHT)
        assert np.all(out.pixels[2, :, :3] == 255)
        assert np.all(out.pixels[0, :, :3] == 0)

    def test_light_mode_leaves_edges_uninverted(self, recolorer):
        img = solid(1, 1, (100, 100, 100))
        out = recolorer.recolor(img, ClassificationMap(np.full((1, 1), 0.5)), BLACK, ContrastMode.LIGHT)
        assert out.pixels[0, 0, :3].tolist() == [50, 50, 50]

    def test_edge_pixels_blend(self, recolorer):
        img = solid(1, 1, (100, 100, 100))
        out = recolorer.recolor(img, ClassificationMap(np.full((1, 1), 0.25)), Color(200, 0, 0), ContrastMode.DARK)
        # 100 * 0.75 + target * 0.25
        assert out.pixels[0, 0, :3].tolist() == [125, 75, 75]

    def test_output_is_opaque(self, recolorer):
        img = solid(2, 2, (10, 20, 30), alpha=0)
        out = recolorer.recolor(img, ClassificationMap(np.zeros((2, 2))), GREEN, ContrastMode.DARK)
        assert np.all(out.pixels[:, :, 3] == 255)
        assert out.pixels.shape == img.pixels.shape

    def test_idempotent_on_background(self, recolorer):
        img = line_on_white()
        classifier = ColorClassifier()
        once = recolorer.recolor(img, classifier.classify(img), GREEN, ContrastMode.DARK)
        twice = recolorer.recolor(once, classifier.classify(once), GREEN, ContrastMode.DARK)
        assert np.array_equal(once.pixels[[0, 1, 3, 4]], twice.pixels[[0, 1, 3, 4]])

    def test_recolor_to_own_background_is_noop(self, recolorer):
        img = solid(6, 6, (255, 255, 255))
        cmap = ColorClassifier().classify(img)
        out = recolorer.recolor(img, cmap, Color(255, 255, 255), ContrastMode.DARK)
        assert np.array_equal(out.pixels, img.pixels)

    def test_source_untouched(self, recolorer):
        img = line_on_white()
        before = img.pixels.copy()
        recolorer.recolor(img, ColorClassifier().classify(img), BLACK, ContrastMode.LIGHT)
        assert np.array_equal(img.pixels, before)

    def test_shape_mismatch(self, recolorer):
        with pytest.raises(ValueError):
            recolorer.recolor(solid(2, 2, (0, 0, 0)), ClassificationMap(np.ones((3, 3))), GREEN, ContrastMode.DARK)

    def test_threshold_from_environment(self, monkeypatch):
        monkeypatch.setenv("LINE_ART_THRESHOLD", "1.0")
        img = solid(1, 1, (100, 100, 100))
        out = BackgroundRecolorer().recolor(img, ClassificationMap(np.full((1, 1), 0.5)), BLACK, ContrastMode.LIGHT)
        # (255 - 100) * 0.5
        assert out.pixels[0, 0, :3].tolist() == [78, 78, 78]
