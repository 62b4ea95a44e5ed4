import sys
from pathlib import Path

import pytest
from PIL import Image as PILImage

# Ensure project root is on sys.path so `import slidescript` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from slidescript.config import LayoutConfig  # noqa: E402
from slidescript.layout_engine import LayoutEngine  # noqa: E402
from slidescript.metrics import FontMetrics  # noqa: E402
from slidescript.parser import SlideParser  # noqa: E402


class FixedMetrics(FontMetrics):
    """Deterministic metrics: every character is half the font size wide."""

    def __init__(self, config: LayoutConfig):
        self.config = config

    def advance_width(self, char, font_size):
        return 0.5 * self.config.font_px(font_size)

    def font_height(self, font_size):
        return 1.2 * self.config.font_px(font_size)

    def font_ascent(self, font_size):
        return 0.8 * self.config.font_px(font_size)


@pytest.fixture
def config():
    return LayoutConfig()


@pytest.fixture
def metrics(config):
    return FixedMetrics(config)


@pytest.fixture
def engine(config, metrics):
    return LayoutEngine(config, metrics)


@pytest.fixture
def parser(tmp_path):
    return SlideParser(base_dir=tmp_path)


@pytest.fixture
def make_png(tmp_path):
    """Write a solid-colour PNG into tmp_path and return its file name."""
    def _make(name="picture.png", size=(200, 100), color=(200, 30, 30, 255)):
        PILImage.new("RGBA", size, color).save(tmp_path / name)
        return name
    return _make
