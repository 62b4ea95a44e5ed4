#!/usr/bin/env python3
"""
Main slideshow module that ties together parser, layout engine and renderers.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_HEIGHT, DEFAULT_WIDTH, LayoutConfig
from .errors import SlideScriptError
from .layout_engine import LayoutEngine
from .metrics import FontMetrics, PillowFontMetrics
from .models import SlideList
from .parser import SlideParser
from .paths import prepare_output
from .png_renderer import PNGRenderer
from .pptx_renderer import PPTXRenderer

logger = logging.getLogger(__name__)

RENDERERS = {
    "pptx": PPTXRenderer,
    "png": PNGRenderer,
}


class SlideGenerator:
    """
    Main class for turning slideshow source into a PPTX deck or PNG pages.
    """

    def __init__(
        self,
        *,
        theme: str = "default",
        base_dir: Union[str, Path, None] = None,
        debug: bool = False,
        metrics: Optional[FontMetrics] = None,
        end_slide: bool = True,
    ):
        """Create a new :class:`SlideGenerator`.

        Parameters
        ----------
        theme
            Name of the CSS theme to apply (``default`` / ``dark`` / ...).
        base_dir
            Base directory for resolving relative image paths.  If None,
            :meth:`parse_file` uses the directory of the slideshow file and
            :meth:`parse` the current working directory.
        debug
            Enable verbose logging of parse and layout decisions.
        metrics
            Font metrics provider; defaults to the theme font through Pillow.
        end_slide
            Append the closing "End of presentation." slide when rendering.
        """
        self.debug = debug
        self.theme = theme
        self.end_slide = end_slide
        self.config = LayoutConfig.from_theme(theme)
        self.metrics = metrics or PillowFontMetrics(self.config, debug=debug)
        self.parser = SlideParser(base_dir=Path(base_dir) if base_dir else None, debug=debug)

    def parse(self, source: str) -> SlideList:
        return self.parser.parse(source)

    def parse_file(self, path: Union[str, Path]) -> SlideList:
        return self.parser.parse_file(path)

    def layout(self, slide_list: SlideList, width: int = DEFAULT_WIDTH,
               height: int = DEFAULT_HEIGHT) -> SlideList:
        """
        Lay out a copy of *slide_list* for a *width* x *height* viewport.

        Wrapping rewrites text lines, so each viewport size starts again from
        the parsed tree; *slide_list* itself is left untouched.
        """
        config = self.config.with_viewport(width, height)
        engine = LayoutEngine(config, self.metrics, debug=self.debug)
        return engine.apply(slide_list.clone())

    def render(self, laid_out: SlideList, output_path: Union[str, Path],
               width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT, fmt: str = "pptx") -> Path:
        """Render an already laid-out slideshow with the *fmt* backend."""
        if fmt not in RENDERERS:
            raise ValueError(f"Unknown output format '{fmt}'. Choose from: {sorted(RENDERERS)}")
        for number, slide in enumerate(laid_out.presentation(), start=1):
            logger.info(f"Slide {number}: {slide.top_text() or '(untitled)'}")

        config = self.config.with_viewport(width, height)
        renderer = RENDERERS[fmt](config, self.metrics, debug=self.debug)
        return renderer.render(laid_out, output_path, end_slide=self.end_slide)

    def generate(self, slide_list: SlideList, output_path: Union[str, Path],
                 width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT, fmt: str = "pptx") -> Path:
        """
        Lay out and render a parsed slideshow.

        Returns:
            Path: the PPTX file or the PNG directory written
        """
        laid_out = self.layout(slide_list, width, height)
        output = self.render(laid_out, output_path, width, height, fmt)

        if self.debug:
            logger.info(f"Generated presentation saved to: {output}")
            logger.info(f"Total slides: {len(laid_out.presentation())}")
            logger.info(f"Theme: {self.theme}")
        return output


def dump_layout(slide_list: SlideList, output_path: Union[str, Path]) -> Path:
    """Write the laid-out tree as JSON."""
    path = prepare_output(output_path)
    path.write_text(json.dumps(slide_list.to_dict(), indent=2), encoding="utf-8")
    return path


def _build_parser():
    import argparse

    p = argparse.ArgumentParser(prog="slidescript", description="Lay out a slideshow script and render it.")
    p.add_argument("file", nargs="?", type=Path, help="Slideshow script to render")
    p.add_argument("width", nargs="?", type=int, help=f"Viewport width in px (default {DEFAULT_WIDTH})")
    p.add_argument("height", nargs="?", type=int, help=f"Viewport height in px (default {DEFAULT_HEIGHT})")
    p.add_argument("--output", "-o", type=Path, help="Destination (PPTX file, or directory for PNG pages)")
    p.add_argument("--format", "-f", choices=sorted(RENDERERS), default="pptx", help="Output format")
    p.add_argument("--theme", "-t", default="default", help="CSS theme to use (default, dark, ...)")
    p.add_argument("--asset-base", type=Path, help="Base directory for resolving relative image paths (default: parent of the script)")
    p.add_argument("--dump-layout", type=Path, help="Also write the laid-out tree as JSON")
    p.add_argument("--no-end-slide", action="store_true", help="Do not append the end-of-presentation slide")
    p.add_argument("--debug", action="store_true", help="Enable verbose logging")
    return p


def main(argv=None) -> int:
    """Command-line entry point for the slideshow renderer."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Handlers and format come from the package logging setup.
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.file is None:
        parser.print_usage(sys.stderr)
        return 1

    width, height = DEFAULT_WIDTH, DEFAULT_HEIGHT
    if args.width is not None and args.height is not None:
        width, height = args.width, args.height
    if width <= 0 or height <= 0:
        logger.error(f"Invalid viewport size: {width}x{height}")
        return 1

    script: Path = args.file
    if not script.exists():
        logger.error(f"Slideshow file '{script}' not found")
        return 1

    if args.output is not None:
        output = args.output
    elif args.format == "pptx":
        output = Path("output") / f"{script.stem}.pptx"
    else:
        output = Path("output") / script.stem

    try:
        generator = SlideGenerator(
            theme=args.theme,
            base_dir=args.asset_base,
            debug=args.debug,
            end_slide=not args.no_end_slide,
        )
        slide_list = generator.parse_file(script)
        laid_out = generator.layout(slide_list, width, height)
        if args.dump_layout:
            dump_layout(laid_out, args.dump_layout)
        written = generator.render(laid_out, output, width, height, args.format)
    except SlideScriptError as exc:
        logger.error(str(exc))
        return 1
    except (FileNotFoundError, ValueError) as exc:
        logger.error(f"❌ {exc}")
        return 1

    logger.info("✅ Presentation written to %s", written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
