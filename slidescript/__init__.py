"""slidescript – top-level package

Exposes the public API (`SlideGenerator`, `SlideParser`, `LayoutEngine`, ...)
**and** sets up a minimal logging configuration so that every sub-module can
call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `SLIDESCRIPT_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise INFO.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("SLIDESCRIPT_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .config import LayoutConfig  # noqa: E402  (import after logger)
from .errors import DSLLogicError, DSLSyntaxError, ImageDecodeError, LayoutError, SlideScriptError  # noqa: E402
from .generator import SlideGenerator  # noqa: E402
from .layout_engine import LayoutEngine  # noqa: E402
from .models import Box, Image, Slide, SlideList, Text  # noqa: E402
from .parser import SlideParser  # noqa: E402
from .png_renderer import PNGRenderer  # noqa: E402
from .pptx_renderer import PPTXRenderer  # noqa: E402

__all__ = [
    "SlideGenerator",
    "SlideParser",
    "LayoutEngine",
    "LayoutConfig",
    "PPTXRenderer",
    "PNGRenderer",
    "SlideList",
    "Slide",
    "Box",
    "Text",
    "Image",
    "SlideScriptError",
    "DSLSyntaxError",
    "DSLLogicError",
    "LayoutError",
    "ImageDecodeError",
]
