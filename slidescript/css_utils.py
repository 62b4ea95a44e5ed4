"""
Centralized CSS utilities for slideshow themes.

Themes keep their tunables as custom properties in ``:root`` and their colors
in ordinary rules; this module is the only place that knows how to read them.
"""
import re
from typing import Dict, Optional, Tuple

from .theme_loader import get_css

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


class CSSParser:
    """
    Centralized CSS parsing utilities.
    """

    def __init__(self, theme: str = "default"):
        self.theme = theme
        self.css_content = _COMMENT_RE.sub("", get_css(theme))
        self._css_vars = None

    def get_css_variables(self) -> Dict[str, str]:
        """Extract all CSS variables from :root section. Cached for performance."""
        if self._css_vars is not None:
            return self._css_vars

        root_match = re.search(r':root\s*\{([^}]+)\}', self.css_content, re.DOTALL)
        if not root_match:
            raise ValueError(f"No :root section found in theme '{self.theme}'")

        variable_pattern = r'--([^:]+):\s*([^;]+);'
        css_vars = re.findall(variable_pattern, root_match.group(1))
        self._css_vars = {name.strip(): value.strip() for name, value in css_vars}

        return self._css_vars

    def get_raw_value(self, variable_name: str) -> str:
        """Get raw CSS variable value."""
        value = self.get_css_variables().get(variable_name)
        if not value:
            raise ValueError(f"CSS variable '--{variable_name}' not found in theme '{self.theme}'")
        return value

    def get_px_value(self, variable_name: str) -> float:
        """Get pixel value from CSS variable."""
        value = self.get_raw_value(variable_name)
        px_match = re.fullmatch(r'(\d+(?:\.\d+)?)px', value)
        if not px_match:
            raise ValueError(f"CSS variable '--{variable_name}' is not a pixel value: {value}")
        return float(px_match.group(1))

    def get_float_value(self, variable_name: str) -> float:
        """Get a unitless number from CSS variable."""
        value = self.get_raw_value(variable_name)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"CSS variable '--{variable_name}' is not a number: {value}") from None

    def get_string_value(self, variable_name: str) -> str:
        """Get a (possibly quoted) string from CSS variable."""
        return self.get_raw_value(variable_name).strip('\'"')

    def get_color_value(self, selector_pattern: str, property_name: str = 'color') -> Optional[str]:
        """Extract a property value from the first rule matching *selector_pattern*."""
        pattern = rf'{selector_pattern}\s*{{[^}}]*?(?<![\w-]){property_name}:\s*([^;}}\s]+)'
        match = re.search(pattern, self.css_content, re.IGNORECASE | re.DOTALL)
        return match.group(1).strip() if match else None


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert ``#rrggbb`` / ``#rgb`` to an RGB tuple."""
    hex_color = hex_color.lstrip('#')
    if len(hex_color) == 3:
        hex_color = ''.join(c * 2 for c in hex_color)
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: #{hex_color}")
    return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
