"""Lookup of the CSS themes shipped inside the package."""
from pathlib import Path
from typing import List

THEMES_DIR = Path(__file__).parent / "themes"


def theme_path(theme: str) -> Path:
    """
    Path of the stylesheet for *theme*.

    Raises:
        ValueError: for names that are not plain identifiers, so a theme
            name can never point outside the themes directory
    """
    if not theme.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Invalid theme name: {theme}")
    return THEMES_DIR / f"{theme}.css"


def get_css(theme: str = "default") -> str:
    """
    Stylesheet text for *theme* (``default``, ``dark``, ...).

    Raises:
        FileNotFoundError: no stylesheet with that name
        ValueError: invalid theme name
    """
    path = theme_path(theme)
    if not path.is_file():
        raise FileNotFoundError(
            f"Theme '{theme}' not found. Available themes: {list_available_themes()}"
        )
    return path.read_text(encoding="utf-8")


def list_available_themes() -> List[str]:
    """Names of the bundled themes, sorted."""
    if not THEMES_DIR.is_dir():
        return []
    return sorted(css.stem for css in THEMES_DIR.glob("*.css") if css.is_file())


def validate_theme(theme: str) -> bool:
    """True when *theme* names a bundled stylesheet."""
    try:
        get_css(theme)
    except (FileNotFoundError, ValueError):
        return False
    return True
