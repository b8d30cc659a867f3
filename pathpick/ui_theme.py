"""UI theme definitions and selection helpers.

Themes are ANSI SGR prefixes for listing rows, the status bar, and the help
overlay. ``plain`` keeps only reverse video, for use when color is disabled.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    bold: str
    entry_file: str
    entry_dir: str
    entry_selected: str
    filter_match: str
    bar_normal: str
    bar_filter: str
    help_text: str


DEFAULT_THEME = UITheme(
    name="default",
    bold="\033[1m",
    entry_file="\033[37m",
    entry_dir="\033[32m",
    entry_selected="\033[97;45m",
    filter_match="\033[31m",
    bar_normal="\033[30;46m",
    bar_filter="\033[30;43m",
    help_text="\033[37m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    bold="\033[1m",
    entry_file="\033[38;5;252m",
    entry_dir="\033[1;38;5;45m",
    entry_selected="\033[38;5;231;48;5;24m",
    filter_match="\033[38;5;215m",
    bar_normal="\033[38;5;16;48;5;39m",
    bar_filter="\033[38;5;16;48;5;153m",
    help_text="\033[38;5;153m",
)

PLAIN_THEME = UITheme(
    name="plain",
    bold="",
    entry_file="",
    entry_dir="",
    entry_selected="\033[7m",
    filter_match="",
    bar_normal="\033[7m",
    bar_filter="\033[7m",
    help_text="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
