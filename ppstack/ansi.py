"""Resolve color names to ANSI escape sequences using rich."""

from __future__ import annotations

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

_PROBE = "\x00"

# "+b" style modifiers, as in "red+b".
_MODIFIERS = {
    "b": "bold",
    "d": "dim",
    "i": "italic",
    "u": "underline",
    "B": "blink",
    "s": "strike",
}


def _to_style_definition(name: str) -> str:
    color, _, modifiers = name.partition("+")
    color = color.strip()
    if color.startswith("light"):
        color = "bright_" + color[len("light"):]

    words = []
    for mod in modifiers:
        if mod == "h":
            color = "bright_" + color
            continue
        if mod not in _MODIFIERS:
            raise ValueError(f"Unknown color modifier '{mod}' in '{name}'")
        words.append(_MODIFIERS[mod])
    words.append(color)
    return " ".join(words)


def color_code(name: str) -> str:
    """Return the escape sequence that switches the terminal to ``name``.

    Accepts ``"color+mods"`` names (``"red"``, ``"magenta+b"``,
    ``"lightblack"``) as well as plain rich style strings
    (``"bold bright_red"``). An empty name yields an empty code.

    Raises:
        ValueError: The name is not a known color or style.
    """
    if not name:
        return ""
    definition = name if " " in name else _to_style_definition(name)
    try:
        style = Style.parse(definition)
    except StyleSyntaxError as exc:
        raise ValueError(f"Unknown color '{name}': {exc}") from exc
    rendered = style.render(_PROBE, color_system=ColorSystem.STANDARD)
    return rendered[: rendered.index(_PROBE)]


RESET_FG = color_code("default") + "\x1b[m"
