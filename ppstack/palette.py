"""Color palette and call site color classification."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .ansi import RESET_FG, color_code
from .models import Call, Location


@dataclass(frozen=True)
class Palette:
    """Escape sequences for every colored part of the output."""
    eol_reset: str = ""

    # Routine header.
    routine_first: str = ""  # The first routine printed.
    routine: str = ""  # Following routines.
    created_by: str = ""
    race: str = ""

    # Call line.
    package: str = ""
    src_file: str = ""
    func_main: str = ""
    func_location_unknown: str = ""
    func_location_unknown_exported: str = ""
    func_go_mod: str = ""
    func_go_mod_exported: str = ""
    func_gopath: str = ""
    func_gopath_exported: str = ""
    func_go_pkg: str = ""
    func_go_pkg_exported: str = ""
    func_stdlib: str = ""
    func_stdlib_exported: str = ""
    arguments: str = ""

    @classmethod
    def role_names(cls) -> tuple:
        return tuple(f.name for f in dataclasses.fields(cls))

    def with_names(self, **names: str) -> "Palette":
        """Return a copy with the given roles set from color names.

        Raises:
            ValueError: Unknown role or color name.
        """
        unknown = set(names) - set(self.role_names())
        if unknown:
            raise ValueError(f"Unknown palette role(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(
            self, **{role: color_code(name) for role, name in names.items()}
        )

    def function_color(self, call: Call) -> str:
        """Color for a call's function name."""
        return self.func_color(call.location, call.func.is_pkg_main, call.func.is_exported)

    def func_color(self, location, main: bool, exported: bool) -> str:
        if main:
            return self.func_main
        if location == Location.GO_MOD:
            return self.func_go_mod_exported if exported else self.func_go_mod
        if location == Location.GOPATH:
            return self.func_gopath_exported if exported else self.func_gopath
        if location == Location.GO_PKG:
            return self.func_go_pkg_exported if exported else self.func_go_pkg
        if location == Location.STDLIB:
            return self.func_stdlib_exported if exported else self.func_stdlib
        return self.func_location_unknown_exported if exported else self.func_location_unknown

    def routine_color(self, first: bool, multiple: bool) -> str:
        """Header color; highlighting the first entry only makes sense among several."""
        if first and multiple:
            return self.routine_first
        return self.routine


DEFAULT_PALETTE = Palette(
    eol_reset=RESET_FG,
    routine_first=color_code("magenta+b"),
    created_by=color_code("lightblack"),
    race=color_code("lightred"),
    package=color_code("default+b"),
    src_file=RESET_FG,
    func_main=color_code("yellow+b"),
    func_location_unknown=color_code("white"),
    func_location_unknown_exported=color_code("white+b"),
    func_go_mod=color_code("red"),
    func_go_mod_exported=color_code("red+b"),
    func_gopath=color_code("cyan"),
    func_gopath_exported=color_code("cyan+b"),
    func_go_pkg=color_code("blue"),
    func_go_pkg_exported=color_code("blue+b"),
    func_stdlib=color_code("green"),
    func_stdlib_exported=color_code("green+b"),
    arguments=RESET_FG,
)
