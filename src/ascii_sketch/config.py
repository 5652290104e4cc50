"""Centralized configuration for ascii-sketch."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ascii_sketch.drawing.charset import CharSet, Symbols
from ascii_sketch.types import PathMode

_PATH_MODE_CYCLE = [PathMode.Straight, PathMode.Elbow90, PathMode.Elbow45, PathMode.Routed]


@dataclass
class EditorOptions:
    """Options for drawing and saving diagrams."""

    path_mode: PathMode = field(default_factory=PathMode.default)
    keep_trailing_ws: bool = False
    strip_margin_ws: bool = False
    file: Path | None = None
    symbols: Symbols = field(default_factory=Symbols.unicode)

    def cycle_path_mode(self) -> PathMode:
        i = _PATH_MODE_CYCLE.index(self.path_mode)
        self.path_mode = _PATH_MODE_CYCLE[(i + 1) % len(_PATH_MODE_CYCLE)]
        return self.path_mode

    @classmethod
    def from_toml(cls, path: str | Path) -> EditorOptions:
        """Load options from a TOML file with optional ``[editor]`` and ``[symbols]`` tables.

        Raises:
            OSError: If the file cannot be read.
            ValueError: On malformed TOML, an unknown path mode, charset or symbol role.
        """
        with open(path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"invalid config '{path}': {e}") from e

        editor = data.get("editor", {})
        opts = cls(
            keep_trailing_ws=bool(editor.get("keep_trailing_ws", False)),
            strip_margin_ws=bool(editor.get("strip_margin_ws", False)),
        )
        if "path_mode" in editor:
            opts.path_mode = PathMode.parse(editor["path_mode"])
        if "charset" in editor:
            try:
                opts.symbols = Symbols.for_charset(CharSet(editor["charset"]))
            except ValueError:
                raise ValueError(f"Unknown charset '{editor['charset']}'; use unicode or ascii") from None
        if "symbols" in data:
            opts.symbols = opts.symbols.with_overrides(data["symbols"])
        return opts
