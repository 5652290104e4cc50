"""Symbol tables, glyph precedence and junction connectivity."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum


class CharSet(Enum):
    Unicode = "unicode"
    Ascii = "ascii"


@dataclass(frozen=True)
class Symbols:
    """Maps every drawing role to the glyph that represents it."""

    n: str = "▲"
    s: str = "▼"
    w: str = "◀"
    e: str = "▶"
    dash: str = "-"
    pipe: str = "|"
    diag: str = "/"
    gaid: str = "\\"
    plus: str = "+"
    cursor: str = "_"
    tlcorn: str = "┌"
    trcorn: str = "┐"
    blcorn: str = "└"
    brcorn: str = "┘"
    hline: str = "─"
    vline: str = "│"
    lhinter: str = "├"
    rhinter: str = "┤"
    tvinter: str = "┬"
    bvinter: str = "┴"
    cinter: str = "┼"
    ubox: str = "□"

    @classmethod
    def unicode(cls) -> Symbols:
        return cls()

    @classmethod
    def ascii(cls) -> Symbols:
        return cls(
            n="^",
            s="v",
            w="<",
            e=">",
            tlcorn="+",
            trcorn="+",
            blcorn="+",
            brcorn="+",
            hline="-",
            vline="|",
            lhinter="+",
            rhinter="+",
            tvinter="+",
            bvinter="+",
            cinter="+",
            ubox="#",
        )

    @classmethod
    def for_charset(cls, cs: CharSet) -> Symbols:
        if cs == CharSet.Unicode:
            return cls.unicode()
        return cls.ascii()

    @classmethod
    def roles(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def with_overrides(self, overrides: dict[str, str]) -> Symbols:
        """Return a copy with the named roles replaced."""
        known = set(self.roles())
        for role, glyph in overrides.items():
            if role not in known:
                raise ValueError(f"Unknown symbol role '{role}'")
            if not isinstance(glyph, str) or len(glyph) != 1:
                raise ValueError(f"Symbol '{role}' must be a single character, got {glyph!r}")
        return replace(self, **overrides)

    def rank(self, c: str) -> int:
        """Overlap precedence: a stronger glyph is never replaced by a weaker one."""
        if c == self.plus or c == self.cinter:
            return 5
        if c == self.dash:
            return 4
        if c == self.pipe:
            return 3
        if c == self.diag:
            return 2
        if c == self.gaid:
            return 1
        return 0

    def arrow_tips(self) -> tuple[str, str, str, str]:
        return (self.n, self.s, self.w, self.e)

    def is_arrow_tip(self, c: str) -> bool:
        return c in self.arrow_tips()

    def is_joinable(self, c: str) -> bool:
        return c in (
            self.vline,
            self.hline,
            self.tlcorn,
            self.trcorn,
            self.blcorn,
            self.brcorn,
            self.lhinter,
            self.rhinter,
            self.tvinter,
            self.bvinter,
            self.cinter,
            self.plus,
            self.n,
            self.s,
            self.w,
            self.e,
        )

    # A neighbour "connects" toward a cell when it has an arm on the side
    # facing that cell. Arrow tips count as an arm on their tail side.

    def connects_down(self, c: str) -> bool:
        return c in (self.vline, self.tlcorn, self.trcorn, self.lhinter, self.rhinter, self.tvinter, self.cinter, self.plus, self.n)

    def connects_up(self, c: str) -> bool:
        return c in (self.vline, self.blcorn, self.brcorn, self.lhinter, self.rhinter, self.bvinter, self.cinter, self.plus, self.s)

    def connects_right(self, c: str) -> bool:
        return c in (self.hline, self.tlcorn, self.blcorn, self.lhinter, self.tvinter, self.bvinter, self.cinter, self.plus, self.w)

    def connects_left(self, c: str) -> bool:
        return c in (self.hline, self.trcorn, self.brcorn, self.rhinter, self.tvinter, self.bvinter, self.cinter, self.plus, self.e)


DEFAULT_SYMBOLS = Symbols()


@dataclass
class Arms:
    """Which arms of a junction cell are active."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    def count(self) -> int:
        return sum((self.up, self.down, self.left, self.right))

    def merge(self, other: Arms) -> Arms:
        return Arms(
            up=self.up or other.up,
            down=self.down or other.down,
            left=self.left or other.left,
            right=self.right or other.right,
        )

    def to_glyph(self, symbols: Symbols, fallback: str) -> str:
        key = (self.up, self.down, self.left, self.right)
        match key:
            case (True, True, True, True):
                return symbols.cinter
            case (True, True, True, False):
                return symbols.rhinter
            case (True, True, False, True):
                return symbols.lhinter
            case (True, False, True, True):
                return symbols.bvinter
            case (False, True, True, True):
                return symbols.tvinter
            case (True, True, False, False):
                return symbols.vline
            case (False, False, True, True):
                return symbols.hline
            case (False, True, False, True):
                return symbols.tlcorn
            case (False, True, True, False):
                return symbols.trcorn
            case (True, False, False, True):
                return symbols.blcorn
            case (True, False, True, False):
                return symbols.brcorn
            case (True, False, False, False) | (False, True, False, False):
                return symbols.vline
            case (False, False, True, False) | (False, False, False, True):
                return symbols.hline
            case _:
                return fallback
