"""colors.py – ANSI SGR styles for terminal text

    from omnos import colors, color_codes

    print(colors.red("error"))              # \x1b[31merror\x1b[0m
    print(colors["bg_bright_blue"]("x"))
    print(style("both", "bold", "green"))   # several codes, one reset

No terminal detection happens here; callers decide whether to colour.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Callable, Dict, Mapping

__all__ = ["color_codes", "colors", "style", "strip_ansi"]

_ESC = "\x1b["

# ────────────────────────────────────────────── codes
_BASE = ["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]

_codes: Dict[str, str] = {
    "reset":     f"{_ESC}0m",
    "bold":      f"{_ESC}1m",
    "dim":       f"{_ESC}2m",
    "italic":    f"{_ESC}3m",
    "underline": f"{_ESC}4m",
    "blink":     f"{_ESC}5m",
    "reverse":   f"{_ESC}7m",
    "hidden":    f"{_ESC}8m",
}
for _i, _name in enumerate(_BASE):
    _codes[_name]                = f"{_ESC}{30 + _i}m"
    _codes[f"bg_{_name}"]        = f"{_ESC}{40 + _i}m"
    _codes[f"bright_{_name}"]    = f"{_ESC}{90 + _i}m"
    _codes[f"bg_bright_{_name}"] = f"{_ESC}{100 + _i}m"
_codes["gray"] = f"{_ESC}90m"   # alias of bright_black

color_codes: Mapping[str, str] = MappingProxyType(_codes)

_SGR = re.compile(r"\x1b\[[0-9;]*m")


# ────────────────────────────────────────────── palette
def _painter(code: str) -> Callable[[str], str]:
    return lambda text: f"{code}{text}{color_codes['reset']}"


class _Palette:
    """One wrapping function per style, by attribute or by name."""

    def __init__(self, codes: Mapping[str, str]):
        self._painters = {name: _painter(code) for name, code in codes.items()}

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._painters[name]
        except KeyError:
            raise AttributeError(f"unknown style {name!r}") from None

    def __getitem__(self, name: str) -> Callable[[str], str]:
        return self._painters[name]

    def __contains__(self, name) -> bool:
        return name in self._painters

    def __iter__(self):
        return iter(self._painters)

    def __dir__(self):
        return list(self._painters)


colors = _Palette(color_codes)


def style(text: str, *names: str) -> str:
    """Wrap text in every named style, followed by a single reset."""
    prefix = "".join(color_codes[n] for n in names)
    return f"{prefix}{text}{color_codes['reset']}"


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from text."""
    return _SGR.sub("", text)
