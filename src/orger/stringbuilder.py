"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end. Renderers use one per container
node so nested output is never built by repeated concatenation.

Thread Safety:
StringBuilder instances are local to each render call.
No shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterable


class StringBuilder:
    """Efficient string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append("<p>").append("Hello").append("</p>").build()
        '<p>Hello</p>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string (empty strings are skipped)."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a string followed by newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def extend(self, strings: Iterable[str]) -> StringBuilder:
        """Append multiple strings at once."""
        self._parts.extend(s for s in strings if s)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)
