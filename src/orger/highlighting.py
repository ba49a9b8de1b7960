"""Syntax highlighting protocol and injection for orger.

Provides optional syntax highlighting for ``#+BEGIN_SRC`` blocks in HTML
output. When orger[syntax] is installed, Rosettes is used automatically.

Usage:
    # Automatic with orger[syntax]
    from orger.renderers import HtmlRenderer
    html = HtmlRenderer(highlight=True).render(doc)

    # Manual injection
    from orger.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<pre class="language-{language}"><code>{code}</code></pre>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeAlias

from orger.utils.logger import get_logger
from orger.utils.text import escape_html

logger = get_logger(__name__)


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Highlighters take code and language and return HTML markup with syntax
    highlighting applied.

    Thread Safety:
        Implementations must be thread-safe. The highlight() method
        may be called concurrently from multiple render threads.
    """

    def highlight(
        self,
        code: str,
        language: str,
        *,
        hl_lines: list[int] | None = None,
        show_linenos: bool = False,
    ) -> str:
        """Highlight code with syntax colors.

        Contract:
            - MUST return valid HTML (never raise for bad input)
            - MUST escape HTML entities in code
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language."""
        ...


# Support for simple callable-based highlighters
SimpleHighlighter: TypeAlias = Callable[[str, str], str]

# Global highlighter
_highlighter: Highlighter | SimpleHighlighter | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: Highlighter | SimpleHighlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A Highlighter protocol implementation, or a simple
            function that takes (code, language) and returns HTML.
            Pass None to clear the highlighter.
    """
    global _highlighter
    _highlighter = highlighter


def _try_import_rosettes() -> bool:
    """Try to import and configure the Rosettes highlighter."""
    global _highlighter, _tried_rosettes

    if _tried_rosettes:
        return _highlighter is not None

    _tried_rosettes = True

    try:
        import rosettes  # type: ignore[import-not-found]
    except ImportError:
        logger.debug("rosettes is not installed; source blocks render unhighlighted")
        return False

    class RosettesHighlighter:
        """Rosettes-based syntax highlighter implementing Highlighter protocol."""

        def highlight(
            self,
            code: str,
            language: str,
            *,
            hl_lines: list[int] | None = None,
            show_linenos: bool = False,
        ) -> str:
            hl_set = set(hl_lines) if hl_lines else None
            result: str = rosettes.highlight(
                code,
                language=language,
                hl_lines=hl_set,
                show_linenos=show_linenos,
            )
            return result

        def supports_language(self, language: str) -> bool:
            try:
                result: bool = rosettes.supports_language(language)
                return result
            except Exception:
                return False

    _highlighter = RosettesHighlighter()
    return True


def highlight(
    code: str,
    language: str,
    *,
    hl_lines: list[int] | None = None,
    show_linenos: bool = False,
) -> str:
    """Highlight code using the configured highlighter.

    Falls back to a plain code block if no highlighter is available.
    Automatically tries to use Rosettes if installed.

    Args:
        code: Source code to highlight
        language: Language identifier
        hl_lines: 1-indexed line numbers to emphasize (optional)
        show_linenos: Include line numbers in output

    Returns:
        HTML markup (highlighted if available, plain otherwise)
    """
    if _highlighter is None:
        _try_import_rosettes()

    if _highlighter is not None:
        if hasattr(_highlighter, "highlight") and callable(_highlighter.highlight):
            return _highlighter.highlight(
                code, language, hl_lines=hl_lines, show_linenos=show_linenos
            )
        if callable(_highlighter):
            return _highlighter(code, language)

    lang_class = f' class="language-{escape_html(language)}"' if language else ""
    return f"<pre><code{lang_class}>{escape_html(code)}</code></pre>"


def has_highlighter() -> bool:
    """Check if a syntax highlighter is available."""
    if _highlighter is not None:
        return True
    return _try_import_rosettes()


def get_highlighter() -> Highlighter | SimpleHighlighter | None:
    """Get the current highlighter, loading Rosettes on first use."""
    if _highlighter is None:
        _try_import_rosettes()
    return _highlighter


__all__ = [
    "Highlighter",
    "SimpleHighlighter",
    "get_highlighter",
    "has_highlighter",
    "highlight",
    "set_highlighter",
]
