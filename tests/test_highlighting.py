"""Tests for syntax highlighter injection."""

import pytest

from orger import highlighting
from orger.highlighting import get_highlighter, has_highlighter, highlight, set_highlighter


@pytest.fixture
def no_highlighter(monkeypatch: pytest.MonkeyPatch) -> None:
    """Behave as if no highlighter is set and Rosettes is unavailable."""
    monkeypatch.setattr(highlighting, "_highlighter", None)
    monkeypatch.setattr(highlighting, "_tried_rosettes", True)


class ObjectHighlighter:
    def highlight(
        self,
        code: str,
        language: str,
        *,
        hl_lines: list[int] | None = None,
        show_linenos: bool = False,
    ) -> str:
        return f"<pre data-lines='{hl_lines}'>{language}:{code}</pre>"

    def supports_language(self, language: str) -> bool:
        return True


class TestFallback:
    def test_plain_code_block(self, no_highlighter: None) -> None:
        assert highlight("a < b", "python") == (
            '<pre><code class="language-python">a &lt; b</code></pre>'
        )

    def test_no_language(self, no_highlighter: None) -> None:
        assert highlight("x", "") == "<pre><code>x</code></pre>"

    def test_has_highlighter(self, no_highlighter: None) -> None:
        assert has_highlighter() is False
        assert get_highlighter() is None


class TestInjection:
    def test_callable(self, no_highlighter: None) -> None:
        set_highlighter(lambda code, language: f"[{language}]{code}")
        assert highlight("x", "py") == "[py]x"
        assert has_highlighter() is True

    def test_protocol_object(self, no_highlighter: None) -> None:
        set_highlighter(ObjectHighlighter())
        assert highlight("x", "py", hl_lines=[1]) == "<pre data-lines='[1]'>py:x</pre>"

    def test_clear(self, no_highlighter: None) -> None:
        set_highlighter(lambda code, language: "hl")
        set_highlighter(None)
        assert get_highlighter() is None
