"""
Source formatter for emitted TSX.

Re-indents a component by its bracket and JSX-tag nesting, normalizes
whitespace and blank lines, adds trailing commas to multi-line object and
array literals, and checks that every bracket and tag is closed by its
matching partner. Output is a fixed point: formatting it again returns
the same text.

The formatter is line based. Strings must open and close on one line and
only `//` comments are recognized, which holds for everything the Code
Synthesizer emits.
"""

import re
from dataclasses import dataclass
from typing import Iterator

from formgen.exceptions import FormattingError

_PAIRS = {")": "(", "]": "[", "}": "{"}
_TAG_NAME = re.compile(r"[A-Za-z][\w.\-]*")
_BLOCK_KEYWORD = re.compile(r"\b(?:else|try|finally|do)$")
_IDENT_CHAR = re.compile(r"[\w$)\]]")
_QUOTES = "\"'`"

OPEN = "open"
CLOSE = "close"
TAG_OPEN = "tag_open"
TAG_CLOSE = "tag_close"
FRAGMENT_OPEN = "fragment_open"
SELF_CLOSE = "self_close"
GREATER = "greater"


@dataclass
class _Token:
    kind: str
    value: str
    start: int
    end: int


@dataclass
class _Scope:
    kind: str  # "bracket", "head" (inside <Tag ...>) or "element" (children)
    value: str  # bracket char or tag name
    indent: int
    line: int
    literal: bool = False

    @property
    def label(self) -> str:
        return f"'{self.value}'" if self.kind == "bracket" else f"<{self.value}>"


def _skip_string(text: str, i: int, lineno: int) -> int:
    """Index just past the string literal opening at `i`."""
    quote = text[i]
    j = i + 1
    while j < len(text) and text[j] != quote:
        j += 2 if text[j] == "\\" else 1
    if j >= len(text):
        raise FormattingError("Unterminated string literal", line=lineno)
    return j + 1


def _has_comment(text: str) -> bool:
    i = 0
    while i < len(text):
        if text[i] in _QUOTES:
            i = _skip_string(text, i, 0)
            continue
        if text.startswith("//", i):
            return True
        i += 1
    return False


def _scan(text: str, lineno: int) -> Iterator[_Token]:
    """Yield the structural tokens of one stripped line."""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in _QUOTES:
            i = _skip_string(text, i, lineno)
            continue
        if text.startswith("//", i):
            return

        if ch in "([{":
            yield _Token(OPEN, ch, i, i + 1)
        elif ch in ")]}":
            yield _Token(CLOSE, ch, i, i + 1)
        elif ch == "<":
            after = text[i + 1 : i + 2]
            starts_expression = i == 0 or not _IDENT_CHAR.match(text[i - 1])
            if after == "/":
                match = _TAG_NAME.match(text, i + 2)
                name = match.group(0) if match else ""
                end = i + 2 + len(name)
                if text[end : end + 1] == ">":
                    yield _Token(TAG_CLOSE, name, i, end + 1)
                    i = end + 1
                    continue
            elif starts_expression and after == ">":
                yield _Token(FRAGMENT_OPEN, "", i, i + 2)
                i += 2
                continue
            elif starts_expression and after.isalpha():
                match = _TAG_NAME.match(text, i + 1)
                yield _Token(TAG_OPEN, match.group(0), i, match.end())
                i = match.end()
                continue
        elif ch == "/" and text[i + 1 : i + 2] == ">":
            yield _Token(SELF_CLOSE, "/>", i, i + 2)
            i += 2
            continue
        elif ch == ">" and text[i - 1 : i] != "=" and text[i + 1 : i + 2] != "=":
            yield _Token(GREATER, ">", i, i + 1)
        i += 1


class _Formatter:
    def __init__(self, indent: int):
        self.unit = " " * indent
        self.stack: list[_Scope] = []
        self.output: list[str] = []
        self.last_content: int | None = None
        self.last_content_top: _Scope | None = None
        self.last_opened = False
        self.pending_blank = False

    def _top(self) -> _Scope | None:
        return self.stack[-1] if self.stack else None

    def _content_indent(self) -> int:
        top = self._top()
        return top.indent + 1 if top is not None else 0

    def _pop(self, kind: str, value: str, label: str, lineno: int) -> _Scope:
        top = self._top()
        if top is None:
            raise FormattingError(f"Unexpected {label} with nothing open", line=lineno)
        if top.kind != kind or top.value != value:
            raise FormattingError(
                f"Mismatched {label}: {top.label} opened on line {top.line} is still open",
                line=lineno,
            )
        return self.stack.pop()

    def _is_literal_brace(self, text: str, start: int) -> bool:
        """Whether a '{' opens an object literal (vs. a block or JSX container)."""
        before = text[:start].rstrip()
        if not before:
            top = self._top()
            return top is not None and top.kind == "bracket" and (top.value != "{" or top.literal)
        if before.endswith(("=>", ")", ">")):
            return False
        if before.endswith("=") and not before[:-1].endswith((" ", "=", "!", "<", ">")):
            return False
        return not _BLOCK_KEYWORD.search(before)

    def _add_trailing_comma(self, closed: _Scope) -> None:
        if not closed.literal or self.last_content is None or self.last_content_top is not closed:
            return
        previous = self.output[self.last_content]
        if previous.endswith((",", "{", "[", "(")) or _has_comment(previous):
            return
        self.output[self.last_content] = previous + ","

    def feed(self, raw: str, lineno: int) -> None:
        text = raw.strip()
        if not text:
            self.pending_blank = True
            return

        container = self._top()
        depth_before = len(self.stack)
        line_indent: int | None = None
        # Indent of the outermost scope closed by the line's leading closers
        anchor: int | None = None
        leading = True
        gap_start = 0

        for token in _scan(text, lineno):
            top = self._top()
            head_end = token.kind == GREATER and top is not None and top.kind == "head"
            closer = head_end or token.kind in (CLOSE, TAG_CLOSE, SELF_CLOSE)
            if leading and (not closer or text[gap_start : token.start].strip()):
                leading = False
                line_indent = anchor if anchor is not None else self._content_indent()

            closed: _Scope | None = None
            if token.kind == OPEN:
                literal = token.value == "[" or (
                    token.value == "{" and self._is_literal_brace(text, token.start)
                )
                self.stack.append(_Scope("bracket", token.value, line_indent, lineno, literal))
            elif token.kind == CLOSE:
                closed = self._pop("bracket", _PAIRS[token.value], f"'{token.value}'", lineno)
            elif token.kind == TAG_OPEN:
                self.stack.append(_Scope("head", token.value, line_indent, lineno))
            elif token.kind == FRAGMENT_OPEN:
                self.stack.append(_Scope("element", "", line_indent, lineno))
            elif token.kind == TAG_CLOSE:
                closed = self._pop("element", token.value, f"</{token.value}>", lineno)
            elif token.kind == SELF_CLOSE:
                if top is None or top.kind != "head":
                    raise FormattingError("Unexpected '/>' outside a tag", line=lineno)
                closed = self.stack.pop()
            elif head_end:
                top.kind = "element"
                closed = top

            if leading and closed is not None:
                if anchor is None:
                    self._add_trailing_comma(closed)
                anchor = closed.indent
                gap_start = token.end

        if line_indent is None:
            line_indent = anchor if anchor is not None else self._content_indent()
        # Blank lines survive only between statements
        keep_blank = (
            anchor is None
            and not self.last_opened
            and (container is None or (container.value == "{" and not container.literal))
        )
        self._emit(text, line_indent, keep_blank, depth_before)

    def _emit(self, text: str, indent: int, keep_blank: bool, depth_before: int) -> None:
        if self.pending_blank and self.output and keep_blank:
            self.output.append("")
        self.pending_blank = False
        self.output.append(self.unit * indent + text)
        self.last_content = len(self.output) - 1
        self.last_content_top = self._top()
        self.last_opened = len(self.stack) > depth_before

    def finish(self) -> str:
        if self.stack:
            scope = self.stack[-1]
            raise FormattingError(f"Unclosed {scope.label}", line=scope.line)
        return "\n".join(self.output) + "\n" if self.output else ""


def format_source(text: str, indent: int = 2) -> str:
    """
    Format emitted TSX source.

    Raises:
        FormattingError: If brackets or JSX tags are unbalanced or
            mismatched, or a string literal is left open.
    """
    formatter = _Formatter(indent)
    for lineno, line in enumerate(text.splitlines(), start=1):
        formatter.feed(line, lineno)
    return formatter.finish()
