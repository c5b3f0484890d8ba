"""SyntaxTree — a tree-sitter parse tree plus a render overlay of pending edits.

tree-sitter trees are immutable, so the transform phases never change nodes
directly. Instead they record edits against byte ranges of the original
source:

* a *replacement* swaps a node's range for a synthesized node (a class
  declaration) that is rendered when the tree is printed;
* a *removal* deletes a statement, together with its line when the statement
  stands alone on it, or empties it to ``{}`` when it is a braceless body.

Printing walks a byte range, emitting the outermost edits inside it and
copying every other byte verbatim. Edits nested inside an edited range are
not lost: they surface when the enclosing content is itself rendered, e.g.
when a function body moved into a class member is printed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Protocol

from pydantic import BaseModel
from tree_sitter import Node, Tree
from tree_sitter import Parser as TSParser

from .constants import EMPTY_STATEMENT, STATEMENT_LIST_TYPES

logger = logging.getLogger(__name__)


class SourceLocation(BaseModel):
    """Structured source span from tree-sitter AST nodes."""

    start_line: int
    start_col: int
    end_line: int
    end_col: int

    def is_unknown(self) -> bool:
        return (
            self.start_line == 0
            and self.start_col == 0
            and self.end_line == 0
            and self.end_col == 0
        )

    def __str__(self) -> str:
        if self.is_unknown():
            return "<unknown>"
        return f"{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


NO_SOURCE_LOCATION = SourceLocation(start_line=0, start_col=0, end_line=0, end_col=0)


def source_loc(node: Node) -> SourceLocation:
    s, e = node.start_point, node.end_point
    return SourceLocation(
        start_line=s[0] + 1,
        start_col=s[1],
        end_line=e[0] + 1,
        end_col=e[1],
    )


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8")


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node under *root* (inclusive) in source (pre-)order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def line_start(source: bytes, offset: int) -> int:
    return source.rfind(b"\n", 0, offset) + 1


def line_indent(source: bytes, offset: int) -> str:
    """Leading whitespace of the line containing *offset*."""
    start = line_start(source, offset)
    end = start
    while end < len(source) and source[end : end + 1] in (b" ", b"\t"):
        end += 1
    return source[start:end].decode("utf-8")


def reindent(
    text: str,
    from_indent: str,
    to_indent: str,
    keep_lines: frozenset[int] = frozenset(),
) -> str:
    """Shift every line after the first from *from_indent* to *to_indent*.

    Lines whose index is in *keep_lines* are left verbatim, as are lines
    indented less than *from_indent*. Blank lines lose their indentation but
    keep a trailing carriage return.
    """
    lines = text.split("\n")
    shifted = [lines[0]]
    for index, line in enumerate(lines[1:], start=1):
        if index in keep_lines:
            shifted.append(line)
        elif not line.strip():
            shifted.append(line.lstrip(" \t"))
        elif line.startswith(from_indent):
            shifted.append(to_indent + line[len(from_indent) :])
        else:
            shifted.append(line)
    return "\n".join(shifted)


class Renderable(Protocol):
    def render(self, tree: SyntaxTree) -> str: ...


@dataclass
class Edit:
    """A pending change to the byte range ``[start, end)``."""

    start: int
    end: int
    replacement: Renderable | None = None
    # fixed text used when there is no replacement node
    text: str = ""

    def render(self, tree: SyntaxTree) -> bytes:
        if self.replacement is None:
            return self.text.encode("utf-8")
        return self.replacement.render(tree).encode("utf-8")


class SyntaxTree:
    """The mutable representation of one source unit."""

    def __init__(self, tree: Tree, source: bytes, parser: TSParser):
        self.tree = tree
        self.source = source
        self._parser = parser
        self._edits: list[Edit] = []
        # line ending for synthesized text, taken from the first line
        first_newline = source.find(b"\n")
        crlf = first_newline > 0 and source[first_newline - 1] == ord("\r")
        self.newline = "\r\n" if crlf else "\n"

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def edits(self) -> list[Edit]:
        return list(self._edits)

    def text(self, node: Node) -> str:
        return node_text(node, self.source)

    def indent_of(self, node: Node) -> str:
        return line_indent(self.source, node.start_byte)

    def template_lines(self, text: str) -> frozenset[int]:
        """Indices of lines of *text* that begin inside a template literal.

        *text* is rendered output, so it is parsed again rather than mapped
        back onto the original tree.
        """
        if "`" not in text:
            return frozenset()
        reparsed = self._parser.parse(text.encode("utf-8"))
        lines: set[int] = set()
        for node in iter_nodes(reparsed.root_node):
            if node.type == "template_string":
                lines.update(range(node.start_point[0] + 1, node.end_point[0] + 1))
        return frozenset(lines)

    # ── edits ────────────────────────────────────────────────────

    def replace(self, start: int, end: int, replacement: Renderable) -> Edit:
        edit = Edit(start, end, replacement)
        self._add(edit)
        return edit

    def remove_statement(self, node: Node) -> Edit:
        """Remove *node*, and its whole line when nothing else is on it.

        A removed line sitting between two blank lines takes the blank line
        after it along, so removals do not leave runs of empty lines. A
        statement that is the body of a braceless ``if``, loop or label is
        replaced by an empty block instead, so the following code keeps its
        place.
        """
        start, end = node.start_byte, node.end_byte
        if node.parent is not None and node.parent.type not in STATEMENT_LIST_TYPES:
            edit = Edit(start, end, text=EMPTY_STATEMENT)
            self._add(edit)
            return edit
        before = line_start(self.source, start)
        line_end = self._line_end(end)
        if (
            not self.source[before:start].strip()
            and not self.source[end:line_end].strip()
        ):
            start, end = before, line_end
            if start > 0 and end < len(self.source):
                previous = self.source[line_start(self.source, start - 1) : start]
                following_end = self._line_end(end)
                if not previous.strip() and not self.source[end:following_end].strip():
                    end = following_end
        edit = Edit(start, end)
        self._add(edit)
        return edit

    def _line_end(self, offset: int) -> int:
        """Offset just past the newline ending the line at *offset*."""
        newline = self.source.find(b"\n", offset)
        return len(self.source) if newline == -1 else newline + 1

    def _add(self, edit: Edit) -> None:
        for other in self._edits:
            overlaps = edit.start < other.end and other.start < edit.end
            nested = (other.start <= edit.start and edit.end <= other.end) or (
                edit.start <= other.start and other.end <= edit.end
            )
            if overlaps and not nested:
                raise ValueError(
                    f"edit [{edit.start}, {edit.end}) partially overlaps "
                    f"[{other.start}, {other.end})"
                )
        logger.debug("Recording edit [%d, %d)", edit.start, edit.end)
        self._edits.append(edit)

    # ── printing ─────────────────────────────────────────────────

    def render_range(self, start: int, end: int) -> str:
        """Render ``source[start:end]`` with every edit inside it applied."""
        inside = sorted(
            (e for e in self._edits if start <= e.start and e.end <= end),
            key=lambda e: (e.start, -e.end),
        )
        pieces: list[bytes] = []
        cursor = start
        for edit in inside:
            if edit.start < cursor:
                # nested in an edit already emitted
                continue
            pieces.append(self.source[cursor : edit.start])
            pieces.append(edit.render(self))
            cursor = edit.end
        pieces.append(self.source[cursor:end])
        return b"".join(pieces).decode("utf-8")

    def render_node(self, node: Node) -> str:
        return self.render_range(node.start_byte, node.end_byte)

    def to_source(self) -> str:
        return self.render_range(0, len(self.source))
