"""Synthesized class declarations and their members."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tree_sitter import Node

from .syntax_tree import SyntaxTree, line_indent, reindent
from . import constants


class MemberKind(str, Enum):
    CONSTRUCTOR = "constructor"
    METHOD = "method"
    GET = "get"
    SET = "set"


@dataclass
class MemberDefinition:
    """One class member built from an original function value.

    ``params`` and ``body`` are nodes of the original tree; they are printed
    through the tree's render overlay so edits nested inside them survive
    the move.
    """

    kind: MemberKind
    name: str
    params: Node
    body: Node
    is_static: bool = False
    is_async: bool = False
    # statements appended to the end of the body (constructor only)
    extra_statements: list[str] = field(default_factory=list)

    def header(self) -> str:
        parts: list[str] = []
        if self.is_static:
            parts.append("static")
        if self.is_async:
            parts.append("async")
        if self.kind in (MemberKind.GET, MemberKind.SET):
            parts.append(self.kind.value)
        parts.append(self.name)
        return " ".join(parts)

    def render(self, tree: SyntaxTree, member_indent: str, indent_unit: str) -> str:
        params = tree.render_node(self.params)
        gap = tree.source[self.params.end_byte : self.body.start_byte].decode("utf-8")
        rendered_body = tree.render_node(self.body)
        body = reindent(
            rendered_body,
            line_indent(tree.source, self.body.start_byte),
            member_indent,
            keep_lines=tree.template_lines(rendered_body),
        )
        if self.extra_statements:
            body = _append_statements(
                body,
                self.extra_statements,
                member_indent,
                member_indent + indent_unit,
                tree.newline,
            )
        return f"{member_indent}{self.header()}{params}{gap}{body}"


def _append_statements(
    body: str,
    statements: list[str],
    member_indent: str,
    statement_indent: str,
    newline: str = "\n",
) -> str:
    inner = body[1:-1]
    if "\n" not in inner and inner.strip():
        inner = newline + statement_indent + inner.strip()
    inner = inner.rstrip()
    for statement in statements:
        inner += newline + statement_indent + statement
    return "{" + inner + newline + member_indent + "}"


@dataclass
class ClassDeclarationNode:
    """A class synthesized from a constructor function.

    Created with exactly one constructor member; afterwards members are only
    ever appended.
    """

    name: str
    base_indent: str
    indent_unit: str
    members: list[MemberDefinition] = field(default_factory=list)
    # verbatim comment text (and the whitespace after it) preceding the class
    leading_comments: str = ""
    # byte span of the original function declaration
    start_byte: int = 0
    end_byte: int = 0

    @classmethod
    def from_function(
        cls,
        tree: SyntaxTree,
        function: Node,
        name: str,
        indent_unit: str,
        leading_comments: str = "",
    ) -> ClassDeclarationNode:
        constructor = MemberDefinition(
            kind=MemberKind.CONSTRUCTOR,
            name=constants.CONSTRUCTOR_NAME,
            params=function.child_by_field_name("parameters"),
            body=function.child_by_field_name("body"),
        )
        return cls(
            name=name,
            base_indent=tree.indent_of(function),
            indent_unit=indent_unit,
            members=[constructor],
            leading_comments=leading_comments,
            start_byte=function.start_byte,
            end_byte=function.end_byte,
        )

    @property
    def constructor(self) -> MemberDefinition:
        return next(m for m in self.members if m.kind == MemberKind.CONSTRUCTOR)

    def is_within(self, node: Node) -> bool:
        """True when the original declaration lies inside *node*."""
        return node.start_byte <= self.start_byte and self.end_byte <= node.end_byte

    def add_member(self, member: MemberDefinition) -> None:
        self.members.append(member)

    def add_field_initializer(self, member_name: str, literal: str) -> None:
        self.constructor.extra_statements.append(f"this.{member_name} = {literal};")

    def render(self, tree: SyntaxTree) -> str:
        member_indent = self.base_indent + self.indent_unit
        newline = tree.newline
        rendered = (newline * 2).join(
            m.render(tree, member_indent, self.indent_unit) for m in self.members
        )
        return (
            f"{self.leading_comments}class {self.name} {{{newline}"
            f"{rendered}{newline}"
            f"{self.base_indent}}}"
        )
