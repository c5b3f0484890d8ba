"""Pattern classification — maps a tree-sitter node to a recognized shape.

Five shapes are recognized:

* ``ClassCandidate`` — ``function Name(...) {...}`` with an upper-case
  leading character;
* ``FieldLiteralAssign`` — ``Name.prototype.member = <literal>;``;
* ``PrototypeMethodAssign`` — ``Name.prototype.method = function (...) {...};``;
* ``StaticMethodAssign`` — ``Name.method = function (...) {...};``
  (``Name`` other than ``exports``);
* ``AccessorDescriptorCall`` — ``Object.defineProperty(Name, "prop", {...});``.

Every statement-level shape carries the enclosing ``expression_statement``
so a phase can remove it after acting on the match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from tree_sitter import Node

from .class_nodes import MemberKind
from .syntax_tree import SyntaxTree
from . import constants

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


@dataclass(frozen=True)
class ClassCandidate:
    function: Node
    class_name: str


@dataclass(frozen=True)
class FieldLiteralAssign:
    statement: Node
    class_name: str
    member_name: str
    literal: str


@dataclass(frozen=True)
class PrototypeMethodAssign:
    statement: Node
    class_name: str
    method_name: str
    function: Node


@dataclass(frozen=True)
class StaticMethodAssign:
    statement: Node
    class_name: str
    method_name: str
    function: Node


@dataclass(frozen=True)
class AccessorValue:
    kind: MemberKind
    params: Node
    body: Node


@dataclass(frozen=True)
class AccessorDescriptorCall:
    statement: Node
    class_name: str
    property_name: str
    accessors: tuple[AccessorValue, ...]


PatternMatch = Union[
    ClassCandidate,
    FieldLiteralAssign,
    PrototypeMethodAssign,
    StaticMethodAssign,
    AccessorDescriptorCall,
]


# ── predicates shared with the scanner ──────────────────────────


def is_eligible_class_name(name: str) -> bool:
    """True when *name* starts with a character equal to its upper-case form."""
    return bool(name) and name[0] == name[0].upper()


def is_function_value(node: Node | None) -> bool:
    return node is not None and node.type in constants.FUNCTION_VALUE_TYPES


def is_async_function(node: Node) -> bool:
    return any(child.type == "async" for child in node.children)


def prototype_owner(node: Node | None, tree: SyntaxTree) -> str | None:
    """For ``X.prototype`` return ``"X"`` when ``X`` is a plain identifier."""
    if node is None or node.type != "member_expression":
        return None
    obj = node.child_by_field_name("object")
    prop = node.child_by_field_name("property")
    if prop is None or tree.text(prop) != constants.PROTOTYPE_PROPERTY:
        return None
    if obj is None or obj.type != "identifier":
        return None
    return tree.text(obj)


def define_property_arguments(call: Node, tree: SyntaxTree) -> list[Node] | None:
    """Arguments of an ``Object.defineProperty(...)`` call, else ``None``."""
    if call.type != "call_expression":
        return None
    callee = call.child_by_field_name("function")
    if callee is None or callee.type != "member_expression":
        return None
    obj = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    if obj is None or obj.type != "identifier" or prop is None:
        return None
    if tree.text(obj) != constants.DEFINE_PROPERTY_OBJECT:
        return None
    if tree.text(prop) != constants.DEFINE_PROPERTY_METHOD:
        return None
    arguments = call.child_by_field_name("arguments")
    if arguments is None:
        return None
    return [
        child
        for child in arguments.named_children
        if child.type not in constants.COMMENT_TYPES
    ]


def define_property_target(target: Node, tree: SyntaxTree) -> str | None:
    """Class name installed on by ``defineProperty``: ``X`` or ``X.prototype``."""
    if target.type == "identifier":
        return tree.text(target)
    return prototype_owner(target, tree)


# ── classification ──────────────────────────────────────────────


def classify(node: Node, tree: SyntaxTree) -> PatternMatch | None:
    """Classify *node* against the recognized shapes."""
    if node.type == constants.FUNCTION_DECLARATION:
        return _classify_function(node, tree)
    if node.type != "expression_statement":
        return None
    expression = _statement_expression(node)
    if expression is None:
        return None
    if expression.type == "assignment_expression":
        return _classify_assignment(node, expression, tree)
    if expression.type == "call_expression":
        return _classify_define_property(node, expression, tree)
    return None


def _statement_expression(statement: Node) -> Node | None:
    for child in statement.named_children:
        if child.type not in constants.COMMENT_TYPES:
            return child
    return None


def _classify_function(node: Node, tree: SyntaxTree) -> ClassCandidate | None:
    name = node.child_by_field_name("name")
    if name is None or node.child_by_field_name("body") is None:
        return None
    class_name = tree.text(name)
    if not is_eligible_class_name(class_name):
        return None
    return ClassCandidate(function=node, class_name=class_name)


def _classify_assignment(
    statement: Node, assignment: Node, tree: SyntaxTree
) -> PatternMatch | None:
    left = assignment.child_by_field_name("left")
    right = assignment.child_by_field_name("right")
    if left is None or right is None or left.type != "member_expression":
        return None
    prop = left.child_by_field_name("property")
    obj = left.child_by_field_name("object")
    if prop is None or obj is None or prop.type != "property_identifier":
        return None
    member_name = tree.text(prop)

    owner = prototype_owner(obj, tree)
    if owner is not None:
        if right.type in constants.LITERAL_TYPES:
            return FieldLiteralAssign(
                statement=statement,
                class_name=owner,
                member_name=member_name,
                literal=tree.text(right),
            )
        if is_function_value(right):
            return PrototypeMethodAssign(
                statement=statement,
                class_name=owner,
                method_name=member_name,
                function=right,
            )
        return None

    if obj.type != "identifier" or not is_function_value(right):
        return None
    class_name = tree.text(obj)
    if class_name == constants.EXPORTS_IDENTIFIER:
        return None
    if member_name == constants.PROTOTYPE_PROPERTY:
        return None
    return StaticMethodAssign(
        statement=statement,
        class_name=class_name,
        method_name=member_name,
        function=right,
    )


def _classify_define_property(
    statement: Node, call: Node, tree: SyntaxTree
) -> AccessorDescriptorCall | None:
    args = define_property_arguments(call, tree)
    if args is None or len(args) < 2:
        return None
    class_name = define_property_target(args[0], tree)
    if class_name is None or args[1].type not in constants.PROPERTY_NAME_TYPES:
        return None
    descriptor = args[2] if len(args) > 2 else None
    return AccessorDescriptorCall(
        statement=statement,
        class_name=class_name,
        property_name=_member_key(args[1], tree),
        accessors=_descriptor_accessors(descriptor, tree),
    )


def _member_key(literal: Node, tree: SyntaxTree) -> str:
    """Class member key for a property-name literal.

    ``"size"`` becomes ``size``; a string that is not a valid identifier keeps
    its quotes, and numbers are used as written.
    """
    text = tree.text(literal)
    if literal.type == "string" and _IDENTIFIER_RE.match(text[1:-1]):
        return text[1:-1]
    return text


def _descriptor_accessors(
    descriptor: Node | None, tree: SyntaxTree
) -> tuple[AccessorValue, ...]:
    if descriptor is None or descriptor.type != "object":
        return ()
    accessors: list[AccessorValue] = []
    for entry in descriptor.named_children:
        if entry.type == "pair":
            key = entry.child_by_field_name("key")
            value = entry.child_by_field_name("value")
            if key is None or not is_function_value(value):
                continue
            params = value.child_by_field_name("parameters")
            body = value.child_by_field_name("body")
        elif entry.type == "method_definition":
            key = entry.child_by_field_name("name")
            params = entry.child_by_field_name("parameters")
            body = entry.child_by_field_name("body")
        else:
            continue
        if key is None or params is None or body is None:
            continue
        name = tree.text(key).strip("'\"")
        if name not in constants.ACCESSOR_KEYS:
            continue
        accessors.append(AccessorValue(kind=MemberKind(name), params=params, body=body))
    return tuple(accessors)
