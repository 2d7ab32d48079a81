# Typed views over tree-sitter function nodes: one shared shape for function
# declarations, function expressions, arrow functions and methods.

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Optional

from tree_sitter import Node as TSNode


class FunctionKind(str, enum.Enum):
    DECLARATION = "declaration"
    EXPRESSION = "expression"
    ARROW = "arrow"
    METHOD = "method"


# tree-sitter node type -> kind. Only named nodes count: the `function` keyword
# token is an anonymous node of type "function".
FUNCTION_NODE_TYPES: dict[str, FunctionKind] = {
    "function_declaration": FunctionKind.DECLARATION,
    "generator_function_declaration": FunctionKind.DECLARATION,
    "function_expression": FunctionKind.EXPRESSION,
    "generator_function": FunctionKind.EXPRESSION,
    "arrow_function": FunctionKind.ARROW,
    "method_definition": FunctionKind.METHOD,
}

GENERATOR_NODE_TYPES = frozenset({"generator_function_declaration", "generator_function"})

ACCESSOR_TOKENS = frozenset({"get", "set"})

# Method keys that read as a name; computed keys (`[key]`) and literals do not.
METHOD_NAME_TYPES = frozenset({"property_identifier", "private_property_identifier"})

STRING_NODE_TYPES = frozenset({"string", "template_string"})

_SKIPPED_STATEMENT_TYPES = frozenset({"comment", "html_comment"})

_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)",
    re.DOTALL,
)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    # line continuations
    "\n": "",
    "\r": "",
    "\r\n": "",
    "\u2028": "",
    "\u2029": "",
}


@dataclass(frozen=True)
class Statement:
    """A statement reduced to what directive detection needs."""

    type: str
    expression_type: Optional[str] = None
    # Static text of a string / substitution-free template expression, else None.
    value: Optional[str] = None


@dataclass(frozen=True)
class Block:
    """A block body. Only the leading statement is kept."""

    first_statement: Optional[Statement]


@dataclass(frozen=True)
class FunctionNode:
    """
    Shared surface of every function-defining construct.

    body is None for concise arrow bodies (`x => x + 1`) and for nodes
    whose body is missing (TypeScript overload signatures, broken parses).
    Byte offsets and 0-based points are those of the function node itself,
    never of an enclosing variable declarator. insert_byte / insert_point
    locate where an `async` keyword belongs: the function start, or the key
    of a method (after `static`, modifiers and decorators).
    """

    kind: FunctionKind
    is_async: bool
    is_generator: bool
    name: Optional[str]
    body: Optional[Block]
    start_byte: int
    end_byte: int
    start_point: tuple[int, int]
    end_point: tuple[int, int]
    is_accessor: bool = False
    insert_byte: Optional[int] = None
    insert_point: Optional[tuple[int, int]] = None

    @property
    def async_insert_byte(self) -> int:
        return self.start_byte if self.insert_byte is None else self.insert_byte

    @property
    def async_insert_point(self) -> tuple[int, int]:
        return self.start_point if self.insert_point is None else self.insert_point


def _node_text(source: bytes, node: TSNode) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _cook_escape(match: re.Match) -> str:
    esc = match.group(1)
    if esc in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[esc]
    if esc.startswith("u{"):
        code = int(esc[2:-1], 16)
        return chr(code) if code <= 0x10FFFF else match.group(0)
    if esc[0] in "ux" and len(esc) > 1:
        return chr(int(esc[1:], 16))
    return esc


def cook_string(raw: str) -> str:
    """Resolve JavaScript escape sequences in the body of a string literal."""
    if "\\" not in raw:
        return raw
    return _ESCAPE_RE.sub(_cook_escape, raw)


def string_literal_value(source: bytes, node: TSNode) -> Optional[str]:
    """
    Return the static value of a string literal or a template literal
    without substitutions. Anything else (including `${...}` templates) is None.
    """
    if node.type not in STRING_NODE_TYPES:
        return None
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
    raw = _node_text(source, node)
    if len(raw) < 2 or raw[0] != raw[-1] or raw[0] not in "'\"`":
        return None
    return cook_string(raw[1:-1])


def _first_statement(block: TSNode) -> Optional[TSNode]:
    for child in block.named_children:
        if child.type not in _SKIPPED_STATEMENT_TYPES:
            return child
    return None


def build_statement(source: bytes, node: TSNode) -> Statement:
    """Reduce a statement node to its type, expression type and static string value."""
    if node.type != "expression_statement":
        return Statement(type=node.type)
    expression = _first_statement(node)
    if expression is None:
        return Statement(type=node.type)
    return Statement(
        type=node.type,
        expression_type=expression.type,
        value=string_literal_value(source, expression),
    )


def build_block(source: bytes, node: Optional[TSNode]) -> Optional[Block]:
    if node is None or node.type != "statement_block":
        return None
    first = _first_statement(node)
    return Block(first_statement=build_statement(source, first) if first is not None else None)


def is_function_node(node: TSNode) -> bool:
    return node.is_named and node.type in FUNCTION_NODE_TYPES


def _has_token(node: TSNode, tokens) -> bool:
    """True if an anonymous keyword/punctuation child of node is one of tokens."""
    return any(not child.is_named and child.type in tokens for child in node.children)


def _method_name(source: bytes, name_node: Optional[TSNode]) -> Optional[str]:
    if name_node is None or name_node.type not in METHOD_NAME_TYPES:
        return None
    return _node_text(source, name_node)


def build_function_node(source: bytes, node: TSNode) -> Optional[FunctionNode]:
    """
    Build a FunctionNode view from a tree-sitter node.

    Returns None when node is not a named function declaration, function
    expression, arrow function or method definition.
    """
    if not node.is_named:
        return None
    kind = FUNCTION_NODE_TYPES.get(node.type)
    if kind is None:
        return None

    # `async`, `*`, `get` and `set` are anonymous tokens directly under the node;
    # a parameter or method key spelled `async` / `get` is a named node.
    is_async = _has_token(node, {"async"})
    is_generator = node.type in GENERATOR_NODE_TYPES or _has_token(node, {"*"})

    name_node = node.child_by_field_name("name")
    insert_byte = insert_point = None
    if kind is FunctionKind.METHOD:
        name = _method_name(source, name_node)
        if name_node is not None:
            insert_byte = name_node.start_byte
            insert_point = tuple(name_node.start_point)
    else:
        name = _node_text(source, name_node) if name_node is not None else None

    return FunctionNode(
        kind=kind,
        is_async=is_async,
        is_generator=is_generator,
        name=name,
        body=build_block(source, node.child_by_field_name("body")),
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        start_point=tuple(node.start_point),
        end_point=tuple(node.end_point),
        is_accessor=kind is FunctionKind.METHOD and _has_token(node, ACCESSOR_TOKENS),
        insert_byte=insert_byte,
        insert_point=insert_point,
    )
