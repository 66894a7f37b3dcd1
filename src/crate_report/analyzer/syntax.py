"""Rust syntax trees via tree-sitter.

Tree-sitter node types used by the analyzers (tree-sitter-rust >= 0.23):
- function_item: fn definitions with a body (free and associated)
- function_modifiers: holds the ``unsafe`` / ``async`` / ``const`` keywords
- parameters / parameter: declared parameters, ``type`` field per parameter
- pointer_type: ``*const T`` / ``*mut T``
- static_item: statics, ``mutable_specifier`` child for ``static mut``
- block: ``{ ... }`` statement lists (fn bodies, plain block expressions)
- unsafe_block: ``unsafe { ... }``, wraps a block
- expression_statement: expression plus optional ``;``
- call_expression / field_expression: method calls such as ``x.unwrap()``
- if_expression / else_clause / match_expression / match_arm
- return_expression, unary_expression, integer_literal
"""

from dataclasses import dataclass
from typing import List, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser, Tree


RUST_LANGUAGE = Language(tree_sitter_rust.language())

# Named children of a block that are not statements.
NON_STATEMENT_KINDS = frozenset(
    {
        "line_comment",
        "block_comment",
        "attribute_item",
        "inner_attribute_item",
        "empty_statement",
        "label",
    }
)

# Statement kinds that carry no value of their own.
DECLARATION_KINDS = frozenset(
    {
        "let_declaration",
        "const_item",
        "static_item",
        "macro_definition",
        "mod_item",
        "foreign_mod_item",
        "struct_item",
        "union_item",
        "enum_item",
        "type_item",
        "function_item",
        "function_signature_item",
        "impl_item",
        "trait_item",
        "associated_type",
        "use_declaration",
        "extern_crate_declaration",
    }
)


def parse_rust(source: str) -> Optional[Tree]:
    """Parse Rust source text.

    A fresh parser is created per call so that files can be parsed from
    several threads at once.

    Args:
        source: File contents

    Returns:
        Parsed tree, or None if the text contains syntax errors
    """
    parser = Parser(RUST_LANGUAGE)
    tree = parser.parse(source.encode("utf-8"))
    if tree.root_node.has_error:
        return None
    return tree


def node_text(node: Optional[Node]) -> str:
    """Decode a node's source text."""
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def line_of(node: Node) -> int:
    """1-indexed line where the node starts."""
    return node.start_point[0] + 1


def child_by_type(node: Node, node_type: str) -> Optional[Node]:
    """Get first child of given type (named or anonymous)."""
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def has_keyword(node: Node, keyword: str) -> bool:
    """Check for an anonymous keyword token directly under node."""
    return any(
        not child.is_named and child.type == keyword for child in node.children
    )


def _enclosing_kind(node: Node) -> Optional[str]:
    # function_item / static_item -> declaration_list -> impl_item, mod_item, ...
    parent = node.parent
    if parent is None or parent.type != "declaration_list":
        return None
    owner = parent.parent
    return owner.type if owner is not None else None


def is_free_function(fn_node: Node) -> bool:
    """True for fn items outside impl and trait bodies."""
    return _enclosing_kind(fn_node) not in ("impl_item", "trait_item")


def is_extern_item(node: Node) -> bool:
    """True for items declared inside an ``extern { ... }`` block."""
    return _enclosing_kind(node) == "foreign_mod_item"


def is_unsafe_fn(fn_node: Node) -> bool:
    modifiers = child_by_type(fn_node, "function_modifiers")
    return modifiers is not None and has_keyword(modifiers, "unsafe")


def function_name(fn_node: Node) -> str:
    name = fn_node.child_by_field_name("name")
    return node_text(name) if name is not None else "<anonymous>"


@dataclass(frozen=True)
class Statement:
    """One statement of a block.

    ``expr`` is the expression of an expression statement or of the block's
    trailing expression, and None for declarations (``let``, items).
    """

    node: Node
    expr: Optional[Node]
    has_semicolon: bool = False

    @property
    def is_expression(self) -> bool:
        return self.expr is not None


def block_statements(block: Node) -> List[Statement]:
    """Split a block node into statements, trailing expression included."""
    statements = []
    for child in block.named_children:
        if child.type in NON_STATEMENT_KINDS:
            continue

        if child.type == "expression_statement":
            expr = next(
                (c for c in child.named_children if c.type not in NON_STATEMENT_KINDS),
                None,
            )
            has_semicolon = child.children[-1].type == ";"
            statements.append(Statement(child, expr, has_semicolon))
        elif child.type in DECLARATION_KINDS:
            statements.append(Statement(child, None))
        else:
            # Bare expression: the block's value
            statements.append(Statement(child, child))

    return statements


def tail_expression(block: Node) -> Optional[Node]:
    """Expression the block evaluates to, if its last statement has no ``;``."""
    statements = block_statements(block)
    if not statements:
        return None
    last = statements[-1]
    if last.is_expression and not last.has_semicolon:
        return last.expr
    return None


class RustVisitor:
    """Walks a tree-sitter tree, dispatching on node type.

    Subclasses define ``visit_<node_type>`` methods and call
    ``generic_visit`` to continue into children, like ``ast.NodeVisitor``.
    """

    def visit(self, node: Node) -> None:
        method = getattr(self, f"visit_{node.type}", self.generic_visit)
        method(node)

    def generic_visit(self, node: Node) -> None:
        for child in node.named_children:
            self.visit(child)
