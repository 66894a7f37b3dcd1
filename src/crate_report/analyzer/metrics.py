"""Single-pass safety metrics for one Rust file."""

from tree_sitter import Node, Tree

from ..models.stats import CodeStats
from .syntax import (
    RustVisitor,
    block_statements,
    child_by_type,
    is_extern_item,
    is_free_function,
    is_unsafe_fn,
    node_text,
)

UNWRAP_METHODS = frozenset({"unwrap"})


def count_lines(source: str) -> int:
    """Count lines; a trailing newline does not open a new line."""
    if not source:
        return 0
    return source.count("\n") + (0 if source.endswith("\n") else 1)


class MetricsCollector(RustVisitor):
    """Accumulates CodeStats counters while walking a tree."""

    def __init__(self):
        self.static_mut_items = 0
        self.total_fns = 0
        self.total_statements = 0
        self.unsafe_fns = 0
        self.unsafe_statements = 0
        self.unwraps = 0

    def visit_function_item(self, node: Node) -> None:
        if is_free_function(node):
            self.total_fns += 1
            if is_unsafe_fn(node):
                self.unsafe_fns += 1
        self.generic_visit(node)

    def visit_block(self, node: Node) -> None:
        self.total_statements += len(block_statements(node))
        self.generic_visit(node)

    def visit_unsafe_block(self, node: Node) -> None:
        block = child_by_type(node, "block")
        if block is not None:
            self.unsafe_statements += len(block_statements(block))
        self.generic_visit(node)

    def visit_static_item(self, node: Node) -> None:
        is_mutable = child_by_type(node, "mutable_specifier") is not None
        if is_mutable and not is_extern_item(node):
            self.static_mut_items += 1
        self.generic_visit(node)

    def visit_call_expression(self, node: Node) -> None:
        if _called_method(node) in UNWRAP_METHODS:
            self.unwraps += 1
        self.generic_visit(node)

    def stats(self, total_lines: int) -> CodeStats:
        return CodeStats(
            static_mut_items=self.static_mut_items,
            total_fns=self.total_fns,
            total_lines=total_lines,
            total_statements=self.total_statements,
            unsafe_fns=self.unsafe_fns,
            unsafe_statements=self.unsafe_statements,
            unwraps=self.unwraps,
        )


def _called_method(call: Node) -> str:
    """Method name of ``recv.method(..)`` / ``recv.method::<T>(..)`` calls."""
    function = call.child_by_field_name("function")
    if function is not None and function.type == "generic_function":
        function = function.child_by_field_name("function")
    if function is None or function.type != "field_expression":
        return ""
    return node_text(function.child_by_field_name("field"))


def collect(tree: Tree, source: str) -> CodeStats:
    """Collect safety metrics for a parsed file.

    Args:
        tree: Tree returned by parse_rust
        source: The text the tree was parsed from

    Returns:
        CodeStats for the file
    """
    collector = MetricsCollector()
    collector.visit(tree.root_node)
    return collector.stats(total_lines=count_lines(source))
