"""Heuristic refactoring candidates.

Two independent detectors, each a predicate over one ``fn`` item:

- safe candidates: ``unsafe fn`` without raw pointer parameters, which may
  not need to be unsafe at all;
- bool candidates: ``fn .. -> i32`` whose every return and tail value is a
  literal 0 or 1, which may be better expressed as ``bool``.

Both are advisory. They look at syntax only and will have false positives
and false negatives.
"""

import re
from typing import Callable, List, Optional

from tree_sitter import Node, Tree

from ..models.candidate import Candidate
from .syntax import (
    NON_STATEMENT_KINDS,
    RustVisitor,
    block_statements,
    child_by_type,
    function_name,
    is_free_function,
    is_unsafe_fn,
    line_of,
    node_text,
)

Detector = Callable[[Node], bool]

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1

_INT_SUFFIX = re.compile(r"(?:[iu](?:8|16|32|64|128|size))$")
_RADIX = {"0x": 16, "0o": 8, "0b": 2}

# Expressions whose value is decided by nested blocks.
_NESTED_KINDS = frozenset({"if_expression", "match_expression", "block", "unsafe_block"})


# ---------------------------------------------------------------------------
# unsafe -> safe


def _is_raw_pointer(param: Node) -> bool:
    type_node = param.child_by_field_name("type")
    return type_node is not None and type_node.type == "pointer_type"


def detect_safe_candidate(fn_node: Node) -> bool:
    """Unsafe function whose parameters include no raw pointers."""
    if not is_unsafe_fn(fn_node):
        return False

    params = fn_node.child_by_field_name("parameters")
    if params is None:
        return True
    return not any(
        _is_raw_pointer(param)
        for param in params.named_children
        if param.type == "parameter"
    )


# ---------------------------------------------------------------------------
# i32 -> bool


def is_i32_type(type_node: Optional[Node]) -> bool:
    """``i32`` or any path ending in ``i32`` (``core::primitive::i32``)."""
    if type_node is None:
        return False
    if type_node.type == "primitive_type":
        return node_text(type_node) == "i32"
    if type_node.type == "scoped_type_identifier":
        return node_text(type_node.child_by_field_name("name")) == "i32"
    return False


def _parse_int_literal(text: str) -> Optional[int]:
    """Value of an integer literal if it fits in an i32, else None."""
    digits = _INT_SUFFIX.sub("", text.replace("_", ""))
    radix = _RADIX.get(digits[:2].lower(), 10)
    if radix != 10:
        digits = digits[2:]
    try:
        value = int(digits, radix)
    except ValueError:
        return None
    if not I32_MIN <= value <= I32_MAX:
        return None
    return value


def is_zero_or_one_literal(expr: Optional[Node]) -> bool:
    """Literal ``0`` / ``1``, or a negated literal that evaluates to 0 or 1."""
    if expr is None:
        return False

    if expr.type == "integer_literal":
        return _parse_int_literal(node_text(expr)) in (0, 1)

    if expr.type == "unary_expression" and expr.children[0].type == "-":
        operand = expr.named_children[0] if expr.named_children else None
        if operand is None or operand.type != "integer_literal":
            return False
        value = _parse_int_literal(node_text(operand))
        return value is not None and -value in (0, 1)

    return False


def _return_value(return_expr: Node) -> Optional[Node]:
    return return_expr.named_children[0] if return_expr.named_children else None


def _last_branch(node: Node) -> Optional[Node]:
    children = [c for c in node.named_children if c.type not in NON_STATEMENT_KINDS]
    return children[-1] if children else None


def _is_valid_tail(value: Optional[Node]) -> bool:
    """A block tail must be a 0/1 literal or a nested if/match/block."""
    if value is None:
        return False
    if value.type in _NESTED_KINDS:
        return check_expr_returns_only_zero_or_one(value)
    return is_zero_or_one_literal(value)


def _arm_passes(value: Optional[Node]) -> bool:
    """Block arms are checked as blocks; other arms pass unless a nested return fails."""
    if value is None:
        return False
    if value.type == "block":
        return check_block_returns_only_zero_or_one(value)
    return is_zero_or_one_literal(value) or check_expr_returns_only_zero_or_one(value)


def check_block_returns_only_zero_or_one(block: Node) -> bool:
    """Check every return and the tail expression of a block.

    Returns False as soon as a return or tail yields something other than a
    0/1 literal, and also when the block yields nothing at all.
    """
    has_returns = False
    statements = block_statements(block)

    for stmt in statements:
        if not stmt.is_expression:
            continue
        if stmt.expr.type == "return_expression":
            has_returns = True
            if not is_zero_or_one_literal(_return_value(stmt.expr)):
                return False
        if not check_expr_returns_only_zero_or_one(stmt.expr):
            return False

    if statements:
        last = statements[-1]
        if last.is_expression and not last.has_semicolon:
            has_returns = True
            if not _is_valid_tail(last.expr):
                return False

    return has_returns


def check_expr_returns_only_zero_or_one(expr: Node) -> bool:
    """Recursively check the returns reachable through nested blocks.

    Expressions that do not nest blocks (calls, loops, assignments, ...)
    pass; only their use as a return or tail value is rejected by callers.
    """
    kind = expr.type

    if kind == "return_expression":
        return is_zero_or_one_literal(_return_value(expr))

    if kind == "block":
        return check_block_returns_only_zero_or_one(expr)

    if kind == "unsafe_block":
        block = child_by_type(expr, "block")
        return block is not None and check_block_returns_only_zero_or_one(block)

    if kind == "if_expression":
        consequence = expr.child_by_field_name("consequence")
        if consequence is None or not check_block_returns_only_zero_or_one(consequence):
            return False

        # An if without else is accepted on the fall-through path.
        alternative = expr.child_by_field_name("alternative")
        if alternative is not None:
            branch = _last_branch(alternative)
            if branch is None or not check_expr_returns_only_zero_or_one(branch):
                return False
        return True

    if kind == "match_expression":
        body = expr.child_by_field_name("body")
        arms = [] if body is None else [c for c in body.named_children if c.type == "match_arm"]
        return all(_arm_passes(arm.child_by_field_name("value")) for arm in arms)

    return True


def detect_bool_candidate(fn_node: Node) -> bool:
    """Function returning ``i32`` that only ever yields literal 0 or 1."""
    if not is_i32_type(fn_node.child_by_field_name("return_type")):
        return False
    body = fn_node.child_by_field_name("body")
    return body is not None and check_block_returns_only_zero_or_one(body)


# ---------------------------------------------------------------------------
# Tree scanning


class CandidateFinder(RustVisitor):
    """Runs one detector over every free function in a tree."""

    def __init__(self, detector: Detector):
        self.detector = detector
        self.candidates: List[Candidate] = []

    def visit_function_item(self, node: Node) -> None:
        if is_free_function(node) and self.detector(node):
            self.candidates.append(
                Candidate(fn_name=function_name(node), line_number=line_of(node))
            )
        self.generic_visit(node)


def find_file_candidates(tree: Tree, detector: Detector) -> List[Candidate]:
    """Candidates in one parsed file, in source order."""
    finder = CandidateFinder(detector)
    finder.visit(tree.root_node)
    return finder.candidates


DETECTORS = {
    "safe": detect_safe_candidate,
    "bool": detect_bool_candidate,
}
