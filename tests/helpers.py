"""Parsing helpers shared by analyzer tests."""

import textwrap

from crate_report.analyzer.syntax import parse_rust


def parse(source):
    tree = parse_rust(textwrap.dedent(source))
    assert tree is not None, "test source must parse"
    return tree


def first_function(source):
    """First fn item in source, searched depth first."""
    stack = [parse(source).root_node]
    while stack:
        node = stack.pop()
        if node.type == "function_item":
            return node
        stack.extend(reversed(node.named_children))
    raise AssertionError("no function_item in source")
