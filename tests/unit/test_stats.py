"""Tests for CodeStats aggregation and reports."""

import itertools

import pytest
from pydantic import ValidationError

from crate_report.models import CodeStats, build_report, sum_stats


def _stats(**kwargs):
    return CodeStats(**kwargs)


FILES = {
    "src/a.rs": _stats(total_fns=3, unsafe_fns=1, total_lines=40, unwraps=2),
    "src/b.rs": _stats(total_fns=1, static_mut_items=4, total_statements=9),
    "src/c.rs": _stats(unsafe_statements=7, total_statements=12, total_lines=3),
}


def test_add_is_field_wise():
    a = _stats(total_fns=2, unsafe_fns=1, unwraps=3)
    b = _stats(total_fns=5, unsafe_fns=2, static_mut_items=1)

    total = a + b

    assert total == _stats(total_fns=7, unsafe_fns=3, unwraps=3, static_mut_items=1)


def test_static_mut_items_added_once():
    """Summing must not count static mut items twice."""
    a = _stats(static_mut_items=2)
    b = _stats(static_mut_items=3)

    assert (a + b).static_mut_items == 5


def test_sum_of_nothing_is_zero():
    assert sum_stats([]) == CodeStats()


def test_total_is_independent_of_order():
    totals = {
        sum_stats(order)
        for order in itertools.permutations(FILES.values())
    }
    assert len(totals) == 1


def test_build_report_orders_files_and_sums_total():
    report = build_report(reversed(list(FILES.items())))

    assert list(report.files) == ["src/a.rs", "src/b.rs", "src/c.rs"]
    assert report.total.total_fns == 4
    assert report.total.static_mut_items == 4
    assert report.total.unsafe_statements == 7
    assert report.total.total_lines == 43


def test_build_report_accepts_mapping():
    assert build_report(FILES) == build_report(list(FILES.items()))


def test_unsafe_fns_cannot_exceed_total():
    with pytest.raises(ValidationError):
        CodeStats(unsafe_fns=2, total_fns=1)


def test_negative_counters_rejected():
    with pytest.raises(ValidationError):
        CodeStats(unwraps=-1)


def test_is_perfect_ignores_totals():
    assert _stats(total_fns=10, total_lines=500, total_statements=80).is_perfect()
    assert not _stats(unwraps=1).is_perfect()


def test_should_report_change_only_on_safety_fields():
    before = _stats(total_fns=1, total_lines=10, unwraps=1)

    assert not before.should_report_change(
        _stats(total_fns=5, total_lines=99, total_statements=3, unwraps=1)
    )
    assert before.should_report_change(_stats(total_fns=1, total_lines=10, unwraps=2))
