"""Tests for crate file discovery and whole-crate analysis."""

import pytest

from crate_report.analyzer import find_candidates, generate_report
from crate_report.analyzer.scanner import find_rust_files, has_cargo_manifest


@pytest.fixture
def crate(make_crate):
    return make_crate(
        {
            "src/lib.rs": "pub unsafe fn reset() {}\nstatic mut STATE: i32 = 0;\n",
            "src/ffi/mod.rs": "pub unsafe fn raw(p: *const u8) -> i32 { 1 }\n",
            "src/broken.rs": "fn broken( {\n",
            "vendor/dep/lib.rs": "fn vendored() {}\n",
            "target/debug/build/out.rs": "fn generated() {}\n",
            "README.md": "not rust",
        }
    )


def test_has_cargo_manifest(crate, tmp_path):
    assert has_cargo_manifest(crate)
    assert not has_cargo_manifest(tmp_path)


def test_find_rust_files_skips_target(crate):
    names = [p.relative_to(crate).as_posix() for p in find_rust_files(crate)]

    assert names == ["src/broken.rs", "src/ffi/mod.rs", "src/lib.rs", "vendor/dep/lib.rs"]


def test_find_rust_files_with_excludes(crate):
    names = [
        p.relative_to(crate).as_posix()
        for p in find_rust_files(crate, exclude=["vendor", "src/ffi/*"])
    ]

    assert names == ["src/broken.rs", "src/lib.rs"]


@pytest.mark.parametrize("jobs", [1, 4])
def test_generate_report(crate, jobs):
    report = generate_report(crate, exclude=["vendor"], jobs=jobs)

    # Unparseable files are left out entirely
    assert list(report.files) == ["src/ffi/mod.rs", "src/lib.rs"]
    assert report.files["src/lib.rs"].static_mut_items == 1
    assert report.total.unsafe_fns == 2
    assert report.total.total_lines == 3


@pytest.mark.parametrize("jobs", [1, 3])
def test_find_candidates(crate, jobs):
    safe = find_candidates(crate, "safe", jobs=jobs)
    bool_ = find_candidates(crate, "bool", jobs=jobs)

    assert [(s.filename, [c.fn_name for c in s.candidates]) for s in safe] == [
        ("src/lib.rs", ["reset"])
    ]
    assert [(s.filename, s.count) for s in bool_] == [("src/ffi/mod.rs", 1)]


def test_unknown_candidate_kind(crate):
    with pytest.raises(ValueError):
        find_candidates(crate, "fast")
