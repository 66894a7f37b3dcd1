"""End-to-end tests for the crate-report CLI."""

import pytest

LIB_RS = """
    static mut COUNTER: u32 = 0;

    pub unsafe fn bump() {
        unsafe {
            COUNTER += 1;
        }
    }

    pub fn is_ready(flag: Option<bool>) -> i32 {
        if flag.unwrap() {
            return 1;
        }
        0
    }
"""

FFI_RS = """
    pub unsafe fn read(p: *const u8) -> u8 {
        unsafe { *p }
    }
"""


@pytest.fixture
def crate(make_crate):
    return make_crate({"src/lib.rs": LIB_RS, "src/ffi.rs": FFI_RS})


def test_missing_cargo_toml(invoke, tmp_path):
    res = invoke(["report", str(tmp_path)])

    assert res.exit_code == 1
    assert "Error: No Cargo.toml found in" in res.output
    assert "Please specify a valid Rust crate directory." in res.output
    assert "Usage:" in res.output


@pytest.mark.parametrize("command", ["safe-candidates", "bool-candidates"])
def test_candidates_need_cargo_toml(invoke, tmp_path, command):
    res = invoke([command, str(tmp_path)])

    assert res.exit_code == 1
    assert "No Cargo.toml found" in res.output


def test_markdown_report(invoke, crate):
    res = invoke(["report", str(crate), "--no-color"])

    assert res.exit_code == 0, res.output
    assert "Code Report" in res.output
    assert "- Total unsafe functions: 66.67% (2 / 3)" in res.output
    assert "- Total static mut items: 1" in res.output
    assert "- Total unwrap calls: 1" in res.output
    assert "src/ffi.rs" in res.output
    assert "\x1b[" not in res.output
    assert res.output.endswith("Generated by crate-report\n")


def test_report_defaults_to_current_directory(invoke, crate, monkeypatch):
    monkeypatch.chdir(crate)

    res = invoke(["report", "--no-color"])

    assert res.exit_code == 0, res.output
    assert "src/lib.rs" in res.output


def test_csv_report(invoke, crate):
    res = invoke(["report", str(crate), "--format", "csv"])

    assert res.exit_code == 0, res.output
    lines = res.output.splitlines()
    assert lines[0] == (
        "filename,static_mut_items,total_fns,total_lines,total_statements,"
        "unsafe_fns,unsafe_statements,unwraps"
    )
    assert [line.split(",")[0] for line in lines[1:]] == ["src/ffi.rs", "src/lib.rs"]


def test_output_file_has_no_colour(invoke, crate, tmp_path):
    out = tmp_path / "report.md"

    res = invoke(["report", str(crate), "--color", "-o", str(out)])

    assert res.exit_code == 0, res.output
    assert res.output == ""
    text = out.read_text()
    assert "Code Report" in text
    assert "\x1b[" not in text


def _baseline(invoke, crate, tmp_path):
    path = tmp_path / "baseline.csv"
    res = invoke(["report", str(crate), "--format", "csv", "--output", str(path)])
    assert res.exit_code == 0, res.output
    return path


def test_markdown_diff_against_baseline(invoke, crate, tmp_path):
    baseline = _baseline(invoke, crate, tmp_path)
    (crate / "src" / "new.rs").write_text("fn f(x: Option<u8>) -> u8 { x.unwrap() }\n")

    res = invoke(["report", str(crate), "--baseline", str(baseline), "--no-color"])

    assert res.exit_code == 0, res.output
    assert "unwraps     : 1 -> 2 (+1)" in res.output
    assert "src/new.rs [NEW FILE]" in res.output


def test_markdown_rejects_bad_baseline(invoke, crate, tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text("file,count\nsrc/lib.rs,1\n")

    res = invoke(["report", str(crate), "--baseline", str(bad)])

    assert res.exit_code == 1
    assert "CSV headers do not match" in res.output


def test_pr_comment(invoke, crate, tmp_path):
    baseline = _baseline(invoke, crate, tmp_path)

    res = invoke(["report", str(crate), "--format", "pr-comment", "--baseline", str(baseline)])

    assert res.exit_code == 0, res.output
    assert res.output.startswith("## Safety Analysis Report")


def test_pr_comment_without_baseline_is_empty(invoke, crate, tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text("nonsense\n")

    res = invoke(["report", str(crate), "--format", "pr-comment", "--baseline", str(bad)])

    assert res.exit_code == 0
    assert "##" not in res.output


def test_html_report(invoke, crate, tmp_path):
    out = tmp_path / "report.html"

    res = invoke(["report", str(crate), "--format", "html", "-o", str(out)])

    assert res.exit_code == 0, res.output
    text = out.read_text()
    assert text.startswith("<!DOCTYPE html>")
    assert "src/lib.rs" in text


def test_config_sets_default_format(invoke, crate, tmp_path):
    config = tmp_path / "crate-report.toml"
    config.write_text('format = "csv"\nexclude = ["ffi.rs"]\n')

    res = invoke(["--config", str(config), "report", str(crate)])

    assert res.exit_code == 0, res.output
    assert res.output.startswith("filename,")
    assert "src/ffi.rs" not in res.output


def test_safe_candidates(invoke, crate):
    res = invoke(["safe-candidates", str(crate)])

    assert res.exit_code == 0, res.output
    assert "\tbump @ src/lib.rs:4" in res.output
    assert "read" not in res.output
    assert "Found 1 candidates over 1 files" in res.output


def test_bool_candidates(invoke, crate):
    res = invoke(["bool-candidates", str(crate), "--jobs", "2"])

    assert res.exit_code == 0, res.output
    assert "\tis_ready @ src/lib.rs:10" in res.output


def test_no_candidates(invoke, make_crate):
    crate = make_crate({"src/main.rs": "fn main() {}\n"})

    res = invoke(["bool-candidates", str(crate)])

    assert res.exit_code == 0
    assert "No candidates found for functions to convert from i32 to bool" in res.output


def test_version(invoke):
    res = invoke(["--version"])

    assert res.exit_code == 0
    assert "crate-report" in res.output
