"""crate-report: unsafe code metrics and baseline diffs for Rust crates."""

__all__ = ["__version__"]

__version__ = "0.1.0"
