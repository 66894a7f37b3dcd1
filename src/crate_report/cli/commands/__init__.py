"""crate-report commands."""
