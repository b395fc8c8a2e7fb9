"""Use-case layer helpers that translate transport-level results for callers."""
