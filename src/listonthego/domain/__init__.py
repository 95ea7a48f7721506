"""Domain-level abstractions (repository protocols)."""
