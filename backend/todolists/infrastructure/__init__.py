"""Infrastructure Layer — in-memory stores and logging setup."""
