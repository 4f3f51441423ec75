"""Package registry lookups."""
