"""Detection rules. Each check takes (script, exclusions, facts) and yields findings."""
