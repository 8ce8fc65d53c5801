"""Diagram export constants and defaults."""

# Dangling edge policies
DANGLING_KEEP = "keep"
DANGLING_DROP = "drop"
DANGLING_POLICIES = (DANGLING_KEEP, DANGLING_DROP)

# JSON output
DEFAULT_INDENT = 2
JSON_ENCODING = "utf-8"
