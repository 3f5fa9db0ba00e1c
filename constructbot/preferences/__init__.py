"""Key-value display preferences (e.g. whether to show example questions)."""
