"""Response source adapters for the construction assistant."""
