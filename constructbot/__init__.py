"""ConstructBot: a construction-domain assistant API."""
