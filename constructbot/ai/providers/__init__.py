"""Response source adapter factory."""

from constructbot.ai.providers.factory import AdapterType, create_adapter

__all__ = [
    "AdapterType",
    "create_adapter",
]
