"""Display preferences kept for the lifetime of the process."""

PreferenceValue = bool | int | float | str

DEFAULT_PREFERENCES: dict[str, PreferenceValue] = {
    "show_example_questions": True,
}


class PreferenceStore:
    """Key-value store of UI preferences layered over the defaults."""

    def __init__(self, defaults: dict[str, PreferenceValue] | None = None) -> None:
        self._defaults = dict(DEFAULT_PREFERENCES if defaults is None else defaults)
        self._values: dict[str, PreferenceValue] = {}

    def all(self) -> dict[str, PreferenceValue]:
        return {**self._defaults, **self._values}

    def get(self, key: str) -> PreferenceValue | None:
        """Return the stored value, the default, or None for unknown keys."""
        return self.all().get(key)

    def set(self, key: str, value: PreferenceValue) -> None:
        self._values[key] = value

    def reset(self) -> None:
        self._values.clear()


_preference_store: PreferenceStore | None = None


def get_preference_store() -> PreferenceStore:
    global _preference_store
    if _preference_store is None:
        _preference_store = PreferenceStore()
    return _preference_store
