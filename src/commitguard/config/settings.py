"""Key/value settings source with typed accessors."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, Optional

_TRUE = {"true", "yes", "1", "on"}
_FALSE = {"false", "no", "0", "off", ""}


class Settings(Mapping[str, Any]):
    """Read-only view over raw option values, keyed by option name.

    Blank strings read as unset, so an empty ``commitMessageRegex`` disables
    the check rather than requiring empty messages.
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings({self._values!r})"

    def get_boolean(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"{key}: expected a boolean, got {value!r}")

    def get_string(self, key: str) -> Optional[str]:
        value = self._values.get(key)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        text = str(value)
        return text if text.strip() else None

    def merged(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return new settings with *overrides* layered on top."""
        return Settings({**self._values, **overrides})
