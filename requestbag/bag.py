"""
Request bag - per-request key/value storage.

One RequestBag lives for exactly one request scope. Handlers, middleware and
services resolved in that scope use it to collect values incrementally and
read them back later in the same request.
"""

from collections.abc import Mapping
from numbers import Number
from typing import Any, Dict, Iterator


def is_empty_value(value: Any) -> bool:
    """
    Loose emptiness check used by RequestBag.has().

    Empty values are exactly: None, False, "", numeric zero (any
    numbers.Number, so Decimal(0), Fraction(0) and 0j too), and an empty
    list, tuple or mapping. Anything else (including "0", b"" and an empty
    set) is considered non-empty.
    """
    if value is None or value is False:
        return True

    if isinstance(value, str):
        return value == ""

    if isinstance(value, Number):
        return value == 0

    if isinstance(value, (list, tuple, Mapping)):
        return len(value) == 0

    return False


class RequestBag:
    """
    String-keyed bag of arbitrary values for a single request.

    Mutators (add, remove, clear, merge) return the bag itself so calls can
    be chained:

        >>> bag = RequestBag()
        >>> bag.add("user_id", 42).add("locale", "en").get("locale")
        'en'

    ``has()`` is a loose check (present and not empty), ``exists()`` is a
    strict presence check.
    """

    __slots__ = ("_entries",)

    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def add(self, key: str, value: Any) -> "RequestBag":
        """Store value under key, replacing any previous value."""
        self._entries[key] = value
        return self

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value, or default when key is absent."""
        if key in self._entries:
            return self._entries[key]
        return default

    def has(self, key: str) -> bool:
        """Check if key exists and its value is not empty."""
        if key not in self._entries:
            return False
        return not is_empty_value(self._entries[key])

    def exists(self, key: str) -> bool:
        """Check if key exists (even if its value is empty)."""
        return key in self._entries

    def remove(self, key: str) -> "RequestBag":
        self._entries.pop(key, None)
        return self

    def all(self) -> Dict[str, Any]:
        """Shallow copy of every entry in the bag."""
        return dict(self._entries)

    def clear(self) -> "RequestBag":
        self._entries.clear()
        return self

    def merge(self, data: Mapping) -> "RequestBag":
        """
        Merge a mapping into the bag.

        Keys present in data overwrite existing entries; other entries are
        left untouched.
        """
        self._entries.update(data)
        return self

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"RequestBag({self._entries!r})"
