# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header containers and lookup helpers.

HTTP header field names are case-insensitive (RFC 9110) and a field may
repeat. `Headers` keeps every value in arrival order under a canonical key
(`x-custom-header` -> `X-Custom-Header`), so decorators can append without
clobbering what an earlier layer set.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any, Union

HeaderInput = Union["Headers", Mapping[str, Any], Iterable[tuple[str, str]], None]


def canonical_header_key(name: str) -> str:
    """Return the canonical form of a header name."""
    return "-".join(part[:1].upper() + part[1:].lower() for part in str(name).strip().split("-"))


class Headers(MutableMapping[str, str]):
    """Case-insensitive, ordered, multi-valued header mapping.

    Mapping access (`headers[name]`, `get`) returns the first value;
    `get_list` returns all of them. Assignment replaces, `add` appends.
    """

    def __init__(self, headers: HeaderInput = None):
        self._values: dict[str, list[str]] = {}
        if headers is None:
            return
        if isinstance(headers, Headers):
            items: Iterable[tuple[str, Any]] = headers.multi_items()
        elif isinstance(headers, Mapping):
            items = headers.items()
        else:
            items = headers
        for key, value in items:
            if isinstance(value, (list, tuple)):
                for item in value:
                    self.add(key, item)
            else:
                self.add(key, value)

    def add(self, key: str, value: Any) -> None:
        """Append a value to the header's value list."""
        self._values.setdefault(canonical_header_key(key), []).append("" if value is None else str(value))

    def get_list(self, key: str) -> list[str]:
        return list(self._values.get(canonical_header_key(key), []))

    def multi_items(self) -> list[tuple[str, str]]:
        return [(key, value) for key, values in self._values.items() for value in values]

    def copy(self) -> Headers:
        return Headers(self)

    def __getitem__(self, key: str) -> str:
        values = self._values.get(canonical_header_key(key))
        if not values:
            raise KeyError(key)
        return values[0]

    def __setitem__(self, key: str, value: Any) -> None:
        self._values[canonical_header_key(key)] = ["" if value is None else str(value)]

    def __delitem__(self, key: str) -> None:
        del self._values[canonical_header_key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and canonical_header_key(key) in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self == Headers(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({self.multi_items()!r})"


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Accepts `Headers` or any plain mapping (e.g. `httpx.Headers`, dicts built by tests).
    """
    if not headers or not name:
        return default

    if isinstance(headers, Headers):
        value = headers.get(name)
        return default if value is None else value.strip()

    lower = str(name).lower()
    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = ["Headers", "canonical_header_key", "header_value"]
