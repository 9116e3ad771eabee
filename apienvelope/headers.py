# =============================================================================
# apienvelope Library – Response Headers
# -----------------------------------------------------------------------------
# Copyright (c) Alejandro Feránandez Rodríguez. All rights reserved.
#
# This source code is released under the GEL 3.0 License.
#
# DISCLAIMER:
# This software is provided "AS IS", without warranty of any kind, express or
# implied, including but not limited to the warranties of merchantability,
# fitness for a particular purpose, and non-infringement. In no event shall the
# authors or copyright holders be liable for any claim, damages, or other
# liability, whether in an action of contract, tort, or otherwise, arising from,
# out of, or in connection with the software or the use or other dealings in
# the software.
#
# LICENSE – GEL 3.0:
# You may use, copy, modify, and distribute this code according to the terms of
# the GEL 3.0 License. A full copy of the license text should accompany any
# redistribution. If the license text is missing, see: https://gel-license.org
#  @author
#    Alejandro Fernández Rodríguez — github.com/afernandezLuc
#  @version 1.0.0
#  @date 2026-01-07
# =============================================================================

from __future__ import annotations

from collections.abc import Mapping
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from requests.structures import CaseInsensitiveDict


HeaderValues = Union[str, Iterable[str]]


def header_values(value: HeaderValues) -> List[str]:
    """Return the values of one header entry as a list (a plain str is one value)."""
    if isinstance(value, str):
        return [value]
    return list(value)


class ResponseHeaders(Mapping):
    """
    Ordered, case-insensitive, multi-valued collection of response headers.

    Each header name maps to a tuple with one or more values. Names that
    repeat in the input are merged into a single entry: the spelling of the
    first occurrence is kept and values stay in arrival order.

    The collection is read-only once built.

    Example:
        >>> headers = ResponseHeaders([("Set-Cookie", "a=1"), ("set-cookie", "b=2")])
        >>> headers["SET-COOKIE"]
        ('a=1', 'b=2')
        >>> list(headers)
        ['Set-Cookie']
    """

    def __init__(
        self,
        source: Union[Mapping, Iterable[Tuple[str, str]], None] = None,
    ) -> None:
        """
        Args:
            source:
                Either a mapping of name -> value(s) or an iterable of
                `(name, value)` pairs. None builds an empty collection.
        """
        self._store: CaseInsensitiveDict = CaseInsensitiveDict()
        if source is None:
            return
        if isinstance(source, Mapping):
            for name, value in source.items():
                for item in header_values(value):
                    self._add(name, item)
        else:
            for name, value in source:
                self._add(name, value)

    def _add(self, name: str, value: str) -> None:
        if name in self._store:
            self._store[name].append(value)
        else:
            self._store[name] = [value]

    def __getitem__(self, name: str) -> Tuple[str, ...]:
        return tuple(self._store[name])

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def first(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value for `name`, or `default` when missing."""
        values = self._store.get(name)
        return values[0] if values else default

    def get_all(self, name: str) -> List[str]:
        """Return every value for `name` (empty list when missing)."""
        return list(self._store.get(name, ()))

    def __repr__(self) -> str:
        return f"ResponseHeaders({dict(self.items())!r})"
