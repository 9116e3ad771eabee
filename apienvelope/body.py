# =============================================================================
# apienvelope Library – Response Body Handles
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

import codecs
from abc import ABC, abstractmethod
from typing import AsyncIterable, Awaitable, Callable, Optional, Union

from .exceptions import BodyConsumedError, BodyReadError


DEFAULT_ENCODING = "utf-8"


class ResponseBody(ABC):
    """
    Handle to the content of an HTTP response.

    A body is either already buffered in memory (and can be read any number
    of times) or backed by a forward-only stream that can only be drained
    once. Subclasses declare which one they are through `replayable`.

    Reading a non-replayable body twice raises `BodyConsumedError`. The
    consumed flag is set before the first suspension point, so two
    overlapping reads on the same handle also fail instead of interleaving.

    Attributes:
        encoding:
            Charset used by `read_text()`. `None` means UTF-8.
    """

    replayable: bool = False

    def __init__(self, encoding: Optional[str] = None) -> None:
        """
        Args:
            encoding: Optional charset name (e.g. "utf-8", "latin-1").

        Raises:
            ValueError: If the charset is unknown to Python's codec registry.
        """
        if encoding is not None:
            try:
                codecs.lookup(encoding)
            except LookupError as exc:
                raise ValueError(f"Unknown body encoding={encoding!r}") from exc
        self.encoding = encoding
        self._consumed = False

    @property
    def consumed(self) -> bool:
        """True once a read has started on this handle."""
        return self._consumed

    async def read_bytes(self) -> bytes:
        """
        Read the whole body content.

        Returns:
            The raw body bytes.

        Raises:
            BodyConsumedError: If the body is consume-once and was read before.
            BodyReadError: If the underlying transport fails while reading.
        """
        if self._consumed and not self.replayable:
            raise BodyConsumedError(
                f"{type(self).__name__} was already consumed and cannot be read again"
            )
        self._consumed = True
        return await self._read()

    async def read_text(self) -> str:
        """
        Read the whole body and decode it with `encoding` (UTF-8 by default).

        A leading byte order mark is dropped when the charset is UTF-8.

        Raises:
            UnicodeDecodeError: If the bytes do not match the charset.
            BodyConsumedError, BodyReadError: Same behavior as read_bytes().
        """
        data = await self.read_bytes()
        encoding = self.encoding or DEFAULT_ENCODING
        if codecs.lookup(encoding).name == "utf-8":
            encoding = "utf-8-sig"
        return data.decode(encoding)

    @abstractmethod
    async def _read(self) -> bytes:
        """Pull the content from the source. Called once per read."""


class BufferedBody(ResponseBody):
    """
    Body whose content is already in memory.

    `str` content is encoded with the body encoding, so `read_text()` gives
    back the original text.
    """

    replayable = True

    def __init__(self, content: Union[bytes, str], encoding: Optional[str] = None) -> None:
        super().__init__(encoding)
        if isinstance(content, str):
            content = content.encode(self.encoding or DEFAULT_ENCODING)
        self._content = bytes(content)

    async def _read(self) -> bytes:
        return self._content

    def __repr__(self) -> str:
        return f"BufferedBody({len(self._content)} bytes)"


class StreamBody(ResponseBody):
    """
    Consume-once body backed by an async iterable of byte chunks.

    Args:
        chunks: Async iterable producing `bytes` chunks.
        encoding: Optional charset for `read_text()`.
        close: Optional coroutine function awaited after the stream has been
            drained (or failed), e.g. to release a connection.
    """

    def __init__(
        self,
        chunks: AsyncIterable[bytes],
        encoding: Optional[str] = None,
        close: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        super().__init__(encoding)
        self._chunks = chunks
        self._close = close

    async def _read(self) -> bytes:
        parts = []
        try:
            async for chunk in self._chunks:
                parts.append(chunk)
        except OSError as exc:
            raise BodyReadError(f"Error while streaming response body: {exc}") from exc
        finally:
            if self._close is not None:
                await self._close()
        return b"".join(parts)


BodySource = Union[ResponseBody, bytes, str, None]


def coerce_body(value: BodySource) -> Optional[ResponseBody]:
    """
    Normalize the accepted body inputs into a `ResponseBody` handle.

    Args:
        value: A body handle, raw `bytes`/`str` content, or None.

    Returns:
        The same handle, a `BufferedBody` for raw content, or None.

    Raises:
        TypeError: For any other input type.
    """
    if value is None or isinstance(value, ResponseBody):
        return value
    if isinstance(value, (bytes, bytearray, str)):
        return BufferedBody(value)
    raise TypeError(f"Unsupported response body type: {type(value).__name__}")
