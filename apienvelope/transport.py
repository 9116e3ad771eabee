# =============================================================================
# apienvelope Library – Transport Adapters
# -----------------------------------------------------------------------------
# Copyright (c) Alejandro Feránandez Rodríguez. All rights reserved.
#
# This source code is released under the GEL 3.0 License.
#
# DISCLAIMER:
# This software is provided "AS IS", without warranty of any kind, express or
# implied, including but not limited to the warranties of merchantability,
# fitness for a particular purpose and noninfringement. In no event shall the
# authors or copyright holders be liable for any claim, damages or other
# liability, whether in an action of contract, tort or otherwise, arising from,
# out of or in connection with the software or the use or other dealings in the
# software.
#
# LICENSE – GEL 3.0:
# You may use, copy, modify, and distribute this code according to the terms of
# the GEL 3.0 License. A full copy of the license should accompany any
# redistribution. If the license text is missing, see: https://gel-license.org
#  @author
#    Alejandro Fernández Rodríguez — github.com/afernandezLuc
#  @version 1.0.0
#  @date 2026-01-07
# =============================================================================

from __future__ import annotations

import asyncio
import codecs
import logging
from typing import List, Optional, Tuple

import httpx
import requests

from .body import ResponseBody
from .exceptions import BodyReadError
from .headers import ResponseHeaders
from .models import ResponseEnvelope

log = logging.getLogger(__name__)


def _known_charset(name: Optional[str]) -> Optional[str]:
    """Return `name` if Python has a codec for it, otherwise None."""
    if not name:
        return None
    try:
        codecs.lookup(name)
    except LookupError:
        log.debug(f"Ignoring unknown response charset {name!r}")
        return None
    return name


class RequestsBody(ResponseBody):
    """
    Consume-once body backed by a `requests.Response`.

    The response may have been fetched with `stream=True`, in which case
    reading drains the connection. The blocking read runs in a worker thread
    so the event loop keeps running while the content arrives.

    Args:
        response: The `requests.Response` to read from.
        encoding:
            Charset override. Defaults to the charset requests derived from
            the Content-Type header, then UTF-8.
    """

    def __init__(self, response: requests.Response, encoding: Optional[str] = None) -> None:
        super().__init__(encoding or _known_charset(response.encoding))
        self._response = response

    async def _read(self) -> bytes:
        try:
            return await asyncio.to_thread(lambda: self._response.content)
        # requests raises RuntimeError when iter_content() already drained the stream
        except (requests.RequestException, OSError, RuntimeError) as exc:
            raise BodyReadError(
                f"Error reading response body from {self._response.url}: {exc}"
            ) from exc


class HttpxBody(ResponseBody):
    """
    Consume-once body backed by an `httpx.Response`.

    Works for streamed responses from `httpx.AsyncClient` and for responses
    whose content httpx already loaded. A still-open stream from the sync
    `httpx.Client` cannot be read here and fails with `BodyReadError`.
    """

    def __init__(self, response: httpx.Response, encoding: Optional[str] = None) -> None:
        super().__init__(encoding or _known_charset(response.charset_encoding))
        self._response = response

    async def _read(self) -> bytes:
        try:
            return await self._response.aread()
        # httpx raises a bare RuntimeError for responses carrying a sync stream
        except (httpx.HTTPError, httpx.StreamError, RuntimeError) as exc:
            raise BodyReadError(f"Error reading response body: {exc}") from exc


def _requests_header_pairs(response: requests.Response) -> List[Tuple[str, str]]:
    """
    Collect header pairs from a requests response.

    `response.headers` joins repeated headers with commas, so the urllib3
    response underneath is preferred when it is available.
    """
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return [(name, value) for name in raw_headers for value in raw_headers.getlist(name)]
    return list(response.headers.items())


def envelope_from_requests(
    response: requests.Response,
    encoding: Optional[str] = None,
) -> ResponseEnvelope:
    """
    Wrap a `requests.Response` into a `ResponseEnvelope`.

    Args:
        response: Response returned by `requests` (streamed or not).
        encoding: Optional charset override for the body.

    Returns:
        Envelope with a consume-once `RequestsBody` and the full header list.

    Raises:
        ValueError: If the `encoding` override is unknown.
    """
    envelope = ResponseEnvelope(
        status_code=response.status_code,
        body=RequestsBody(response, encoding=encoding),
        headers=ResponseHeaders(_requests_header_pairs(response)),
    )
    log.debug(f"Wrapped requests response {response.status_code} from {response.url}")
    return envelope


def envelope_from_httpx(
    response: httpx.Response,
    encoding: Optional[str] = None,
) -> ResponseEnvelope:
    """
    Wrap an `httpx.Response` into a `ResponseEnvelope`.

    Header names keep the spelling sent by the server; repeated headers keep
    every value.
    """
    header_encoding = response.headers.encoding
    pairs = [
        (name.decode(header_encoding), value.decode(header_encoding))
        for name, value in response.headers.raw
    ]
    envelope = ResponseEnvelope(
        status_code=response.status_code,
        body=HttpxBody(response, encoding=encoding),
        headers=ResponseHeaders(pairs),
    )
    log.debug(f"Wrapped httpx response {response.status_code}")
    return envelope
