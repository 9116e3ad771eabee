# =============================================================================
# apienvelope Library – Response Envelope Model
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

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from .body import BodySource, coerce_body
from .exceptions import DeserializationError
from .headers import ResponseHeaders


JsonValue = Union[None, bool, int, float, str, List["JsonValue"], Dict[str, "JsonValue"]]
JsonObject = Dict[str, JsonValue]


@dataclass(frozen=True)
class ResponseEnvelope:
    """
    Immutable representation of a response received from an HTTP API.

    The envelope is built once by the client layer right after the transport
    returns, then handed to application code. It never validates its inputs.

    Attributes:
        status_code:
            HTTP status code as returned by the server. Not range-checked.

        body:
            Response content. Either a `ResponseBody` handle, raw `bytes` or
            `str` (treated as already buffered), or None when the response
            has no body. Stream-backed handles can only be read once, and a
            single envelope must not have its body read by several tasks.

        headers:
            Response headers. A `ResponseHeaders` collection or any mapping of
            header name -> list of values (a plain `str` is one value), or
            None when absent.
    """

    status_code: int
    body: BodySource = None
    headers: Optional[Mapping[str, Any]] = None

    @property
    def is_success_status_code(self) -> bool:
        """True when the status code is in the 2xx range (200-299 inclusive)."""
        return 200 <= self.status_code <= 299

    async def deserialize_body_as_map(self) -> JsonObject:
        """
        Read the body and parse it as a JSON object.

        If there is no body, an empty dict is returned without awaiting
        anything. Otherwise the body is read once (the only suspension
        point) and its text parsed. A leading UTF-8 byte order mark is
        ignored.

        A body that reads as empty or blank text yields an empty dict rather
        than a `DeserializationError`. This is the only non-JSON text that
        is accepted, so that 202/204 responses without content can be passed
        through unchanged.

        Cancellation and timeouts are the caller's business: wrap the call in
        `asyncio.wait_for` or cancel the task, the read simply propagates it.

        Returns:
            Dict with the top-level JSON members. Nested values keep their
            JSON kind (dict, list, str, int/float, bool, None).

        Raises:
            DeserializationError:
                If the content is not JSON, is JSON but not an object, or
                cannot be decoded with the body charset.
            BodyReadError:
                If reading the body fails, including a second read of a
                consume-once body (`BodyConsumedError`).
        """
        body = coerce_body(self.body)
        if body is None:
            return {}

        try:
            text = await body.read_text()
        except UnicodeDecodeError as exc:
            raise DeserializationError(f"Response body is not valid text: {exc}") from exc

        if not text.strip():
            return {}

        try:
            content = json.loads(text)
        except ValueError as exc:
            raise DeserializationError(f"Response body is not valid JSON: {exc}") from exc

        if not isinstance(content, dict):
            raise DeserializationError(
                f"Expected a JSON object in response body, got {type(content).__name__}"
            )
        return content

    def _header_collection(self) -> Optional[ResponseHeaders]:
        """Plain mappings go through `ResponseHeaders` for case-insensitive merging."""
        if self.headers is None or isinstance(self.headers, ResponseHeaders):
            return self.headers
        return ResponseHeaders(self.headers)

    def deserialize_headers_as_map(self) -> Dict[str, str]:
        """
        Flatten the headers into a name -> value dict.

        Names are matched case-insensitively, so `X-A` and `x-a` given as
        separate mapping keys form one entry spelled like the first of them.
        Only the first value of a multi-valued header is kept; use
        `deserialize_headers_as_multimap()` to get all of them. Entries with
        no values are skipped.
        """
        headers = self._header_collection()
        if headers is None:
            return {}
        return {name: values[0] for name, values in headers.items() if values}

    def deserialize_headers_as_multimap(self) -> Dict[str, List[str]]:
        """Headers as a name -> list of all values dict."""
        headers = self._header_collection()
        if headers is None:
            return {}
        return {name: list(values) for name, values in headers.items() if values}
