from .models import ResponseEnvelope, JsonObject, JsonValue
from .body import ResponseBody, BufferedBody, StreamBody
from .headers import ResponseHeaders
from .transport import (
    HttpxBody,
    RequestsBody,
    envelope_from_httpx,
    envelope_from_requests,
)
from .exceptions import (
    EnvelopeError,
    DeserializationError,
    BodyReadError,
    BodyConsumedError,
)

__all__ = [
    "ResponseEnvelope",
    "JsonObject",
    "JsonValue",
    "ResponseBody",
    "BufferedBody",
    "StreamBody",
    "ResponseHeaders",
    "HttpxBody",
    "RequestsBody",
    "envelope_from_httpx",
    "envelope_from_requests",
    "EnvelopeError",
    "DeserializationError",
    "BodyReadError",
    "BodyConsumedError",
]
