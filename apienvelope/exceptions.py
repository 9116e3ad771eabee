# =============================================================================
# apienvelope Library – Exceptions Module
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


class EnvelopeError(Exception):
    """
    Base exception for the library.

    Every failure raised while reading or converting a response envelope
    inherits from this class, so callers can catch `EnvelopeError` to handle
    any library-specific problem in one place.
    """
    pass


class DeserializationError(EnvelopeError, ValueError):
    """
    The response body was read but its content is not a JSON object.

    Raised when:
      - The body text is not valid JSON
      - The body is valid JSON but the top-level value is not an object
        (e.g. an array, a string or `null`)
      - The body bytes cannot be decoded with the body charset

    The original parser error is kept as `__cause__`.
    """
    pass


class BodyReadError(EnvelopeError, IOError):
    """
    Errors raised while pulling the body content from the transport.

    This includes problems such as:
      - Connection dropped while streaming the body
      - Decompression or chunked-encoding failures reported by the HTTP stack
      - Reading a stream that was already closed
    """
    pass


class BodyConsumedError(BodyReadError):
    """
    A consume-once body was read a second time.

    Stream-backed bodies can only be drained once. Re-issue the original
    request instead of re-reading the same response.
    """
    pass
