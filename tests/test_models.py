"""
Unit tests for ResponseEnvelope (no network required).
Run: pytest tests/test_models.py -v
"""

import asyncio
import dataclasses

import pytest

from apienvelope import (
    BodyConsumedError,
    BufferedBody,
    DeserializationError,
    EnvelopeError,
    ResponseEnvelope,
    ResponseHeaders,
    StreamBody,
)


async def _chunks(*parts):
    for part in parts:
        yield part


class TestSuccessStatusCode:
    @pytest.mark.parametrize(
        "status_code, expected",
        [(199, False), (200, True), (202, True), (299, True), (300, False), (404, False), (500, False)],
    )
    def test_boundaries(self, status_code, expected):
        assert ResponseEnvelope(status_code).is_success_status_code is expected

    def test_out_of_range_codes_are_not_rejected(self):
        envelope = ResponseEnvelope(-1)
        assert envelope.status_code == -1
        assert envelope.is_success_status_code is False

    def test_envelope_is_immutable(self):
        envelope = ResponseEnvelope(200)
        with pytest.raises(dataclasses.FrozenInstanceError):
            envelope.status_code = 500


class TestHeadersAsMap:
    def test_absent_headers(self):
        assert ResponseEnvelope(200).deserialize_headers_as_map() == {}

    def test_first_value_wins(self):
        envelope = ResponseEnvelope(200, headers={"X-A": ["1", "2"], "X-B": ["3"]})
        assert envelope.deserialize_headers_as_map() == {"X-A": "1", "X-B": "3"}

    def test_response_headers_collection(self):
        headers = ResponseHeaders([("Set-Cookie", "a=1"), ("set-cookie", "b=2"), ("X-Trace", "t")])
        envelope = ResponseEnvelope(200, headers=headers)
        assert envelope.deserialize_headers_as_map() == {"Set-Cookie": "a=1", "X-Trace": "t"}

    def test_plain_string_values(self):
        envelope = ResponseEnvelope(200, headers={"Content-Type": "application/json"})
        assert envelope.deserialize_headers_as_map() == {"Content-Type": "application/json"}

    def test_entries_without_values_are_skipped(self):
        envelope = ResponseEnvelope(200, headers={"X-Empty": [], "X-B": ["3"]})
        assert envelope.deserialize_headers_as_map() == {"X-B": "3"}

    def test_multimap_keeps_every_value(self):
        envelope = ResponseEnvelope(200, headers={"X-A": ["1", "2"], "X-B": ["3"]})
        assert envelope.deserialize_headers_as_multimap() == {"X-A": ["1", "2"], "X-B": ["3"]}

    def test_plain_mapping_names_are_case_insensitive(self):
        envelope = ResponseEnvelope(200, headers={"X-A": ["1"], "x-a": ["2"], "X-B": "3"})
        assert envelope.deserialize_headers_as_map() == {"X-A": "1", "X-B": "3"}
        assert envelope.deserialize_headers_as_multimap() == {"X-A": ["1", "2"], "X-B": ["3"]}

    def test_multimap_absent_headers(self):
        assert ResponseEnvelope(200).deserialize_headers_as_multimap() == {}


class TestBodyAsMap:
    def test_absent_body_returns_without_suspending(self):
        coro = ResponseEnvelope(200).deserialize_body_as_map()
        with pytest.raises(StopIteration) as exc_info:
            coro.send(None)
        assert exc_info.value.value == {}

    @pytest.mark.asyncio
    async def test_object_body(self):
        envelope = ResponseEnvelope(200, body=BufferedBody('{"id":"abc","count":5}'))
        content = await envelope.deserialize_body_as_map()
        assert content == {"id": "abc", "count": 5}
        assert isinstance(content["count"], int)

    @pytest.mark.asyncio
    async def test_nested_values_keep_their_kind(self):
        envelope = ResponseEnvelope(
            200,
            body=b'{"errors":[{"field":null,"message":"bad"}],"ok":false,"ratio":0.5,"meta":{}}',
        )
        content = await envelope.deserialize_body_as_map()
        assert content["errors"] == [{"field": None, "message": "bad"}]
        assert content["ok"] is False
        assert content["ratio"] == 0.5
        assert content["meta"] == {}

    @pytest.mark.asyncio
    async def test_utf8_byte_order_mark_is_ignored(self):
        envelope = ResponseEnvelope(200, body=b"\xef\xbb\xbf" + b'{"id":"abc"}')
        assert await envelope.deserialize_body_as_map() == {"id": "abc"}

    @pytest.mark.asyncio
    async def test_byte_order_mark_with_explicit_utf8_charset(self):
        body = BufferedBody(b"\xef\xbb\xbf{}", encoding="UTF8")
        assert await ResponseEnvelope(200, body=body).deserialize_body_as_map() == {}

    @pytest.mark.asyncio
    async def test_not_json(self):
        envelope = ResponseEnvelope(400, body="not json")
        with pytest.raises(DeserializationError):
            await envelope.deserialize_body_as_map()

    @pytest.mark.asyncio
    async def test_json_array_is_rejected(self):
        envelope = ResponseEnvelope(200, body="[1,2,3]")
        with pytest.raises(DeserializationError) as exc_info:
            await envelope.deserialize_body_as_map()
        assert "list" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_json_null_is_rejected(self):
        with pytest.raises(DeserializationError):
            await ResponseEnvelope(200, body="null").deserialize_body_as_map()

    @pytest.mark.asyncio
    async def test_undecodable_bytes(self):
        envelope = ResponseEnvelope(200, body=b"\xff\xfe{}")
        with pytest.raises(DeserializationError) as exc_info:
            await envelope.deserialize_body_as_map()
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    @pytest.mark.asyncio
    async def test_parse_error_is_chained_and_catchable_as_base(self):
        with pytest.raises(EnvelopeError) as exc_info:
            await ResponseEnvelope(200, body="{").deserialize_body_as_map()
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   \r\n"])
    async def test_empty_body_text(self, text):
        assert await ResponseEnvelope(202, body=text).deserialize_body_as_map() == {}

    @pytest.mark.asyncio
    async def test_blank_body_is_the_only_accepted_non_json(self):
        with pytest.raises(DeserializationError):
            await ResponseEnvelope(200, body="  x  ").deserialize_body_as_map()

    @pytest.mark.asyncio
    async def test_buffered_body_can_be_read_twice(self):
        envelope = ResponseEnvelope(200, body=BufferedBody('{"a":1}'))
        assert await envelope.deserialize_body_as_map() == {"a": 1}
        assert await envelope.deserialize_body_as_map() == {"a": 1}

    @pytest.mark.asyncio
    async def test_stream_body_second_read_fails(self):
        envelope = ResponseEnvelope(200, body=StreamBody(_chunks(b'{"a":', b"1}")))
        assert await envelope.deserialize_body_as_map() == {"a": 1}
        with pytest.raises(BodyConsumedError):
            await envelope.deserialize_body_as_map()

    @pytest.mark.asyncio
    async def test_caller_timeout_propagates(self):
        async def slow():
            await asyncio.sleep(10)
            yield b"{}"

        envelope = ResponseEnvelope(200, body=StreamBody(slow()))
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(envelope.deserialize_body_as_map(), timeout=0.01)

    @pytest.mark.asyncio
    async def test_unsupported_body_type(self):
        with pytest.raises(TypeError):
            await ResponseEnvelope(200, body=12345).deserialize_body_as_map()


class TestAcceptedWithoutContent:
    @pytest.mark.asyncio
    async def test_202_without_body_or_headers(self):
        envelope = ResponseEnvelope(202, None, None)
        assert envelope.is_success_status_code is True
        assert await envelope.deserialize_body_as_map() == {}
        assert envelope.deserialize_headers_as_map() == {}
