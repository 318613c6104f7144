"""Tests for header derivation, password digest and error-body decoding."""
import hashlib
import json

import httpx

from jellyfin_client.errors import HttpRequestError
from jellyfin_client.utils import (
    build_authorization_header,
    decode_http_error,
    handle_http_error,
    password_digest,
)


class TestAuthorizationHeader:

    def test_format_with_token(self):
        device_id = hashlib.md5(b"living_room_pc").hexdigest()
        assert build_authorization_header("living room pc", "abc123") == (
            'MediaBrowser Client="jellyfin-client", Device="living_room_pc", '
            f'DeviceId="{device_id}", Version=1, Token="abc123"'
        )

    def test_empty_token_when_unauthenticated(self):
        header = build_authorization_header("box")
        assert header.endswith('Token=""')

    def test_device_id_is_stable_per_device(self):
        a = build_authorization_header("my box", "t1")
        b = build_authorization_header("my box", "t2")
        c = build_authorization_header("other box", "t1")
        device_id = lambda h: h.split('DeviceId="')[1].split('"')[0]
        assert device_id(a) == device_id(b)
        assert device_id(a) != device_id(c)


def test_password_digest_is_sha1_hex():
    assert password_digest("password") == "5baa61e4c9b93f3f0682250b6cf8331b7ee68fd8"


class TestDecodeHttpError:

    def test_problem_details_with_field_errors(self):
        body = json.dumps({
            "type": "https://tools.ietf.org/html/rfc9110#section-15.5.1",
            "title": "One or more validation errors occurred.",
            "detail": "bad id",
            "instance": "/Users/x",
            "status": 400,
            "errors": {"userId": ["The value 'x' is not valid."]},
        })
        err = decode_http_error(400, body)

        assert isinstance(err, HttpRequestError)
        assert err.status == 400
        assert err.type == "https://tools.ietf.org/html/rfc9110#section-15.5.1"
        assert err.title == "One or more validation errors occurred."
        assert err.detail == "bad id"
        assert err.instance == "/Users/x"
        assert err.errors == {"userId": ["The value 'x' is not valid."]}
        assert err.message == body
        assert err.body == body

    def test_object_without_errors_defaults_to_empty_map(self):
        err = decode_http_error(500, '{"title": "Boom"}')
        assert err.title == "Boom"
        assert err.type is None
        assert err.errors == {}

    def test_non_string_fields_are_ignored(self):
        err = decode_http_error(400, '{"type": 3, "errors": {"a": "single"}}')
        assert err.type is None
        assert err.errors == {"a": ["single"]}

    def test_plain_text_body(self):
        err = decode_http_error(401, "Error processing request.")
        assert err.message == "Error processing request."
        assert err.type is None
        assert err.title is None
        assert err.detail is None
        assert err.instance is None
        assert err.errors == {}

    def test_empty_body(self):
        err = decode_http_error(401, "")
        assert err.status == 401
        assert err.message == ""

    def test_json_string_body_keeps_raw_text(self):
        err = decode_http_error(404, '"User not found"')
        assert err.message == '"User not found"'
        assert err.body == '"User not found"'
        assert err.type is None
        assert err.errors == {}

    def test_json_array_body_keeps_raw_text(self):
        err = decode_http_error(500, "[1, 2]")
        assert err.message == "[1, 2]"
        assert err.title is None

    def test_deeply_nested_body_falls_back_to_raw_text(self):
        body = "[" * 100_000 + "]" * 100_000
        err = decode_http_error(500, body)
        assert err.status == 500
        assert err.message == body
        assert err.title is None
        assert err.errors == {}


def test_handle_http_error_reads_response():
    resp = httpx.Response(403, text="Forbidden")
    err = handle_http_error(resp)
    assert err.status == 403
    assert err.message == "Forbidden"
