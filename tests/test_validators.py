"""
Tests for request-body validation and PATCH field filtering.
"""

import pytest

from api.errors import ValidationError
from utils.schemas import CredentialsRequest, TodoCreateRequest
from utils.validators import extract_todo_patch, parse_body


class TestParseBody:
    def test_valid_credentials(self):
        req = parse_body(CredentialsRequest, {"email": "a@x.com", "password": "secret1"})
        assert req.email == "a@x.com"

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            "text",
            {},
            {"email": "a@x.com"},
            {"email": "not-an-email", "password": "secret1"},
            {"email": "a@x.com", "password": "short"},
            {"email": "a@x.com", "password": 1234567},
            {"email": "a@x.com", "password": "x" * 73},
        ],
    )
    def test_invalid_credentials_shape(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            parse_body(CredentialsRequest, payload)
        assert exc_info.value.status_code == 400
        assert exc_info.value.details

    def test_details_never_echo_password(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_body(CredentialsRequest, {"email": "bad", "password": "hunter"})
        assert "hunter" not in str(exc_info.value.details)

    def test_todo_defaults(self):
        req = parse_body(TodoCreateRequest, {"title": "buy milk"})
        assert req.completed is False
        assert req.location is None
        assert req.photo_uri is None

    def test_todo_camel_case_fields(self):
        req = parse_body(
            TodoCreateRequest,
            {"title": "t", "photoUri": "file://p.jpg", "location": {"latitude": -33.4, "longitude": -70}},
        )
        assert req.photo_uri == "file://p.jpg"
        assert req.location.longitude == -70

    @pytest.mark.parametrize(
        "payload",
        [
            {"title": ""},
            {"completed": True},
            {"title": "t", "completed": "yes"},
            {"title": "t", "location": {"latitude": "1", "longitude": 2}},
            {"title": "t", "location": {"latitude": 1}},
            {"title": "t", "photoUri": 5},
        ],
    )
    def test_invalid_todo_shape(self, payload):
        with pytest.raises(ValidationError):
            parse_body(TodoCreateRequest, payload)


class TestExtractTodoPatch:
    def test_keeps_correctly_typed_fields(self):
        changes = extract_todo_patch(
            {
                "title": "new",
                "completed": True,
                "location": {"latitude": 1.0, "longitude": 2.0},
                "photoUri": "file://p.jpg",
            }
        )
        assert set(changes) == {"title", "completed", "location", "photo_uri"}

    def test_drops_wrong_types(self):
        changes = extract_todo_patch(
            {"title": 5, "completed": "true", "location": "here", "photoUri": None}
        )
        assert changes == {}

    def test_drops_empty_title_and_bad_location(self):
        assert extract_todo_patch({"title": "", "location": {"latitude": "x"}}) == {}

    def test_ignores_unknown_and_protected_fields(self):
        assert extract_todo_patch({"id": "9", "userId": "bob", "createdAt": "x"}) == {}

    @pytest.mark.parametrize("body", [None, [], "x", 3])
    def test_non_object_body_is_empty(self, body):
        assert extract_todo_patch(body) == {}


class TestNonFiniteLocation:
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_create_rejects_non_finite(self, value):
        with pytest.raises(ValidationError):
            parse_body(TodoCreateRequest, {"title": "t", "location": {"latitude": value, "longitude": 1}})

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_patch_drops_non_finite(self, value):
        assert extract_todo_patch({"location": {"latitude": 1, "longitude": value}}) == {}

    def test_snake_case_create_field_is_not_accepted(self):
        req = parse_body(TodoCreateRequest, {"title": "t", "photo_uri": "x"})
        assert req.photo_uri is None
