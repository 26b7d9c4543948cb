"""
Unit tests for the standard claims extractor.
"""

import pytest

from signed_token import (
    ClaimTypeError,
    FormatError,
    JsonObject,
    parse,
    parse_standard_header,
    parse_standard_payload,
)

from helpers import SAMPLE_TOKEN


class TestStandardHeader:
    """Test cases for parse_standard_header."""

    def test_all_fields(self):
        """Test extraction of every registered header parameter."""
        header = parse_standard_header(JsonObject.from_mapping({
            "alg": "RS256",
            "typ": "JWT",
            "cty": "JWT",
            "kid": "rsa-1",
            "x5c": ["MIIB", "MIIC"],
            "x5u": "https://idp.example.com/cert",
            "crit": ["exp"],
            "custom": {"ignored": True},
        }))

        # Assertions
        assert header.alg == "RS256"
        assert header.typ == "JWT"
        assert header.cty == "JWT"
        assert header.kid == "rsa-1"
        assert header.x5c == ("MIIB", "MIIC")
        assert header.x5u == "https://idp.example.com/cert"
        assert header.crit == ("exp",)

    def test_only_alg_required(self):
        """Test that absent optional fields are None."""
        header = parse_standard_header(parse(SAMPLE_TOKEN).header)

        assert header.alg == "HS256"
        assert header.typ == "JWT"
        assert header.kid is None
        assert header.x5c is None

    def test_missing_alg(self):
        """Test that a header without alg is a hard error."""
        with pytest.raises(FormatError):
            parse_standard_header(JsonObject([("typ", "JWT")]))

    @pytest.mark.parametrize("name,value", [
        ("alg", 1),
        ("typ", ["JWT"]),
        ("kid", None),
        ("x5c", "MIIB"),
        ("x5c", ["MIIB", 2]),
        ("crit", [True]),
    ])
    def test_wrong_shape_names_field(self, name, value):
        """Test that a present field of the wrong shape is reported by name."""
        fields = JsonObject([("alg", "HS256"), (name, value)]) if name != "alg" else JsonObject([("alg", value)])

        with pytest.raises(ClaimTypeError) as exc_info:
            parse_standard_header(fields)

        assert exc_info.value.claim == name
        assert exc_info.value.code == "CLAIM_TYPE_ERROR"


class TestStandardPayload:
    """Test cases for parse_standard_payload."""

    def test_all_fields(self):
        """Test extraction of every registered claim."""
        payload = parse_standard_payload(JsonObject.from_mapping({
            "iss": "https://idp.example.com/",
            "sub": "user1",
            "aud": ["a", "b"],
            "exp": 1700000000,
            "nbf": 1699999999.5,
            "iat": 1699999000,
            "jti": "abc",
        }))

        # Assertions
        assert payload.iss == "https://idp.example.com/"
        assert payload.sub == "user1"
        assert payload.aud == ("a", "b")
        assert payload.audiences == frozenset({"a", "b"})
        assert payload.exp == 1700000000.0
        assert isinstance(payload.exp, float)
        assert payload.nbf == 1699999999.5
        assert payload.iat == 1699999000.0
        assert payload.jti == "abc"

    def test_empty_payload(self):
        """Test that every claim is optional."""
        payload = parse_standard_payload(JsonObject())

        assert payload.iss is None
        assert payload.exp is None
        assert payload.audiences == frozenset()

    def test_single_audience_string(self):
        """Test that aud may be a single string."""
        payload = parse_standard_payload(JsonObject([("aud", "api")]))

        assert payload.aud == "api"
        assert payload.audiences == frozenset({"api"})

    def test_null_audience_reads_as_absent(self):
        """Test that aud: null is treated as no audience."""
        assert parse_standard_payload(JsonObject([("aud", None)])).aud is None

    @pytest.mark.parametrize("name,value", [
        ("exp", True),
        ("exp", "1700000000"),
        ("nbf", None),
        ("iat", [1]),
        ("exp", 10 ** 400),
        ("aud", 5),
        ("aud", ["a", 1]),
        ("iss", 1),
        ("sub", {"id": 1}),
        ("jti", 7),
    ])
    def test_wrong_shape_names_field(self, name, value):
        """Test that a present claim of the wrong shape is reported by name."""
        with pytest.raises(ClaimTypeError) as exc_info:
            parse_standard_payload(JsonObject.from_mapping({name: value}))

        assert exc_info.value.claim == name
