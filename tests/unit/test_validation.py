"""Tests for generation request validation."""

import pytest

from viralgif_engine.common.exceptions import ValidationError
from viralgif_engine.generation.validation import validate_request


class TestValidateRequest:
    @pytest.mark.parametrize("length", [10, 11, 499, 500])
    def test_accepted_lengths(self, length):
        request = validate_request("saas", "x" * length)
        assert len(request.description) == length

    @pytest.mark.parametrize("length,fragment", [(9, "at least 10"), (501, "at most 500")])
    def test_rejected_lengths(self, length, fragment):
        with pytest.raises(ValidationError, match=fragment):
            validate_request("saas", "x" * length)

    @pytest.mark.parametrize("industry,description", [
        (None, "a long enough description"),
        ("saas", None),
        ("", "a long enough description"),
        ("   ", "a long enough description"),
        ("saas", "           "),
    ])
    def test_missing_fields(self, industry, description):
        with pytest.raises(ValidationError, match="Missing required fields"):
            validate_request(industry, description)

    def test_non_string_fields(self):
        with pytest.raises(ValidationError, match="must be strings"):
            validate_request(["saas"], "a long enough description")
        with pytest.raises(ValidationError):
            validate_request("saas", 12345678901)

    def test_industry_is_stripped(self):
        assert validate_request("  fitness ", "a long enough description").industry == "fitness"

    def test_error_is_client_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_request("saas", "short")
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "VALIDATION_ERROR"
