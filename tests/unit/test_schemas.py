"""Unit tests for registration request validation."""

import pytest
from pydantic import ValidationError

from src.schemas.auth import PhoneSpec, SignUpRequest
from src.schemas.common import ErrorEnvelope


def _request(**overrides) -> dict:
    data = {"name": "Test", "email": "a@b.com", "password": "Abcdefg12"}
    data.update(overrides)
    return data


class TestPasswordPolicy:
    @pytest.mark.parametrize(
        "password",
        [
            "Abcdefg12",     # 9 chars, 1 upper, 2 digits
            "abcdeF12",      # minimum length
            "a1bcdefghiJ2",  # maximum length
            "12Abcdefg",     # digits first
        ],
    )
    def test_accepts_valid(self, password: str):
        assert SignUpRequest(**_request(password=password)).password == password

    @pytest.mark.parametrize(
        "password, reason",
        [
            ("Abcde12", "between 8 and 12"),
            ("Abcdefghij123", "between 8 and 12"),
            ("abcdefg12", "exactly one uppercase"),
            ("ABcdefg12", "exactly one uppercase"),
            ("Abcdefgh1", "exactly two digits"),
            ("Abcdef123", "exactly two digits"),
            ("Abcdef12!", "letters and digits"),
            ("Abcdéf12x", "letters and digits"),
        ],
    )
    def test_rejects_invalid(self, password: str, reason: str):
        with pytest.raises(ValidationError) as excinfo:
            SignUpRequest(**_request(password=password))

        assert reason in str(excinfo.value)


class TestEmailFormat:
    @pytest.mark.parametrize("email", ["a@b.com", "first.last+tag@mail.example.org"])
    def test_accepts_valid(self, email: str):
        assert SignUpRequest(**_request(email=email)).email == email

    @pytest.mark.parametrize("email", ["", "plain", "a@b", "a@b.c", "a b@c.com", "@b.com", "a@b.com\n", " a@b.com"])
    def test_rejects_invalid(self, email: str):
        with pytest.raises(ValidationError):
            SignUpRequest(**_request(email=email))

    def test_email_required(self):
        data = _request()
        del data["email"]

        with pytest.raises(ValidationError):
            SignUpRequest(**data)


class TestPhoneSpec:
    def test_accepts_legacy_field_names(self):
        phone = PhoneSpec.model_validate({"number": 1, "citycode": 2, "countrycode": "57"})

        assert phone.city_code == 2
        assert phone.country_code == "57"

    def test_rejects_negative_number(self):
        with pytest.raises(ValidationError):
            PhoneSpec(number=-1, city_code=1, country_code="57")


class TestErrorEnvelope:
    def test_single_item(self):
        envelope = ErrorEnvelope.of(409, "User already exists")

        dumped = envelope.model_dump(mode="json")
        assert len(dumped["error"]) == 1
        item = dumped["error"][0]
        assert item["code"] == 409
        assert item["detail"] == "User already exists"
        assert item["timestamp"]
