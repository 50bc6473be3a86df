"""Tests for phone, plate and VIN format checks."""

import pytest

from garage_crm.core.validation import (
    is_valid_phone,
    is_valid_plate,
    is_valid_vin,
    phone_error,
    plate_error,
    vin_error,
)


class TestPhone:
    @pytest.mark.parametrize("phone", ["+7-900-111-22-33", "89001112233", "+7 (900) 111-22-33"])
    def test_valid(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize("phone", ["123", "", None, "9001112233", "+1 900 111 22 33", "790011122334"])
    def test_invalid(self, phone):
        assert not is_valid_phone(phone)

    def test_error_message(self):
        assert phone_error("+79001112233") == ""
        assert "123" in phone_error("123")


class TestPlate:
    @pytest.mark.parametrize("plate", ["А123АА77", "а123аа777", "Х 001 ХХ 99"])
    def test_valid(self, plate):
        assert is_valid_plate(plate)

    @pytest.mark.parametrize("plate", [
        "A123AA77",   # Latin letters
        "Б123АА77",   # letter outside the allowed set
        "А12АА77",    # too few digits
        "А123АА7",    # region too short
        "А123АА7777",
        "",
    ])
    def test_invalid(self, plate):
        assert not is_valid_plate(plate)

    def test_error_message(self):
        assert plate_error("А123АА77") == ""
        assert plate_error("XYZ") != ""


class TestVin:
    def test_empty_is_valid(self):
        assert is_valid_vin("")
        assert is_valid_vin(None)

    def test_valid(self):
        assert is_valid_vin("WF0XXXGCDX1234567")

    def test_lowercase_and_spaces_allowed(self):
        assert is_valid_vin("wf0xxx gcdx 1234567")

    def test_sixteen_characters(self):
        assert not is_valid_vin("WF0XXXGCDX123456")

    @pytest.mark.parametrize("letter", ["I", "O", "Q"])
    def test_forbidden_letters(self, letter):
        assert not is_valid_vin("WF0XXXGCDX123456" + letter)

    def test_error_messages(self):
        assert vin_error("WF0XXXGCDX1234567") == ""
        assert "17" in vin_error("WF0XXXGCDX123456")
        assert "I, O or Q" in vin_error("WF0XXXGCDX123456O")
        assert "Latin" in vin_error("WF0XXXGCDX12345-7")
