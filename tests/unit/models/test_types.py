"""Tests for shared type validators."""

import pytest
from pydantic import TypeAdapter, ValidationError

from simpleswap.models.api import SwapRequest
from simpleswap.models.types import (
    UINT256_MAX,
    Uint256,
    is_valid_address,
    normalize_address,
    validate_uint256,
)


class TestValidateUint256:
    def test_accepts_int_and_string(self):
        assert validate_uint256(42) == "42"
        assert validate_uint256("42") == "42"
        assert validate_uint256(UINT256_MAX) == str(UINT256_MAX)

    @pytest.mark.parametrize("value", [-1, "-1", UINT256_MAX + 1, "1.5", "abc", True, 1.0])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            validate_uint256(value)

    def test_annotated_type(self):
        assert TypeAdapter(Uint256).validate_python(7) == "7"
        with pytest.raises(ValidationError):
            TypeAdapter(Uint256).validate_python("-7")


class TestAddresses:
    def test_normalize(self):
        assert normalize_address("0xABCDEF" + "0" * 34) == "0xabcdef" + "0" * 34
        assert normalize_address("ab" * 20) == "0x" + "ab" * 20

    def test_normalize_validates_on_request(self):
        with pytest.raises(ValueError):
            normalize_address("0x1234", validate=True)

    def test_is_valid_address(self):
        assert is_valid_address("0x" + "f" * 40)
        assert not is_valid_address("0x" + "g" * 40)
        assert not is_valid_address("0x" + "f" * 39)


class TestRequestModels:
    def test_accepts_aliases_and_field_names(self):
        address = "0x" + "1" * 40
        by_alias = SwapRequest.model_validate(
            {
                "sender": address,
                "amountIn": "5",
                "amountOutMin": 0,
                "path": [address, address],
                "to": address,
                "deadline": 1,
            }
        )
        by_name = SwapRequest(
            sender=address,
            amount_in="5",
            amount_out_min="0",
            path=[address, address],
            to=address,
            deadline=1,
        )
        assert by_alias == by_name
        assert by_alias.amount_out_min == "0"
