"""
Unit tests for shielded_notes.core.token — token validation and token IDs.
"""

import pytest

from shielded_notes.core.token import (
    TokenData,
    TokenType,
    check_token_data,
    get_token_id,
    validate_token_data,
)
from shielded_notes.errors import InvalidTokenData

ADDRESS = "0x" + "1f" * 20
OTHER_ADDRESS = "0x" + "2e" * 20


def _enc(n: int) -> bytes:
    return n.to_bytes(32, "big")


# ==============================================================================
# Validation
# ==============================================================================


class TestValidateTokenData:

    @pytest.mark.parametrize("token_type", list(TokenType))
    def test_all_types_valid(self, token_type):
        assert validate_token_data(TokenData(token_type, ADDRESS, 5)) is True

    def test_plain_int_type_accepted(self):
        assert validate_token_data(TokenData(2, ADDRESS, 5)) is True

    def test_unknown_type(self):
        assert validate_token_data(TokenData(3, ADDRESS)) is False

    def test_bool_type_rejected(self):
        assert validate_token_data(TokenData(True, ADDRESS)) is False

    def test_bad_address(self):
        assert validate_token_data(TokenData(TokenType.FUNGIBLE, "0x1234")) is False

    def test_sub_id_bounds(self):
        assert validate_token_data(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 0)) is True
        assert validate_token_data(
            TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 2**256 - 1)
        ) is True
        assert validate_token_data(
            TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 2**256)
        ) is False
        assert validate_token_data(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, -1)) is False

    @pytest.mark.parametrize("token, field", [
        (TokenData(7, ADDRESS), "token_type"),
        (TokenData(TokenType.FUNGIBLE, "not-an-address"), "token_address"),
        (TokenData(TokenType.ERC1155, ADDRESS, -5), "token_sub_id"),
    ])
    def test_check_names_failing_field(self, token, field):
        with pytest.raises(InvalidTokenData) as exc:
            check_token_data(token)
        assert exc.value.field == field

    def test_erc_aliases(self):
        assert TokenType.ERC20 is TokenType.FUNGIBLE
        assert TokenType.ERC721 is TokenType.NON_FUNGIBLE_UNIQUE
        assert TokenType.ERC1155 is TokenType.NON_FUNGIBLE_SEMI_FUNGIBLE


# ==============================================================================
# Token IDs
# ==============================================================================


class TestFungibleTokenId:

    def test_padded_address(self, reference):
        token = TokenData(TokenType.FUNGIBLE, ADDRESS)
        assert get_token_id(token, reference) == b"\x00" * 12 + b"\x1f" * 20

    def test_independent_of_sub_id(self, reference):
        a = get_token_id(TokenData(TokenType.FUNGIBLE, ADDRESS, 0), reference)
        b = get_token_id(TokenData(TokenType.FUNGIBLE, ADDRESS, 12345), reference)
        assert a == b

    def test_no_hashing(self, arith):
        get_token_id(TokenData(TokenType.FUNGIBLE, ADDRESS), arith)
        assert arith.calls == []


class TestNonFungibleTokenId:

    def test_golden_arithmetic(self, arith):
        """hash(pad32(addr), sub_id) = 1*addr + 2*sub_id under the arithmetic provider."""
        address = "0x" + "00" * 19 + "0a"
        token = TokenData(TokenType.NON_FUNGIBLE_UNIQUE, address, 4)
        assert get_token_id(token, arith) == _enc(10 + 2 * 4)
        assert arith.calls == [("poseidon", 2)]

    def test_deterministic(self, reference):
        token = TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 42)
        assert get_token_id(token, reference) == get_token_id(token, reference)

    def test_width(self, reference):
        token = TokenData(TokenType.NON_FUNGIBLE_SEMI_FUNGIBLE, ADDRESS, 42)
        assert len(get_token_id(token, reference)) == 32

    def test_sub_id_changes_output(self, reference):
        a = get_token_id(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 1), reference)
        b = get_token_id(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 2), reference)
        assert a != b

    def test_address_changes_output(self, reference):
        a = get_token_id(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 1), reference)
        b = get_token_id(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, OTHER_ADDRESS, 1), reference)
        assert a != b

    def test_unique_and_semi_fungible_share_derivation(self, reference):
        a = get_token_id(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 9), reference)
        b = get_token_id(TokenData(TokenType.NON_FUNGIBLE_SEMI_FUNGIBLE, ADDRESS, 9), reference)
        assert a == b

    def test_differs_from_fungible(self, reference):
        a = get_token_id(TokenData(TokenType.FUNGIBLE, ADDRESS, 0), reference)
        b = get_token_id(TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 0), reference)
        assert a != b

    def test_invalid_token_rejected(self, reference):
        with pytest.raises(InvalidTokenData):
            get_token_id(TokenData(9, ADDRESS), reference)

    def test_default_primitives(self, reference):
        token = TokenData(TokenType.NON_FUNGIBLE_UNIQUE, ADDRESS, 3)
        assert get_token_id(token) == get_token_id(token, reference)
