import pytest
from solders.pubkey import Pubkey

from auction_house.errors import InvalidAddressError
from auction_house.pda import (
    AUCTION_HOUSE_PROGRAM_ID,
    TOKEN_METADATA_PROGRAM_ID,
    auction_house_program_id,
    find_associated_token_account,
    find_auction_house_pda,
    find_listing_receipt_pda,
    find_metadata_pda,
    to_pubkey,
)


class TestToPubkey:
    def test_passes_pubkey_through(self):
        key = Pubkey.new_unique()
        assert to_pubkey(key) is key

    def test_parses_base58(self):
        key = Pubkey.new_unique()
        assert to_pubkey(str(key)) == key
        assert to_pubkey(f"  {key} ") == key

    def test_parses_raw_bytes(self):
        key = Pubkey.new_unique()
        assert to_pubkey(bytes(key)) == key

    @pytest.mark.parametrize("value", ["not-a-key", "", b"\x01\x02"])
    def test_rejects_malformed(self, value):
        with pytest.raises(InvalidAddressError):
            to_pubkey(value)

    @pytest.mark.parametrize("size", [0, 31, 33, 64])
    def test_rejects_wrong_length_bytes(self, size):
        with pytest.raises(InvalidAddressError, match=f"got {size}"):
            to_pubkey(b"\x07" * size)

    def test_accepts_bytearray(self):
        key = Pubkey.new_unique()
        assert to_pubkey(bytearray(bytes(key))) == key

    def test_rejects_unsupported_type(self):
        with pytest.raises(InvalidAddressError):
            to_pubkey(42)


class TestProgramIds:
    def test_token_metadata_program(self):
        assert str(TOKEN_METADATA_PROGRAM_ID) == "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bBuk9Nds"

    def test_auction_house_program(self):
        assert str(AUCTION_HOUSE_PROGRAM_ID) == "hausS13jsjafwWwGqZTUQRmWyvyxn9EQpqMwV1PBBmk"
        assert auction_house_program_id() == AUCTION_HOUSE_PROGRAM_ID

    def test_auction_house_program_from_settings(self, auction_house_program):
        assert auction_house_program_id() == auction_house_program
        trade_state = Pubkey.new_unique()
        expected = Pubkey.find_program_address([b"listing_receipt", bytes(trade_state)], auction_house_program)[0]
        assert find_listing_receipt_pda(trade_state) == expected


class TestFindMetadataPda:
    def test_matches_token_metadata_seeds(self):
        mint = Pubkey.new_unique()
        expected, _bump = Pubkey.find_program_address(
            [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)], TOKEN_METADATA_PROGRAM_ID
        )
        assert find_metadata_pda(mint) == expected

    def test_deterministic_and_distinct_from_mint(self):
        mint = Pubkey.new_unique()
        assert find_metadata_pda(mint) == find_metadata_pda(str(mint))
        assert find_metadata_pda(mint) != mint

    def test_off_curve_and_per_mint(self):
        first, second = find_metadata_pda(Pubkey.new_unique()), find_metadata_pda(Pubkey.new_unique())
        assert not first.is_on_curve()
        assert first != second

    def test_invalid_mint(self):
        with pytest.raises(InvalidAddressError):
            find_metadata_pda("definitely not base58 0OIl")


def test_listing_receipt_pda_seeds():
    trade_state = Pubkey.new_unique()
    expected = Pubkey.find_program_address([b"listing_receipt", bytes(trade_state)], AUCTION_HOUSE_PROGRAM_ID)[0]
    assert find_listing_receipt_pda(trade_state) == expected


def test_auction_house_pda_depends_on_mint():
    creator = Pubkey.new_unique()
    assert find_auction_house_pda(creator, Pubkey.new_unique()) != find_auction_house_pda(creator, Pubkey.new_unique())


def test_associated_token_account_is_per_owner():
    mint = Pubkey.new_unique()
    assert find_associated_token_account(Pubkey.new_unique(), mint) != find_associated_token_account(
        Pubkey.new_unique(), mint
    )
