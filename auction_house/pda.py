from typing import Union

from solders.pubkey import Pubkey

from .errors import InvalidAddressError
from .settings import AUCTION_HOUSE_PROGRAM_ID as _AH_PROGRAM, TOKEN_METADATA_PROGRAM_ID as _TM_PROGRAM, get_settings

AUCTION_HOUSE_PROGRAM_ID = Pubkey.from_string(_AH_PROGRAM)
TOKEN_METADATA_PROGRAM_ID = Pubkey.from_string(_TM_PROGRAM)
TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string("ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL")

AddressLike = Union[Pubkey, str, bytes]


def to_pubkey(value: AddressLike) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, (bytes, bytearray)) and len(value) != 32:
        # solders panics on short slices instead of raising
        raise InvalidAddressError(value, f"expected 32 bytes, got {len(value)}")
    try:
        if isinstance(value, (bytes, bytearray)):
            return Pubkey.from_bytes(bytes(value))
        if isinstance(value, str):
            return Pubkey.from_string(value.strip())
    except Exception as exc:  # noqa: BLE001
        raise InvalidAddressError(value, str(exc)) from exc
    raise InvalidAddressError(value, f"unsupported type {type(value).__name__}")


def auction_house_program_id() -> Pubkey:
    """Auction House program, read from the ``AUCTION_HOUSE_PROGRAM_ID`` setting."""
    return to_pubkey(get_settings().auction_house_program_id)


def find_metadata_pda(mint: AddressLike) -> Pubkey:
    mint = to_pubkey(mint)
    return Pubkey.find_program_address(
        [b"metadata", bytes(TOKEN_METADATA_PROGRAM_ID), bytes(mint)], TOKEN_METADATA_PROGRAM_ID
    )[0]


def find_auction_house_pda(creator: AddressLike, treasury_mint: AddressLike) -> Pubkey:
    return Pubkey.find_program_address(
        [b"auction_house", bytes(to_pubkey(creator)), bytes(to_pubkey(treasury_mint))],
        auction_house_program_id(),
    )[0]


def find_listing_receipt_pda(trade_state: AddressLike) -> Pubkey:
    return Pubkey.find_program_address(
        [b"listing_receipt", bytes(to_pubkey(trade_state))], auction_house_program_id()
    )[0]


def find_associated_token_account(owner: AddressLike, mint: AddressLike) -> Pubkey:
    return Pubkey.find_program_address(
        [bytes(to_pubkey(owner)), bytes(TOKEN_PROGRAM_ID), bytes(to_pubkey(mint))],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )[0]
