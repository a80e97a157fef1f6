"""On-chain account layouts and decoders for the Auction House reads.

Anchor accounts start with an 8-byte discriminator,
``sha256("account:<Name>")[:8]``, followed by the Borsh-encoded body.
Token Metadata and SPL accounts have no discriminator.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import List, Optional

from borsh_construct import Bool, CStruct, I64, Option, String, U16, U64, U8, Vec
from construct import ConstructError
from solders.pubkey import Pubkey
from spl.token._layouts import ACCOUNT_LAYOUT, MINT_LAYOUT

from .errors import DecodeError

DISCRIMINATOR_SIZE = 8
PUBLIC_KEY_SIZE = 32

PublicKeyLayout = U8[PUBLIC_KEY_SIZE]


def account_discriminator(name: str) -> bytes:
    return hashlib.sha256(f"account:{name}".encode()).digest()[:DISCRIMINATOR_SIZE]


LISTING_RECEIPT_DISCRIMINATOR = account_discriminator("ListingReceipt")
AUCTION_HOUSE_DISCRIMINATOR = account_discriminator("AuctionHouse")

ListingReceiptLayout = CStruct(
    "trade_state" / PublicKeyLayout,
    "bookkeeper" / PublicKeyLayout,
    "auction_house" / PublicKeyLayout,
    "seller" / PublicKeyLayout,
    "metadata" / PublicKeyLayout,
    "purchase_receipt" / Option(PublicKeyLayout),
    "price" / U64,
    "token_size" / U64,
    "bump" / U8,
    "trade_state_bump" / U8,
    "created_at" / I64,
    "canceled_at" / Option(I64),
)

# Offsets into the full account data (discriminator included).
LISTING_RECEIPT_AUCTION_HOUSE_OFFSET = DISCRIMINATOR_SIZE + PUBLIC_KEY_SIZE * 2
LISTING_RECEIPT_SELLER_OFFSET = DISCRIMINATOR_SIZE + PUBLIC_KEY_SIZE * 3
LISTING_RECEIPT_METADATA_OFFSET = DISCRIMINATOR_SIZE + PUBLIC_KEY_SIZE * 4

# Latest second datetime can represent (9999-12-31T23:59:59Z).
MAX_UNIX_TIMESTAMP = 253_402_300_799

AuctionHouseLayout = CStruct(
    "auction_house_fee_account" / PublicKeyLayout,
    "auction_house_treasury" / PublicKeyLayout,
    "treasury_withdrawal_destination" / PublicKeyLayout,
    "fee_withdrawal_destination" / PublicKeyLayout,
    "treasury_mint" / PublicKeyLayout,
    "authority" / PublicKeyLayout,
    "creator" / PublicKeyLayout,
    "bump" / U8,
    "treasury_bump" / U8,
    "fee_payer_bump" / U8,
    "seller_fee_basis_points" / U16,
    "requires_sign_off" / Bool,
    "can_change_sale_price" / Bool,
    "escrow_payment_bump" / U8,
    "has_auctioneer" / Bool,
    "auctioneer_address" / PublicKeyLayout,
)

CreatorLayout = CStruct(
    "address" / PublicKeyLayout,
    "verified" / Bool,
    "share" / U8,
)

MetadataLayout = CStruct(
    "key" / U8,
    "update_authority" / PublicKeyLayout,
    "mint" / PublicKeyLayout,
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "seller_fee_basis_points" / U16,
    "creators" / Option(Vec(CreatorLayout)),
    "primary_sale_happened" / Bool,
    "is_mutable" / Bool,
)
METADATA_KEY_V1 = 4

_DECODE_ERRORS = (ConstructError, UnicodeDecodeError, ValueError)


@dataclass(frozen=True)
class ListingReceiptAccount:
    address: Pubkey
    trade_state: Pubkey
    bookkeeper: Pubkey
    auction_house: Pubkey
    seller: Pubkey
    metadata: Pubkey
    purchase_receipt: Optional[Pubkey]
    price: int
    token_size: int
    bump: int
    trade_state_bump: int
    created_at: int
    canceled_at: Optional[int]


@dataclass(frozen=True)
class AuctionHouseAccount:
    address: Pubkey
    auction_house_fee_account: Pubkey
    auction_house_treasury: Pubkey
    treasury_withdrawal_destination: Pubkey
    fee_withdrawal_destination: Pubkey
    treasury_mint: Pubkey
    authority: Pubkey
    creator: Pubkey
    bump: int
    treasury_bump: int
    fee_payer_bump: int
    seller_fee_basis_points: int
    requires_sign_off: bool
    can_change_sale_price: bool
    escrow_payment_bump: int
    has_auctioneer: bool
    auctioneer_address: Pubkey


@dataclass(frozen=True)
class Creator:
    address: Pubkey
    verified: bool
    share: int


@dataclass(frozen=True)
class MetadataAccount:
    address: Pubkey
    update_authority: Pubkey
    mint: Pubkey
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: List[Creator]
    primary_sale_happened: bool
    is_mutable: bool


@dataclass(frozen=True)
class TokenAccount:
    address: Pubkey
    mint: Pubkey
    owner: Pubkey
    amount: int


@dataclass(frozen=True)
class MintAccount:
    address: Pubkey
    supply: int
    decimals: int
    mint_authority: Optional[Pubkey]


def _pubkey(raw) -> Pubkey:
    return Pubkey.from_bytes(bytes(raw))


def _optional_pubkey(raw) -> Optional[Pubkey]:
    return None if raw is None else _pubkey(raw)


def _strip(value: str) -> str:
    # Metadata strings are zero-padded to a fixed capacity.
    return value.rstrip("\x00")


def _body(account_type: str, address: Pubkey, data: bytes, discriminator: bytes) -> bytes:
    if len(data) < DISCRIMINATOR_SIZE:
        raise DecodeError(account_type, address, f"buffer too short ({len(data)} bytes)")
    if data[:DISCRIMINATOR_SIZE] != discriminator:
        raise DecodeError(account_type, address, f"unexpected discriminator {data[:DISCRIMINATOR_SIZE].hex()}")
    return data[DISCRIMINATOR_SIZE:]


def decode_listing_receipt(address: Pubkey, data: bytes) -> ListingReceiptAccount:
    body = _body("ListingReceipt", address, bytes(data), LISTING_RECEIPT_DISCRIMINATOR)
    try:
        parsed = ListingReceiptLayout.parse(body)
    except _DECODE_ERRORS as exc:
        raise DecodeError("ListingReceipt", address, str(exc)) from exc
    for field in ("created_at", "canceled_at"):
        value = getattr(parsed, field)
        if value is not None and not 0 <= value <= MAX_UNIX_TIMESTAMP:
            raise DecodeError("ListingReceipt", address, f"{field} out of range: {value}")
    return ListingReceiptAccount(
        address=address,
        trade_state=_pubkey(parsed.trade_state),
        bookkeeper=_pubkey(parsed.bookkeeper),
        auction_house=_pubkey(parsed.auction_house),
        seller=_pubkey(parsed.seller),
        metadata=_pubkey(parsed.metadata),
        purchase_receipt=_optional_pubkey(parsed.purchase_receipt),
        price=parsed.price,
        token_size=parsed.token_size,
        bump=parsed.bump,
        trade_state_bump=parsed.trade_state_bump,
        created_at=parsed.created_at,
        canceled_at=parsed.canceled_at,
    )


def decode_auction_house(address: Pubkey, data: bytes) -> AuctionHouseAccount:
    body = _body("AuctionHouse", address, bytes(data), AUCTION_HOUSE_DISCRIMINATOR)
    try:
        parsed = AuctionHouseLayout.parse(body)
    except _DECODE_ERRORS as exc:
        raise DecodeError("AuctionHouse", address, str(exc)) from exc
    return AuctionHouseAccount(
        address=address,
        auction_house_fee_account=_pubkey(parsed.auction_house_fee_account),
        auction_house_treasury=_pubkey(parsed.auction_house_treasury),
        treasury_withdrawal_destination=_pubkey(parsed.treasury_withdrawal_destination),
        fee_withdrawal_destination=_pubkey(parsed.fee_withdrawal_destination),
        treasury_mint=_pubkey(parsed.treasury_mint),
        authority=_pubkey(parsed.authority),
        creator=_pubkey(parsed.creator),
        bump=parsed.bump,
        treasury_bump=parsed.treasury_bump,
        fee_payer_bump=parsed.fee_payer_bump,
        seller_fee_basis_points=parsed.seller_fee_basis_points,
        requires_sign_off=parsed.requires_sign_off,
        can_change_sale_price=parsed.can_change_sale_price,
        escrow_payment_bump=parsed.escrow_payment_bump,
        has_auctioneer=parsed.has_auctioneer,
        auctioneer_address=_pubkey(parsed.auctioneer_address),
    )


def decode_metadata(address: Pubkey, data: bytes) -> MetadataAccount:
    try:
        parsed = MetadataLayout.parse(bytes(data))
    except _DECODE_ERRORS as exc:
        raise DecodeError("Metadata", address, str(exc)) from exc
    if parsed.key != METADATA_KEY_V1:
        raise DecodeError("Metadata", address, f"unexpected key {parsed.key}")
    creators = [
        Creator(address=_pubkey(c.address), verified=c.verified, share=c.share)
        for c in (parsed.creators or [])
    ]
    return MetadataAccount(
        address=address,
        update_authority=_pubkey(parsed.update_authority),
        mint=_pubkey(parsed.mint),
        name=_strip(parsed.name),
        symbol=_strip(parsed.symbol),
        uri=_strip(parsed.uri),
        seller_fee_basis_points=parsed.seller_fee_basis_points,
        creators=creators,
        primary_sale_happened=parsed.primary_sale_happened,
        is_mutable=parsed.is_mutable,
    )


def decode_token_account(address: Pubkey, data: bytes) -> TokenAccount:
    data = bytes(data)
    if len(data) < ACCOUNT_LAYOUT.sizeof():
        raise DecodeError("Token", address, f"account too short: {len(data)} bytes")
    try:
        parsed = ACCOUNT_LAYOUT.parse(data)
    except _DECODE_ERRORS as exc:
        raise DecodeError("Token", address, str(exc)) from exc
    return TokenAccount(
        address=address,
        mint=_pubkey(parsed.mint),
        owner=_pubkey(parsed.owner),
        amount=parsed.amount,
    )


def decode_mint(address: Pubkey, data: bytes) -> MintAccount:
    data = bytes(data)
    if len(data) < MINT_LAYOUT.sizeof():
        raise DecodeError("Mint", address, f"account too short: {len(data)} bytes")
    try:
        parsed = MINT_LAYOUT.parse(data)
    except _DECODE_ERRORS as exc:
        raise DecodeError("Mint", address, str(exc)) from exc
    return MintAccount(
        address=address,
        supply=parsed.supply,
        decimals=parsed.decimals,
        mint_authority=_pubkey(parsed.mint_authority) if parsed.mint_authority_option else None,
    )
