from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Optional

from solders.pubkey import Pubkey

from .accounts import AuctionHouseAccount, ListingReceiptAccount

WRAPPED_SOL_MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")


def _timestamp(value: Optional[int]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)


@dataclass(frozen=True)
class AuctionHouse:
    address: Pubkey
    creator: Pubkey
    authority: Pubkey
    treasury_mint: Pubkey
    fee_account: Pubkey
    treasury_account: Pubkey
    fee_withdrawal_destination: Pubkey
    treasury_withdrawal_destination: Pubkey
    seller_fee_basis_points: int
    requires_sign_off: bool
    can_change_sale_price: bool
    has_auctioneer: bool = False

    @property
    def is_native(self) -> bool:
        return self.treasury_mint == WRAPPED_SOL_MINT


def to_auction_house(account: AuctionHouseAccount) -> AuctionHouse:
    return AuctionHouse(
        address=account.address,
        creator=account.creator,
        authority=account.authority,
        treasury_mint=account.treasury_mint,
        fee_account=account.auction_house_fee_account,
        treasury_account=account.auction_house_treasury,
        fee_withdrawal_destination=account.fee_withdrawal_destination,
        treasury_withdrawal_destination=account.treasury_withdrawal_destination,
        seller_fee_basis_points=account.seller_fee_basis_points,
        requires_sign_off=account.requires_sign_off,
        can_change_sale_price=account.can_change_sale_price,
        has_auctioneer=account.has_auctioneer,
    )


@dataclass(frozen=True)
class LazyListing:
    """Listing identity taken straight from its receipt, not yet hydrated."""

    auction_house: AuctionHouse
    trade_state_address: Pubkey
    bookkeeper_address: Pubkey
    seller_address: Pubkey
    metadata_address: Pubkey
    receipt_address: Pubkey
    purchase_receipt_address: Optional[Pubkey]
    price: int
    tokens: int
    created_at: datetime
    canceled_at: Optional[datetime]

    @property
    def is_canceled(self) -> bool:
        return self.canceled_at is not None

    @property
    def is_purchased(self) -> bool:
        return self.purchase_receipt_address is not None


@dataclass(frozen=True)
class ListingAsset:
    mint_address: Pubkey
    metadata_address: Pubkey
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    decimals: int
    token_address: Pubkey
    token_amount: int


@dataclass(frozen=True)
class Listing(LazyListing):
    asset: Optional[ListingAsset] = None


def to_lazy_listing(account: ListingReceiptAccount, auction_house: AuctionHouse) -> LazyListing:
    return LazyListing(
        auction_house=auction_house,
        trade_state_address=account.trade_state,
        bookkeeper_address=account.bookkeeper,
        seller_address=account.seller,
        metadata_address=account.metadata,
        receipt_address=account.address,
        purchase_receipt_address=account.purchase_receipt,
        price=account.price,
        tokens=account.token_size,
        created_at=_timestamp(account.created_at),
        canceled_at=_timestamp(account.canceled_at),
    )


def to_listing(lazy_listing: LazyListing, asset: ListingAsset) -> Listing:
    values = {f.name: getattr(lazy_listing, f.name) for f in fields(LazyListing)}
    return Listing(asset=asset, **values)
