from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from .models import AuctionHouse, Listing


class AuctionHouseView(BaseModel):
    address: str
    creator: str
    authority: str
    treasury_mint: str
    seller_fee_basis_points: int
    requires_sign_off: bool
    can_change_sale_price: bool
    is_native: bool


class ListingAssetView(BaseModel):
    mint: str
    metadata: str
    name: str
    symbol: str
    uri: str
    decimals: int
    token_account: str
    token_amount: int


class ListingView(BaseModel):
    receipt: str
    trade_state: str
    auction_house: str
    seller: str
    metadata: str
    purchase_receipt: Optional[str] = None
    price: int
    tokens: int
    created_at: datetime
    canceled_at: Optional[datetime] = None
    asset: Optional[ListingAssetView] = None


def auction_house_view(auction_house: AuctionHouse) -> AuctionHouseView:
    return AuctionHouseView(
        address=str(auction_house.address),
        creator=str(auction_house.creator),
        authority=str(auction_house.authority),
        treasury_mint=str(auction_house.treasury_mint),
        seller_fee_basis_points=auction_house.seller_fee_basis_points,
        requires_sign_off=auction_house.requires_sign_off,
        can_change_sale_price=auction_house.can_change_sale_price,
        is_native=auction_house.is_native,
    )


def listing_view(listing: Listing) -> ListingView:
    asset = None
    if listing.asset is not None:
        asset = ListingAssetView(
            mint=str(listing.asset.mint_address),
            metadata=str(listing.asset.metadata_address),
            name=listing.asset.name,
            symbol=listing.asset.symbol,
            uri=listing.asset.uri,
            decimals=listing.asset.decimals,
            token_account=str(listing.asset.token_address),
            token_amount=listing.asset.token_amount,
        )
    return ListingView(
        receipt=str(listing.receipt_address),
        trade_state=str(listing.trade_state_address),
        auction_house=str(listing.auction_house.address),
        seller=str(listing.seller_address),
        metadata=str(listing.metadata_address),
        purchase_receipt=str(listing.purchase_receipt_address) if listing.purchase_receipt_address else None,
        price=listing.price,
        tokens=listing.tokens,
        created_at=listing.created_at,
        canceled_at=listing.canceled_at,
        asset=asset,
    )


