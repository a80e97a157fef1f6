from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment

from .errors import (
    AccountNotFoundError,
    AuctionHouseError,
    DecodeError,
    InvalidAddressError,
    OperationCanceledError,
    QueryExecutionError,
)
from .models import AuctionHouse
from .operations import (
    FindListingsByPublicKeyFieldInput,
    ListingQueryType,
    fetch_auction_house,
    find_listing_by_receipt,
    find_listings_by_public_key_field,
)
from .pda import to_pubkey
from .scope import CancellationScope
from .settings import configure_logging, create_client, get_settings
from .views import AuctionHouseView, ListingView, auction_house_view, listing_view

configure_logging()
logger = logging.getLogger("auction_house")

app = FastAPI(title="Auction House Listings API", version="0.1.0")


@lru_cache(maxsize=1)
def get_client() -> AsyncClient:
    return create_client(get_settings())


def http_error(exc: AuctionHouseError) -> HTTPException:
    if isinstance(exc, InvalidAddressError):
        return HTTPException(status_code=400, detail=exc.message)
    if isinstance(exc, AccountNotFoundError):
        return HTTPException(status_code=404, detail=exc.message)
    if isinstance(exc, DecodeError):
        return HTTPException(status_code=502, detail=exc.message)
    if isinstance(exc, QueryExecutionError):
        return HTTPException(status_code=503, detail=exc.message)
    if isinstance(exc, OperationCanceledError):
        return HTTPException(status_code=499, detail=exc.message)
    return HTTPException(status_code=500, detail=exc.message)


async def _load_auction_house(client: AsyncClient, address: str, commitment: Optional[str]) -> AuctionHouse:
    try:
        return await fetch_auction_house(client, address, Commitment(commitment) if commitment else None)
    except AuctionHouseError as exc:
        raise http_error(exc) from exc


@app.get("/health")
def health():
    settings = get_settings()
    return {"status": "ok", "rpc": settings.rpc_url(), "program": settings.auction_house_program_id}


@app.get("/auction_houses/{address}", response_model=AuctionHouseView)
async def auction_house_detail(address: str, commitment: Optional[str] = None, client: AsyncClient = Depends(get_client)):
    return auction_house_view(await _load_auction_house(client, address, commitment))


@app.get("/auction_houses/{address}/listings", response_model=List[ListingView])
async def auction_house_listings(
    address: str,
    type: ListingQueryType,
    public_key: str,
    commitment: Optional[str] = None,
    client: AsyncClient = Depends(get_client),
):
    auction_house = await _load_auction_house(client, address, commitment)
    scope = CancellationScope()
    try:
        params = FindListingsByPublicKeyFieldInput(
            type=type,
            auction_house=auction_house,
            public_key=to_pubkey(public_key),
            commitment=Commitment(commitment) if commitment else None,
        )
        listings = await find_listings_by_public_key_field(client, params, scope)
    except AuctionHouseError as exc:
        logger.warning("listings_lookup_failed auction_house=%s type=%s error=%s", address, type.value, exc)
        raise http_error(exc) from exc
    return [listing_view(listing) for listing in listings]


@app.get("/auction_houses/{address}/listings/receipt/{receipt}", response_model=ListingView)
async def auction_house_listing_by_receipt(
    address: str,
    receipt: str,
    commitment: Optional[str] = None,
    client: AsyncClient = Depends(get_client),
):
    auction_house = await _load_auction_house(client, address, commitment)
    try:
        listing = await find_listing_by_receipt(
            client,
            receipt,
            auction_house,
            CancellationScope(),
            commitment=Commitment(commitment) if commitment else None,
        )
    except AuctionHouseError as exc:
        logger.warning("listing_receipt_lookup_failed receipt=%s error=%s", receipt, exc)
        raise http_error(exc) from exc
    return listing_view(listing)
