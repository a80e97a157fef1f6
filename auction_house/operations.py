"""Read-side Auction House operations: find, load and resolve listings."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Awaitable, Callable, Iterable, List, Optional, TypeVar

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from .accounts import decode_auction_house, decode_listing_receipt, decode_metadata, decode_mint, decode_token_account
from .errors import AccountNotFoundError, QueryExecutionError, UnreachableCaseError
from .gpa import TRANSPORT_ERRORS, KeyedAccount, ListingReceiptGpaBuilder, listing_accounts
from .models import AuctionHouse, LazyListing, Listing, ListingAsset, to_auction_house, to_lazy_listing, to_listing
from .pda import (
    AddressLike,
    find_associated_token_account,
    find_auction_house_pda,
    find_listing_receipt_pda,
    find_metadata_pda,
    to_pubkey,
)
from .scope import CancellationScope

logger = logging.getLogger("auction_house.operations")

T = TypeVar("T")
ListingLoader = Callable[[AsyncClient, LazyListing, CancellationScope], Awaitable[Listing]]


class ListingQueryType(str, Enum):
    SELLER = "seller"
    METADATA = "metadata"
    MINT = "mint"


@dataclass(frozen=True)
class FindListingsByPublicKeyFieldInput:
    type: ListingQueryType
    auction_house: AuctionHouse
    public_key: Pubkey
    commitment: Optional[Commitment] = None


async def _rpc(method: str, call: Awaitable[T]) -> T:
    try:
        return await call
    except TRANSPORT_ERRORS as exc:
        raise QueryExecutionError(method, str(exc)) from exc


async def _gather_in_order(pending: Iterable[Awaitable[T]]) -> List[T]:
    """Await everything concurrently; results keep input order.

    The first failure cancels whatever is still running and is re-raised.
    """
    tasks = [asyncio.ensure_future(aw) for aw in pending]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def fetch_auction_house(
    client: AsyncClient, address: AddressLike, commitment: Optional[Commitment] = None
) -> AuctionHouse:
    address = to_pubkey(address)
    resp = await _rpc("getAccountInfo", client.get_account_info(address, commitment=commitment))
    if resp.value is None:
        raise AccountNotFoundError("AuctionHouse", address)
    return to_auction_house(decode_auction_house(address, bytes(resp.value.data)))


async def find_auction_house_by_creator_and_mint(
    client: AsyncClient,
    creator: AddressLike,
    treasury_mint: AddressLike,
    commitment: Optional[Commitment] = None,
) -> AuctionHouse:
    return await fetch_auction_house(client, find_auction_house_pda(creator, treasury_mint), commitment)


async def load_listing(
    client: AsyncClient,
    lazy_listing: LazyListing,
    scope: CancellationScope,
    commitment: Optional[Commitment] = None,
) -> Listing:
    """Hydrate a lazy listing with its metadata, mint and the seller's token account."""
    scope.throw_if_canceled()
    metadata_address = lazy_listing.metadata_address
    resp = await _rpc("getAccountInfo", client.get_account_info(metadata_address, commitment=commitment))
    if resp.value is None:
        raise AccountNotFoundError("Metadata", metadata_address)
    metadata = decode_metadata(metadata_address, bytes(resp.value.data))

    token_address = find_associated_token_account(lazy_listing.seller_address, metadata.mint)
    scope.throw_if_canceled()
    resp = await _rpc(
        "getMultipleAccounts",
        client.get_multiple_accounts([metadata.mint, token_address], commitment=commitment),
    )
    mint_info, token_info = resp.value
    if mint_info is None:
        raise AccountNotFoundError("Mint", metadata.mint)
    mint = decode_mint(metadata.mint, bytes(mint_info.data))
    token_amount = 0
    if token_info is not None:
        token_amount = decode_token_account(token_address, bytes(token_info.data)).amount
    else:
        logger.debug("listing_token_account_missing receipt=%s token=%s", lazy_listing.receipt_address, token_address)

    asset = ListingAsset(
        mint_address=metadata.mint,
        metadata_address=metadata_address,
        name=metadata.name,
        symbol=metadata.symbol,
        uri=metadata.uri,
        seller_fee_basis_points=metadata.seller_fee_basis_points,
        decimals=mint.decimals,
        token_address=token_address,
        token_amount=token_amount,
    )
    return to_listing(lazy_listing, asset)


def _listing_query(client: AsyncClient, params: FindListingsByPublicKeyFieldInput) -> ListingReceiptGpaBuilder:
    query = listing_accounts(client).merge_config(commitment=params.commitment)
    query = query.where_auction_house(params.auction_house.address)
    public_key = to_pubkey(params.public_key)
    if params.type == ListingQueryType.SELLER:
        return query.where_seller(public_key)
    if params.type == ListingQueryType.METADATA:
        return query.where_metadata(public_key)
    if params.type == ListingQueryType.MINT:
        return query.where_metadata(find_metadata_pda(public_key))
    raise UnreachableCaseError(params.type)


async def find_listings_by_public_key_field(
    client: AsyncClient,
    params: FindListingsByPublicKeyFieldInput,
    scope: CancellationScope,
    load_listing_fn: Optional[ListingLoader] = None,
) -> List[Listing]:
    loader = load_listing_fn or partial(load_listing, commitment=params.commitment)
    query = _listing_query(client, params)
    scope.throw_if_canceled()
    logger.info(
        "listings_query type=%s auction_house=%s public_key=%s",
        getattr(params.type, "value", params.type),
        params.auction_house.address,
        params.public_key,
    )

    async def resolve(account: KeyedAccount) -> Listing:
        receipt = decode_listing_receipt(account.address, account.data)
        return await loader(client, to_lazy_listing(receipt, params.auction_house), scope)

    pending = await query.get_and_map(resolve)
    listings = await _gather_in_order(pending)
    logger.info("listings_resolved type=%s count=%d", getattr(params.type, "value", params.type), len(listings))
    return listings


async def find_listings_by_seller(
    client: AsyncClient,
    auction_house: AuctionHouse,
    seller: AddressLike,
    scope: CancellationScope,
    commitment: Optional[Commitment] = None,
) -> List[Listing]:
    params = FindListingsByPublicKeyFieldInput(ListingQueryType.SELLER, auction_house, to_pubkey(seller), commitment)
    return await find_listings_by_public_key_field(client, params, scope)


async def find_listings_by_metadata(
    client: AsyncClient,
    auction_house: AuctionHouse,
    metadata: AddressLike,
    scope: CancellationScope,
    commitment: Optional[Commitment] = None,
) -> List[Listing]:
    params = FindListingsByPublicKeyFieldInput(ListingQueryType.METADATA, auction_house, to_pubkey(metadata), commitment)
    return await find_listings_by_public_key_field(client, params, scope)


async def find_listings_by_mint(
    client: AsyncClient,
    auction_house: AuctionHouse,
    mint: AddressLike,
    scope: CancellationScope,
    commitment: Optional[Commitment] = None,
) -> List[Listing]:
    params = FindListingsByPublicKeyFieldInput(ListingQueryType.MINT, auction_house, to_pubkey(mint), commitment)
    return await find_listings_by_public_key_field(client, params, scope)


async def find_listing_by_receipt(
    client: AsyncClient,
    receipt_address: AddressLike,
    auction_house: AuctionHouse,
    scope: CancellationScope,
    commitment: Optional[Commitment] = None,
    load_listing_fn: Optional[ListingLoader] = None,
) -> Listing:
    loader = load_listing_fn or partial(load_listing, commitment=commitment)
    receipt_address = to_pubkey(receipt_address)
    scope.throw_if_canceled()
    resp = await _rpc("getAccountInfo", client.get_account_info(receipt_address, commitment=commitment))
    if resp.value is None:
        raise AccountNotFoundError("ListingReceipt", receipt_address)
    receipt = decode_listing_receipt(receipt_address, bytes(resp.value.data))
    return await loader(client, to_lazy_listing(receipt, auction_house), scope)


async def find_listing_by_trade_state(
    client: AsyncClient,
    trade_state: AddressLike,
    auction_house: AuctionHouse,
    scope: CancellationScope,
    commitment: Optional[Commitment] = None,
) -> Listing:
    receipt_address = find_listing_receipt_pda(trade_state)
    return await find_listing_by_receipt(client, receipt_address, auction_house, scope, commitment)
