"""getProgramAccounts query builders.

Builders are immutable: every ``where*`` / ``merge_config`` call returns a new
builder, so a partially built query can be shared and branched freely.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solana.rpc.types import MemcmpOpts
from solders.pubkey import Pubkey

from .accounts import (
    LISTING_RECEIPT_AUCTION_HOUSE_OFFSET,
    LISTING_RECEIPT_DISCRIMINATOR,
    LISTING_RECEIPT_METADATA_OFFSET,
    LISTING_RECEIPT_SELLER_OFFSET,
    ListingReceiptAccount,
    decode_listing_receipt,
)
from .errors import QueryExecutionError
from .pda import AddressLike, auction_house_program_id, to_pubkey

logger = logging.getLogger("auction_house.gpa")

R = TypeVar("R")
Filter = Union[int, MemcmpOpts]

TRANSPORT_ERRORS = (SolanaRpcException, RPCException, httpx.HTTPError, OSError)


@dataclass(frozen=True)
class KeyedAccount:
    address: Pubkey
    data: bytes


@dataclass(frozen=True)
class GpaBuilder:
    client: AsyncClient
    program_id: Pubkey
    filters: Tuple[Filter, ...] = ()
    config: Dict[str, Any] = field(default_factory=dict)

    def merge_config(self, **config: Any) -> "GpaBuilder":
        return replace(self, config={**self.config, **config})

    def where(self, offset: int, value: Union[AddressLike, bytes, int]) -> "GpaBuilder":
        if isinstance(value, int):
            value = int(value).to_bytes(8, "little")
        if isinstance(value, (bytes, bytearray)):
            opts = MemcmpOpts(offset=offset, bytes=bytes(value))
        else:
            opts = MemcmpOpts(offset=offset, bytes=str(to_pubkey(value)))
        return replace(self, filters=self.filters + (opts,))

    def where_size(self, data_size: int) -> "GpaBuilder":
        return replace(self, filters=self.filters + (data_size,))

    @property
    def commitment(self) -> Optional[str]:
        return self.config.get("commitment")

    async def get(self) -> List[KeyedAccount]:
        logger.debug(
            "gpa_query program=%s filters=%d commitment=%s",
            self.program_id,
            len(self.filters),
            self.commitment,
        )
        try:
            resp = await self.client.get_program_accounts(
                self.program_id,
                commitment=self.commitment,
                encoding="base64",
                filters=list(self.filters),
            )
        except TRANSPORT_ERRORS as exc:
            raise QueryExecutionError("getProgramAccounts", str(exc)) from exc
        accounts = [KeyedAccount(address=item.pubkey, data=bytes(item.account.data)) for item in resp.value or []]
        logger.debug("gpa_query_done program=%s count=%d", self.program_id, len(accounts))
        return accounts

    async def get_and_map(self, callback: Callable[[KeyedAccount], R]) -> List[R]:
        return [callback(account) for account in await self.get()]

    async def get_public_keys(self) -> List[Pubkey]:
        return await self.get_and_map(lambda account: account.address)


class ListingReceiptGpaBuilder(GpaBuilder):
    def where_auction_house(self, address: AddressLike) -> "ListingReceiptGpaBuilder":
        return self.where(LISTING_RECEIPT_AUCTION_HOUSE_OFFSET, address)

    def where_seller(self, address: AddressLike) -> "ListingReceiptGpaBuilder":
        return self.where(LISTING_RECEIPT_SELLER_OFFSET, address)

    def where_metadata(self, address: AddressLike) -> "ListingReceiptGpaBuilder":
        return self.where(LISTING_RECEIPT_METADATA_OFFSET, address)

    async def get_receipts(self) -> List[ListingReceiptAccount]:
        return await self.get_and_map(lambda account: decode_listing_receipt(account.address, account.data))


def listing_accounts(client: AsyncClient, program_id: Optional[AddressLike] = None) -> ListingReceiptGpaBuilder:
    program = to_pubkey(program_id) if program_id is not None else auction_house_program_id()
    return ListingReceiptGpaBuilder(client, program).where(0, LISTING_RECEIPT_DISCRIMINATOR)
