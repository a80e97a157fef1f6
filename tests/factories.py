"""Byte builders and a fake RPC client for the auction house tests."""
from types import SimpleNamespace
from typing import Dict, List, Optional

from solders.pubkey import Pubkey
from spl.token._layouts import ACCOUNT_LAYOUT, MINT_LAYOUT

from auction_house.accounts import (
    AUCTION_HOUSE_DISCRIMINATOR,
    LISTING_RECEIPT_DISCRIMINATOR,
    AuctionHouseLayout,
    ListingReceiptLayout,
    MetadataLayout,
)
from auction_house.models import AuctionHouse, WRAPPED_SOL_MINT

ZERO = bytes(32)


def pk(value: Pubkey) -> List[int]:
    return list(bytes(value))


def listing_receipt_bytes(
    *,
    auction_house: Pubkey,
    seller: Pubkey,
    metadata: Pubkey,
    trade_state: Optional[Pubkey] = None,
    bookkeeper: Optional[Pubkey] = None,
    purchase_receipt: Optional[Pubkey] = None,
    price: int = 1_500_000_000,
    token_size: int = 1,
    created_at: int = 1_700_000_000,
    canceled_at: Optional[int] = None,
) -> bytes:
    body = ListingReceiptLayout.build(
        {
            "trade_state": pk(trade_state or Pubkey.new_unique()),
            "bookkeeper": pk(bookkeeper or Pubkey.new_unique()),
            "auction_house": pk(auction_house),
            "seller": pk(seller),
            "metadata": pk(metadata),
            "purchase_receipt": pk(purchase_receipt) if purchase_receipt else None,
            "price": price,
            "token_size": token_size,
            "bump": 254,
            "trade_state_bump": 253,
            "created_at": created_at,
            "canceled_at": canceled_at,
        }
    )
    return LISTING_RECEIPT_DISCRIMINATOR + body


def auction_house_bytes(*, creator: Pubkey, authority: Pubkey, treasury_mint: Pubkey = WRAPPED_SOL_MINT) -> bytes:
    body = AuctionHouseLayout.build(
        {
            "auction_house_fee_account": pk(Pubkey.new_unique()),
            "auction_house_treasury": pk(Pubkey.new_unique()),
            "treasury_withdrawal_destination": pk(Pubkey.new_unique()),
            "fee_withdrawal_destination": pk(Pubkey.new_unique()),
            "treasury_mint": pk(treasury_mint),
            "authority": pk(authority),
            "creator": pk(creator),
            "bump": 255,
            "treasury_bump": 254,
            "fee_payer_bump": 253,
            "seller_fee_basis_points": 200,
            "requires_sign_off": False,
            "can_change_sale_price": False,
            "escrow_payment_bump": 252,
            "has_auctioneer": False,
            "auctioneer_address": pk(Pubkey.default()),
        }
    )
    # Real accounts are allocated with trailing space.
    return AUCTION_HOUSE_DISCRIMINATOR + body + bytes(64)


def metadata_bytes(*, mint: Pubkey, name: str = "Mochi #1", symbol: str = "MOCHI", key: int = 4) -> bytes:
    return MetadataLayout.build(
        {
            "key": key,
            "update_authority": pk(Pubkey.new_unique()),
            "mint": pk(mint),
            "name": name.ljust(32, "\x00"),
            "symbol": symbol.ljust(10, "\x00"),
            "uri": "https://arweave.net/mochi-1.json".ljust(200, "\x00"),
            "seller_fee_basis_points": 500,
            "creators": [{"address": pk(Pubkey.new_unique()), "verified": True, "share": 100}],
            "primary_sale_happened": True,
            "is_mutable": True,
        }
    )


def mint_bytes(*, decimals: int = 0, supply: int = 1) -> bytes:
    return MINT_LAYOUT.build(
        {
            "mint_authority_option": 0,
            "mint_authority": ZERO,
            "supply": supply,
            "decimals": decimals,
            "is_initialized": 1,
            "freeze_authority_option": 0,
            "freeze_authority": ZERO,
        }
    )


def token_account_bytes(*, mint: Pubkey, owner: Pubkey, amount: int = 1) -> bytes:
    return ACCOUNT_LAYOUT.build(
        {
            "mint": bytes(mint),
            "owner": bytes(owner),
            "amount": amount,
            "delegate_option": 0,
            "delegate": ZERO,
            "state": 1,
            "is_native_option": 0,
            "is_native": 0,
            "delegated_amount": 0,
            "close_authority_option": 0,
            "close_authority": ZERO,
        }
    )


def make_auction_house(address: Optional[Pubkey] = None) -> AuctionHouse:
    return AuctionHouse(
        address=address or Pubkey.new_unique(),
        creator=Pubkey.new_unique(),
        authority=Pubkey.new_unique(),
        treasury_mint=WRAPPED_SOL_MINT,
        fee_account=Pubkey.new_unique(),
        treasury_account=Pubkey.new_unique(),
        fee_withdrawal_destination=Pubkey.new_unique(),
        treasury_withdrawal_destination=Pubkey.new_unique(),
        seller_fee_basis_points=200,
        requires_sign_off=False,
        can_change_sale_price=False,
    )


class FakeRpcClient:
    """Stands in for ``solana.rpc.async_api.AsyncClient``."""

    def __init__(self, program_accounts=None, accounts: Optional[Dict[Pubkey, bytes]] = None, error=None):
        self.program_accounts = list(program_accounts or [])
        self.accounts = dict(accounts or {})
        self.error = error
        self.gpa_calls: List[dict] = []
        self.account_calls: List[Pubkey] = []

    async def get_program_accounts(self, program_id, commitment=None, encoding="base64", data_slice=None, filters=None):
        self.gpa_calls.append(
            {"program_id": program_id, "commitment": commitment, "encoding": encoding, "filters": list(filters or [])}
        )
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            value=[
                SimpleNamespace(pubkey=address, account=SimpleNamespace(data=data))
                for address, data in self.program_accounts
            ]
        )

    def _info(self, address: Pubkey):
        self.account_calls.append(address)
        data = self.accounts.get(address)
        return None if data is None else SimpleNamespace(data=data)

    async def get_account_info(self, pubkey, commitment=None, encoding="base64", data_slice=None):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(value=self._info(pubkey))

    async def get_multiple_accounts(self, pubkeys, commitment=None, encoding="base64", data_slice=None):
        if self.error is not None:
            raise self.error
        return SimpleNamespace(value=[self._info(p) for p in pubkeys])
