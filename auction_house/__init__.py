from .errors import (
    AccountNotFoundError,
    AuctionHouseError,
    DecodeError,
    InvalidAddressError,
    OperationCanceledError,
    QueryExecutionError,
    UnreachableCaseError,
)
from .models import AuctionHouse, LazyListing, Listing, ListingAsset, to_lazy_listing
from .operations import (
    FindListingsByPublicKeyFieldInput,
    ListingQueryType,
    fetch_auction_house,
    find_listing_by_receipt,
    find_listing_by_trade_state,
    find_listings_by_metadata,
    find_listings_by_mint,
    find_listings_by_public_key_field,
    find_listings_by_seller,
    load_listing,
)
from .pda import find_metadata_pda
from .scope import CancellationScope

__all__ = [
    "AccountNotFoundError",
    "AuctionHouse",
    "AuctionHouseError",
    "CancellationScope",
    "DecodeError",
    "FindListingsByPublicKeyFieldInput",
    "InvalidAddressError",
    "LazyListing",
    "Listing",
    "ListingAsset",
    "ListingQueryType",
    "OperationCanceledError",
    "QueryExecutionError",
    "UnreachableCaseError",
    "fetch_auction_house",
    "find_listing_by_receipt",
    "find_listing_by_trade_state",
    "find_listings_by_metadata",
    "find_listings_by_mint",
    "find_listings_by_public_key_field",
    "find_listings_by_seller",
    "find_metadata_pda",
    "load_listing",
    "to_lazy_listing",
]
