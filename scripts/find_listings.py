"""
Look up Auction House listings by seller, metadata or mint and print them as JSON.

    python scripts/find_listings.py --auction-house <AH> --type seller --public-key <WALLET>
"""
import argparse
import asyncio
import json
import sys

from auction_house.operations import (
    FindListingsByPublicKeyFieldInput,
    ListingQueryType,
    fetch_auction_house,
    find_listings_by_public_key_field,
)
from auction_house.errors import AuctionHouseError
from auction_house.pda import to_pubkey
from auction_house.scope import CancellationScope
from auction_house.settings import configure_logging, create_client, get_settings
from auction_house.views import listing_view


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find Auction House listings")
    parser.add_argument("--auction-house", required=True, help="Auction House address")
    parser.add_argument("--type", required=True, choices=[t.value for t in ListingQueryType])
    parser.add_argument("--public-key", required=True, help="Seller, metadata or mint address")
    parser.add_argument("--commitment", default=None, help="processed | confirmed | finalized")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    client = create_client(get_settings())
    scope = CancellationScope()
    try:
        auction_house = await fetch_auction_house(client, args.auction_house, args.commitment)
        params = FindListingsByPublicKeyFieldInput(
            type=ListingQueryType(args.type),
            auction_house=auction_house,
            public_key=to_pubkey(args.public_key),
            commitment=args.commitment,
        )
        listings = await find_listings_by_public_key_field(client, params, scope)
    except AuctionHouseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        await client.close()
    print(json.dumps([listing_view(listing).model_dump(mode="json") for listing in listings], indent=2))
    return 0


def main() -> None:
    configure_logging()
    sys.exit(asyncio.run(run(parse_args())))


if __name__ == "__main__":
    main()
