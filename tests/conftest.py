import pytest
from solders.pubkey import Pubkey

from auction_house.settings import get_settings


@pytest.fixture
def auction_house_program(monkeypatch):
    """Point the Auction House program setting at a fresh address."""
    program = Pubkey.new_unique()
    monkeypatch.setenv("AUCTION_HOUSE_PROGRAM_ID", str(program))
    get_settings.cache_clear()
    yield program
    get_settings.cache_clear()
