from solana.rpc.commitment import Confirmed

from auction_house.settings import AUCTION_HOUSE_PROGRAM_ID, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("HELIUS_RPC_URL", raising=False)
    monkeypatch.delenv("COMMITMENT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.auction_house_program_id == AUCTION_HOUSE_PROGRAM_ID
    assert settings.default_commitment() == Confirmed
    assert settings.rpc_url() == settings.solana_rpc


def test_helius_preferred(monkeypatch):
    monkeypatch.setenv("HELIUS_RPC_URL", "https://mainnet.helius-rpc.com/?api-key=test")
    settings = Settings(_env_file=None)
    assert settings.rpc_url() == "https://mainnet.helius-rpc.com/?api-key=test"


def test_commitment_can_be_disabled(monkeypatch):
    monkeypatch.setenv("COMMITMENT", "")
    assert Settings(_env_file=None).default_commitment() is None


def test_program_override(monkeypatch):
    monkeypatch.setenv("AUCTION_HOUSE_PROGRAM_ID", "11111111111111111111111111111111")
    assert Settings(_env_file=None).auction_house_program_id == "11111111111111111111111111111111"
