from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment

AUCTION_HOUSE_PROGRAM_ID = "hausS13jsjafwWwGqZTUQRmWyvyxn9EQpqMwV1PBBmk"
TOKEN_METADATA_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bBuk9Nds"

logger = logging.getLogger("auction_house")


class Settings(BaseSettings):
    solana_rpc: str = "https://api.mainnet-beta.solana.com"
    helius_rpc_url: str = ""
    commitment: Optional[str] = "confirmed"
    auction_house_program_id: str = AUCTION_HOUSE_PROGRAM_ID
    rpc_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def rpc_url(self) -> str:
        # Prefer Helius RPC if provided to improve reliability.
        return self.helius_rpc_url or self.solana_rpc

    def default_commitment(self) -> Optional[Commitment]:
        return Commitment(self.commitment) if self.commitment else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or get_settings().log_level).upper())


def create_client(settings: Optional[Settings] = None) -> AsyncClient:
    settings = settings or get_settings()
    logger.info("rpc_client_created url=%s commitment=%s", settings.rpc_url(), settings.commitment)
    return AsyncClient(
        settings.rpc_url(),
        commitment=settings.default_commitment(),
        timeout=settings.rpc_timeout_seconds,
    )
