import os
from dataclasses import dataclass
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from tokenview.errors import MissingConfigError

# Load environment variables early
load_dotenv()

REQUIRED_CREDENTIALS = ("ZAPPER_KEY", "NEYNAR_KEY", "ALCHEMY_KEY")

# Base mainnet
BASE_CHAIN_ID = 8453
BASE_NETWORK = "base"


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key, default)
    if value is None:
        return None
    return value.strip() or default


@dataclass(frozen=True)
class ProviderCredentials:
    zapper_key: str
    neynar_key: str
    alchemy_key: str


@dataclass(frozen=True)
class Settings:
    # --- Provider keys ---
    ZAPPER_KEY: Optional[str] = None
    NEYNAR_KEY: Optional[str] = None
    ALCHEMY_KEY: Optional[str] = None

    # --- Upstream endpoints ---
    ZAPPER_GRAPHQL_URL: str = "https://public.zapper.xyz/graphql"
    DEXSCREENER_API_URL: str = "https://api.dexscreener.com"
    COINGECKO_API_URL: str = "https://api.coingecko.com/api/v3"
    NEYNAR_API_URL: str = "https://api.neynar.com"
    ALCHEMY_RPC_URL: str = "https://base-mainnet.g.alchemy.com/v2"

    # --- API / CORS ---
    PORT: int = 8000
    CORS_ALLOW_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # --- Tuning ---
    HTTP_TIMEOUT_SECONDS: float = 20.0

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        return cls(
            ZAPPER_KEY=_env("ZAPPER_KEY"),
            NEYNAR_KEY=_env("NEYNAR_KEY"),
            ALCHEMY_KEY=_env("ALCHEMY_KEY"),
            ZAPPER_GRAPHQL_URL=_env("ZAPPER_GRAPHQL_URL", defaults.ZAPPER_GRAPHQL_URL),
            DEXSCREENER_API_URL=_env("DEXSCREENER_API_URL", defaults.DEXSCREENER_API_URL),
            COINGECKO_API_URL=_env("COINGECKO_API_URL", defaults.COINGECKO_API_URL),
            NEYNAR_API_URL=_env("NEYNAR_API_URL", defaults.NEYNAR_API_URL),
            ALCHEMY_RPC_URL=_env("ALCHEMY_RPC_URL", defaults.ALCHEMY_RPC_URL),
            PORT=int(_env("PORT", "8000")),
            CORS_ALLOW_ORIGINS=_env("CORS_ALLOW_ORIGINS", "*"),
            LOG_LEVEL=_env("LOG_LEVEL", "INFO").upper(),
            HTTP_TIMEOUT_SECONDS=float(_env("HTTP_TIMEOUT_SECONDS", "20")),
        )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()] or ["*"]


settings = Settings.from_env()


def get_settings() -> Settings:
    return settings


def require_credentials(
    config: Settings, keys: Sequence[str] = REQUIRED_CREDENTIALS
) -> ProviderCredentials:
    """
    Validate that every named provider key is configured.
    Raises MissingConfigError naming all absent keys.
    """
    missing = [key for key in keys if not getattr(config, key, None)]
    if len(missing) == 1:
        raise MissingConfigError(f"{missing[0]} environment variable is not set")
    if missing:
        raise MissingConfigError(f"{', '.join(missing)} environment variables are not set")
    return ProviderCredentials(
        zapper_key=config.ZAPPER_KEY or "",
        neynar_key=config.NEYNAR_KEY or "",
        alchemy_key=config.ALCHEMY_KEY or "",
    )
