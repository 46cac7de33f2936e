import pytest

from tokenview.config import ProviderCredentials, Settings, require_credentials
from tokenview.errors import MissingConfigError


def test_require_credentials_returns_keys(settings):
    assert require_credentials(settings) == ProviderCredentials(
        zapper_key="zapper-test", neynar_key="neynar-test", alchemy_key="alchemy-test"
    )


def test_require_credentials_names_single_missing_key():
    with pytest.raises(MissingConfigError) as excinfo:
        require_credentials(Settings(ZAPPER_KEY="z", NEYNAR_KEY="n"))
    assert excinfo.value.status_code == 500
    assert excinfo.value.error == "ALCHEMY_KEY environment variable is not set"


def test_require_credentials_names_every_missing_key():
    with pytest.raises(MissingConfigError) as excinfo:
        require_credentials(Settings(NEYNAR_KEY="n"))
    assert excinfo.value.error == "ZAPPER_KEY, ALCHEMY_KEY environment variables are not set"


def test_from_env_reads_keys_and_tuning(monkeypatch):
    monkeypatch.setenv("ZAPPER_KEY", " zk ")
    monkeypatch.setenv("NEYNAR_KEY", "")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = Settings.from_env()

    assert config.ZAPPER_KEY == "zk"
    assert config.NEYNAR_KEY is None
    assert config.HTTP_TIMEOUT_SECONDS == 3.5
    assert config.cors_origins == ["https://a.example", "https://b.example"]
    assert config.LOG_LEVEL == "DEBUG"


def test_from_env_defaults(monkeypatch):
    for key in ("ZAPPER_GRAPHQL_URL", "ALCHEMY_RPC_URL", "PORT", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(key, raising=False)
    config = Settings.from_env()
    assert config.ZAPPER_GRAPHQL_URL == "https://public.zapper.xyz/graphql"
    assert config.ALCHEMY_RPC_URL == "https://base-mainnet.g.alchemy.com/v2"
    assert config.PORT == 8000
    assert config.cors_origins == ["*"]
