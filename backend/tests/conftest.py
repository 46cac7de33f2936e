"""
Pytest configuration and shared fixtures for the tokenview tests.

Upstream providers are replaced by an ``httpx.MockTransport`` backed by
``FakeUpstream``, which records every outbound request.
"""
import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from tokenview.config import Settings, get_settings
from tokenview.http_client import get_transport
from tokenview.main import app

TOKEN_ADDRESS = "0x4ed4e862860bed51a9570b96d89af5e1b0efefed"
DEPLOYER_ADDRESS = "0xdeadbeef00000000000000000000000000000001"
VIEWER_FID = "3621"

ZAPPER_HOST = "public.zapper.xyz"
DEXSCREENER_HOST = "api.dexscreener.com"
COINGECKO_HOST = "api.coingecko.com"
NEYNAR_HOST = "api.neynar.com"
ALCHEMY_HOST = "base-mainnet.g.alchemy.com"

RELEVANT_PATH = "/v2/farcaster/fungible/owner/relevant"
BULK_BY_ADDRESS_PATH = "/v2/farcaster/user/bulk-by-address"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeUpstream:
    """Routes requests by host and path prefix; unmatched requests get a 404."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: List[Tuple[str, str, Handler]] = []

    def route(
        self,
        host: str,
        path: str,
        status: int = 200,
        body: Any = None,
        text: Optional[str] = None,
        handler: Optional[Handler] = None,
    ) -> None:
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                if text is not None:
                    return httpx.Response(status, text=text)
                return httpx.Response(status, json=body)
        # Newest route wins so tests can override the defaults
        self.routes.insert(0, (host, path, handler))

    def calls(self, host: str, path: str = "") -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == host and r.url.path.startswith(path)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for host, path, handler in self.routes:
            if request.url.host == host and request.url.path.startswith(path):
                return handler(request)
        return httpx.Response(404, json={"error": "no route"})


def zapper_token(**overrides: Any) -> Dict[str, Any]:
    token = {
        "address": TOKEN_ADDRESS,
        "symbol": "DEGEN",
        "name": "Degen",
        "decimals": 18,
        "imageUrlV2": "https://storage.zapper.xyz/degen.png",
        "deployer": {
            "address": DEPLOYER_ADDRESS,
            "farcasterProfile": {
                "username": "jacek",
                "fid": 15983,
                "metadata": {"imageUrl": "https://i.imgur.com/jacek.png"},
            },
        },
        "holders": {"totalCount": 812345},
        "priceData": {
            "price": 0.0041,
            "marketCap": 152000000.5,
            "priceChange5m": 0.1,
            "priceChange1h": -1.2,
            "priceChange24h": 4.75,
            "volume24h": 2300000,
            "totalGasTokenLiquidity": 1200.5,
            "totalLiquidity": 8100000,
            "priceTicks": [
                {"id": "t1", "median": 0.004, "open": 0.0039, "close": 0.0041,
                 "high": 0.0042, "low": 0.0038, "timestamp": 1718000000000},
            ],
        },
    }
    token.update(overrides)
    return token


def zapper_response(token: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {"data": {"fungibleTokenV2": token}}


def dexscreener_response() -> Dict[str, Any]:
    return {
        "pairs": [
            {
                "chainId": "solana",
                "url": "https://dexscreener.com/solana/xyz",
                "info": {"websites": [{"url": "https://wrong.example"}]},
            },
            {
                "chainId": "base",
                "url": "https://dexscreener.com/base/0xpair",
                "info": {
                    "websites": [{"url": "https://degen.tips"}, {"url": "https://second.example"}],
                    "socials": [
                        {"type": "twitter", "url": "https://x.com/degentokenbase"},
                        {"type": "telegram", "url": "https://t.me/degen"},
                        {"type": "twitter", "url": "https://x.com/other"},
                    ],
                },
            },
        ]
    }


def coingecko_response() -> Dict[str, Any]:
    return {"id": "degen-base", "description": {"en": "Degen is the token of the Degen channel."}}


def neynar_owner(i: int) -> Dict[str, Any]:
    return {
        "fid": 1000 + i,
        "username": f"user{i}",
        "display_name": f"User {i}",
        "pfp_url": f"https://pfp.example/{i}.png",
        "custody_address": f"0xcustody{i:02d}",
        "verified_addresses": {"eth_addresses": [f"0xverified{i:02d}"]},
        "follower_count": 10 * i,
        "power_badge": i % 2 == 0,
    }


def relevant_holders_response(count: int = 3) -> Dict[str, Any]:
    return {"top_relevant_fungible_owners_hydrated": [neynar_owner(i) for i in range(1, count + 1)]}


def alchemy_handler(
    transfers: Optional[List[Dict[str, Any]]] = None,
    timestamp: Optional[str] = "0x665f4d80",
) -> Handler:
    if transfers is None:
        transfers = [{"blockNum": "0x1a2b3c", "from": DEPLOYER_ADDRESS}]

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body["method"] == "alchemy_getAssetTransfers":
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": {"transfers": transfers}})
        if body["method"] == "eth_getBlockByNumber":
            result = {"number": body["params"][0]}
            if timestamp is not None:
                result["timestamp"] = timestamp
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})
        return httpx.Response(400, json={"error": "unknown method"})

    return handler


@pytest.fixture
def settings() -> Settings:
    return Settings(ZAPPER_KEY="zapper-test", NEYNAR_KEY="neynar-test", ALCHEMY_KEY="alchemy-test")


@pytest.fixture
def upstream() -> FakeUpstream:
    fake = FakeUpstream()
    fake.route(ZAPPER_HOST, "/graphql", body=zapper_response(zapper_token()))
    fake.route(DEXSCREENER_HOST, "/latest/dex/tokens/", body=dexscreener_response())
    fake.route(COINGECKO_HOST, "/api/v3/coins/base/contract/", body=coingecko_response())
    fake.route(NEYNAR_HOST, RELEVANT_PATH, body=relevant_holders_response())
    fake.route(NEYNAR_HOST, BULK_BY_ADDRESS_PATH, body={})
    fake.route(ALCHEMY_HOST, "/v2/", handler=alchemy_handler())
    return fake


@pytest.fixture
def http_client(upstream: FakeUpstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def client(settings: Settings, upstream: FakeUpstream):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_transport] = lambda: httpx.MockTransport(upstream)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

