"""
Token profile aggregation.

Requests are fanned out in two stages:

1. Zapper, DexScreener and CoinGecko, which only need the token address.
2. Neynar relevant holders, Alchemy token age and creator resolution, which
   run once Zapper has resolved the token and its deployer.

Only a Zapper failure aborts the request; every other provider degrades to
None.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx

from tokenview import alchemy, coingecko, dexscreener, neynar, zapper
from tokenview.config import BASE_CHAIN_ID, ProviderCredentials, Settings
from tokenview.creator import extract_creator_info, resolve_creator_info
from tokenview.models import (
    CoinMetadata,
    CreatorInfo,
    PairLinks,
    PriceData,
    RelevantHolder,
    TokenAge,
    TokenProfile,
    TokenQuery,
)

logger = logging.getLogger(__name__)


@dataclass
class StageOneResult:
    token: Dict[str, Any]
    links: Optional[PairLinks]
    coin: CoinMetadata


@dataclass
class StageTwoResult:
    relevant_holders: Optional[List[RelevantHolder]]
    age: Optional[TokenAge]
    creator: CreatorInfo


def assemble_profile(stage_one: StageOneResult, stage_two: StageTwoResult) -> TokenProfile:
    token = stage_one.token
    links = stage_one.links or PairLinks()
    holders = token.get("holders") or {}
    price_data = token.get("priceData")

    return TokenProfile(
        address=token.get("address"),
        symbol=token.get("symbol"),
        name=token.get("name"),
        decimals=token.get("decimals"),
        image_url_v2=token.get("imageUrlV2"),
        creator=stage_two.creator,
        relevant_holders=stage_two.relevant_holders,
        holder_count=holders.get("totalCount") or None,
        age=stage_two.age,
        price_data=PriceData.model_validate(price_data) if price_data else None,
        description=stage_one.coin.description,
        website=links.website,
        telegram=links.telegram,
        twitter=links.twitter,
        dexscreener_url=links.dexscreener_url,
        coin_gecko_url=stage_one.coin.url,
    )


def _degrade(result: Any, provider: str, fallback: Any) -> Any:
    """Swap an optional provider's exception for ``fallback``."""
    if not isinstance(result, BaseException):
        return result
    if not isinstance(result, Exception):
        raise result
    logger.warning("%s enrichment failed: %r", provider, result)
    return fallback


class TokenProfileService:
    def __init__(
        self,
        config: Settings,
        credentials: ProviderCredentials,
        client: httpx.AsyncClient,
        clock: Callable[[], int] = alchemy.now_ms,
    ):
        self.config = config
        self.credentials = credentials
        self.client = client
        self.clock = clock

    async def fetch_stage_one(self, token_address: str) -> StageOneResult:
        results = await asyncio.gather(
            zapper.fetch_token(
                self.client,
                self.config.ZAPPER_GRAPHQL_URL,
                token_address,
                BASE_CHAIN_ID,
                self.credentials.zapper_key,
            ),
            dexscreener.fetch_pair_links(self.client, self.config.DEXSCREENER_API_URL, token_address),
            coingecko.fetch_coin_metadata(self.client, self.config.COINGECKO_API_URL, token_address),
            return_exceptions=True,
        )
        token, links, coin = results
        if isinstance(token, BaseException):
            raise token
        return StageOneResult(
            token=token,
            links=_degrade(links, "DexScreener", None),
            coin=_degrade(coin, "CoinGecko", CoinMetadata()),
        )

    async def lookup_creator(self, address: str) -> Optional[CreatorInfo]:
        return await neynar.fetch_user_by_address(
            self.client, self.config.NEYNAR_API_URL, address, self.credentials.neynar_key
        )

    async def fetch_stage_two(self, query: TokenQuery, token: Dict[str, Any]) -> StageTwoResult:
        zapper_creator = extract_creator_info(token)
        relevant_holders, age, creator = await asyncio.gather(
            neynar.fetch_relevant_holders(
                self.client,
                self.config.NEYNAR_API_URL,
                query.token_address,
                query.fid,
                self.credentials.neynar_key,
            ),
            alchemy.fetch_token_age(
                self.client,
                self.config.ALCHEMY_RPC_URL,
                query.token_address,
                self.credentials.alchemy_key,
                clock=self.clock,
            ),
            resolve_creator_info(zapper_creator, self.lookup_creator),
            return_exceptions=True,
        )
        return StageTwoResult(
            relevant_holders=_degrade(relevant_holders, "Neynar relevant holders", None),
            age=_degrade(age, "Alchemy", None),
            creator=_degrade(creator, "Neynar creator lookup", zapper_creator),
        )

    async def build_profile(self, query: TokenQuery) -> TokenProfile:
        stage_one = await self.fetch_stage_one(query.token_address)
        stage_two = await self.fetch_stage_two(query, stage_one.token)
        profile = assemble_profile(stage_one, stage_two)

        logger.debug(
            "Resolved %s (%s): creator=%s holders=%s age=%s links=%s",
            profile.symbol,
            profile.address,
            profile.creator.farcaster_username,
            len(profile.relevant_holders) if profile.relevant_holders is not None else None,
            profile.age.age_in_days if profile.age else None,
            stage_one.links is not None,
        )
        return profile
