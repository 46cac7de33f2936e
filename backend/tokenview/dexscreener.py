import logging
from enum import Enum
from typing import Any, Dict, Iterable, Optional

import httpx

from tokenview.config import BASE_NETWORK
from tokenview.http_client import describe_http_error, http_get_json
from tokenview.models import PairLinks

logger = logging.getLogger(__name__)


class SocialLinkType(str, Enum):
    TELEGRAM = "telegram"
    TWITTER = "twitter"


def first_social_links(socials: Optional[Iterable[Any]]) -> Dict[SocialLinkType, str]:
    """
    Map each known link type to the url of its first matching entry.
    Later entries of an already-seen type are ignored.
    """
    found: Dict[SocialLinkType, str] = {}
    for social in socials or []:
        if not isinstance(social, dict):
            continue
        try:
            link_type = SocialLinkType(social.get("type"))
        except ValueError:
            continue
        if link_type in found:
            continue
        url = social.get("url")
        if url:
            found[link_type] = url
    return found


def find_chain_pair(data: Any, chain_id: str = BASE_NETWORK) -> Optional[Dict[str, Any]]:
    pairs = data.get("pairs") if isinstance(data, dict) else None
    for pair in pairs or []:
        if isinstance(pair, dict) and pair.get("chainId") == chain_id:
            return pair
    return None


def parse_pair_links(pair: Dict[str, Any]) -> PairLinks:
    info = pair.get("info") or {}
    websites = info.get("websites") or []
    website = None
    if websites and isinstance(websites[0], dict):
        website = websites[0].get("url") or None
    socials = first_social_links(info.get("socials"))
    return PairLinks(
        website=website,
        telegram=socials.get(SocialLinkType.TELEGRAM),
        twitter=socials.get(SocialLinkType.TWITTER),
        dexscreener_url=pair.get("url") or None,
    )


async def fetch_pair_links(
    client: httpx.AsyncClient, base_url: str, token_address: str
) -> Optional[PairLinks]:
    """Links of the token's Base pair, or None when unavailable."""
    try:
        data = await http_get_json(client, f"{base_url}/latest/dex/tokens/{token_address}")
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("DexScreener lookup failed for %s: %s", token_address, describe_http_error(e))
        return None

    pair = find_chain_pair(data)
    if pair is None:
        logger.debug("No %s pair on DexScreener for %s", BASE_NETWORK, token_address)
        return None
    return parse_pair_links(pair)
