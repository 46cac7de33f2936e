import logging

import httpx

from tokenview.config import BASE_NETWORK
from tokenview.http_client import describe_http_error, http_get_json
from tokenview.models import CoinMetadata

logger = logging.getLogger(__name__)

COIN_PAGE_URL = "https://www.coingecko.com/en/coins/{coin_id}"


async def fetch_coin_metadata(
    client: httpx.AsyncClient, base_url: str, token_address: str
) -> CoinMetadata:
    """English description and coin page url; both None on any failure."""
    try:
        data = await http_get_json(client, f"{base_url}/coins/{BASE_NETWORK}/contract/{token_address}")
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("CoinGecko lookup failed for %s: %s", token_address, describe_http_error(e))
        return CoinMetadata()

    if not isinstance(data, dict):
        return CoinMetadata()

    description = data.get("description")
    description = (description.get("en") if isinstance(description, dict) else None) or None
    coin_id = data.get("id")
    return CoinMetadata(
        description=description,
        url=COIN_PAGE_URL.format(coin_id=coin_id) if coin_id else None,
    )
