"""
Zapper GraphQL client: token identity, deployer, holder count and price data.

This is the one required provider. Every failure mode raises UpstreamError so
the request is aborted before any enrichment happens.
"""
import logging
from typing import Any, Dict, List

import httpx

from tokenview.errors import UpstreamError

logger = logging.getLogger(__name__)

FUNGIBLE_TOKEN_QUERY = """
  query FungibleTokenV2($address: Address!, $chainId: Int!) {
    fungibleTokenV2(address: $address, chainId: $chainId) {
      address
      symbol
      name
      decimals
      imageUrlV2
      deployer {
        address
        farcasterProfile {
          username
          fid
          metadata {
            imageUrl
          }
        }
      }
      holders(first: 1) {
        totalCount
      }
      priceData {
        price
        marketCap
        priceChange5m
        priceChange1h
        priceChange24h
        volume24h
        totalGasTokenLiquidity
        totalLiquidity
        priceTicks(currency: USD, timeFrame: HOUR) {
          id
          median
          open
          close
          high
          low
          timestamp
        }
      }
    }
  }
"""


def _graphql_error_details(errors: Any) -> str:
    if not isinstance(errors, list):
        return str(errors)
    messages: List[str] = []
    for err in errors:
        if isinstance(err, dict) and err.get("message"):
            messages.append(str(err["message"]))
        else:
            messages.append(str(err))
    return "; ".join(messages)


async def fetch_token(
    client: httpx.AsyncClient,
    url: str,
    token_address: str,
    chain_id: int,
    api_key: str,
) -> Dict[str, Any]:
    """Return the raw ``fungibleTokenV2`` object or raise UpstreamError."""
    payload = {
        "query": FUNGIBLE_TOKEN_QUERY,
        "variables": {"address": token_address, "chainId": chain_id},
    }
    r = await client.post(
        url,
        json=payload,
        headers={"Content-Type": "application/json", "x-zapper-api-key": api_key},
    )

    if not r.is_success:
        logger.error("Zapper API error (%s): %s", r.status_code, r.text)
        raise UpstreamError(
            "Failed to fetch token data from Zapper API",
            status_code=r.status_code,
            details=r.text or None,
        )

    try:
        data = r.json()
    except ValueError:
        logger.error("Zapper API returned a non-JSON body: %s", r.text[:200])
        raise UpstreamError("Invalid response from Zapper API", status_code=500)

    if not isinstance(data, dict):
        raise UpstreamError("Invalid response from Zapper API", status_code=500)

    if data.get("errors") is not None:
        details = _graphql_error_details(data["errors"])
        logger.error("GraphQL errors from Zapper: %s", details)
        raise UpstreamError("GraphQL errors from Zapper API", status_code=500, details=details or None)

    token = (data.get("data") or {}).get("fungibleTokenV2")
    if not token:
        raise UpstreamError("Token not found", status_code=404)

    return token
