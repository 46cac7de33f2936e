"""
Neynar (Farcaster social graph) lookups.

Both lookups are optional enrichment: failures are logged and reported as None.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from tokenview.config import BASE_NETWORK
from tokenview.http_client import describe_http_error, http_get_json
from tokenview.models import CreatorInfo, RelevantHolder

logger = logging.getLogger(__name__)

MAX_RELEVANT_HOLDERS = 10


def _str_or_none(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


def _owner_address(owner: Dict[str, Any]) -> Optional[str]:
    if owner.get("custody_address"):
        return owner["custody_address"]
    eth_addresses = (owner.get("verified_addresses") or {}).get("eth_addresses") or []
    return eth_addresses[0] if eth_addresses else None


def to_relevant_holder(owner: Dict[str, Any]) -> RelevantHolder:
    return RelevantHolder(
        address=_owner_address(owner),
        farcaster_username=owner.get("username") or None,
        farcaster_fid=_str_or_none(owner.get("fid")),
        farcaster_pfp=owner.get("pfp_url") or None,
        display_name=owner.get("display_name") or None,
        follower_count=owner.get("follower_count") or None,
        power_badge=bool(owner.get("power_badge")),
    )


async def fetch_relevant_holders(
    client: httpx.AsyncClient,
    base_url: str,
    token_address: str,
    viewer_fid: str,
    api_key: str,
) -> Optional[List[RelevantHolder]]:
    """Top holders of the token within the viewer's social graph."""
    params = {
        "contract_address": token_address,
        "network": BASE_NETWORK,
        "viewer_fid": viewer_fid,
    }
    try:
        data = await http_get_json(
            client,
            f"{base_url}/v2/farcaster/fungible/owner/relevant",
            headers={"x-api-key": api_key},
            params=params,
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Neynar relevant holders failed for %s: %s", token_address, describe_http_error(e))
        return None

    owners = data.get("top_relevant_fungible_owners_hydrated") if isinstance(data, dict) else None
    if not owners:
        return None
    return [to_relevant_holder(o) for o in owners[:MAX_RELEVANT_HOLDERS] if isinstance(o, dict)]


async def fetch_user_by_address(
    client: httpx.AsyncClient, base_url: str, address: str, api_key: str
) -> Optional[CreatorInfo]:
    """First Farcaster profile verified for ``address``, if any."""
    try:
        data = await http_get_json(
            client,
            f"{base_url}/v2/farcaster/user/bulk-by-address",
            headers={"x-api-key": api_key},
            params={"addresses": address},
        )
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Neynar address lookup failed for %s: %s", address, describe_http_error(e))
        return None

    if not isinstance(data, dict):
        return None
    # Response is keyed by address; Neynar lowercases the keys.
    users = data.get(address) or data.get(address.lower()) or []
    if not users or not isinstance(users[0], dict):
        return None
    user = users[0]
    return CreatorInfo(
        address=address,
        farcaster_username=user.get("username") or None,
        farcaster_fid=_str_or_none(user.get("fid")),
        farcaster_pfp=user.get("pfp_url") or None,
    )
