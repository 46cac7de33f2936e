import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from tokenview.models import CreatorInfo

logger = logging.getLogger(__name__)

CreatorLookup = Callable[[str], Awaitable[Optional[CreatorInfo]]]


def extract_creator_info(token: Dict[str, Any]) -> CreatorInfo:
    """Creator record embedded in the Zapper token's deployer field."""
    deployer = token.get("deployer") or {}
    profile = deployer.get("farcasterProfile") or {}
    metadata = profile.get("metadata") or {}
    fid = profile.get("fid")
    return CreatorInfo(
        address=deployer.get("address") or None,
        farcaster_username=profile.get("username") or None,
        farcaster_fid=str(fid) if fid not in (None, "") else None,
        farcaster_pfp=metadata.get("imageUrl") or None,
    )


async def resolve_creator_info(creator: CreatorInfo, lookup: CreatorLookup) -> CreatorInfo:
    """
    Fill in the creator's Farcaster identity when Zapper has none.

    The lookup only runs for a known address without a username. A match
    replaces the social fields wholesale; the address always stays the one
    Zapper reported.
    """
    if not creator.address or creator.farcaster_username:
        return creator

    found = await lookup(creator.address)
    if found is None:
        logger.debug("No Farcaster profile for creator %s", creator.address)
        return creator

    return CreatorInfo(
        address=creator.address,
        farcaster_username=found.farcaster_username,
        farcaster_fid=found.farcaster_fid,
        farcaster_pfp=found.farcaster_pfp,
    )
