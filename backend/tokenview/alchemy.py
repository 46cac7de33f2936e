import logging
import time
from typing import Any, Callable, Dict, List, Optional

import httpx

from tokenview.http_client import describe_http_error, http_post_json
from tokenview.models import TokenAge

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR


def now_ms() -> int:
    return int(time.time() * 1000)


def _hex_to_int(x: str) -> int:
    return int(x, 16) if isinstance(x, str) and x.startswith("0x") else int(x or 0)


def compute_token_age(created_at_ms: int, current_ms: int) -> TokenAge:
    age = current_ms - created_at_ms
    return TokenAge(
        created_at=created_at_ms,
        age_in_days=age // MS_PER_DAY,
        age_in_hours=age // MS_PER_HOUR,
        age_in_minutes=age // MS_PER_MINUTE,
    )


async def _rpc(client: httpx.AsyncClient, url: str, method: str, params: List[Any], request_id: int) -> Dict[str, Any]:
    payload = {"jsonrpc": "2.0", "id": request_id, "method": method, "params": params}
    data = await http_post_json(client, url, payload, headers={"Content-Type": "application/json"})
    if not isinstance(data, dict):
        return {}
    if data.get("error"):
        logger.warning("Alchemy %s returned error: %s", method, data["error"])
        return {}
    return data.get("result") or {}


async def fetch_deployment_block(client: httpx.AsyncClient, url: str, contract_address: str) -> Optional[str]:
    """Block number (hex) of the earliest external transfer into the contract."""
    result = await _rpc(
        client,
        url,
        "alchemy_getAssetTransfers",
        [
            {
                "fromBlock": "0x0",
                "toBlock": "latest",
                "toAddress": contract_address,
                "category": ["external"],
                "maxCount": "0x1",
                "order": "asc",
            }
        ],
        request_id=1,
    )
    transfers = result.get("transfers") or []
    if not transfers or not isinstance(transfers[0], dict):
        return None
    return transfers[0].get("blockNum")


async def fetch_block_timestamp(client: httpx.AsyncClient, url: str, block_num: str) -> Optional[int]:
    """Block timestamp in epoch milliseconds."""
    result = await _rpc(client, url, "eth_getBlockByNumber", [block_num, False], request_id=2)
    timestamp = result.get("timestamp")
    if not timestamp:
        return None
    return _hex_to_int(timestamp) * 1000


async def fetch_token_age(
    client: httpx.AsyncClient,
    base_url: str,
    contract_address: str,
    api_key: str,
    clock: Callable[[], int] = now_ms,
) -> Optional[TokenAge]:
    """Age of the token measured from its deployment block, or None."""
    url = f"{base_url}/{api_key}"
    try:
        block_num = await fetch_deployment_block(client, url, contract_address)
        if not block_num:
            return None
        created_at = await fetch_block_timestamp(client, url, block_num)
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Alchemy token age failed for %s: %s", contract_address, describe_http_error(e))
        return None

    if created_at is None:
        return None
    return compute_token_age(created_at, clock())
