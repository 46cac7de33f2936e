import json
import logging
from typing import Any, Mapping

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tokenview.config import Settings, get_settings, require_credentials, settings
from tokenview.errors import InvalidRequestError, TokenViewError
from tokenview.http_client import get_http_client
from tokenview.logging_config import setup_logging
from tokenview.models import ErrorResponse, TokenProfileResponse, TokenQuery
from tokenview.service import TokenProfileService

setup_logging("tokenview", settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

MISSING_PARAMS = "Missing required parameters: fid and tokenAddress are required"

# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------
app = FastAPI(title="tokenview API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TokenViewError)
async def token_view_error_handler(request: Request, exc: TokenViewError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _param(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (int, float)):
        # 0 is not a valid fid
        return str(value) if value else ""
    if isinstance(value, str):
        return value.strip()
    return ""


def parse_token_query(params: Mapping[str, Any]) -> TokenQuery:
    fid = _param(params.get("fid"))
    token_address = _param(params.get("tokenAddress"))
    if not fid or not token_address:
        raise InvalidRequestError(MISSING_PARAMS)
    return TokenQuery(fid=fid, token_address=token_address)


def parse_json_body(raw: bytes) -> TokenQuery:
    try:
        body = json.loads(raw)
    except ValueError:
        raise InvalidRequestError("Invalid JSON body")
    if not isinstance(body, dict):
        raise InvalidRequestError("Invalid JSON body", details="Expected a JSON object")
    return parse_token_query(body)


async def view_token(
    query: TokenQuery,
    config: Settings,
    client: httpx.AsyncClient,
) -> TokenProfileResponse:
    credentials = require_credentials(config)
    service = TokenProfileService(config, credentials, client)
    try:
        profile = await service.build_profile(query)
    except TokenViewError:
        raise
    except Exception as e:
        logger.exception("Error fetching token data for %s", query.token_address)
        raise TokenViewError("Internal server error", status_code=500, details=str(e) or e.__class__.__name__)
    return TokenProfileResponse(success=True, token=profile)

# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------
ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@app.get("/")
def ping():
    return {"message": "tokenview backend online."}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/view-token", response_model=TokenProfileResponse, responses=ERROR_RESPONSES)
@app.get("/api/fetch-token", response_model=TokenProfileResponse, responses=ERROR_RESPONSES)
async def view_token_get(
    request: Request,
    config: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> TokenProfileResponse:
    query = parse_token_query(request.query_params)
    return await view_token(query, config, client)


@app.post("/api/view-token", response_model=TokenProfileResponse, responses=ERROR_RESPONSES)
@app.post("/api/fetch-token", response_model=TokenProfileResponse, responses=ERROR_RESPONSES)
async def view_token_post(
    request: Request,
    config: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> TokenProfileResponse:
    query = parse_json_body(await request.body())
    return await view_token(query, config, client)


# -----------------------------------------------------------------------------
# Optional: run with uvicorn if executed directly
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tokenview.main:app", host="0.0.0.0", port=settings.PORT, reload=False)
