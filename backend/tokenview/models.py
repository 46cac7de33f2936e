from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Upstream numbers are relayed as given; ints stay ints.
Number = Union[int, float]

# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------
# Field names are snake_case; the wire format is camelCase.


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class TokenQuery(BaseModel):
    fid: str
    token_address: str


class CreatorInfo(CamelModel):
    address: Optional[str] = None
    farcaster_username: Optional[str] = None
    farcaster_fid: Optional[str] = None
    farcaster_pfp: Optional[str] = None


class RelevantHolder(CamelModel):
    address: Optional[str] = None
    farcaster_username: Optional[str] = None
    farcaster_fid: Optional[str] = None
    farcaster_pfp: Optional[str] = None
    display_name: Optional[str] = None
    follower_count: Optional[int] = None
    power_badge: bool = False


class TokenAge(CamelModel):
    created_at: int
    age_in_days: int
    age_in_hours: int
    age_in_minutes: int


class PriceTick(CamelModel):
    id: Optional[str] = None
    median: Optional[Number] = None
    open: Optional[Number] = None
    close: Optional[Number] = None
    high: Optional[Number] = None
    low: Optional[Number] = None
    timestamp: Optional[Number] = None


class PriceData(CamelModel):
    price: Optional[Number] = None
    market_cap: Optional[Number] = None
    price_change_5m: Optional[Number] = Field(default=None, alias="priceChange5m")
    price_change_1h: Optional[Number] = Field(default=None, alias="priceChange1h")
    price_change_24h: Optional[Number] = Field(default=None, alias="priceChange24h")
    volume_24h: Optional[Number] = Field(default=None, alias="volume24h")
    total_gas_token_liquidity: Optional[Number] = None
    total_liquidity: Optional[Number] = None
    price_ticks: Optional[List[PriceTick]] = None


class PairLinks(CamelModel):
    website: Optional[str] = None
    telegram: Optional[str] = None
    twitter: Optional[str] = None
    dexscreener_url: Optional[str] = None


class CoinMetadata(CamelModel):
    description: Optional[str] = None
    url: Optional[str] = None


class TokenProfile(CamelModel):
    address: Optional[str] = None
    symbol: Optional[str] = None
    name: Optional[str] = None
    decimals: Optional[int] = None
    image_url_v2: Optional[str] = Field(default=None, alias="imageUrlV2")
    creator: CreatorInfo
    relevant_holders: Optional[List[RelevantHolder]] = None
    holder_count: Optional[int] = None
    age: Optional[TokenAge] = None
    price_data: Optional[PriceData] = None
    description: Optional[str] = None
    website: Optional[str] = None
    telegram: Optional[str] = None
    twitter: Optional[str] = None
    dexscreener_url: Optional[str] = None
    coin_gecko_url: Optional[str] = None


class TokenProfileResponse(BaseModel):
    success: bool = True
    token: TokenProfile


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
