"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

CWA_API_BASE_URL = "https://opendata.cwa.gov.tw/api"
# 一般天氣預報-今明 36 小時天氣預報
CWA_DATASET_ID = "F-C0032-001"


class UpstreamConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = CWA_API_BASE_URL
    dataset_id: str = CWA_DATASET_ID
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    api_key: str = ""


class GeoConfig(BaseModel):
    model_config = {"extra": "forbid"}

    database_path: str = "data/GeoLite2-City.mmdb"
    default_city: str = Field(default="臺北市", min_length=1)
    # Lowercase English city name -> CWA location name. Empty uses the built-in table.
    city_translations: dict[str, str] = {}


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = ["*"]


class ProxyConfig(BaseModel):
    model_config = {"extra": "forbid"}

    upstream: UpstreamConfig = UpstreamConfig()
    geo: GeoConfig = GeoConfig()
    server: ServerConfig = ServerConfig()
