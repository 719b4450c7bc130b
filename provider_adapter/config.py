from pydantic import AnyUrl
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    SERVICE_PORT: int = 8080
    MAX_EVENT_SIZE: int = 65536
    LOG_JSON: bool = True
    # Response sink selection: "memory" or "redis"
    SINK_ADAPTER: Literal["memory", "redis"] = "memory"
    REDIS_URL: AnyUrl | None = None
    RESPONSE_STREAM_KEY: str = "provider-adapter:responses"
    # Comma-separated list of organisations this adapter serves (empty = all)
    ORG_IDS: str = ""
    HEALTH_COMPONENT: str = "adapter"
    # Raise on action strings outside the known enum instead of rejecting
    STRICT_ACTIONS: bool = False
    # Post an ADAPTER_REJECTED event when verification does not accept
    ACKNOWLEDGE_UNVERIFIED: bool = False

    def org_ids(self) -> set[str]:
        return {org.strip() for org in self.ORG_IDS.split(",") if org.strip()}

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
