import os
from typing import Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_API_KEYS = ("your-secret-api-key-123", "admin-key-456")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    port: int = 3000
    # "development" exposes stack traces in error envelopes
    environment: str = "production"
    api_keys: Tuple[str, ...] = DEFAULT_API_KEYS

    @property
    def debug(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            port=os.getenv("PORT", "3000"),
            environment=os.getenv("APP_ENV", "production"),
        )
