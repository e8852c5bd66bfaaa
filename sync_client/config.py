import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

load_dotenv()


class SyncClientConfig(BaseModel):
    api_base: str
    timeout_seconds: float = 10.0

    @field_validator("api_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("api_base is required to reach the API")
        return value

    @classmethod
    def from_env(cls, api_base: Optional[str] = None) -> "SyncClientConfig":
        """Reads LINGUA_API_BASE and LINGUA_API_TIMEOUT."""
        return cls(
            api_base=api_base or os.getenv("LINGUA_API_BASE", ""),
            timeout_seconds=float(os.getenv("LINGUA_API_TIMEOUT", "10")),
        )
