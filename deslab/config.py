from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    # Modes of operation
    default_mode: Literal["ECB", "CBC", "CFB", "OFB", "CTR"] = Field(default="CBC")
    strict_padding: bool = Field(
        default=False,
        description="Raise PaddingError on inconsistent padding instead of returning the payload as-is",
    )

    # Avalanche demo
    avalanche_trials: int = Field(default=200, ge=1, le=100_000)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Logging
    log_level: str = Field(default="INFO")

    @field_validator("default_mode", mode="before")
    @classmethod
    def _upper_mode(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    def _bool(name: str, default: bool) -> bool:
        v = os.getenv(name)
        if v is None:
            return default
        return v.strip().lower() in {"1", "true", "yes", "y", "on"}

    return Settings(
        default_mode=os.getenv("DESLAB_DEFAULT_MODE", "CBC"),
        strict_padding=_bool("DESLAB_STRICT_PADDING", False),
        avalanche_trials=int(os.getenv("DESLAB_AVALANCHE_TRIALS", "200")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        log_level=os.getenv("DESLAB_LOG_LEVEL", "INFO"),
    )
