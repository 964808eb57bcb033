from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Remainders at or below this are treated as settled.
    settlement_epsilon: float = Field(1e-9, alias="SETTLEMENT_EPSILON", gt=0)
    # Allowed drift when checking that an expense's balances sum to zero.
    balance_tolerance: float = Field(1e-6, alias="BALANCE_TOLERANCE", gt=0)

    enforce_contribution_total: bool = Field(True, alias="ENFORCE_CONTRIBUTION_TOTAL")


settings = Settings()
