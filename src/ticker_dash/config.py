from pydantic import BaseModel, Field, field_validator

from ticker_dash.domain.models import OpenPolicy


class Settings(BaseModel):
    symbols: list[str] = Field(..., min_length=1)
    log_level: str = "WARNING"
    log_file: str | None = None
    timeout: float = Field(10.0, gt=0)
    open_policy: OpenPolicy = OpenPolicy.FIRST
    artifacts_dir: str | None = None
    poll_interval: float = Field(0.2, gt=0)
    dashboard: bool = True

    @field_validator("symbols")
    @classmethod
    def _clean_symbols(cls, value: list[str]) -> list[str]:
        cleaned = [symbol.strip().upper() for symbol in value]
        if any(not symbol for symbol in cleaned):
            raise ValueError("symbols must be non-empty")
        return cleaned
