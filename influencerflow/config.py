import json
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load env values for components that read os.environ directly (e.g., the Stripe SDK).
_project_root = Path(__file__).resolve().parents[1]
load_dotenv(_project_root / ".env", override=False)


def _coerce_json(value: str):
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _split_list(value: str | list[str]) -> list[str]:
    """Accept a JSON array or a comma-separated string."""
    if isinstance(value, str):
        decoded = _coerce_json(value)
        if isinstance(decoded, list):
            return [str(item).strip() for item in decoded if str(item).strip()]
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./influencerflow.db"
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30

    CLERK_JWT_ISSUER: str = ""
    CLERK_JWKS_URL: str = ""
    CLERK_AUDIENCE: Annotated[list[str], NoDecode] = ["http://localhost:5173", "backend"]

    BACKEND_CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    STRIPE_SECRET_KEY: str | None = None
    STRIPE_WEBHOOK_SECRET: str | None = None
    PAYMENT_CURRENCY: str = "usd"
    # Payments are created with the contract and fall due a week later.
    PAYMENT_DUE_DAYS: int = 7
    PAYMENT_DUE_SOON_DAYS: int = 3

    DEFAULT_CONTRACT_TERMS: str = "Standard collaboration agreement terms and conditions apply."
    ENABLE_DEMO_SEED: bool = False

    @field_validator("BACKEND_CORS_ORIGINS", "CLERK_AUDIENCE", mode="before")
    @classmethod
    def split_lists(cls, value: str | list[str]) -> list[str]:
        return _split_list(value)

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
