"""Application settings loaded from the environment (prefix ``AGROSTORE_``) or a ``.env`` file.

Protean's own infrastructure (databases, brokers, event store) is configured
per bounded context in ``domain.toml``; these settings cover everything that
lives outside the domain model: auth tokens, cookies, uploads and the
payment gateway.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AGROSTORE_", env_file=".env", extra="ignore")

    project_name: str = "AgroStore API"

    # Security
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expiry_days: int = 7
    auth_cookie_name: str = "session_token"
    cookie_secure: bool = False
    session_secret: str = "change-me-too"
    session_cookie_name: str = "agrostore_session"

    # Uploads
    upload_dir: str = "public/uploads"
    upload_url_prefix: str = "/uploads"

    # Payments
    payment_gateway: str = "fake"
    razorpay_key_id: str = ""
    razorpay_key_secret: str = ""
    razorpay_api_url: str = "https://api.razorpay.com/v1"
    currency: str = "INR"

    # CORS
    cors_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
