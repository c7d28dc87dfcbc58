import os
from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    app_name: str = os.getenv("APP_NAME", "Fund The World")
    debug: bool = os.getenv("DEBUG", "False").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    port: int = int(os.getenv("PORT", 8001))
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./fundtheworld.db")

    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_temperature: float = float(os.getenv("OPENAI_TEMPERATURE", 0.5))
    chat_max_steps: int = int(os.getenv("CHAT_MAX_STEPS", 5))

    secret_key: str = os.getenv("SECRET_KEY", "your-secret-key")
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 1440))

    cache_ttl_seconds: int = int(os.getenv("CACHE_TTL_SECONDS", 300))
    btc_price_usd: float = float(os.getenv("BTC_PRICE_USD", 65000))

    imgbb_api_key: Optional[str] = os.getenv("IMGBB_API_KEY")
    imgbb_upload_url: str = os.getenv("IMGBB_UPLOAD_URL", "https://api.imgbb.com/1/upload")

    class Config:
        env_file = ".env"
        extra = "allow"

settings = Settings()
