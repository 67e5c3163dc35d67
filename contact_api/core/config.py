from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional

FORM2CHAT_API_URL = "https://form2chat.onrender.com/api/contact-form"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB URI - must be provided via environment variables
    mongo_uri: Optional[str] = None
    mongodb_url: Optional[str] = None  # Alternative environment variable name
    contact_collection: str = "contact_messages"

    # Form2Chat notifier
    form2chat_api_url: str = FORM2CHAT_API_URL
    form2chat_api_key: str = ""
    form2chat_timeout: float = Field(default=15.0, gt=0)

    # CORS settings
    allowed_origins: list[str] = ["*"]

    @property
    def effective_mongo_uri(self) -> str:
        """Get the effective MongoDB URI from available sources"""
        uri = self.mongodb_url or self.mongo_uri
        if not uri:
            raise ValueError("MongoDB URI not configured! Please set MONGODB_URL in your environment variables.")
        return uri


@lru_cache
def get_settings():
    return Settings()
