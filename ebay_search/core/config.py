from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    PROJECT_NAME: str = "eBay Search"

    # Search endpoint (listview layout of ebay.de)
    EBAY_BASE_URL: str = "https://www.ebay.de/sch/i.html"

    # Document source
    HTTP_TIMEOUT: float = 30.0  # seconds per request
    HTTP_RETRIES: int = 3
    HTTP_BACKOFF_BASE: float = 1.0  # seconds, doubled on every failed attempt

    # Logging
    LOG_JSON: bool = False  # JSON lines instead of the colored console renderer
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")


settings = Settings()
