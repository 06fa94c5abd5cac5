from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "hourse"
    environment: str = "dev"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./hourse.db"

    yungching_base_url: str = "https://buy.yungching.com.tw"
    yungching_page_size: int = 30
    yungching_min_price: int = 500
    yungching_max_price: int = 3000

    browser_headless: bool = True
    navigation_timeout_ms: int = 30000


@lru_cache
def get_settings() -> Settings:
    return Settings()
