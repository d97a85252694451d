from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CHORDSHEET_", env_file=".env", extra="ignore")

    default_key: str = "C"
    output_format: str = "html"
    include_minor_keys: bool = True
    log_level: str = "WARNING"
    log_json: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
