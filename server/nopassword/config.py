from functools import lru_cache
from typing import List

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from nopassword.token_codec import CodecConfig, configure


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "nopassword-server"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    token_secret: SecretStr = SecretStr("dev-secret-change-me")
    max_token_age_ms: int = 15 * 60 * 1000
    pbkdf2_iterations: int = 1000

    def codec_config(self) -> CodecConfig:
        return configure(
            self.token_secret.get_secret_value(),
            self.max_token_age_ms,
            iterations=self.pbkdf2_iterations,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
