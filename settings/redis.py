from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="redis_")

    host: str = Field(default="redis", title="Redis host")
    port: int = Field(default=6379, title="Redis port")
    db: int = Field(default=0, title="Redis db")
    password: str | None = Field(default=None, title="Redis password")

    @property
    def url(self) -> str:
        """Url.

        Returns:
            Redis connection URL.

        """
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


redis_settings = RedisSettings()
