from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class PartitionSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="partition_")

    host: str = Field(default="partition", title="Partition service host")
    port: int = Field(default=8080, title="Partition service port")
    timeout: float = Field(default=600.0, title="Partition request timeout")

    @property
    def url(self) -> str:
        """Url.

        Returns:
            Partition service base URL.

        """
        return f"http://{self.host}:{self.port}"


partition_settings = PartitionSettings()
