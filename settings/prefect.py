from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class PrefectSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="prefect_")

    host: str = Field(default="prefect", title="Prefect host")
    port: int = Field(default=4200, title="Prefect port")
    pool_name: str = Field(default="default", title="Prefect work pool name")

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


prefect_settings = PrefectSettings()
