from pydantic import Field
from pydantic_settings import SettingsConfigDict

from settings.base import BaseSettings


class CoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="core_")

    max_file_size: int = Field(default=100 * 1024 * 1024, title="Max file size")
    flow_url_template: str = Field(
        default="https://{flow_name}.flows.graphorlm.com", title="Flow URL template"
    )
    lock_timeout: float = Field(default=60.0, title="Key lock expiry in seconds")
    lock_blocking_timeout: float = Field(
        default=10.0, title="Seconds to wait for a busy key lock"
    )

    def build_flow_url(self, flow_name: str) -> str:
        """Build the public URL of a deployed flow.

        Args:
            flow_name: The flow name.

        Returns:
            The flow URL.

        """
        return self.flow_url_template.format(flow_name=flow_name)


core_settings = CoreSettings()
