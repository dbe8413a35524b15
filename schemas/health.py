from pydantic import BaseModel, Field, computed_field


class LivenessResponse(BaseModel):
    status: bool = Field(default=True, description="Process is up")


class ServiceHealthResponse(BaseModel):
    name: str = Field(default=..., description="Dependency name")
    status: bool = Field(default=..., description="Dependency is reachable")


class HealthResponse(BaseModel):
    services: list[ServiceHealthResponse] = Field(
        default_factory=list, description="Dependency checks in a fixed order"
    )

    @computed_field
    @property
    def status(self) -> bool:
        """Ready only when every dependency answered."""
        return all(service.status for service in self.services)

    @computed_field
    @property
    def failed(self) -> list[str]:
        return [service.name for service in self.services if not service.status]
