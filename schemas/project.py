from pydantic import BaseModel, ConfigDict, Field


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(default=..., description="ID", gt=0)
    name: str = Field(default=..., description="Name")
