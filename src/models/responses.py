from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommandReadResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Identifier assigned by the store")
    how_to: Optional[str] = Field(None, description="What the command does")
    platform: Optional[str] = Field(
        None, description="Operating system or tool the command runs on"
    )
    command_line: Optional[str] = Field(None, description="The literal command")


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint"""

    status: str = Field(..., description="Overall service health status")
    repository: str = Field(..., description="Command repository in use")
    command_count: int = Field(..., description="Number of stored commands")
