from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommandBaseRequest(BaseModel):
    """Mutable command fields. camelCase on the wire, snake_case accepted too"""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    how_to: Optional[str] = Field(None, description="What the command does")
    platform: Optional[str] = Field(
        None, description="Operating system or tool the command runs on"
    )
    command_line: Optional[str] = Field(None, description="The literal command")


class CommandCreateRequest(CommandBaseRequest):
    pass


class CommandUpdateRequest(CommandBaseRequest):
    """Full replacement of a command's mutable fields"""

    pass


class CommandPatchRequest(CommandBaseRequest):
    """
    Sparse set of field changes. Only keys present in the body are applied,
    so an explicit null clears a field while an omitted key leaves it alone.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class JsonPatchOperation(BaseModel):
    """One RFC 6902 operation, e.g. {"op": "replace", "path": "/howTo", "value": "..."}"""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str = Field(..., description="JSON Pointer into the command, e.g. /platform")
    value: Any = None
    from_: Optional[str] = Field(None, alias="from")

    def to_operation(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)
