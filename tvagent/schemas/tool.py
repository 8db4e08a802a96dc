from typing import Any

from pydantic import BaseModel, Field


class ToolInvocation(BaseModel):
    tool: str = Field(..., min_length=1)
    input: dict[str, Any] = Field(default_factory=dict)


class ToolResponse(BaseModel):
    tool: str
    input: dict[str, Any]
    result: dict[str, Any]


class ToolDescriptor(BaseModel):
    name: str
    title: str
    description: str
    input_schema: dict[str, Any]
    output_schema: dict[str, Any]


class ToolListResponse(BaseModel):
    tools: list[ToolDescriptor]


class ErrorResponse(BaseModel):
    schema_version: str
    status: str = "error"
    error_code: str
    message: str
