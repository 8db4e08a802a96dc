"""
Tool registry.

Each tool pairs a pydantic input model with a handler. Invocation validates
the raw input before the handler runs, so malformed requests never reach a
provider.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import pydantic
from pydantic import BaseModel

from tvagent.errors import InternalError, ToolError, UnknownToolError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolSpec:
    name: str
    title: str
    description: str
    input_model: type[BaseModel]
    output_model: type[BaseModel]
    handler: Callable[[Any], BaseModel]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "input_schema": self.input_model.model_json_schema(),
            "output_schema": self.output_model.model_json_schema(),
        }


def flatten_validation_errors(exc: pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(i) for i in err.get("loc", []))
        msg = err.get("msg", "Invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


class ToolRegistry:
    def __init__(self):
        self._tools: dict[str, ToolSpec] = {}

    def register(self, spec: ToolSpec):
        if spec.name in self._tools:
            raise ValueError(f"tool already registered: {spec.name}")
        self._tools[spec.name] = spec

    def get(self, name: str) -> ToolSpec:
        spec = self._tools.get(name)
        if spec is None:
            raise UnknownToolError(name)
        return spec

    def list_tools(self) -> list[dict[str, Any]]:
        return [spec.to_dict() for spec in self._tools.values()]

    def invoke(self, name: str, raw_input: dict[str, Any] | None) -> tuple[dict[str, Any], dict[str, Any]]:
        """Run a tool. Returns the normalized input and the result, both as plain dicts."""
        spec = self.get(name)
        try:
            parsed = spec.input_model.model_validate(raw_input or {})
        except pydantic.ValidationError as exc:
            raise ValidationError(flatten_validation_errors(exc)) from exc

        try:
            result = spec.handler(parsed)
        except ToolError:
            raise
        except Exception as exc:
            logger.error(f"Tool {name} failed: {exc}", exc_info=True)
            raise InternalError(f"{name} failed unexpectedly") from exc
        return parsed.model_dump(), result.model_dump()
