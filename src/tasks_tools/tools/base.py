"""Agent tool definitions.

A Tool couples a name and description with a pydantic model describing its
input, and an async execute function that receives the validated model.
The calling agent framework reads input_schema() and calls invoke().
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tool:
    """A named, schema-validated async operation callable by an agent."""

    name: str
    description: str
    parameters: type[BaseModel]
    execute: Callable[[Any], Awaitable[Any]]

    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool input, as exposed to the agent."""
        return self.parameters.model_json_schema(by_alias=True)

    def validate(self, arguments: Mapping[str, Any] | None = None) -> BaseModel:
        """Validate raw tool arguments.

        Raises:
            pydantic.ValidationError: If the arguments don't match the schema.
        """
        return self.parameters.model_validate(dict(arguments or {}))

    async def invoke(self, arguments: Mapping[str, Any] | None = None) -> Any:
        """Validate arguments and run the tool."""
        params = self.validate(arguments)
        logger.debug(f"Invoking tool {self.name}")
        return await self.execute(params)


class ToolRegistry:
    """Lookup of tools by name."""

    def __init__(self, tools: list[Tool] | None = None):
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> Tool:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool
        return tool

    def get(self, name: str) -> Tool:
        try:
            return self._tools[name]
        except KeyError:
            raise KeyError(
                f"Unknown tool: {name}. Available tools: {list(self._tools.keys())}"
            ) from None

    def names(self) -> list[str]:
        return list(self._tools.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
