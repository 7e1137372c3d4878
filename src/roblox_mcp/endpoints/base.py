"""Tool registration for the Roblox endpoint modules.

Endpoint classes subclass ``BaseEndpoint`` and mark async methods with the
``@endpoint`` decorator. Defining the class is enough to register its tools;
``EndpointManager`` instantiates classes lazily and routes MCP tool calls.

Example:

    class RobloxUsers(BaseEndpoint):
        @endpoint(
            name="get_user",
            description="Look up a Roblox user by username",
            params={"username": {"type": "string", "description": "Username"}},
        )
        async def get_user(self, username: str) -> str:
            user = await self.client.get_user(username)
            return f"{user.username} ({user.id})"
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, TypeVar

from mcp.types import Tool, TextContent

from roblox_mcp.client import RobloxClient
from roblox_mcp.client.models import CookieHeader


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Coroutine[Any, Any, str]])

NO_SESSION_MESSAGE = (
    "Error: No Roblox session configured. "
    "Set the ROBLOX_COOKIE environment variable to your .ROBLOSECURITY cookie."
)


@dataclass
class EndpointTool:
    """Metadata for a registered endpoint tool."""

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: Callable[..., Coroutine[Any, Any, str]]
    endpoint_class: type["BaseEndpoint"]
    supports_json: bool = False


class EndpointRegistry:
    """Registry of every tool defined by an endpoint class."""

    _tools: dict[str, EndpointTool] | None = None

    @classmethod
    def _ensure_initialized(cls) -> None:
        if cls._tools is None:
            cls._tools = {}

    @classmethod
    def register_tool(cls, tool: EndpointTool) -> None:
        """Register a tool, replacing any tool with the same name."""
        cls._ensure_initialized()
        assert cls._tools is not None
        if tool.name in cls._tools:
            logger.warning(f"Tool '{tool.name}' already registered, overwriting")
        cls._tools[tool.name] = tool
        logger.debug(f"Registered tool: {tool.name}")

    @classmethod
    def get_tool(cls, name: str) -> EndpointTool | None:
        cls._ensure_initialized()
        assert cls._tools is not None
        return cls._tools.get(name)

    @classmethod
    def get_all_tools(cls) -> list[EndpointTool]:
        cls._ensure_initialized()
        assert cls._tools is not None
        return list(cls._tools.values())

    @classmethod
    def get_mcp_tools(cls) -> list[Tool]:
        """Get all tools in MCP Tool format."""
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
            )
            for tool in cls.get_all_tools()
        ]

    @classmethod
    def clear(cls) -> None:
        """Clear all registered tools (useful for testing)."""
        cls._tools = {}


def _build_input_schema(params: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """Build a JSON Schema object from parameter definitions."""
    properties: dict[str, Any] = {}
    required: list[str] = []

    for name, param in params.items():
        param_dict = {
            "type": param.get("type", "string"),
            "description": param.get("description", ""),
        }
        for key in ("enum", "default", "minimum", "maximum", "items"):
            if key in param:
                param_dict[key] = param[key]
        if param.get("required", True):
            required.append(name)

        properties[name] = param_dict

    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


def endpoint(
    name: str,
    description: str,
    params: dict[str, dict[str, Any]] | None = None,
    supports_json: bool = False,
) -> Callable[[F], F]:
    """
    Mark an async method as an MCP tool.

    Args:
        name: Tool name, unique across all endpoint classes
        description: Human-readable description of what the tool does
        params: Parameter definitions (type, description, required, enum,
                default, minimum, maximum, items)
        supports_json: Add a ``format`` parameter switching between 'text'
                       (default) and 'json' output

    Returns:
        The undecorated function, with ``_endpoint_meta`` attached
    """
    params = dict(params or {})

    if supports_json:
        params["format"] = {
            "type": "string",
            "description": "Output format: 'text' for human-readable output, 'json' for structured JSON",
            "enum": ["text", "json"],
            "default": "text",
            "required": False,
        }

    input_schema = _build_input_schema(params)

    def decorator(func: F) -> F:
        func._endpoint_meta = {  # type: ignore[attr-defined]
            "name": name,
            "description": description,
            "input_schema": input_schema,
            "supports_json": supports_json,
        }
        return func

    return decorator


class BaseEndpointMeta(type):
    """Metaclass that registers the tools of each endpoint class it creates."""

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        **kwargs: Any,
    ) -> type:
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        if name != "BaseEndpoint" and any(
            isinstance(b, BaseEndpointMeta) for b in bases
        ):
            for attr_value in namespace.values():
                meta = getattr(attr_value, "_endpoint_meta", None)
                if meta is None:
                    continue
                EndpointRegistry.register_tool(
                    EndpointTool(
                        name=meta["name"],
                        description=meta["description"],
                        input_schema=meta["input_schema"],
                        handler=attr_value,
                        endpoint_class=cls,  # type: ignore[arg-type]
                        supports_json=meta["supports_json"],
                    )
                )

        return cls


class BaseEndpoint(metaclass=BaseEndpointMeta):
    """
    Base class for Roblox endpoint modules.

    Attributes:
        client: RobloxClient used for API calls
        credentials: Session cookies for authenticated tools, if configured
    """

    def __init__(
        self, client: RobloxClient, credentials: CookieHeader | None = None
    ) -> None:
        self.client = client
        self.credentials = credentials

    @staticmethod
    def format_error(message: str, format: str = "text") -> str:
        """Render an error message for text or json output."""
        if not message.startswith("Error"):
            message = f"Error: {message}"
        if format == "json":
            return json.dumps({"error": message})
        return message


class EndpointManager:
    """Instantiates endpoint classes and routes tool calls to them."""

    def __init__(
        self, client: RobloxClient, credentials: CookieHeader | None = None
    ) -> None:
        self.client = client
        self.credentials = credentials
        self._instances: dict[type[BaseEndpoint], BaseEndpoint] = {}

    def _get_instance(self, endpoint_class: type[BaseEndpoint]) -> BaseEndpoint:
        if endpoint_class not in self._instances:
            self._instances[endpoint_class] = endpoint_class(
                self.client, self.credentials
            )
        return self._instances[endpoint_class]

    def get_all_tools(self) -> list[Tool]:
        return EndpointRegistry.get_mcp_tools()

    async def call_tool(
        self, name: str, arguments: dict[str, Any] | None
    ) -> list[TextContent]:
        """
        Route a tool call to its endpoint handler.

        Exceptions raised by the handler (Roblox errors, transport failures,
        undecodable bodies) are turned into an error text result.

        Raises:
            ValueError: If the tool is not registered
        """
        tool = EndpointRegistry.get_tool(name)
        if not tool:
            raise ValueError(f"Unknown tool: {name}")

        instance = self._get_instance(tool.endpoint_class)

        try:
            result = await tool.handler(instance, **(arguments or {}))
            return [TextContent(type="text", text=result)]
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [TextContent(type="text", text=f"Error: {e}")]
