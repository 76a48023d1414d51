from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from mcp.server.fastmcp import FastMCP

from ua_testserver.core.models import (
    BASE_NAMESPACE_URI,
    NAMESPACE_ARRAY,
    SERVER_CAPABILITIES,
    SERVICE_LEVEL,
    NodeId,
    RuntimeConfig,
    Variant,
)


logger = logging.getLogger(__name__)

DEFAULT_SERVER_NAME = "ua_testserver"


@dataclass
class McpServerHandle:
    """
    One server instance.

    variables
      Address space keyed by NodeId. Only nodes created by new_server
      exist; writes to anything else fail.
    """

    config: RuntimeConfig
    mcp: FastMCP
    variables: Dict[NodeId, Variant] = field(default_factory=dict)
    destroyed: bool = False

    @property
    def namespaces(self) -> List[str]:
        return self.variables[NAMESPACE_ARRAY].value

    def read(self, node_id: NodeId) -> Variant:
        if node_id not in self.variables:
            raise KeyError(f"unknown node {node_id}")
        return self.variables[node_id]


class McpServerRuntime:
    """
    ServerRuntime that publishes variables over MCP.

    Clients read the address space through tools:
      read_variable(node_id)
      list_variables()
      get_namespace_array()
      get_application_description()
    """

    def __init__(self, host: str = "0.0.0.0", transport: str = "streamable-http"):
        self.host = host
        self.transport = transport

    def set_minimal_config(self, port: int) -> RuntimeConfig:
        return RuntimeConfig(port=int(port), host=self.host)

    def new_server(self, config: RuntimeConfig) -> McpServerHandle:
        name = config.application_name.text or DEFAULT_SERVER_NAME
        mcp = FastMCP(name, host=config.host, port=config.port)
        handle = McpServerHandle(config=config, mcp=mcp)
        handle.variables[NAMESPACE_ARRAY] = Variant([BASE_NAMESPACE_URI, config.application_uri], "String")
        handle.variables[SERVICE_LEVEL] = Variant(0, "Byte")
        handle.variables[SERVER_CAPABILITIES] = Variant([], "String")
        self._register_tools(handle)
        logger.info("server %r created for %s:%d", name, config.host, config.port)
        return handle

    def write_variable(self, handle: McpServerHandle, node_id: NodeId, value: Variant) -> None:
        self._check_alive(handle)
        current = handle.read(node_id)
        if current.data_type != value.data_type or current.is_array != value.is_array:
            raise TypeError(
                f"node {node_id} holds {current.data_type}{'[]' if current.is_array else ''}, "
                f"got {value.data_type}{'[]' if value.is_array else ''}"
            )
        handle.variables[node_id] = Variant(list(value.value) if value.is_array else value.value, value.data_type)

    def add_namespace(self, handle: McpServerHandle, uri: str) -> int:
        self._check_alive(handle)
        namespaces = handle.namespaces
        if uri in namespaces:
            return namespaces.index(uri)
        namespaces.append(uri)
        return len(namespaces) - 1

    def run(self, handle: McpServerHandle) -> None:
        self._check_alive(handle)
        try:
            handle.mcp.run(transport=self.transport)
        except KeyboardInterrupt:
            logger.info("interrupt received, stopping server")

    def destroy(self, handle: McpServerHandle) -> None:
        if handle.destroyed:
            return
        handle.variables.clear()
        handle.destroyed = True

    def _check_alive(self, handle: McpServerHandle) -> None:
        if handle.destroyed:
            raise RuntimeError("server handle already destroyed")

    def _register_tools(self, handle: McpServerHandle) -> None:
        mcp = handle.mcp

        @mcp.tool()
        def read_variable(node_id: str) -> Dict[str, Any]:
            """Read a variable by node id, for example "ns=0;i=2267"."""
            parsed = NodeId.parse(node_id)
            result = handle.read(parsed).to_dict()
            result["node_id"] = str(parsed)
            return result

        @mcp.tool()
        def list_variables() -> List[str]:
            return [str(n) for n in handle.variables]

        @mcp.tool()
        def get_namespace_array() -> List[str]:
            return list(handle.namespaces)

        @mcp.tool()
        def get_application_description() -> Dict[str, Any]:
            return {
                "application_uri": handle.config.application_uri,
                "application_name": {
                    "locale": handle.config.application_name.locale,
                    "text": handle.config.application_name.text,
                },
            }
