from __future__ import annotations
from typing import Any, Protocol

from .models import NodeId, RuntimeConfig, Variant


class ServerRuntime(Protocol):
    """
    Interface the bootstrapper drives.

    Failing calls raise. The bootstrapper never retries and calls destroy
    on every path once new_server has returned a handle.
    """

    def set_minimal_config(self, port: int) -> RuntimeConfig:
        """
        Return a configuration listening on port with everything else default.
        """
        ...

    def new_server(self, config: RuntimeConfig) -> Any:
        ...

    def write_variable(self, handle: Any, node_id: NodeId, value: Variant) -> None:
        ...

    def add_namespace(self, handle: Any, uri: str) -> int:
        """
        Register a namespace URI and return its index in the namespace array.
        """
        ...

    def run(self, handle: Any) -> None:
        """
        Serve until an external interrupt, then return.
        """
        ...

    def destroy(self, handle: Any) -> None:
        ...
