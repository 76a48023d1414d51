from __future__ import annotations
import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional

from .errors import BootstrapStepError, ConfigurationError
from .models import (
    APPLICATION_NAME_LOCALE,
    DI_NAMESPACE_URI,
    SERVER_CAPABILITIES,
    SERVICE_LEVEL,
    SERVICE_LEVEL_FULL,
    ConfigurationRecord,
    LocalizedText,
    RuntimeConfig,
    Variant,
)
from .runtime import ServerRuntime


logger = logging.getLogger(__name__)

MIN_PORT = 1
MAX_PORT = 65535


class BootstrapState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONFIGURED = "configured"
    RUNNING = "running"
    TERMINATED = "terminated"


def parse_port(raw: Optional[str]) -> int:
    if raw is None or raw == "":
        raise ConfigurationError("port is required, pass it with -p")
    # ASCII digits only, no sign, whitespace or underscores.
    if not (raw.isascii() and raw.isdigit()):
        raise ConfigurationError(f"port {raw!r} is not an integer")
    port = int(raw)
    if not MIN_PORT <= port <= MAX_PORT:
        raise ConfigurationError(f"port {port} is outside {MIN_PORT}..{MAX_PORT}")
    return port


class ServerBootstrapper:
    """
    Drives a ServerRuntime through the fixed startup sequence.

    Order:
      minimal config for the port
      application identity
      new server
      server capabilities variable
      DI namespace, only when enabled
      service level 255
      run until interrupted
      destroy

    Any failure before run is fatal and propagates. The state never goes
    back; there is no paused or recoverable error state.
    """

    def __init__(self, runtime: ServerRuntime, log: Optional[Callable[[str], None]] = None):
        self.runtime = runtime
        self.state = BootstrapState.UNINITIALIZED
        self.namespace_index: Optional[int] = None
        self._log = log or logger.info

    def configure(self, record: ConfigurationRecord) -> RuntimeConfig:
        port = parse_port(record.port)
        config = self.runtime.set_minimal_config(port)
        config.application_uri = record.application_uri
        config.application_name = LocalizedText(APPLICATION_NAME_LOCALE, record.application_name)
        self.state = BootstrapState.CONFIGURED
        self._log(f"configured port={port} uri={record.application_uri!r} name={record.application_name!r}")
        return config

    @contextmanager
    def server_instance(self, config: RuntimeConfig) -> Iterator[Any]:
        """
        Create the server and guarantee destroy on every exit.
        """
        handle = self._step("new_server", self.runtime.new_server, config)
        try:
            yield handle
        finally:
            self.runtime.destroy(handle)
            self._log("server destroyed")

    def populate(self, handle: Any, record: ConfigurationRecord, capabilities: List[str]) -> None:
        self._step(
            "write_server_capabilities",
            self.runtime.write_variable,
            handle,
            SERVER_CAPABILITIES,
            Variant(list(capabilities), "String"),
        )
        self._log(f"server capabilities {capabilities} from {record.capabilities_raw!r}")

        if record.di_namespace_enabled:
            self.namespace_index = self._step(
                "add_di_namespace", self.runtime.add_namespace, handle, DI_NAMESPACE_URI
            )
            self._log(f"DI namespace registered at index {self.namespace_index}")

        self._step(
            "write_service_level",
            self.runtime.write_variable,
            handle,
            SERVICE_LEVEL,
            Variant(SERVICE_LEVEL_FULL, "Byte"),
        )

    def bootstrap(self, record: ConfigurationRecord, capabilities: List[str]) -> None:
        """
        Run the whole sequence. Blocks until the runtime returns from run.
        """
        config = self.configure(record)
        with self.server_instance(config) as handle:
            self.populate(handle, record, capabilities)
            self.state = BootstrapState.RUNNING
            self._log(f"running on port {config.port}")
            self._step("run", self.runtime.run, handle)
        self.state = BootstrapState.TERMINATED

    def _step(self, step: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except Exception as exc:
            raise BootstrapStepError(step, str(exc) or type(exc).__name__) from exc
