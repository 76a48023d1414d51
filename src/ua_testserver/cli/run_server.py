from __future__ import annotations
import logging
import sys
from typing import Optional, Sequence

from ua_testserver.core.args import parse_arguments
from ua_testserver.core.bootstrap import ServerBootstrapper
from ua_testserver.core.capabilities import build_capabilities
from ua_testserver.core.errors import (
    ArgumentError,
    BootstrapError,
    ConfigurationError,
)
from ua_testserver.core.runtime import ServerRuntime


logger = logging.getLogger("ua_testserver")

EXIT_OK = 0
EXIT_ARGUMENTS = 2
EXIT_CONFIGURATION = 3
EXIT_BOOTSTRAP = 4

USAGE = "usage: ua-testserver -p <port> [-au <uri>] [-an <name>] [-c <cap1:cap2:...>] [-d ON]"


def exit_code_for(exc: BootstrapError) -> int:
    if isinstance(exc, ArgumentError):
        return EXIT_ARGUMENTS
    if isinstance(exc, ConfigurationError):
        return EXIT_CONFIGURATION
    return EXIT_BOOTSTRAP


def main(argv: Optional[Sequence[str]] = None, runtime: Optional[ServerRuntime] = None) -> int:
    """
    Parse the flags, build the capability list and run the server.

      ua-testserver -au urn:example:lds -an "Test Server" -c LDS:DA -p 4840 -d ON

    Returns the process exit code. Blocks while the server runs.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        record = parse_arguments(args)
        capabilities = build_capabilities(record.capabilities_raw)
        if runtime is None:
            from ua_testserver.runtime.mcp_runtime import McpServerRuntime

            runtime = McpServerRuntime()
        ServerBootstrapper(runtime).bootstrap(record, capabilities)
    except BootstrapError as exc:
        logger.error("startup failed: %s", exc)
        print(f"error: {exc}", file=sys.stderr)
        if isinstance(exc, ArgumentError):
            print(USAGE, file=sys.stderr)
        return exit_code_for(exc)

    return EXIT_OK


def cli() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    sys.exit(main())


if __name__ == "__main__":
    cli()
