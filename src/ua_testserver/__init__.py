"""
ua_testserver

Command line test server that publishes its identity and capabilities
as readable variables.

Core ideas
1. Flags are parsed into a ConfigurationRecord
2. The capability string is split into an ordered list
3. The bootstrapper drives a pluggable server runtime through a fixed sequence
"""

__all__ = ["core", "runtime", "cli"]
