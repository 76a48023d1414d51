"""
Core modules. These never import a concrete runtime.
"""

from .args import parse_arguments
from .bootstrap import BootstrapState, ServerBootstrapper
from .capabilities import build_capabilities
from .models import ConfigurationRecord

__all__ = [
    "parse_arguments",
    "build_capabilities",
    "ConfigurationRecord",
    "ServerBootstrapper",
    "BootstrapState",
]
