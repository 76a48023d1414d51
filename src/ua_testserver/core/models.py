from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import ValueTooLongError


MAX_STRING_LENGTH = 254
MAX_PORT_LENGTH = 5

FIELD_LIMITS: Dict[str, int] = {
    "application_uri": MAX_STRING_LENGTH,
    "application_name": MAX_STRING_LENGTH,
    "capabilities_raw": MAX_STRING_LENGTH,
    "port": MAX_PORT_LENGTH,
}

APPLICATION_NAME_LOCALE = "de"
DI_NAMESPACE_URI = "http://opcfoundation.org/UA/DI/"
BASE_NAMESPACE_URI = "http://opcfoundation.org/UA/"

# ServiceLevel 255 means the server is fully operational.
SERVICE_LEVEL_FULL = 255


@dataclass
class ConfigurationRecord:
    """
    Everything the command line can set.

    application_uri, application_name
      Identity published in the application description.

    capabilities_raw
      Unparsed capability list such as "LDS:DA". Kept verbatim so it can
      still be logged after build_capabilities has split it.

    port
      Raw port token. Converted and validated by the bootstrapper, not
      the parser.

    di_namespace_enabled
      Register the Device Integration namespace when True.
    """

    application_uri: str = ""
    application_name: str = ""
    capabilities_raw: str = ""
    port: Optional[str] = None
    di_namespace_enabled: bool = False

    def assign(self, name: str, value: str, index: Optional[int] = None, flag: Optional[str] = None) -> None:
        """
        Set a string field, rejecting values longer than the field allows.
        """
        limit = FIELD_LIMITS[name]
        if len(value) > limit:
            raise ValueTooLongError(
                f"value for {flag or name} is {len(value)} characters, limit is {limit}",
                index=index,
                flag=flag,
                field=name,
                limit=limit,
            )
        setattr(self, name, value)


@dataclass(frozen=True)
class NodeId:
    namespace: int
    identifier: int

    def __str__(self) -> str:
        return f"ns={self.namespace};i={self.identifier}"

    @classmethod
    def parse(cls, text: str) -> "NodeId":
        """
        Parse the "ns=<n>;i=<id>" form. A bare "i=<id>" means namespace 0.
        """
        parts = dict(p.split("=", 1) for p in text.strip().split(";") if "=" in p)
        if "i" not in parts:
            raise ValueError(f"unsupported node id {text!r}")
        return cls(namespace=int(parts.get("ns", 0)), identifier=int(parts["i"]))


NAMESPACE_ARRAY = NodeId(0, 2255)
SERVICE_LEVEL = NodeId(0, 2267)
SERVER_CAPABILITIES = NodeId(0, 12710)


@dataclass(frozen=True)
class LocalizedText:
    locale: str
    text: str


@dataclass
class Variant:
    """
    A variable value together with its declared data type name.
    Arrays are plain lists of the element type.
    """

    value: Any
    data_type: str

    @property
    def is_array(self) -> bool:
        return isinstance(self.value, list)

    def to_dict(self) -> Dict[str, Any]:
        value = list(self.value) if self.is_array else self.value
        return {"value": value, "data_type": self.data_type, "is_array": self.is_array}


@dataclass
class RuntimeConfig:
    """
    Minimal runtime configuration, filled in by set_minimal_config and then
    given an identity by the bootstrapper.
    """

    port: int
    host: str = "0.0.0.0"
    application_uri: str = ""
    application_name: LocalizedText = field(
        default_factory=lambda: LocalizedText(APPLICATION_NAME_LOCALE, "")
    )
