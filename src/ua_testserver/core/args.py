from __future__ import annotations
import logging
from typing import Dict, Optional, Sequence

from .errors import ArgumentCountError, UnknownFlagError
from .models import ConfigurationRecord


logger = logging.getLogger(__name__)

FLAG_MARKER = "-"

# argc limit of 11 including the program name.
MAX_ARGUMENTS = 10

# Two character codes are tried before one character codes.
LONG_FLAGS: Dict[str, str] = {
    "au": "application_uri",
    "an": "application_name",
}
SHORT_FLAGS: Dict[str, str] = {
    "c": "capabilities_raw",
    "p": "port",
    "d": "di_namespace_enabled",
}

DI_ENABLED_VALUE = "ON"


def match_flag(token: str) -> Optional[str]:
    """
    Map a flag token to the record field it sets, or None if unknown.

    Matching is by prefix after the marker, so "-cap" selects "c".
    """
    code = token[len(FLAG_MARKER):]
    if code[:2] in LONG_FLAGS:
        return LONG_FLAGS[code[:2]]
    if code[:1] in SHORT_FLAGS:
        return SHORT_FLAGS[code[:1]]
    return None


def parse_arguments(tokens: Sequence[str]) -> ConfigurationRecord:
    """
    Parse flag/value pairs into a ConfigurationRecord.

    tokens excludes the program name. Pairs are read left to right and a
    repeated flag overwrites the earlier value. Tokens without the flag
    marker are skipped together with the token after them.
    """
    count = len(tokens)
    if count == 0:
        raise ArgumentCountError("no options found")
    if count > MAX_ARGUMENTS:
        raise ArgumentCountError(f"too many options found ({count}, limit is {MAX_ARGUMENTS})")

    record = ConfigurationRecord()

    for i in range(0, count, 2):
        flag = tokens[i]
        if not flag.startswith(FLAG_MARKER):
            logger.debug("argv[%d] = %s ignored", i, flag)
            continue

        field = match_flag(flag)
        if field is None:
            raise UnknownFlagError(f"invalid option {flag}", index=i, flag=flag, record=record)

        if i + 1 >= count:
            raise ArgumentCountError(f"option {flag} has no value", index=i, flag=flag)
        value = tokens[i + 1]

        if field == "di_namespace_enabled":
            record.di_namespace_enabled = value == DI_ENABLED_VALUE
        else:
            record.assign(field, value, index=i + 1, flag=flag)
        logger.debug("argv[%d] = %s -> %s = %s", i, flag, field, value)

    return record
