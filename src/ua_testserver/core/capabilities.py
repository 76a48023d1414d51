from __future__ import annotations
import logging
from typing import List


logger = logging.getLogger(__name__)

CAPABILITY_DELIMITER = ":"


def build_capabilities(raw: str, delimiter: str = CAPABILITY_DELIMITER) -> List[str]:
    """
    Split a delimited capability string into an ordered list.

    Empty segments from leading, trailing or doubled delimiters are dropped,
    so "a::b:" gives ["a", "b"] and "" gives []. The input is not modified.
    """
    caps = [segment for segment in raw.split(delimiter) if segment]
    for cap in caps:
        logger.debug("server capability %s", cap)
    return caps
