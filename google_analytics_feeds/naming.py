"""Conversion between Google Analytics names and python identifiers.

Google Analytics names columns ``ga:visitorType``; callers use
``visitor_type``. Only names following that convention round-trip.
"""

import re

PREFIX = "ga:"
SEPARATOR = "_"

_PREFIX_RE = re.compile(r"^ga:")
_CAMEL_RE = re.compile(r"(.)([A-Z])")


def to_identifier(wire_name: str) -> str:
    """Return a python-friendly identifier for a Google Analytics name.

    Example:
        to_identifier("ga:visitorType")  # => "visitor_type"
    """
    name = _PREFIX_RE.sub("", wire_name)
    return _CAMEL_RE.sub(r"\1" + SEPARATOR + r"\2", name).lower()


def to_wire_name(identifier: str) -> str:
    """Return the Google Analytics name for a python identifier.

    Example:
        to_wire_name("visitor_type")  # => "ga:visitorType"
    """
    parts = [part.capitalize() for part in str(identifier).split(SEPARATOR)]
    parts[0] = parts[0].lower()
    return PREFIX + "".join(parts)
