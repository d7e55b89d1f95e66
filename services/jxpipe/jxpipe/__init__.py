"""Request-time JSON to XML bridge."""

__version__ = "1.0.0"

from .transcoder import encode_container, encode_value, escape_xml
from .values import parse_json

__all__ = ["encode_container", "encode_value", "escape_xml", "parse_json"]
