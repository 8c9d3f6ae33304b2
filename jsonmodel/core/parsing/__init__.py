"""JSON value parsing into model instances."""

from jsonmodel.core.parsing.parser import ParseOptions, ValueParser, decode_json

__all__ = ["ParseOptions", "ValueParser", "decode_json"]
