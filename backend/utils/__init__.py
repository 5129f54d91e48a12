from .parsing import clamp, extract_json_block, parse_json_object, parse_numeric_value

__all__ = [
    "clamp",
    "extract_json_block",
    "parse_json_object",
    "parse_numeric_value",
]
