import json
import re
from typing import Any, Optional, Dict

CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f]")


def parse_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Strictly parse text as a single JSON object."""
    if not text:
        return None
    try:
        parsed = json.loads(text.strip())
    except (json.JSONDecodeError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json_block(text: str) -> Optional[Dict[str, Any]]:
    """Extract the first balanced JSON object from text."""
    if not text:
        return None

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                candidate = text[start : i + 1]
                try:
                    parsed = json.loads(candidate)
                except json.JSONDecodeError:
                    try:
                        parsed = json.loads(CONTROL_CHARS_PATTERN.sub("", candidate))
                    except json.JSONDecodeError:
                        return None
                return parsed if isinstance(parsed, dict) else None
    return None

def parse_numeric_value(val: Any) -> Optional[float]:
    """Parse a number out of model output such as 0.8, "0.8", "85%" or "1,4"."""
    if val is None or isinstance(val, bool):
        return None
    try:
        if isinstance(val, (int, float)):
            return float(val)
        s = str(val).strip()
        is_percent = s.endswith("%")
        s = s.rstrip("%").strip().replace(",", ".")
        m = re.match(r"^(-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)", s)
        number = float(m.group(1)) if m else float(s)
    except (ValueError, TypeError, OverflowError):
        return None
    return number / 100.0 if is_percent else number


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))
