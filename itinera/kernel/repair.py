"""
Itinera Kernel — JSON Repair

Pure function: truncated JSON prefix → text that closes every open object/array.

Only bracket nesting is tracked. A string literal left open at the end of the
input stays open, so the result will not parse until more text arrives.
"""

from __future__ import annotations

_CLOSERS: dict[str, str] = {"{": "}", "[": "]"}


def repair_json(text: str) -> str:
    """
    Close the unterminated braces/brackets of a JSON prefix.

    Trailing whitespace and one dangling comma are dropped before the closers
    are appended innermost-first. Never raises.

    Examples:
      '{"a":1,'          → '{"a":1}'
      '{"a":[1,2'        → '{"a":[1,2]}'
      '{"a":"x}'         → '{"a":"x}'   (open string: unchanged, still invalid)
    """
    stack: list[str] = []
    in_string = False

    for i, char in enumerate(text):
        if char == '"' and (i == 0 or text[i - 1] != "\\"):
            in_string = not in_string
        if in_string:
            continue

        if char in _CLOSERS:
            stack.append(char)
        elif char == "}" and stack and stack[-1] == "{":
            stack.pop()
        elif char == "]" and stack and stack[-1] == "[":
            stack.pop()

    closing = "".join(_CLOSERS[opener] for opener in reversed(stack))
    return strip_dangling_comma(text) + closing


def strip_dangling_comma(text: str) -> str:
    """Trim trailing whitespace and drop a single trailing comma."""
    cleaned = text.strip()
    if cleaned.endswith(","):
        cleaned = cleaned[:-1]
    return cleaned


def ends_with_dangling_comma(text: str) -> bool:
    """True when the stream stopped right after a separator (more elements expected)."""
    return text.strip().endswith(",")
