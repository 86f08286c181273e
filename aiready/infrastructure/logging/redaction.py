"""
Sensitive-field redaction for emitted log records.

Paths use the notation of the redaction list below: dotted segments, quoted
keys in brackets for names that are not identifiers, and ``*`` to match any
key at one level. A path is anchored at the top of the record.
"""

import re
from typing import Any, Dict, Iterable, List, Sequence, Tuple

REDACT_PATHS: Tuple[str, ...] = (
    "password",
    "token",
    "secret",
    "authorization",
    "cookie",
    "req.headers.authorization",
    "req.headers.cookie",
    'res.headers["set-cookie"]',
)

CENSOR = "***REDACTED***"

WILDCARD = "*"

_SEGMENT = re.compile(r"""\.?(?:\[(?P<quote>["'])(?P<quoted>.*?)(?P=quote)\]|(?P<plain>[^.\[\]]+))""")


def parse_path(path: str) -> Tuple[str, ...]:
    """
    Split a redaction path into its key segments.

    Args:
        path: Path such as ``req.headers.cookie`` or ``res.headers["set-cookie"]``

    Returns:
        Tuple of keys from the record root down to the redacted field

    Raises:
        ValueError: If the path is empty or not well formed
    """
    segments: List[str] = []
    position = 0
    while position < len(path):
        match = _SEGMENT.match(path, position)
        if not match or match.end() == position:
            raise ValueError(f"Malformed redaction path: {path!r}")
        segments.append(match.group("quoted") if match.group("quote") else match.group("plain"))
        position = match.end()
    if not segments:
        raise ValueError("Redaction path must not be empty")
    return tuple(segments)


class RedactionProcessor:
    """
    structlog processor that censors configured paths.

    Containers along a matched path are shallow-copied before the value is
    replaced, so dicts owned by the caller or bound into a logger's context
    keep their original values.
    """

    def __init__(self, paths: Iterable[str] = REDACT_PATHS, censor: Any = CENSOR):
        self.paths: Tuple[Tuple[str, ...], ...] = tuple(parse_path(p) for p in paths)
        self.censor = censor

    def __call__(self, logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        for path in self.paths:
            event_dict = self._redact(event_dict, path)
        return event_dict

    def _redact(self, node: Dict[str, Any], path: Sequence[str]) -> Dict[str, Any]:
        head, rest = path[0], path[1:]
        keys = list(node) if head == WILDCARD else [head]
        copied = None
        for key in keys:
            if key not in node:
                continue
            if not rest:
                replacement = self.censor
            elif isinstance(node[key], dict):
                replacement = self._redact(node[key], rest)
                if replacement is node[key]:
                    continue
            else:
                continue
            if copied is None:
                copied = dict(node)
            copied[key] = replacement
        return node if copied is None else copied
