"""
Canonical string forms used as SigV4 signing input.

The output of every function here is byte-stable: permuting the input
mappings never changes the result.
"""

import json
from typing import Any, Dict, Mapping
from urllib.parse import quote

from .hashing import sha256_hex

# Characters JavaScript's encodeURI leaves alone, on top of the RFC 3986
# unreserved set that quote() never escapes.
_URI_SAFE = "/;,?:@&=+$!*'()#"


def uri_encode_path(path: str) -> str:
    """Percent-encode a request path, keeping slashes and URI delimiters."""
    return quote(path, safe=_URI_SAFE)


def uri_encode_component(value: str) -> str:
    """
    Percent-encode with only the RFC 3986 unreserved set left as is.

    Unlike most component encoders this also escapes ``!'()*``.
    """
    return quote(value, safe='')


def _query_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def canonical_query_string(query_params: Mapping[str, Any]) -> str:
    if not query_params:
        return ''
    return '&'.join(
        f'{uri_encode_component(key)}={uri_encode_component(_query_value(query_params[key]))}'
        for key in sorted(query_params)
    )


def _lowercase_headers(headers: Mapping[str, Any]) -> Dict[str, str]:
    # Names differing only by case collapse into one comma-joined entry.
    grouped: Dict[str, str] = {}
    for name in sorted(headers, key=str.lower):
        lname = name.lower()
        value = str(headers[name])
        grouped[lname] = f'{grouped[lname]},{value}' if lname in grouped else value
    return grouped


def canonical_headers(headers: Mapping[str, Any]) -> str:
    lowered = _lowercase_headers(headers)
    return ''.join(f'{name}:{lowered[name]}\n' for name in sorted(lowered))


def canonical_signed_headers(headers: Mapping[str, Any]) -> str:
    return ';'.join(sorted(_lowercase_headers(headers)))


def canonical_request(
        method: str,
        path: str,
        query_params: Mapping[str, Any],
        headers: Mapping[str, Any],
        payload: str
) -> str:
    """
    Build the six-line canonical request.

    The headers block already ends in a newline, which leaves an empty line
    between it and the signed header list.
    """
    return '\n'.join([
        method,
        uri_encode_path(path),
        canonical_query_string(query_params),
        canonical_headers(headers),
        canonical_signed_headers(headers),
        sha256_hex(payload),
    ])
