"""
Server-side recomputation of SigV4 signatures produced by ``SigV4Signer``.
"""

import hmac
import logging
import re
from typing import Any, List, Mapping, NamedTuple, Optional

from . import constants as c
from .canonical import canonical_request
from .hashing import calculate_signature, derive_signing_key, sha256_hex
from .sigv4 import string_to_sign

logger = logging.getLogger(__name__)

_AUTH_HEADER_RE = re.compile(
    r'^AWS4-HMAC-SHA256\s+'
    r'Credential=(?P<access_key>[^/]+)/(?P<scope>[^,]+),\s*'
    r'SignedHeaders=(?P<signed_headers>[^,]+),\s*'
    r'Signature=(?P<signature>[0-9a-f]{64})$'
)


class ParsedAuthorization(NamedTuple):
    access_key: str
    scope: str
    signed_headers: List[str]
    signature: str

    @property
    def scope_parts(self) -> List[str]:
        """date/region/service/aws4_request"""
        return self.scope.split('/')

    @property
    def date(self) -> str:
        return self.scope_parts[0]

    @property
    def region(self) -> str:
        return self.scope_parts[1]

    @property
    def service(self) -> str:
        return self.scope_parts[2]


def parse_authorization_header(value: str) -> Optional[ParsedAuthorization]:
    """
    Parse an ``AWS4-HMAC-SHA256`` Authorization header.

    Returns None if the value is not a well-formed SigV4 header with a
    four-part credential scope.
    """
    m = _AUTH_HEADER_RE.match(value or '')
    if not m:
        return None
    scope = m.group('scope')
    parts = scope.split('/')
    if len(parts) != 4 or parts[3] != c.AWS4_REQUEST:
        return None
    return ParsedAuthorization(
        access_key=m.group('access_key'),
        scope=scope,
        signed_headers=m.group('signed_headers').split(';'),
        signature=m.group('signature'),
    )


def verify_signature(
        method: str,
        path: str,
        query_params: Mapping[str, Any],
        headers: Mapping[str, str],
        payload: str,
        secret_key: str
) -> bool:
    """
    Recompute the signature of a received request and compare it with the
    one carried in its Authorization header.

    Only the headers listed in ``SignedHeaders`` take part, looked up
    case-insensitively. The timestamp comes from ``x-amz-date``.
    """
    lowered = {name.lower(): value for name, value in headers.items()}
    auth = parse_authorization_header(lowered.get(c.AUTHORIZATION.lower(), ''))
    if auth is None:
        logger.debug('Missing or unparsable Authorization header')
        return False

    date_time = lowered.get(c.X_AMZ_DATE)
    if not date_time or date_time[:8] != auth.date:
        logger.debug('x-amz-date %r does not match credential scope %s', date_time, auth.scope)
        return False

    missing = [name for name in auth.signed_headers if name not in lowered]
    if missing:
        logger.debug('Signed headers absent from request: %s', ', '.join(missing))
        return False
    signed = {name: lowered[name] for name in auth.signed_headers}

    canonical = canonical_request(method.upper(), path, query_params, signed, payload)
    to_sign = string_to_sign(date_time, auth.scope, sha256_hex(canonical))
    signing_key = derive_signing_key(secret_key, date_time, auth.region, auth.service)
    expected = calculate_signature(signing_key, to_sign)
    return hmac.compare_digest(expected, auth.signature)
