"""
AWS Signature Version 4 header generation for API Gateway style endpoints.

Signs one request per call and returns the headers the transport has to send
alongside the body left in ``SigningRequest.data``.
"""

import ipaddress
import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, MutableMapping, Optional
from urllib.parse import urlsplit

from . import constants as c
from .canonical import canonical_request, canonical_signed_headers
from .exceptions import InvalidPayloadError, MalformedEndpointError
from .hashing import calculate_signature, derive_signing_key, sha256_hex
from .request import SigningRequest

logger = logging.getLogger(__name__)

Headers = Dict[str, str]
Clock = Callable[[], datetime]
Trace = Callable[[str, str], None]

# urlsplit has already lower-cased the host name.
_HOSTNAME_RE = re.compile(r'[a-z0-9_-]+(\.[a-z0-9_-]+)*\.?')


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def amz_date(moment: datetime) -> str:
    """Format a moment as ``YYYYMMDDTHHMMSSZ``; naive values are taken as UTC."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(c.AMZ_DATE_FORMAT)


def host_from_endpoint(endpoint: str) -> str:
    """Extract the Host header value (no scheme, userinfo or port) from an endpoint URL."""
    try:
        parts = urlsplit(endpoint)
        # Raises ValueError for a non-numeric or out-of-range port.
        parts.port
    except (TypeError, ValueError) as e:
        raise MalformedEndpointError(str(endpoint), str(e)) from e

    if parts.scheme not in ('http', 'https'):
        raise MalformedEndpointError(endpoint, 'scheme must be http or https')
    host = parts.hostname
    if not host:
        raise MalformedEndpointError(endpoint, 'no host')
    if ':' in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError as e:
            raise MalformedEndpointError(endpoint, 'invalid host') from e
        return f'[{host}]'
    if not _HOSTNAME_RE.fullmatch(host):
        raise MalformedEndpointError(endpoint, 'invalid host')
    return host


def credential_scope(date_time: str, region: str, service: str) -> str:
    return f'{date_time[:8]}/{region}/{service}/{c.AWS4_REQUEST}'


def string_to_sign(date_time: str, scope: str, hashed_canonical_request: str) -> str:
    return '\n'.join([c.AWS_SHA_256, date_time, scope, hashed_canonical_request])


def authorization_header(access_key: str, scope: str, signed_headers: str, signature: str) -> str:
    return (
        f'{c.AWS_SHA_256} Credential={access_key}/{scope}, '
        f'SignedHeaders={signed_headers}, Signature={signature}'
    )


def serialize_payload(data: Any) -> str:
    """Compact JSON body text; NaN and infinities are rejected as they are not JSON."""
    try:
        return json.dumps(data, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidPayloadError(f'data is not JSON serializable: {e}') from e


def query_from_data(data: Any) -> Dict[str, Any]:
    if not data:
        return {}
    if not isinstance(data, Mapping):
        raise InvalidPayloadError(f'GET data must be a mapping of query parameters, got {type(data).__name__}')
    return dict(data)


class SigV4Signer:
    """
    Stateless SigV4 signer.

    ``clock`` returns the signing moment and ``trace`` receives the canonical
    request and the string-to-sign. Both are optional.
    """

    def __init__(self, clock: Optional[Clock] = None, trace: Optional[Trace] = None) -> None:
        self._clock = clock or _utc_now
        self._trace = trace

    def _emit(self, label: str, value: str) -> None:
        if self._trace is not None:
            self._trace(label, value)

    def create_headers(self, request: SigningRequest) -> Headers:
        request.validate()

        host = host_from_endpoint(request.endpoint)
        method = request.method.upper()
        date_time = amz_date(self._clock())

        headers: Headers = {
            c.ACCEPT: request.default_accept_type,
            c.X_AMZ_DATE: date_time,
            c.HOST: host,
        }

        if method == 'GET':
            headers[c.CONTENT_TYPE] = request.default_content_type
            query_params = query_from_data(request.data)
            payload = ''
        else:
            query_params = {}
            payload = serialize_payload(request.data)
        request.method = method
        request.data = payload

        canonical = canonical_request(method, request.path, query_params, headers, request.data)
        logger.debug('CanonicalRequest:\n%s', canonical)
        self._emit('canonical_request', canonical)

        scope = credential_scope(date_time, request.region, request.service)
        to_sign = string_to_sign(date_time, scope, sha256_hex(canonical))
        logger.debug('StringToSign:\n%s', to_sign)
        self._emit('string_to_sign', to_sign)

        signing_key = derive_signing_key(request.secret_key, date_time, request.region, request.service)
        signature = calculate_signature(signing_key, to_sign)

        headers[c.AUTHORIZATION] = authorization_header(
            request.access_key, scope, canonical_signed_headers(headers), signature
        )
        headers[c.X_AMZ_SECURITY_TOKEN] = request.session_token
        # Both branches end up with the default content type.
        headers[c.CONTENT_TYPE] = request.default_content_type
        return headers


def sign(
        config: MutableMapping[str, Any],
        clock: Optional[Clock] = None,
        trace: Optional[Trace] = None
) -> Headers:
    """
    Sign a request described by a camelCase config mapping.

    On success ``config['data']`` and ``config['method']`` are rewritten to the
    body and verb the transport must send with the returned headers.
    """
    request = SigningRequest.from_config(config)
    headers = SigV4Signer(clock, trace).create_headers(request)
    config['method'] = request.method
    config['data'] = request.data
    return headers
