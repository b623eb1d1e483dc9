"""
AWS Signature Version 4 - API Gateway Header Signer

This package builds the SigV4 header set for a single outgoing request to an
AWS-compatible signed endpoint (API Gateway by default) without depending on
botocore or any other SDK.
"""

from .exceptions import ConfigurationError, InvalidPayloadError, MalformedEndpointError, SigV4Error
from .request import Service, SigningRequest
from .sigv4 import Headers, SigV4Signer, sign
from .verify import ParsedAuthorization, parse_authorization_header, verify_signature

__version__ = "0.1.0"
__all__ = [
    "sign",
    "SigV4Signer",
    "SigningRequest",
    "Service",
    "Headers",
    "SigV4Error",
    "ConfigurationError",
    "InvalidPayloadError",
    "MalformedEndpointError",
    "ParsedAuthorization",
    "parse_authorization_header",
    "verify_signature",
]
