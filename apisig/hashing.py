"""
SHA-256 hashing and the SigV4 signing-key derivation chain.

Every step of the key chain feeds raw HMAC bytes into the next step as the
key; hex encoding only happens on the final signature.
"""

import hashlib
import hmac
from typing import Union

from .constants import AWS4, AWS4_REQUEST

Data = Union[str, bytes]


def _to_bytes(value: Data) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    return value


def sha256_digest(value: Data) -> bytes:
    return hashlib.sha256(_to_bytes(value)).digest()


def hex_encode(digest: bytes) -> str:
    return digest.hex()


def sha256_hex(value: Data) -> str:
    return hex_encode(sha256_digest(value))


def hmac_sha256(key: bytes, msg: Data) -> bytes:
    return hmac.new(key, _to_bytes(msg), hashlib.sha256).digest()


def derive_signing_key(secret_key: str, amz_date: str, region: str, service: str) -> bytes:
    """
    Derive the date/region/service scoped signing key.

    Only the first eight characters of ``amz_date`` (``YYYYMMDD``) take part,
    so a full ``x-amz-date`` value or a bare date stamp both work.
    """
    k_date = hmac_sha256(_to_bytes(AWS4 + secret_key), amz_date[:8])
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, AWS4_REQUEST)


def calculate_signature(signing_key: bytes, string_to_sign: str) -> str:
    return hex_encode(hmac_sha256(signing_key, string_to_sign))
