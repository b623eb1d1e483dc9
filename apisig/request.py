"""
Typed input for a single signing call.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Union

from .constants import (
    DEFAULT_ACCEPT_TYPE,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_SERVICE_NAME,
    REQUIRED_FIELDS,
)
from .exceptions import ConfigurationError


class Service(str, Enum):
    EXECUTE_API = DEFAULT_SERVICE_NAME
    APPSYNC = 'appsync'
    LAMBDA = 'lambda'
    STS = 'sts'
    IAM = 'iam'


# Public config key -> SigningRequest attribute.
_CONFIG_KEYS: Dict[str, str] = {
    'method': 'method',
    'path': 'path',
    'region': 'region',
    'endpoint': 'endpoint',
    'accessKey': 'access_key',
    'secretKey': 'secret_key',
    'sessionToken': 'session_token',
    'data': 'data',
    'serviceName': 'service_name',
    'defaultAcceptType': 'default_accept_type',
    'defaultContentType': 'default_content_type',
}


@dataclass
class SigningRequest:
    """
    Everything needed to sign one request.

    ``data`` is rewritten by the signer to the exact body the transport must
    send: the empty string for GET, compact JSON text otherwise.
    """
    method: str
    path: str
    region: str
    endpoint: str
    access_key: str
    secret_key: str
    session_token: str
    data: Any = field(default_factory=dict)
    service_name: Union[str, Service] = DEFAULT_SERVICE_NAME
    default_accept_type: str = DEFAULT_ACCEPT_TYPE
    default_content_type: str = DEFAULT_CONTENT_TYPE

    def __post_init__(self) -> None:
        # Optional fields explicitly passed as None fall back to their defaults.
        for f in fields(self):
            if f.name in _REQUIRED_ATTRS or getattr(self, f.name) is not None:
                continue
            if f.name == 'data':
                self.data = {}
            else:
                setattr(self, f.name, f.default)

    @property
    def service(self) -> str:
        if isinstance(self.service_name, Service):
            return self.service_name.value
        return self.service_name

    def validate(self) -> None:
        for key in REQUIRED_FIELDS:
            if getattr(self, _CONFIG_KEYS[key]) is None:
                raise ConfigurationError(key)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'SigningRequest':
        """
        Build a request from a camelCase config mapping.

        Required keys are checked first; unknown keys are ignored.
        """
        for key in REQUIRED_FIELDS:
            if config.get(key) is None:
                raise ConfigurationError(key)
        kwargs = {
            attr: config[key]
            for key, attr in _CONFIG_KEYS.items()
            if config.get(key) is not None
        }
        return cls(**kwargs)


_REQUIRED_ATTRS = frozenset(_CONFIG_KEYS[key] for key in REQUIRED_FIELDS)
