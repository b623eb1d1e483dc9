"""Constant tables shared by the SigV4 signing pipeline."""

AWS_SHA_256 = 'AWS4-HMAC-SHA256'
AWS4_REQUEST = 'aws4_request'
AWS4 = 'AWS4'

AMZ_DATE_FORMAT = '%Y%m%dT%H%M%SZ'

# Header names as they appear in the returned header map.
ACCEPT = 'Accept'
CONTENT_TYPE = 'Content-Type'
HOST = 'Host'
X_AMZ_DATE = 'x-amz-date'
X_AMZ_SECURITY_TOKEN = 'x-amz-security-token'
AUTHORIZATION = 'Authorization'

DEFAULT_SERVICE_NAME = 'execute-api'
DEFAULT_ACCEPT_TYPE = 'application/json'
DEFAULT_CONTENT_TYPE = 'application/json'

EMPTY_SHA256_HASH = 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

# Public config keys that must be supplied, in the order they are checked.
REQUIRED_FIELDS = (
    'method',
    'path',
    'region',
    'endpoint',
    'accessKey',
    'secretKey',
    'sessionToken',
)
