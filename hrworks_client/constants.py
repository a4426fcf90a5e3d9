"""
Constants for HRworks client library.
Values match the HRworks API request-signing protocol.
"""

from enum import Enum


class Realm(str, Enum):
    """Deployment environment of the HRworks API."""

    PRODUCTION = "production"
    DEMO = "demo"


REALM_URIS = {
    Realm.PRODUCTION: "https://api.hrworks.de",
    Realm.DEMO: "https://api-demo.hrworks.de",
}

# HTTP Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_DATE = "Date"
HEADER_HOST = "Host"
HEADER_HRWORKS_DATE = "X-HRworks-Date"
HEADER_HRWORKS_TARGET = "X-HRworks-Target"

# Headers covered by the signature; Date is sent but not signed
SIGNED_HEADERS = (
    HEADER_CONTENT_TYPE,
    HEADER_HOST,
    HEADER_HRWORKS_DATE,
    HEADER_HRWORKS_TARGET,
)

# Canonical request
HTTP_METHOD = "POST"
CANONICAL_URL = "/"
CANONICAL_QUERY_STRING = ""
CONTENT_TYPE = "application/json; charset=utf-8"

# Signature chain
SECRET_KEY_PREFIX = "HRWORKS"
SIGNATURE_ALGORITHM_IDENTIFIER = "HRWORKS-HMAC-SHA256"
SIGNATURE_CLOSING_STRING = "hrworks_api_request"

# Timestamp formats
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
DATE_FORMAT = "%Y%m%d"

# Response status codes treated as success
STATUS_CODE_SUCCESS = 200
STATUS_CODE_CREATED = 201

# Environment variables read by HRworksClient.from_env()
ENV_ACCESS_KEY = "HRWORKS_ACCESS_KEY"
ENV_SECRET_KEY = "HRWORKS_SECRET_KEY"
ENV_REALM = "HRWORKS_REALM"

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,              # HTTP timeout in seconds
}
