"""
HRworks Client Library

A Python client library that issues signed requests against the HRworks
API using the HRWORKS-HMAC-SHA256 request-signing scheme.

Example usage:
    from hrworks_client import HRworksClient, get_persons

    client = HRworksClient("your-access-key", "your-secret-key", realm="demo")
    persons = client.send(get_persons(only_active=True))
"""

import logging

from .client import HRworksClient
from .exceptions import (
    HRworksClientError,
    ConfigurationError,
    RequestNotPreparedError,
    ResponseError,
    UnknownOperationError
)
from .constants import (
    Realm,
    REALM_URIS,
    DEFAULT_CONFIG,
    SIGNATURE_ALGORITHM_IDENTIFIER
)
from .operations import (
    OPERATIONS,
    Operation,
    build_request,
    get_persons,
    get_person_master_data
)
from .request import Request, Signer

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    "HRworksClient",
    "HRworksClientError",
    "ConfigurationError",
    "RequestNotPreparedError",
    "ResponseError",
    "UnknownOperationError",
    "Realm",
    "REALM_URIS",
    "DEFAULT_CONFIG",
    "SIGNATURE_ALGORITHM_IDENTIFIER",
    "OPERATIONS",
    "Operation",
    "build_request",
    "get_persons",
    "get_person_master_data",
    "Request",
    "Signer"
]
