"""
Signable requests for the HRworks API.

A Request holds the target operation and its JSON payload. Once bound to a
signer it builds the canonical request, derives its signature through the
signer's keyed-hash primitive and assembles the final HTTP headers.
"""

import datetime
import hashlib
import json
from email.utils import format_datetime
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, Union
from urllib.parse import quote_plus

from .constants import (
    CANONICAL_QUERY_STRING,
    CANONICAL_URL,
    CONTENT_TYPE,
    DATE_FORMAT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_DATE,
    HEADER_HOST,
    HEADER_HRWORKS_DATE,
    HEADER_HRWORKS_TARGET,
    HTTP_METHOD,
    SIGNATURE_ALGORITHM_IDENTIFIER,
    SIGNATURE_CLOSING_STRING,
    SIGNED_HEADERS,
    TIMESTAMP_FORMAT,
)
from .exceptions import RequestNotPreparedError


class Signer(Protocol):
    """What a request needs from the client at signing time."""

    host: str
    access_key: str
    realm_name: str

    def sign(self, message: Union[str, bytes], secret: Optional[Union[str, bytes]] = None,
             hex: bool = False) -> Union[str, bytes]:
        ...


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def compact(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None, keeping falsy values such as False or []."""
    return {key: value for key, value in data.items() if value is not None}


def sha256_hex(data: Union[str, bytes]) -> str:
    if isinstance(data, str):
        data = data.encode('utf-8')
    return hashlib.sha256(data).hexdigest()


def trim_whitespace(value: str) -> str:
    """Strip leading and trailing whitespace, keeping inner whitespace as is."""
    return value.strip()


def derive_signing_key(signer: Signer, date: str, realm_name: str,
                       closing_string: str = SIGNATURE_CLOSING_STRING) -> Tuple[bytes, bytes, bytes]:
    """
    Run the keyed-hash chain that scopes the signing key.

    Each stage is keyed by the previous one: the base secret signs the date,
    the date key signs the realm and the realm key signs the closing label.

    Args:
        signer: Object exposing the sign() primitive
        date: Date portion of the request timestamp (YYYYMMDD)
        realm_name: Name of the target realm
        closing_string: Label that closes the chain

    Returns:
        Tuple of (date key, realm key, signing key) as raw bytes
    """
    date_key = signer.sign(date)
    realm_key = signer.sign(realm_name, secret=date_key)
    signing_key = signer.sign(closing_string, secret=realm_key)
    return date_key, realm_key, signing_key


def sorted_header_keys():
    return sorted(name.lower() for name in SIGNED_HEADERS)


def canonical_headers(headers: Dict[str, str]) -> str:
    """Render the signed headers as sorted, lowercased name:value lines."""
    values = {name.lower(): value for name, value in headers.items()}
    return "\n".join(
        f"{name}:{trim_whitespace(values[name])}" for name in sorted_header_keys()
    )


def canonical_request(headers: Dict[str, str], body: bytes) -> str:
    return "\n".join([
        HTTP_METHOD,
        CANONICAL_URL,
        CANONICAL_QUERY_STRING,
        canonical_headers(headers),
        "",
        sha256_hex(body),
    ])


def string_to_sign(formatted_timestamp: str, request: str) -> str:
    return "\n".join([
        SIGNATURE_ALGORITHM_IDENTIFIER,
        formatted_timestamp,
        sha256_hex(request),
    ])


class Request:
    """
    A single call against the HRworks API.

    The timestamp is captured when the request is prepared for sending and
    stays fixed for every step of that send. Preparing the request again
    captures a fresh timestamp and re-derives the signature.
    """

    def __init__(self, target: str, data: Optional[Dict[str, Any]] = None,
                 clock: Optional[Callable[[], datetime.datetime]] = None):
        """
        Initialize request.

        Args:
            target: Name of the remote operation (X-HRworks-Target)
            data: JSON payload; keys with a None value are dropped
            clock: Callable returning the current time (defaults to UTC now)
        """
        self.target = target
        self.data = compact(data or {})
        self._clock = clock or utc_now
        self._signer = None
        self._timestamp = None
        self._body = None
        self._headers = None
        self._signature = None

    def __repr__(self):
        return f"{self.__class__.__name__}(target={self.target!r}, data={self.data!r})"

    @property
    def prepared(self) -> bool:
        return self._signer is not None

    def prepare_for_sending(self, signer: Signer):
        """
        Bind the request to a signer and compute every signed value.

        Nothing on the request changes unless every step succeeds.

        Args:
            signer: Client (or stand-in) providing host, credentials and sign()

        Raises:
            TypeError: If the payload is not JSON serializable
            ValueError: If the payload holds NaN or infinite floats
        """
        body = self._serialize()
        timestamp = self._clock()
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=datetime.timezone.utc)
        timestamp = timestamp.astimezone(datetime.timezone.utc)

        formatted_timestamp = timestamp.strftime(TIMESTAMP_FORMAT)
        headers = {
            HEADER_HOST: signer.host,
            HEADER_CONTENT_TYPE: CONTENT_TYPE,
            HEADER_DATE: format_datetime(timestamp, usegmt=True),
            HEADER_HRWORKS_DATE: formatted_timestamp,
            HEADER_HRWORKS_TARGET: self.target,
        }

        _, _, signing_key = derive_signing_key(signer, timestamp.strftime(DATE_FORMAT),
                                               signer.realm_name)
        signature = signer.sign(
            string_to_sign(formatted_timestamp, canonical_request(headers, body)),
            secret=signing_key,
            hex=True,
        )

        self._signer = signer
        self._timestamp = timestamp
        self._body = body
        self._headers = headers
        self._signature = signature

    def _require_prepared(self):
        if not self.prepared:
            raise RequestNotPreparedError(
                f"{self.target} request has not been prepared for sending"
            )

    @property
    def timestamp(self) -> datetime.datetime:
        self._require_prepared()
        return self._timestamp

    @property
    def formatted_timestamp(self) -> str:
        """Timestamp in compact ISO 8601 basic form, e.g. 20240101T000000Z."""
        return self.timestamp.strftime(TIMESTAMP_FORMAT)

    @property
    def http_timestamp(self) -> str:
        """Timestamp as an HTTP date, e.g. Mon, 01 Jan 2024 00:00:00 GMT."""
        return format_datetime(self.timestamp, usegmt=True)

    @property
    def body(self) -> bytes:
        """JSON body; fixed once the request is prepared."""
        if self._body is not None:
            return self._body
        return self._serialize()

    def _serialize(self) -> bytes:
        return json.dumps(self.data, separators=(',', ':'), ensure_ascii=False,
                          allow_nan=False).encode('utf-8')

    def headers(self) -> Dict[str, str]:
        """Headers without Authorization."""
        self._require_prepared()
        return dict(self._headers)

    def signed_headers(self) -> Dict[str, str]:
        """Headers including the Authorization header."""
        headers = self.headers()
        headers[HEADER_AUTHORIZATION] = self.authorization_header_value
        return headers

    @property
    def sorted_header_keys(self):
        return sorted_header_keys()

    @property
    def canonical_headers(self) -> str:
        self._require_prepared()
        return canonical_headers(self._headers)

    @property
    def canonical_request(self) -> str:
        self._require_prepared()
        return canonical_request(self._headers, self._body)

    @property
    def string_to_sign(self) -> str:
        return string_to_sign(self.formatted_timestamp, self.canonical_request)

    @property
    def signature(self) -> str:
        self._require_prepared()
        return self._signature

    @property
    def authorization_header_value(self) -> str:
        self._require_prepared()
        return (
            f"{SIGNATURE_ALGORITHM_IDENTIFIER} "
            f"Credential={quote_plus(self._signer.access_key)}/{self._signer.realm_name}, "
            f"SignedHeaders={';'.join(self.sorted_header_keys)}, "
            f"Signature={self.signature}"
        )
