"""
HRworks API client.

This module provides the client that holds the API credentials, signs
requests with the HRworks HMAC-SHA256 key chain and sends them over a
reused HTTP session.
"""

import hashlib
import hmac
import logging
import os
import threading
from typing import Any, Optional, Union
from urllib.parse import urlsplit

import requests

from .constants import (
    DEFAULT_CONFIG,
    ENV_ACCESS_KEY,
    ENV_REALM,
    ENV_SECRET_KEY,
    REALM_URIS,
    SECRET_KEY_PREFIX,
    STATUS_CODE_CREATED,
    STATUS_CODE_SUCCESS,
    Realm,
)
from .exceptions import ConfigurationError, ResponseError
from .request import Request

logger = logging.getLogger(__name__)


class HRworksClient:
    """
    Client for issuing signed requests against the HRworks API.

    The HTTP session is created on the first send and reused afterwards.
    """

    def __init__(self, access_key: str, secret_key: str,
                 realm: Union[Realm, str] = Realm.PRODUCTION, **config):
        """
        Initialize HRworks client.

        Args:
            access_key: Public API access key
            secret_key: Private API secret key
            realm: Target environment ("production" or "demo")
            **config: Configuration options (timeout)
        """
        self.access_key = access_key
        self._secret_key = secret_key

        try:
            self.realm = Realm(realm)
        except ValueError:
            raise ConfigurationError(f"Unknown realm: {realm!r}") from None

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()

        self._session = None
        self._session_lock = threading.Lock()
        self._send_lock = threading.Lock()

    @classmethod
    def from_env(cls, **config) -> "HRworksClient":
        """
        Create a client from HRWORKS_ACCESS_KEY, HRWORKS_SECRET_KEY and,
        optionally, HRWORKS_REALM.

        Raises:
            ConfigurationError: If a credential variable is not set
        """
        access_key = os.getenv(ENV_ACCESS_KEY)
        secret_key = os.getenv(ENV_SECRET_KEY)

        missing = [name for name, value in ((ENV_ACCESS_KEY, access_key),
                                            (ENV_SECRET_KEY, secret_key)) if not value]
        if missing:
            raise ConfigurationError(
                f"Missing HRworks credentials, environment variables not set: {', '.join(missing)}"
            )

        realm = os.getenv(ENV_REALM) or Realm.PRODUCTION
        return cls(access_key, secret_key, realm=realm, **config)

    def __repr__(self):
        return f"{self.__class__.__name__}(access_key={self.access_key!r}, realm={self.realm.value!r})"

    def _validate_config(self):
        """Validate client configuration."""
        if not self.access_key:
            raise ConfigurationError("access_key cannot be empty")

        if not self._secret_key:
            raise ConfigurationError("secret_key cannot be empty")

        timeout = self.config['timeout']
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    @property
    def uri(self) -> str:
        """Base URI of the configured realm."""
        return REALM_URIS[self.realm]

    @property
    def host(self) -> str:
        return urlsplit(self.uri).hostname

    @property
    def realm_name(self) -> str:
        return self.realm.value

    def sign(self, message: Union[str, bytes], secret: Optional[Union[str, bytes]] = None,
             hex: bool = False) -> Union[str, bytes]:
        """
        Compute HMAC-SHA256 over message.

        Without an explicit secret the key is the client's secret key
        prefixed with "HRWORKS".

        Args:
            message: Data to sign
            secret: Key overriding the client's base key
            hex: Return a hex string instead of raw bytes

        Returns:
            Raw digest bytes, or lowercase hex digest when hex is True
        """
        if secret is None:
            secret = SECRET_KEY_PREFIX + self._secret_key
        if isinstance(secret, str):
            secret = secret.encode('utf-8')
        if isinstance(message, str):
            message = message.encode('utf-8')

        mac = hmac.new(secret, message, hashlib.sha256)
        return mac.hexdigest() if hex else mac.digest()

    @property
    def session(self) -> requests.Session:
        """
        HTTP session bound to this client, created once on first use.

        requests does not promise thread safety for one Session, so send()
        issues one request at a time over it.
        """
        if self._session is None:
            with self._session_lock:
                if self._session is None:
                    logger.debug("Creating HTTP session for %s", self.host)
                    self._session = requests.Session()
        return self._session

    def send(self, request: Request) -> Any:
        """
        Sign and send a request, returning the parsed JSON response.

        Args:
            request: Request to send; it is re-signed on every send

        Returns:
            Decoded JSON body of the response

        Raises:
            ResponseError: If the API answers with a non-success status
            requests.RequestException: If the transport fails
        """
        request.prepare_for_sending(self)

        logger.debug("Sending %s request to %s realm", request.target, self.realm_name)

        with self._send_lock:
            response = self.session.post(
                self.uri + "/",
                headers=request.signed_headers(),
                data=request.body,
                timeout=self.config['timeout'],
            )

        return self._parse_response(request, response)

    def _parse_response(self, request: Request, response: requests.Response) -> Any:
        logger.debug("%s request answered with status %s", request.target, response.status_code)

        if response.status_code in (STATUS_CODE_SUCCESS, STATUS_CODE_CREATED):
            return response.json()

        logger.warning("%s request failed with status %s", request.target, response.status_code)
        raise ResponseError(response)

    def close(self):
        """Close HTTP session."""
        with self._session_lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
