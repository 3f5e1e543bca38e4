"""Site and secret used to authenticate every request."""
from dataclasses import dataclass, field
from typing import Optional, Tuple
from urllib.parse import urlparse

import httpx
import requests
from requests.auth import AuthBase, HTTPBasicAuth

from .errors import ConfigurationError


API_PREFIX = "/api/v2"


@dataclass(frozen=True)
class Credentials:
    """
    Immutable authentication context shared by all requests of a client.

    Exactly one secret is expected. Precedence when several are given:
    oauth_token, api_token, password.

    Usage:
    ```python
    creds = Credentials("https://acme.example.com", "admin@acme.com", api_token="abc")
    creds.basic_auth  # ("admin@acme.com/token", "abc")
    ```
    """

    site: str
    email: str = ""
    password: Optional[str] = field(default=None, repr=False)
    api_token: Optional[str] = field(default=None, repr=False)
    oauth_token: Optional[str] = field(default=None, repr=False)

    def validate(self) -> None:
        """
        Check the site and secret without touching the network.

        Raises:
            ConfigurationError: If the site is not an absolute http(s) URL,
                or no usable secret is configured
        """
        parsed = urlparse(self.site or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(f"Malformed site URL: {self.site!r}")

        if self.oauth_token:
            return

        if not self.email:
            raise ConfigurationError("An email is required for basic authentication")
        if not (self.api_token or self.password):
            raise ConfigurationError("No password, api_token or oauth_token configured")

    @property
    def base_url(self) -> str:
        """Site normalised to the API root, e.g. https://acme.example.com/api/v2"""
        base = (self.site or "").rstrip("/")
        if not base.endswith(API_PREFIX):
            base = f"{base}{API_PREFIX}"
        return base

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        """(username, secret) for basic auth, None when a bearer token is used."""
        if self.oauth_token:
            return None
        if self.api_token:
            return f"{self.email}/token", self.api_token
        return self.email, self.password

    @property
    def auth_style(self) -> str:
        if self.oauth_token:
            return "oauth"
        if self.api_token:
            return "api_token"
        return "password"


class CredentialsAuth(AuthBase, httpx.Auth):
    """
    Authentication hook accepted by both requests and httpx.

    Basic styles delegate to HTTPBasicAuth / httpx.BasicAuth, the OAuth style
    sets a bearer token. Credentials are validated before the header is set.

    Usage:
    ```python
    auth = CredentialsAuth(creds)
    session.auth = auth
    httpx.AsyncClient(auth=auth)
    ```
    """

    def __init__(self, credentials: Credentials):
        self.credentials = credentials

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        self.credentials.validate()
        basic = self.credentials.basic_auth
        if basic is None:
            request.headers["Authorization"] = f"Bearer {self.credentials.oauth_token}"
            return request
        return HTTPBasicAuth(*basic)(request)

    def auth_flow(self, request: httpx.Request):
        self.credentials.validate()
        basic = self.credentials.basic_auth
        if basic is None:
            request.headers["Authorization"] = f"Bearer {self.credentials.oauth_token}"
            yield request
            return
        yield from httpx.BasicAuth(*basic).auth_flow(request)
