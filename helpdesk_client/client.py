"""Entry point object tying credentials, transport and resource clients together."""
import logging
from typing import Optional

from helpdesk_client.api.credentials import Credentials
from helpdesk_client.api.request_builder import RequestBuilder
from helpdesk_client.api.transport import Transport
from helpdesk_client.resources.brands import BrandsResource
from helpdesk_client.resources.groups import GroupsResource
from helpdesk_client.resources.search import SearchResource
from helpdesk_client.resources.users import UsersResource

logger = logging.getLogger(__name__)


class HelpdeskApi:
    """
    Client for the helpdesk REST API.

    Every resource method has a blocking form and an awaitable *_async form.

    Usage:
    ```python
    api = HelpdeskApi("https://acme.example.com", "admin@acme.com", password="secret")
    groups = api.groups.get_groups(PageOptions(per_page=2, page=2))
    user = await api.users.get_user_async(42)
    ```
    """

    def __init__(
        self,
        site: str,
        email: str = "",
        password: Optional[str] = None,
        api_token: Optional[str] = None,
        oauth_token: Optional[str] = None,
        timeout: float = 60,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize client

        A malformed site does not fail here; every call made with it raises
        ConfigurationError instead.

        Args:
            site: Account URL, e.g. https://acme.example.com
            email: Account email, used for basic authentication
            password: Password (basic auth)
            api_token: API token (basic auth as "<email>/token")
            oauth_token: OAuth access token (bearer auth)
            timeout: Per-request timeout in seconds
            transport: Pre-built transport, mostly for tests
        """
        self.credentials = Credentials(
            site=site,
            email=email,
            password=password,
            api_token=api_token,
            oauth_token=oauth_token,
        )
        self.transport = transport or Transport(self.credentials, timeout=timeout)
        builder = RequestBuilder(self.credentials.base_url)

        self.brands = BrandsResource(self.transport, builder)
        self.groups = GroupsResource(self.transport, builder)
        self.users = UsersResource(self.transport, builder)
        self.search = SearchResource(self.transport, builder)

        logger.debug(f"Helpdesk client for {self.credentials.base_url} ({self.credentials.auth_style})")

    @classmethod
    def from_config(cls, config) -> "HelpdeskApi":
        """Build a client from a HelpdeskApiConfig."""
        return cls(
            site=config.site,
            email=config.email,
            password=config.password or None,
            api_token=config.api_token or None,
            oauth_token=config.oauth_token or None,
            timeout=config.request_timeout(),
        )

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "HelpdeskApi":
        return self

    def __exit__(self, *args) -> None:
        self.close()
