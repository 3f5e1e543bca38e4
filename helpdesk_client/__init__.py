"""
Helpdesk API client

Typed, paginated client for the helpdesk REST API with blocking and
awaitable forms of every call:
- Brands, Groups, Group memberships, Users, Search
- Explicit page selection (PageOptions) and Page envelopes
- Typed errors (NotFoundError, ValidationError, TransportError...)
"""

from .client import HelpdeskApi
from .api.credentials import Credentials
from .api.errors import (
    CancelledError,
    ConfigurationError,
    HelpdeskError,
    NotFoundError,
    ServiceError,
    TransportError,
    ValidationError,
)
from .api.pagination import Page, PageOptions
from .resources.search import SearchResults
from .schema.models import Brand, Group, GroupMembership, User, UserRole

__version__ = "0.1.0"

__all__ = [
    "HelpdeskApi",
    "Credentials",
    "Page",
    "PageOptions",
    "SearchResults",
    "Brand",
    "Group",
    "GroupMembership",
    "User",
    "UserRole",
    "HelpdeskError",
    "ConfigurationError",
    "TransportError",
    "ServiceError",
    "ValidationError",
    "NotFoundError",
    "CancelledError",
]
