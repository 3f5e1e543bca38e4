"""
HTTP layer - credentials, request building, transport and pagination.
"""

from .credentials import Credentials, CredentialsAuth
from .pagination import Page, PageOptions
from .request_builder import ApiRequest, MembershipScope, RequestBuilder
from .transport import Transport

__all__ = [
    "Credentials",
    "CredentialsAuth",
    "Page",
    "PageOptions",
    "ApiRequest",
    "MembershipScope",
    "RequestBuilder",
    "Transport",
]
