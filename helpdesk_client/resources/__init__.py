"""
Resource clients, one per entity type.
"""

from .base import Operation, ResourceClient
from .brands import BrandsResource
from .groups import GroupsResource
from .search import SearchResource, SearchResults
from .users import UsersResource

__all__ = [
    "Operation",
    "ResourceClient",
    "BrandsResource",
    "GroupsResource",
    "SearchResource",
    "SearchResults",
    "UsersResource",
]
