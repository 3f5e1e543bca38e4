"""Entities exchanged with the helpdesk API."""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional

# Set by the service, never sent back in create/update bodies
READ_ONLY_FIELDS = {"url", "created_at", "updated_at"}


class UserRole(str, Enum):
    """Roles accepted by the users endpoint."""
    END_USER = "end-user"
    AGENT = "agent"
    ADMIN = "admin"


class ApiModel:
    """
    Shared dict conversion for entity dataclasses.

    Unknown keys in responses are ignored. None values and read-only fields
    are left out of to_dict() so a payload only carries what the caller set.
    """

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build an entity from a response record."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to request payload."""
        payload = {}
        for f in fields(self):
            if f.name in READ_ONLY_FIELDS:
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            payload[f.name] = value
        return payload


@dataclass
class Brand(ApiModel):
    """A brand (customer facing identity, one subdomain each)."""

    name: Optional[str] = None
    active: Optional[bool] = None
    subdomain: Optional[str] = None
    id: Optional[int] = None
    brand_url: Optional[str] = None
    host_mapping: Optional[str] = None
    has_help_center: Optional[bool] = None
    help_center_state: Optional[str] = None
    default: Optional[bool] = None
    url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class Group(ApiModel):
    """A group of agents."""

    name: Optional[str] = None
    id: Optional[int] = None
    description: Optional[str] = None
    deleted: Optional[bool] = None
    url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class User(ApiModel):
    """An end-user, agent or admin."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[UserRole] = None
    id: Optional[int] = None
    active: Optional[bool] = None
    verified: Optional[bool] = None
    phone: Optional[str] = None
    locale: Optional[str] = None
    time_zone: Optional[str] = None
    organization_id: Optional[int] = None
    default_group_id: Optional[int] = None
    external_id: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        # Roles the enum does not know about are kept as plain strings
        if isinstance(self.role, str) and not isinstance(self.role, UserRole):
            try:
                self.role = UserRole(self.role)
            except ValueError:
                pass

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if not payload.get("tags"):
            payload.pop("tags", None)
        return payload


@dataclass
class GroupMembership(ApiModel):
    """Links one user to one group. default marks the user's default group."""

    user_id: Optional[int] = None
    group_id: Optional[int] = None
    default: Optional[bool] = None
    id: Optional[int] = None
    url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# Search "type:" filter for each searchable model
SEARCH_TYPES = {
    User: "user",
    Group: "group",
}
