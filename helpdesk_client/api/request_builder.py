"""Compose URL, method, query and body for one logical API call."""
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .pagination import PageOptions


@dataclass(frozen=True)
class ApiRequest:
    """A fully built request, independent of the HTTP library that sends it."""

    method: str
    url: str
    params: Tuple[Tuple[str, str], ...] = ()
    body: Optional[bytes] = None
    # Key a successful response must carry, e.g. "group" or "groups"
    envelope: Optional[str] = None

    @property
    def query(self) -> Dict[str, str]:
        return dict(self.params)

    def json(self) -> Optional[Dict[str, Any]]:
        """Decoded body, mostly useful for logging and tests."""
        if self.body is None:
            return None
        return json.loads(self.body.decode("utf-8"))


@dataclass
class MembershipScope:
    """
    Selects which group membership collection a call addresses.

    No ids: the global collection. group_id: memberships of one group.
    user_id: memberships of one user. membership_id narrows either of the
    above (or the global collection) to a single record.
    """

    user_id: Optional[int] = None
    group_id: Optional[int] = None
    membership_id: Optional[int] = None
    assignable: bool = False

    def path(self) -> str:
        if self.user_id is not None and self.group_id is not None:
            raise ValueError("A membership scope takes a user_id or a group_id, not both")
        if self.assignable and (self.user_id is not None or self.membership_id is not None):
            raise ValueError("Assignable memberships can only be scoped by group")

        if self.group_id is not None:
            base = f"groups/{self.group_id}/memberships"
        elif self.user_id is not None:
            base = f"users/{self.user_id}/group_memberships"
        else:
            base = "group_memberships"

        if self.assignable:
            return f"{base}/assignable"
        if self.membership_id is not None:
            return f"{base}/{self.membership_id}"
        return base


class RequestBuilder:
    """
    Builds ApiRequest values relative to the API root.

    Usage:
    ```python
    builder = RequestBuilder("https://acme.example.com/api/v2")
    req = builder.get("groups", paging=PageOptions(page=2, per_page=2))
    req.url     # https://acme.example.com/api/v2/groups.json
    req.params  # (("per_page", "2"), ("page", "2"))
    ```
    """

    SUFFIX = ".json"

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.strip('/')}{self.SUFFIX}"

    def build(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        paging: Optional[PageOptions] = None,
        query: Optional[Dict[str, Any]] = None,
        envelope: Optional[str] = None,
    ) -> ApiRequest:
        """
        Build a request.

        Args:
            method: HTTP verb
            path: Resource path without API root or suffix, e.g. "groups/12"
            payload: JSON body, serialised once so every transport sends the same bytes
            paging: Optional page/per_page override
            query: Extra query parameters; None values are dropped
            envelope: Key the 2xx response body must contain

        Returns:
            ApiRequest
        """
        params: List[Tuple[str, str]] = []
        for key, value in (query or {}).items():
            if value is not None:
                params.append((key, str(value)))
        if paging is not None:
            params.extend(paging.to_params())

        body = None
        if payload is not None:
            body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

        return ApiRequest(
            method=method.upper(),
            url=self.url(path),
            params=tuple(params),
            body=body,
            envelope=envelope,
        )

    def get(
        self,
        path: str,
        paging: Optional[PageOptions] = None,
        query: Optional[Dict[str, Any]] = None,
        envelope: Optional[str] = None,
    ) -> ApiRequest:
        return self.build("GET", path, paging=paging, query=query, envelope=envelope)

    def post(self, path: str, payload: Dict[str, Any], envelope: Optional[str] = None) -> ApiRequest:
        return self.build("POST", path, payload=payload, envelope=envelope)

    def put(self, path: str, payload: Optional[Dict[str, Any]] = None, envelope: Optional[str] = None) -> ApiRequest:
        return self.build("PUT", path, payload=payload, envelope=envelope)

    def delete(self, path: str) -> ApiRequest:
        return self.build("DELETE", path)
