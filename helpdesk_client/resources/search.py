"""Full-text search endpoint."""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from helpdesk_client.api.pagination import Page, PageOptions
from helpdesk_client.schema.models import SEARCH_TYPES, User

from .base import Operation, ResourceClient


@dataclass
class SearchResults(Page):
    """A page of search results. facets is returned verbatim when the service sends it."""

    facets: Optional[Any] = None

    @classmethod
    def from_search(cls, payload: Dict[str, Any], parse, paging: Optional[PageOptions] = None) -> "SearchResults":
        page = Page.from_response(payload, "results", parse, paging)
        return cls(
            items=page.items,
            count=page.count,
            next_page=page.next_page,
            previous_page=page.previous_page,
            page=page.page,
            per_page=page.per_page,
            facets=payload.get("facets"),
        )

    @property
    def results(self) -> List[Any]:
        return self.items


class SearchResource(ResourceClient):
    """
    /search

    search_for() narrows the query to one entity type and returns typed
    results; search_all() returns the heterogeneous records as dicts.
    """

    PATH = "search"
    SORT_ORDERS = ("asc", "desc")

    def _op_search(
        self,
        query: str,
        parse,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        paging: Optional[PageOptions] = None,
    ) -> Operation:
        if not query or not query.strip():
            raise ValueError("A search query is required")
        if sort_order is not None and sort_order not in self.SORT_ORDERS:
            raise ValueError(f"sort_order must be one of {self.SORT_ORDERS}, got {sort_order!r}")

        request = self.builder.get(
            self.PATH,
            paging=paging,
            query={"query": query.strip(), "sort_by": sort_by, "sort_order": sort_order},
            envelope="results",
        )
        return Operation(request, lambda body: SearchResults.from_search(body, parse, paging))

    def _op_search_for(self, query: str, model: Type, **options) -> Operation:
        search_type = SEARCH_TYPES.get(model)
        if search_type is None:
            raise ValueError(f"{model.__name__} is not searchable")
        return self._op_search(f"type:{search_type} {query}", model.from_dict, **options)

    def search_for(
        self,
        query: str,
        model: Type = User,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        paging: Optional[PageOptions] = None,
    ) -> SearchResults:
        operation = self._op_search_for(query, model, sort_by=sort_by, sort_order=sort_order, paging=paging)
        return self._run(operation)

    async def search_for_async(
        self,
        query: str,
        model: Type = User,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        paging: Optional[PageOptions] = None,
    ) -> SearchResults:
        operation = self._op_search_for(query, model, sort_by=sort_by, sort_order=sort_order, paging=paging)
        return await self._run_async(operation)

    def search_all(
        self,
        query: str,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        paging: Optional[PageOptions] = None,
    ) -> SearchResults:
        return self._run(self._op_search(query, dict, sort_by, sort_order, paging))

    async def search_all_async(
        self,
        query: str,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        paging: Optional[PageOptions] = None,
    ) -> SearchResults:
        return await self._run_async(self._op_search(query, dict, sort_by, sort_order, paging))
