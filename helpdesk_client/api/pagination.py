"""Page parameters and the collection envelope returned by list endpoints."""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar
from urllib.parse import parse_qs, urlparse

T = TypeVar("T")


def _positive(name: str, value: Optional[int]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class PageOptions:
    """
    Explicit page selection for list calls.

    Either field may be omitted; the server default applies for it
    (first page, default page size).
    """

    page: Optional[int] = None
    per_page: Optional[int] = None

    def __post_init__(self):
        _positive("page", self.page)
        _positive("per_page", self.per_page)

    def to_params(self) -> List[Tuple[str, str]]:
        params = []
        if self.per_page is not None:
            params.append(("per_page", str(self.per_page)))
        if self.page is not None:
            params.append(("page", str(self.page)))
        return params

    @classmethod
    def from_url(cls, url: Optional[str]) -> Optional["PageOptions"]:
        """Read page/per_page back out of a next_page or previous_page link."""
        if not url:
            return None
        query = parse_qs(urlparse(url).query)

        def _int(key: str) -> Optional[int]:
            values = query.get(key)
            if not values:
                return None
            try:
                return int(values[0])
            except ValueError:
                return None

        return cls(page=_int("page"), per_page=_int("per_page"))


@dataclass
class Page(Generic[T]):
    """
    One page of a collection.

    count is the total reported by the server for the whole collection,
    not the length of items.
    """

    items: List[T] = field(default_factory=list)
    count: int = 0
    next_page: Optional[str] = None
    previous_page: Optional[str] = None
    page: int = 1
    per_page: Optional[int] = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index):
        return self.items[index]

    @property
    def has_next(self) -> bool:
        return bool(self.next_page)

    @property
    def has_previous(self) -> bool:
        return bool(self.previous_page)

    def next_page_options(self) -> Optional[PageOptions]:
        return PageOptions.from_url(self.next_page)

    def previous_page_options(self) -> Optional[PageOptions]:
        return PageOptions.from_url(self.previous_page)

    @classmethod
    def from_response(
        cls,
        payload: Dict[str, Any],
        key: str,
        parse: Callable[[Dict[str, Any]], T],
        paging: Optional[PageOptions] = None,
    ) -> "Page[T]":
        """
        Wrap a list response.

        Args:
            payload: Decoded JSON body
            key: Envelope key holding the records, e.g. "groups"
            parse: Converts one record dict into an entity
            paging: Options the request was made with
        """
        items = [parse(record) for record in payload.get(key) or []]
        count = payload.get("count")
        return cls(
            items=items,
            count=count if count is not None else len(items),
            next_page=payload.get("next_page"),
            previous_page=payload.get("previous_page"),
            page=(paging.page if paging and paging.page else 1),
            per_page=paging.per_page if paging else None,
        )
