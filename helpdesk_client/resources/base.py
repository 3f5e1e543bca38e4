"""Shared plumbing for resource clients: one operation, two call forms."""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from helpdesk_client.api.pagination import Page, PageOptions
from helpdesk_client.api.request_builder import ApiRequest, RequestBuilder
from helpdesk_client.api.transport import Transport


R = TypeVar("R")


@dataclass(frozen=True)
class Operation(Generic[R]):
    """A built request plus the function that turns its response body into a result."""

    request: ApiRequest
    decode: Callable[[Dict[str, Any]], R]


class ResourceClient:
    """
    Base class for the per-entity clients.

    Subclasses build Operation values in private _op_* methods and expose
    each of them twice: once through _run (blocking) and once through
    _run_async (awaitable). Request construction and decoding are never
    duplicated between the two.
    """

    def __init__(self, transport: Transport, builder: RequestBuilder):
        self.transport = transport
        self.builder = builder

    def _run(self, operation: Operation[R]) -> R:
        return operation.decode(self.transport.send(operation.request))

    async def _run_async(self, operation: Operation[R]) -> R:
        return operation.decode(await self.transport.send_async(operation.request))

    # Operation factories shared by the subclasses

    def _list(self, path: str, key: str, model: Type, paging: Optional[PageOptions] = None) -> Operation[Page]:
        return Operation(
            self.builder.get(path, paging=paging, envelope=key),
            lambda body: Page.from_response(body, key, model.from_dict, paging),
        )

    def _show(self, path: str, key: str, model: Type) -> Operation:
        return Operation(self.builder.get(path, envelope=key), lambda body: model.from_dict(body[key]))

    def _create(self, path: str, key: str, entity) -> Operation:
        return Operation(
            self.builder.post(path, {key: entity.to_dict()}, envelope=key),
            lambda body: type(entity).from_dict(body[key]),
        )

    def _update(self, path: str, key: str, entity) -> Operation:
        if entity.id is None:
            raise ValueError(f"Cannot update a {type(entity).__name__} without an id")
        return Operation(
            self.builder.put(f"{path}/{entity.id}", {key: entity.to_dict()}, envelope=key),
            lambda body: type(entity).from_dict(body[key]),
        )

    def _destroy(self, path: str) -> Operation[bool]:
        return Operation(self.builder.delete(path), lambda body: True)
