"""Brands endpoints."""
from typing import Optional

from helpdesk_client.api.pagination import Page, PageOptions
from helpdesk_client.schema.models import Brand

from .base import Operation, ResourceClient


class BrandsResource(ResourceClient):
    """CRUD over /brands."""

    PATH = "brands"

    def _op_get_brands(self, paging: Optional[PageOptions] = None) -> Operation:
        return self._list(self.PATH, "brands", Brand, paging)

    def _op_get_brand(self, brand_id: int) -> Operation:
        return self._show(f"{self.PATH}/{brand_id}", "brand", Brand)

    def _op_create_brand(self, brand: Brand) -> Operation:
        return self._create(self.PATH, "brand", brand)

    def _op_update_brand(self, brand: Brand) -> Operation:
        return self._update(self.PATH, "brand", brand)

    def _op_delete_brand(self, brand_id: int) -> Operation:
        return self._destroy(f"{self.PATH}/{brand_id}")

    def get_brands(self, paging: Optional[PageOptions] = None) -> Page[Brand]:
        return self._run(self._op_get_brands(paging))

    async def get_brands_async(self, paging: Optional[PageOptions] = None) -> Page[Brand]:
        return await self._run_async(self._op_get_brands(paging))

    def get_brand(self, brand_id: int) -> Brand:
        return self._run(self._op_get_brand(brand_id))

    async def get_brand_async(self, brand_id: int) -> Brand:
        return await self._run_async(self._op_get_brand(brand_id))

    def create_brand(self, brand: Brand) -> Brand:
        """Create a brand. The service enforces subdomain uniqueness (ValidationError)."""
        return self._run(self._op_create_brand(brand))

    async def create_brand_async(self, brand: Brand) -> Brand:
        return await self._run_async(self._op_create_brand(brand))

    def update_brand(self, brand: Brand) -> Brand:
        return self._run(self._op_update_brand(brand))

    async def update_brand_async(self, brand: Brand) -> Brand:
        return await self._run_async(self._op_update_brand(brand))

    def delete_brand(self, brand_id: int) -> bool:
        return self._run(self._op_delete_brand(brand_id))

    async def delete_brand_async(self, brand_id: int) -> bool:
        return await self._run_async(self._op_delete_brand(brand_id))
