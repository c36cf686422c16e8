"""
Hydra style collection envelopes for list endpoints.

Collections are returned as::

    {
        "@context": "/api/contexts/Employee",
        "@id": "/api/employees",
        "@type": "Collection",
        "totalItems": 42,
        "member": [...],
        "view": {...}
    }
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy.orm import Query as SAQuery

from .config import settings


class PageParams(BaseModel):
    page: int
    items_per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.items_per_page


def page_params(
    page: int = Query(1, ge=1, description="Page number"),
    items_per_page: int = Query(
        settings.default_page_size,
        alias="itemsPerPage",
        ge=1,
        le=settings.max_page_size,
        description="Items per page",
    ),
) -> PageParams:
    return PageParams(page=page, items_per_page=items_per_page)


def total_pages(total: int, items_per_page: int) -> int:
    return (total + items_per_page - 1) // items_per_page if items_per_page > 0 else 0


def paginate(query: SAQuery, params: PageParams) -> Tuple[List[Any], int]:
    """Apply offset/limit to a query and return the page plus the total count."""
    total = query.order_by(None).count()
    items = query.offset(params.offset).limit(params.items_per_page).all()
    return items, total


def _page_link(path: str, page: int, params: PageParams) -> str:
    if params.items_per_page == settings.default_page_size:
        return f"{path}?page={page}"
    return f"{path}?itemsPerPage={params.items_per_page}&page={page}"


def build_view(path: str, total: int, params: PageParams) -> Optional[Dict[str, str]]:
    last_page = max(total_pages(total, params.items_per_page), 1)
    if last_page <= 1 and params.page == 1:
        return None

    view = {
        "@id": _page_link(path, params.page, params),
        "@type": "PartialCollectionView",
        "first": _page_link(path, 1, params),
        "last": _page_link(path, last_page, params),
    }
    if params.page > 1:
        view["previous"] = _page_link(path, params.page - 1, params)
    if params.page < last_page:
        view["next"] = _page_link(path, params.page + 1, params)
    return view


def hydra_collection(
    resource: str,
    path: str,
    members: Sequence[BaseModel],
    total: int,
    params: PageParams,
) -> Dict[str, Any]:
    """Wrap serialized members into a Hydra collection envelope."""
    body: Dict[str, Any] = {
        "@context": f"/api/contexts/{resource}",
        "@id": path,
        "@type": "Collection",
        "totalItems": total,
        "member": [member.model_dump(mode="json", by_alias=True) for member in members],
    }
    view = build_view(path, total, params)
    if view is not None:
        body["view"] = view
    return body
