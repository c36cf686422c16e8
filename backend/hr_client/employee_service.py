# backend/hr_client/employee_service.py

import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .errors import VALIDATION_ERROR, ApiError
from .http_client import HttpClient
from .validators import validate_employee_data

EMPLOYEES_ENDPOINT = "/employees"
DEFAULT_ITEMS_PER_PAGE = 20

_PAGE_PATTERN = re.compile(r"[?&]page=(\d+)")


@dataclass
class EmployeePage:
    employees: List[Dict[str, Any]] = field(default_factory=list)
    current_page: int = 1
    total_items: int = 0
    total_pages: int = 0
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE


def extract_page_from_url(url: Optional[str]) -> int:
    if not url:
        return 1
    match = _PAGE_PATTERN.search(url)
    return int(match.group(1)) if match else 1


def calculate_total_pages(total_items: int, items_per_page: int) -> int:
    if items_per_page <= 0:
        return 0
    return math.ceil(total_items / items_per_page)


def transform_employee(data: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Flatten an API employee into the shape the UI layer uses."""
    if not data:
        return None
    hired_at = data.get("hiredAt")
    employee = dict(data)
    employee["fullName"] = data.get("fullName") or f"{data.get('firstName')} {data.get('lastName')}"
    employee["salary"] = {"amount": data.get("salaryAmount"), "currency": data.get("salaryCurrency")}
    employee["hiredAt"] = date.fromisoformat(hired_at[:10]) if isinstance(hired_at, str) else hired_at
    return employee


def _to_json(data: Dict[str, Any]) -> Dict[str, Any]:
    payload = {}
    for key, value in data.items():
        if isinstance(value, Decimal):
            value = float(value)
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        payload[key] = value
    return payload


def _validate(data: Dict[str, Any]) -> None:
    result = validate_employee_data(data)
    if not result.is_valid:
        raise ApiError(
            VALIDATION_ERROR,
            "Validation failed",
            status=422,
            details={"validationErrors": result.errors},
        )


def _require_id(employee_id: Optional[str]) -> str:
    if not employee_id:
        raise ValueError("Employee ID is required")
    return employee_id


class EmployeeService:
    def __init__(self, http: HttpClient):
        self.http = http

    async def fetch_employees(
        self, page: int = 1, items_per_page: int = DEFAULT_ITEMS_PER_PAGE, **filters: Any
    ) -> EmployeePage:
        params = {"page": page, "itemsPerPage": items_per_page}
        params.update({k: v for k, v in filters.items() if v is not None})
        response = await self.http.get(EMPLOYEES_ENDPOINT, params=params)
        data = response.json()

        total = data.get("totalItems", 0)
        view = data.get("view") or {}
        return EmployeePage(
            employees=[transform_employee(e) for e in data.get("member", [])],
            current_page=extract_page_from_url(view.get("@id")) if view else page,
            total_items=total,
            total_pages=calculate_total_pages(total, items_per_page),
            items_per_page=items_per_page,
        )

    async def get_employee(self, employee_id: str) -> Dict[str, Any]:
        response = await self.http.get(f"{EMPLOYEES_ENDPOINT}/{_require_id(employee_id)}")
        return transform_employee(response.json())

    async def create_employee(self, data: Dict[str, Any]) -> Dict[str, Any]:
        _validate(data)
        response = await self.http.post(EMPLOYEES_ENDPOINT, json=_to_json(data))
        return transform_employee(response.json())

    async def update_employee(self, employee_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        employee_id = _require_id(employee_id)
        _validate(data)
        response = await self.http.put(f"{EMPLOYEES_ENDPOINT}/{employee_id}", json=_to_json(data))
        return transform_employee(response.json())

    async def delete_employee(self, employee_id: str) -> Dict[str, Any]:
        employee_id = _require_id(employee_id)
        await self.http.delete(f"{EMPLOYEES_ENDPOINT}/{employee_id}")
        return {"success": True, "message": "Employee deleted", "id": employee_id}
