# backend/hr_client/tests/test_employee_service.py

import json
from datetime import date
from decimal import Decimal

import httpx
import pytest

from hr_client.employee_service import (
    EmployeeService,
    calculate_total_pages,
    extract_page_from_url,
    transform_employee,
)
from hr_client.errors import NOT_FOUND, VALIDATION_ERROR, ApiError
from hr_client.http_client import HttpClient

from .conftest import BASE_URL, USER

API_EMPLOYEE = {
    "id": "emp-1",
    "firstName": "Marta",
    "lastName": "Lopez",
    "fullName": "Marta Lopez",
    "email": "marta.lopez@company.com",
    "position": "UX Designer",
    "salaryAmount": 52000.0,
    "salaryCurrency": "EUR",
    "hiredAt": "2021-05-10",
}

VALID_FORM = {
    "firstName": "Marta",
    "lastName": "Lopez",
    "email": "marta.lopez@company.com",
    "position": "UX Designer",
    "salaryAmount": Decimal("52000.00"),
    "salaryCurrency": "EUR",
    "hiredAt": date(2021, 5, 10),
}


def make_service(storage, make_token, handler) -> EmployeeService:
    storage.set_auth_data(make_token(), "refresh-1", USER)
    return EmployeeService(HttpClient(BASE_URL, storage=storage, transport=httpx.MockTransport(handler)))


class TestHelpers:
    @pytest.mark.parametrize(
        "url,page",
        [
            ("/api/employees?page=3", 3),
            ("/api/employees?itemsPerPage=5&page=12", 12),
            ("/api/employees", 1),
            (None, 1),
        ],
    )
    def test_extract_page_from_url(self, url, page):
        assert extract_page_from_url(url) == page

    def test_calculate_total_pages(self):
        assert calculate_total_pages(45, 20) == 3
        assert calculate_total_pages(40, 20) == 2
        assert calculate_total_pages(0, 20) == 0
        assert calculate_total_pages(10, 0) == 0

    def test_transform_employee(self):
        employee = transform_employee(API_EMPLOYEE)
        assert employee["fullName"] == "Marta Lopez"
        assert employee["salary"] == {"amount": 52000.0, "currency": "EUR"}
        assert employee["hiredAt"] == date(2021, 5, 10)
        assert transform_employee(None) is None


class TestEmployeeService:
    @pytest.mark.asyncio
    async def test_fetch_employees(self, storage, make_token):
        seen = {}

        def handler(request):
            seen.update(request.url.params)
            return httpx.Response(
                200,
                json={
                    "@context": "/api/contexts/Employee",
                    "@id": "/api/employees",
                    "@type": "Collection",
                    "totalItems": 45,
                    "member": [API_EMPLOYEE],
                    "view": {"@id": "/api/employees?page=2", "@type": "PartialCollectionView"},
                },
            )

        service = make_service(storage, make_token, handler)
        page = await service.fetch_employees(page=2, position="UX Designer", search=None)
        await service.http.aclose()

        assert seen == {"page": "2", "itemsPerPage": "20", "position": "UX Designer"}
        assert page.current_page == 2
        assert page.total_items == 45
        assert page.total_pages == 3
        assert page.employees[0]["fullName"] == "Marta Lopez"

    @pytest.mark.asyncio
    async def test_single_page_without_view(self, storage, make_token):
        def handler(request):
            return httpx.Response(200, json={"totalItems": 1, "member": [API_EMPLOYEE]})

        service = make_service(storage, make_token, handler)
        page = await service.fetch_employees(items_per_page=10)
        await service.http.aclose()

        assert page.current_page == 1
        assert page.total_pages == 1
        assert page.items_per_page == 10

    @pytest.mark.asyncio
    async def test_invalid_form_is_not_sent(self, storage, make_token):
        def handler(request):
            raise AssertionError("request should not be sent")

        service = make_service(storage, make_token, handler)
        with pytest.raises(ApiError) as exc_info:
            await service.create_employee({**VALID_FORM, "firstName": "M", "salaryAmount": -5})
        await service.http.aclose()

        error = exc_info.value
        assert error.error_type == VALIDATION_ERROR
        assert error.status == 422
        assert set(error.details["validationErrors"]) == {"firstName", "salaryAmount"}

    @pytest.mark.asyncio
    async def test_create_serializes_decimal_and_date(self, storage, make_token):
        sent = {}

        def handler(request):
            sent.update(json.loads(request.content))
            return httpx.Response(201, json=API_EMPLOYEE)

        service = make_service(storage, make_token, handler)
        employee = await service.create_employee(VALID_FORM)
        await service.http.aclose()

        assert sent["salaryAmount"] == 52000.0
        assert sent["hiredAt"] == "2021-05-10"
        assert employee["id"] == "emp-1"

    @pytest.mark.asyncio
    async def test_update_uses_put(self, storage, make_token):
        def handler(request):
            assert request.method == "PUT"
            assert request.url.path == "/api/employees/emp-1"
            return httpx.Response(200, json=API_EMPLOYEE)

        service = make_service(storage, make_token, handler)
        await service.update_employee("emp-1", VALID_FORM)
        await service.http.aclose()

    @pytest.mark.asyncio
    async def test_delete(self, storage, make_token):
        def handler(request):
            assert request.method == "DELETE"
            return httpx.Response(204)

        service = make_service(storage, make_token, handler)
        result = await service.delete_employee("emp-1")
        await service.http.aclose()

        assert result == {"success": True, "message": "Employee deleted", "id": "emp-1"}

    @pytest.mark.asyncio
    async def test_missing_employee(self, storage, make_token):
        def handler(request):
            return httpx.Response(404, json={"detail": "Employee with ID emp-9 not found"})

        service = make_service(storage, make_token, handler)
        with pytest.raises(ApiError) as exc_info:
            await service.get_employee("emp-9")
        await service.http.aclose()

        assert exc_info.value.error_type == NOT_FOUND

    @pytest.mark.asyncio
    async def test_id_is_required(self, storage, make_token):
        service = make_service(storage, make_token, lambda request: httpx.Response(200))
        with pytest.raises(ValueError, match="Employee ID is required"):
            await service.get_employee("")
        await service.http.aclose()
