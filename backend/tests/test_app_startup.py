# backend/tests/test_app_startup.py

"""
Smoke tests for application startup, health endpoints and error bodies.
"""

import sqlalchemy as sa

from app.startup import REQUIRED_TABLES, StartupValidator, run_startup_checks
from core.database import build_engine


class TestStartupValidator:
    def test_creates_tables_on_empty_database(self):
        engine = build_engine("sqlite://")
        validator = StartupValidator(engine)

        passed, errors, warnings = validator.validate_all()

        assert passed, errors
        assert set(REQUIRED_TABLES) <= set(sa.inspect(engine).get_table_names())
        assert any("JWT_SECRET_KEY" in w for w in warnings)

    def test_unreachable_database(self, tmp_path):
        engine = build_engine(f"sqlite:///{tmp_path}/missing/dir/hr.db")
        validator = StartupValidator(engine)

        assert validator.check_database_connection() is False
        assert validator.errors[0].startswith("Database connection failed")

    def test_run_startup_checks_outside_production(self):
        passed, warnings = run_startup_checks(build_engine("sqlite://"))
        assert passed
        assert warnings


class TestAppEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert "docs" in client.get("/").json()

    def test_openapi_lists_hr_routes(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        for path in ("/api/employees", "/api/payrolls", "/api/vacations", "/api/login_check"):
            assert path in paths

    def test_error_body_shape(self, client, user_headers):
        response = client.get("/api/employees/does-not-exist", headers=user_headers)
        assert response.status_code == 404
        assert response.json() == {
            "detail": "Employee with ID does-not-exist not found",
            "error_code": "NOT_FOUND",
            "path": "/api/employees/does-not-exist",
        }
