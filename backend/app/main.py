from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.exceptions import register_exception_handlers
from app.startup import configure_startup_logging, run_startup_checks

# ========== Authentication ==========
from modules.auth.routes.auth_routes import router as auth_router
from modules.auth.routes.user_routes import router as user_router

# ========== HR ==========
from modules.employees.routes.employee_routes import router as employee_router
from modules.payroll.routes.payroll_routes import router as payroll_router
from modules.vacations.routes.vacation_routes import router as vacation_router

configure_startup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    run_startup_checks()
    yield


app = FastAPI(
    title=settings.app_name,
    description="""
    HR management API: employees, payroll and vacation requests.

    ## Authentication

    Every `/api` endpoint except login requires a JWT bearer token.
    Obtain one from `POST /api/login_check` (or `/api/auth/login`) and
    renew it with `POST /api/auth/refresh`.

    ### Demo credentials (after loading fixtures)
    - **Admin**: `admin@hr-system.com` / `password123`
    - **User**: `user@hr-system.com` / `password123`
    """,
    version=settings.app_version,
    lifespan=lifespan,
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== Include all routers (auth first) ==========
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(user_router, prefix=settings.api_prefix)
app.include_router(employee_router, prefix=settings.api_prefix)
app.include_router(payroll_router, prefix=settings.api_prefix)
app.include_router(vacation_router, prefix=settings.api_prefix)


@app.get("/")
def read_root():
    return {"message": f"{settings.app_name} is running", "docs": "/docs"}


@app.get("/health")
def health_check():
    return {"status": "healthy", "version": settings.app_version, "environment": settings.environment}
