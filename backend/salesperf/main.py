from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from salesperf.core.config import settings
from salesperf.core.logging_config import configure_logging
import salesperf.models  # noqa: F401  # force model registration
from salesperf.db.session import dispose_engine

from salesperf.api.v1.users import router as users_router
from salesperf.api.v1.sales import router as sales_router
from salesperf.api.v1.targets import router as targets_router
from salesperf.api.v1.commission import router as commission_router


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    await dispose_engine()


def create_application() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Sales Performance Analytics API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            # Local development frontend
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {
            "status": "ok",
            "service": "salesperf",
            "endpoints": {
                "users": "/api/v1/users",
                "sales": "/api/v1/sales",
                "targets": "/api/v1/targets",
                "commission": "/api/v1/commission",
            },
        }

    # Routers
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(sales_router, prefix="/api/v1")
    app.include_router(targets_router, prefix="/api/v1")
    app.include_router(commission_router, prefix="/api/v1")

    return app


app = create_application()
