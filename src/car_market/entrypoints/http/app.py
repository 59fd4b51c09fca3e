from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from car_market.entrypoints.http.exception_handlers import register_exception_handlers
from car_market.entrypoints.http.routes.admin_cars import router as admin_cars_router
from car_market.entrypoints.http.routes.cars import router as cars_router
from car_market.entrypoints.http.routes.health import router as health_router
from car_market.infra.storage.config import upload_dir


def build_app() -> FastAPI:
    app = FastAPI(
        title="Car Market API",
        description="""
        Car marketplace API for browsing, searching and managing car listings.

        ## Features
        - Browse and search the catalog with filters, ordering and pagination
        - Car details, similar cars, featured and most viewed cars
        - Admin management of listings, images and specifications

        ## Authentication
        Currently no authentication required (development phase).

        ## Error Handling
        All errors return structured JSON responses with error codes.
        See the error response schemas in the API documentation.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        license_info={
            "name": "Proprietary",
        },
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(cars_router, prefix="/v1")
    app.include_router(admin_cars_router, prefix="/v1")

    # Uploaded images; the directory may not exist until the first upload
    app.mount("/uploads", StaticFiles(directory=upload_dir(), check_dir=False), name="uploads")

    return app


app = build_app()
