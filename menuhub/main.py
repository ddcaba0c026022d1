"""
Main FastAPI application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from menuhub.config import get_settings
from menuhub.database import create_tables
from menuhub.api import catalog, structures, combined_menus, company_menus, updations
from menuhub.utils.exceptions import MenuHubError, PersistenceFailure
from menuhub.utils.logger import configure_package_logging

settings = get_settings()
configure_package_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_tables()
    logger.info("Database tables created")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Weekly catering menu projection per company and building",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MenuHubError)
async def menuhub_error_handler(request: Request, exc: MenuHubError):
    content = {"detail": exc.message}
    if isinstance(exc, PersistenceFailure) and exc.result is not None:
        content["failed"] = [building_id for building_id, _ in exc.failures]
        combined_menu_id = getattr(exc.result, "combined_menu_id", None)
        if combined_menu_id:
            content["combined_menu_id"] = combined_menu_id
        if hasattr(exc.result, "summary"):
            content["summary"] = exc.result.summary()
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(ValidationError)
async def structure_validation_handler(request: Request, exc: ValidationError):
    # Raised when stored or submitted structure JSON has the wrong shape
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(exc.errors(include_url=False, include_context=False))},
    )


# Include routers
app.include_router(catalog.router, prefix="/api/catalog", tags=["Catalog"])
app.include_router(structures.router, prefix="/api/structures", tags=["Structures"])
app.include_router(combined_menus.router, prefix="/api/combined-menus", tags=["Combined Menus"])
app.include_router(company_menus.router, prefix="/api/company-menus", tags=["Company Menus"])
app.include_router(updations.router, prefix="/api/updations", tags=["Updations"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "menuhub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
