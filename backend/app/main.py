"""FastAPI application entry point."""
import logging
import traceback
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from extractor.errors import (
    ArchiveUnreadable, DirectoryUnreadable, EntryNotFound, ExtractorError,
    StoreClosed, StoreReadFailed, StoreWriteFailed,
)

from backend.app.core.config import settings
from backend.app.core.database import init_store, close_store
from backend.app.api.router import api_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

ERROR_STATUS = {
    DirectoryUnreadable: 400,
    ArchiveUnreadable: 400,
    EntryNotFound: 404,
    StoreReadFailed: 500,
    StoreWriteFailed: 500,
    StoreClosed: 503,
}


@app.exception_handler(ExtractorError)
async def extractor_exception_handler(request: Request, exc: ExtractorError):
    """Report engine errors with a status matching their kind."""
    status_code = ERROR_STATUS.get(type(exc), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Report invalid arguments as bad requests."""
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to log all errors."""
    print(f"ERROR: {request.method} {request.url.path}")
    print(f"Exception: {type(exc).__name__}: {exc}")
    traceback.print_exc()
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__}
    )


@app.on_event("startup")
def startup_event():
    """Run on application startup."""
    print("=" * 60)
    print(f"{settings.app_name} v{settings.api_version}")
    print("=" * 60)
    store = init_store()
    print(f"✓ Recipe store: {settings.database_url or settings.database_path}")
    print(f"✓ Recipes stored: {store.count()}")
    print(f"✓ CORS origins: {settings.cors_origins_list}")
    if settings.mods_dir:
        print(f"✓ Default mods folder: {settings.mods_dir}")
    print("-" * 60)
    print(f"📚 API Docs:    http://{settings.host}:{settings.port}/docs")
    print(f"💓 Health:      http://{settings.host}:{settings.port}/api/health")
    print("=" * 60)


@app.on_event("shutdown")
def shutdown_event():
    """Run on application shutdown."""
    print("\nShutting down...")
    close_store()
    print("✓ Stopped")

