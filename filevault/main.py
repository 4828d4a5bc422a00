from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from filevault import schemas
from filevault.config import Settings, settings as global_app_settings
from filevault.exceptions import DuplicateContent, FileVaultError
from filevault.logging_config import get_logger
from filevault.routers import files as files_router
from filevault.store import FileStore

logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("FileVault starting up...")
    logger.info(f"Maximum upload size: {app.state.settings.MAX_UPLOAD_SIZE_BYTES} bytes")
    logger.info("Files are stored in memory and reset on server restart")
    yield
    logger.info(f"FileVault shutting down, dropping {len(app.state.store)} stored files...")

async def filevault_error_handler(request: Request, exc: FileVaultError):
    logger.warning(f"{type(exc).__name__}: {exc} path={request.url.path}")
    if isinstance(exc, DuplicateContent):
        body = schemas.DuplicateErrorResponse(
            error=str(exc),
            duplicateFile=schemas.DuplicateFileInfo.model_validate(exc.existing),
        )
    else:
        body = schemas.ErrorResponse(error=str(exc))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", by_alias=True),
    )

async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error while serving {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or global_app_settings

    app = FastAPI(
        title="FileVault",
        version="0.1.0",
        lifespan=lifespan
    )
    app.state.settings = app_settings
    app.state.store = FileStore(max_size_bytes=app_settings.MAX_UPLOAD_SIZE_BYTES)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(FileVaultError, filevault_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(files_router.router)

    @app.get("/ping", tags=["Health"])
    async def ping():
        logger.debug("Ping endpoint was called")
        return {"ping": "pong! from FileVault"}

    @app.get("/", tags=["Root"])
    async def read_root():
        return {"message": "Welcome to the FileVault API"}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting FileVault on {global_app_settings.FILEVAULT_HOST}:{global_app_settings.FILEVAULT_PORT}")
    uvicorn.run("filevault.main:app", host=global_app_settings.FILEVAULT_HOST, port=global_app_settings.FILEVAULT_PORT)
