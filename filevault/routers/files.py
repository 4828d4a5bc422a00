from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.datastructures import UploadFile

from filevault import schemas
from filevault.exceptions import BadRequest, PayloadTooLarge
from filevault.logging_config import get_logger
from filevault.models import StoredFile
from filevault.store import FileStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["files"],
)

# Room for boundaries and part headers on top of the file bytes.
MULTIPART_OVERHEAD_BYTES = 16 * 1024

def get_store(request: Request) -> FileStore:
    return request.app.state.store

def content_disposition(filename: str) -> str:
    safe_name = "".join(ch for ch in filename if ch not in '"\\' and ch.isprintable())
    if safe_name.isascii():
        return f'attachment; filename="{safe_name}"'
    ascii_name = "".join(ch if ch.isascii() else "_" for ch in safe_name)
    return f"attachment; filename=\"{ascii_name}\"; filename*=utf-8''{quote(safe_name)}"

async def get_upload(request: Request, store: FileStore = Depends(get_store)) -> Optional[UploadFile]:
    """Parse the multipart body and return its ``file`` part, if it is a file.

    Bodies whose declared length cannot fit under the size limit are refused
    before any of the body is read.
    """
    content_length = request.headers.get("content-length")
    if content_length is not None and content_length.isdigit():
        declared = int(content_length)
        if declared > store.max_size_bytes + MULTIPART_OVERHEAD_BYTES:
            logger.warning(f"Refusing upload with Content-Length {declared} before reading the body")
            raise PayloadTooLarge(declared, store.max_size_bytes)

    form = await request.form()
    part = form.get("file")
    if not isinstance(part, UploadFile):
        return None
    return part

async def read_upload(file: Optional[UploadFile], store: FileStore) -> bytes:
    if file is None:
        logger.warning("Upload request without a file part")
        raise BadRequest("No file uploaded")

    if file.size is not None and file.size > store.max_size_bytes:
        await file.close()
        raise PayloadTooLarge(file.size, store.max_size_bytes)

    try:
        return await file.read()
    finally:
        await file.close()

@router.get("/files", response_model=List[schemas.FileMetadataPublic])
async def list_files(store: FileStore = Depends(get_store)):
    files = store.list()
    logger.debug(f"Listing {len(files)} files")
    return [schemas.FileMetadataPublic.model_validate(meta) for meta in files]

@router.post("/upload", response_model=schemas.UploadResponse)
async def upload_file(
    file: Optional[UploadFile] = Depends(get_upload),
    store: FileStore = Depends(get_store),
):
    if file is not None:
        logger.info(f"Upload request for filename: '{file.filename}', content_type: '{file.content_type}'")
    content = await read_upload(file, store)

    meta = store.insert(file.filename or "", file.content_type, content)
    return schemas.UploadResponse(
        message="File uploaded successfully",
        file=schemas.FileSummary.model_validate(meta),
    )

@router.put("/files/{file_id}", response_model=schemas.UploadResponse)
async def replace_file(
    file_id: str,
    file: Optional[UploadFile] = Depends(get_upload),
    store: FileStore = Depends(get_store),
):
    logger.info(f"Replace request for file_id: {file_id}")
    content = await read_upload(file, store)

    meta = store.replace(file_id, file.filename or "", file.content_type, content)
    return schemas.UploadResponse(
        message="File replaced successfully",
        file=schemas.FileSummary.model_validate(meta),
    )

@router.delete("/files/{file_id}", response_model=schemas.MessageResponse)
async def delete_file(file_id: str, store: FileStore = Depends(get_store)):
    logger.info(f"Delete request for file_id: {file_id}")
    store.delete(file_id)
    return schemas.MessageResponse(message="File deleted successfully")

@router.get("/files/{file_id}/metadata", response_model=schemas.FileMetadataPublic)
async def get_file_metadata_endpoint(file_id: str, store: FileStore = Depends(get_store)):
    return schemas.FileMetadataPublic.model_validate(store.get_metadata(file_id))

@router.get("/files/{file_id}/download")
async def download_file(file_id: str, store: FileStore = Depends(get_store)):
    logger.info(f"Download request for file_id: {file_id}")
    stored: StoredFile = store.get(file_id)

    return Response(
        content=stored.content,
        media_type=stored.mime_type,
        headers={"Content-Disposition": content_disposition(stored.name)},
    )
