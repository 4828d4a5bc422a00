from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

class FileSummary(BaseModel):
    id: str
    name: str
    size: int
    mime_type: str = Field(alias="type")
    uploaded_at: datetime = Field(alias="uploadDate")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class FileMetadataPublic(FileSummary):
    content_hash: str = Field(alias="hash")

class UploadResponse(BaseModel):
    message: str
    file: FileSummary

class MessageResponse(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str

class DuplicateFileInfo(BaseModel):
    id: str
    name: str
    uploaded_at: datetime = Field(alias="uploadDate")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class DuplicateErrorResponse(ErrorResponse):
    duplicateFile: DuplicateFileInfo
