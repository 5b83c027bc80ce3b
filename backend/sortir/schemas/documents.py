from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UploadResponse(BaseModel):
    success: bool = True
    fileName: str


class DocumentDetail(BaseModel):
    fileName: str
    size: int
    uploadedAt: datetime
    length: int
    preview: str


class DeleteRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    filename: str = ""


class DeleteResponse(BaseModel):
    success: bool = True
