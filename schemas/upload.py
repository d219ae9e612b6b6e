# schemas/upload.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PresignUploadRequest(BaseModel):
     filename: str = Field(..., min_length=1, max_length=255)
     content_type: Optional[str] = Field(None, max_length=100)


class PresignUploadResponse(BaseModel):
     upload_url: str
     blob_url: str
     expires_at: datetime


class PresignDownloadResponse(BaseModel):
     download_url: str
     expires_at: datetime
