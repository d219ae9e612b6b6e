# routers/uploads.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

import azure_blob
from database import get_session
from dependencies import get_current_user, require_landlord
from exceptions import NotFoundError
from schemas.upload import PresignDownloadResponse, PresignUploadRequest, PresignUploadResponse
from services import lease_service
from services.access import CurrentUser

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/presign", response_model=PresignUploadResponse)
def presign_upload(
     data: PresignUploadRequest,
     user: CurrentUser = Depends(require_landlord),
):
     """Presigned upload URL for a custom lease document."""
     return PresignUploadResponse(**azure_blob.presign_upload(data.filename, user.id))


@router.get("/presign-download", response_model=PresignDownloadResponse)
def presign_download(
     url: str = Query(..., description="Blob URL previously returned by /uploads/presign"),
     db: Session = Depends(get_session),
     user: CurrentUser = Depends(get_current_user),
):
     """
     Read URL for a lease document. Landlords may read their own uploads;
     everyone else needs a lease that references the blob.
     """
     _, blob_name = azure_blob.parse_blob_url(url)
     own_upload = user.is_landlord and azure_blob.is_uploaded_by(blob_name, user.id)
     if not own_upload and not lease_service.can_view_document(db, user, url):
          raise NotFoundError("Document not found")
     return PresignDownloadResponse(**azure_blob.presign_download(url))
