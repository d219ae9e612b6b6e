from azure.storage.blob import BlobSasPermissions, generate_blob_sas
from datetime import timedelta
from urllib.parse import unquote, urlparse
import os
import uuid

import config
from exceptions import ValidationError
from utils.dates import utcnow


def _account_url() -> str:
     return f"https://{config.AZURE_STORAGE_ACCOUNT}.blob.core.windows.net"


def _sign(container: str, blob_name: str, permission: BlobSasPermissions):
     if not config.AZURE_STORAGE_ACCOUNT or not config.AZURE_STORAGE_KEY:
          raise Exception("AZURE_STORAGE_ACCOUNT / AZURE_STORAGE_KEY are not set")
     expires_at = utcnow() + timedelta(minutes=config.AZURE_SAS_TTL_MINUTES)
     sas = generate_blob_sas(
          account_name=config.AZURE_STORAGE_ACCOUNT,
          container_name=container,
          blob_name=blob_name,
          account_key=config.AZURE_STORAGE_KEY,
          permission=permission,
          expiry=expires_at,
     )
     return sas, expires_at


def presign_upload(filename: str, user_id: str | int, container: str | None = None):
     """
     Presigned PUT for a lease document. The client uploads directly to the
     returned ``upload_url``; ``blob_url`` is what gets stored on the lease.
     """
     container = container or config.AZURE_UPLOAD_CONTAINER
     ext = os.path.splitext(filename)[1]
     blob_name = f"{user_id}/{uuid.uuid4()}{ext}"
     sas, expires_at = _sign(container, blob_name, BlobSasPermissions(create=True, write=True))
     blob_url = f"{_account_url()}/{container}/{blob_name}"
     return {
          "upload_url": f"{blob_url}?{sas}",
          "blob_url": blob_url,
          "expires_at": expires_at,
     }


def parse_blob_url(blob_url: str) -> tuple[str, str]:
     """Split a blob URL of this storage account into (container, blob name)."""
     parsed = urlparse(blob_url)
     if parsed.netloc != urlparse(_account_url()).netloc:
          raise ValidationError("URL does not belong to this storage account")
     parts = unquote(parsed.path).lstrip("/").split("/", 1)
     if len(parts) != 2 or not parts[1]:
          raise ValidationError("URL must include a container and blob name")
     return parts[0], parts[1]


def is_uploaded_by(blob_name: str, user_id: str | int) -> bool:
     return blob_name.startswith(f"{user_id}/")


def presign_download(blob_url: str):
     """
     Time-limited read URL for a blob in this storage account.
     """
     container, blob_name = parse_blob_url(blob_url)
     sas, expires_at = _sign(container, blob_name, BlobSasPermissions(read=True))
     return {
          "download_url": f"{_account_url()}/{container}/{blob_name}?{sas}",
          "expires_at": expires_at,
     }
