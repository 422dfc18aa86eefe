# services/media_service.py
"""
Media Service - uploads images and documents to Azure Blob Storage and
returns the descriptor that is stored verbatim as a document source.
File contents are never inspected.
"""
import logging
import os
import uuid
from typing import Optional

from azure.storage.blob import BlobServiceClient, ContentSettings
from dotenv import load_dotenv

from schemas.document import MediaDescriptor

load_dotenv()

logger = logging.getLogger(__name__)

AZURE_STORAGE_CONTAINER = os.getenv("AZURE_STORAGE_CONTAINER", "documents")

_blob_service: Optional[BlobServiceClient] = None


def get_blob_service() -> BlobServiceClient:
     """Create the blob client on first use so importing this module needs no credentials."""
     global _blob_service
     if _blob_service is None:
          account = os.getenv("AZURE_STORAGE_ACCOUNT")
          key = os.getenv("AZURE_STORAGE_KEY")
          if not account or not key:
               raise RuntimeError("AZURE_STORAGE_ACCOUNT and AZURE_STORAGE_KEY must be set")
          _blob_service = BlobServiceClient.from_connection_string(
               f"DefaultEndpointsProtocol=https;"
               f"AccountName={account};"
               f"AccountKey={key};"
               f"EndpointSuffix=core.windows.net"
          )
     return _blob_service


def upload_media(file, folder: str, container: str = AZURE_STORAGE_CONTAINER) -> MediaDescriptor:
     """
     Upload a FastAPI UploadFile under `folder/` with a random name.

     Returns:
          MediaDescriptor with the public blob URL, original name, mime type
          and size in bytes
     """
     ext = os.path.splitext(file.filename or "")[1]
     blob_name = f"{folder}/{uuid.uuid4()}{ext}"
     blob_client = get_blob_service().get_blob_client(container=container, blob=blob_name)
     blob_client.upload_blob(
          file.file,
          overwrite=True,
          content_settings=ContentSettings(content_type=file.content_type),
     )
     logger.info("Uploaded %s to %s/%s", file.filename, container, blob_name)
     return MediaDescriptor(
          uri=blob_client.url,
          name=file.filename or blob_name,
          mime_type=file.content_type,
          size=getattr(file, "size", None),
     )


def delete_media(blob_url: str) -> None:
     """
     Deletes a file from Azure Blob Storage using its full URL
     """
     path = blob_url.split(".blob.core.windows.net/", 1)[-1]
     container, _, blob_name = path.partition("/")
     blob_client = get_blob_service().get_blob_client(container=container, blob=blob_name)
     blob_client.delete_blob()
     logger.info("Deleted blob %s/%s", container, blob_name)
