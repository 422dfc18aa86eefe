# routers/documents.py
"""
Document API routes.

Files are uploaded to the media store first; the returned descriptor is then
used as the `source` of a document. Document changes never touch the
dashboard statistics.
"""
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, Response, UploadFile, status

from dependencies import StoreContext, get_store, verify_token
from models import User
from schemas.document import Document, DocumentCreate, MediaDescriptor, RelatedTo, SourceKind
from services import store_service
from services.media_service import delete_media, upload_media
from utils.exceptions import NotFoundError

router = APIRouter(prefix="/api/documents", tags=["documents"])

BLOB_HOST_MARKER = ".blob.core.windows.net/"


@router.get("", response_model=List[Document], summary="List documents")
def list_documents(
     related_to: Optional[RelatedTo] = Query(None, description="property, tenant or unit"),
     related_id: Optional[str] = Query(None, description="ID of the related entity"),
     store: StoreContext = Depends(get_store),
):
     documents = store.state.documents
     if related_to:
          documents = [d for d in documents if d.related_to == related_to]
     if related_id:
          documents = [d for d in documents if d.related_id == related_id]
     return documents


@router.post(
     "/upload",
     response_model=MediaDescriptor,
     status_code=status.HTTP_201_CREATED,
     summary="Upload an image or document file"
)
def upload_document_file(
     file: UploadFile = File(...),
     kind: SourceKind = Form(SourceKind.DOCUMENT),
     user: User = Depends(verify_token),
):
     """Returns {uri, name, mime_type, size} to be stored as a document source."""
     return upload_media(file, folder=f"{user.id}/{kind.value}")


@router.post(
     "",
     response_model=Document,
     status_code=status.HTTP_201_CREATED,
     summary="Attach a document"
)
def create_document(body: DocumentCreate, store: StoreContext = Depends(get_store)):
     """**related_id** must name an existing property, tenant or unit."""
     return store.apply(store_service.add_document, body).entity


@router.get("/{document_id}", response_model=Document, summary="Get document by ID")
def get_document(document_id: str, store: StoreContext = Depends(get_store)):
     document = store.state.find_document(document_id)
     if document is None:
          raise NotFoundError("document", document_id)
     return document


@router.put("/{document_id}", response_model=Document, summary="Update document")
def update_document(document_id: str, body: DocumentCreate, store: StoreContext = Depends(get_store)):
     updated = Document(id=document_id, **body.model_dump())
     return store.apply(store_service.update_document, updated).entity


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete document")
def delete_document(
     document_id: str,
     background_tasks: BackgroundTasks,
     store: StoreContext = Depends(get_store),
):
     """Uploaded files are removed from blob storage once no document refers to them."""
     document = store.state.find_document(document_id)
     result = store.apply(store_service.delete_document, document_id)
     if document is not None and BLOB_HOST_MARKER in document.source.uri:
          still_used = any(d.source.uri == document.source.uri for d in result.state.documents)
          if not still_used:
               background_tasks.add_task(delete_media, document.source.uri)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
