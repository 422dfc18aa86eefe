# schemas/document.py
"""
Pydantic schemas for documents attached to properties, units and tenants.
"""
from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class DocumentType(str, Enum):
     LEASE = "lease"
     RECEIPT = "receipt"
     UTILITY = "utility"
     MAINTENANCE = "maintenance"
     OTHER = "other"


class SourceKind(str, Enum):
     IMAGE = "image"
     DOCUMENT = "document"
     URL = "url"


class RelatedTo(str, Enum):
     PROPERTY = "property"
     TENANT = "tenant"
     UNIT = "unit"


class MediaDescriptor(BaseModel):
     """What the media store hands back after an upload."""
     uri: str
     name: str
     mime_type: Optional[str] = None
     size: Optional[int] = None


class DocumentSource(BaseModel):
     """Location of the document content. Stored as received, never inspected."""
     uri: str
     kind: SourceKind = SourceKind.URL
     name: Optional[str] = None
     mime_type: Optional[str] = None
     size: Optional[int] = None

     @classmethod
     def from_media(cls, media: MediaDescriptor, kind: SourceKind) -> "DocumentSource":
          return cls(kind=kind, **media.model_dump())


class DocumentCreate(BaseModel):
     name: str = Field(..., min_length=1, max_length=255)
     type: DocumentType = DocumentType.OTHER
     source: DocumentSource
     upload_date: date = Field(default_factory=date.today)
     related_to: RelatedTo
     related_id: str


class Document(DocumentCreate):
     id: str
