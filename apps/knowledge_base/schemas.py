"""
API Schemas for Knowledge Base app.
"""
from typing import Any, List, Optional
from uuid import UUID
from datetime import datetime
from ninja import Schema


class MetadataItem(Schema):
    key: str
    value: str = ""


class ArticleIn(Schema):
    title: Optional[str] = None
    category: str = ""
    icon: str = ""
    content: Any = None
    metadata: List[MetadataItem] = []


class ArticleUpdate(Schema):
    title: Optional[str] = None
    category: Optional[str] = None
    icon: Optional[str] = None
    content: Any = None
    metadata: Optional[List[MetadataItem]] = None


class ArticleSummaryOut(Schema):
    """Listing entry. Content is omitted."""
    id: UUID
    title: str
    category: str
    icon: str
    metadata: List[MetadataItem]
    author_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime


class ArticleOut(ArticleSummaryOut):
    content: Any = None


class CategoryRenameIn(Schema):
    name: str
