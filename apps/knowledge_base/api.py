"""
Knowledge Base API endpoints.
"""
from typing import List, Optional
from uuid import UUID
from ninja import Router
from ninja.errors import HttpError
from django.http import HttpRequest

from apps.identity.api import require_auth
from .schemas import ArticleIn, ArticleUpdate, ArticleOut, ArticleSummaryOut, CategoryRenameIn
from . import services

router = Router(tags=["Knowledge Base"])


# =============================================================================
# Categories
# =============================================================================

@router.get("/categories", response=List[str], auth=None)
def get_categories(request: HttpRequest):
    require_auth(request)
    return services.list_categories()


@router.put("/categories/{name}", auth=None)
def rename_category_api(request: HttpRequest, name: str, payload: CategoryRenameIn):
    """Rename a category on every article that uses it."""
    require_auth(request)
    try:
        updated = services.rename_category(name, payload.name)
    except ValueError as e:
        raise HttpError(400, str(e))
    return {"updated": updated}


@router.delete("/categories/{name}", auth=None)
def delete_category_api(request: HttpRequest, name: str):
    """Delete a category and all of its articles."""
    require_auth(request)
    return {"deleted": services.delete_category(name)}


# =============================================================================
# Articles
# =============================================================================

@router.get("/articles", response=List[ArticleSummaryOut], auth=None)
def get_articles(request: HttpRequest, category: Optional[str] = None):
    require_auth(request)
    return services.list_articles(category=category)


@router.get("/articles/{article_id}", response=ArticleOut, auth=None)
def get_article_detail(request: HttpRequest, article_id: UUID):
    require_auth(request)
    article = services.get_article(article_id)
    if not article:
        raise HttpError(404, "Article not found")
    return article


@router.post("/articles", response=ArticleOut, auth=None)
def create_article_api(request: HttpRequest, payload: ArticleIn):
    user = require_auth(request)
    return services.create_article(payload, author_id=user.id)


@router.put("/articles/{article_id}", response=ArticleOut, auth=None)
def update_article_api(request: HttpRequest, article_id: UUID, payload: ArticleUpdate):
    require_auth(request)
    article = services.update_article(article_id, payload)
    if not article:
        raise HttpError(404, "Article not found")
    return article


@router.delete("/articles/{article_id}", response={204: None}, auth=None)
def delete_article_api(request: HttpRequest, article_id: UUID):
    require_auth(request)
    if not services.delete_article(article_id):
        raise HttpError(404, "Article not found")
    return 204, None
