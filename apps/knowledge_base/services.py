"""
Knowledge base services.

Categories are free-text labels on articles; they exist as long as some
article uses them.
"""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction

from .models import Article
from .schemas import ArticleIn, ArticleUpdate

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Untitled'


def _clean_title(title: Optional[str]) -> str:
    title = (title or '').strip()
    return title or DEFAULT_TITLE


# =============================================================================
# Articles
# =============================================================================

def list_articles(category: Optional[str] = None) -> List[Article]:
    """Articles without content, most recently updated first."""
    queryset = Article.objects.defer('content')
    if category is not None:
        queryset = queryset.filter(category=category)
    return list(queryset)


def get_article(article_id: UUID) -> Optional[Article]:
    try:
        return Article.objects.get(id=article_id)
    except Article.DoesNotExist:
        return None


def create_article(payload: ArticleIn, author_id: Optional[UUID] = None) -> Article:
    data = payload.dict()
    article = Article.objects.create(
        title=_clean_title(data['title']),
        category=data['category'].strip(),
        icon=data['icon'],
        content=data['content'] if data['content'] is not None else {},
        metadata=data['metadata'],
        author_id=author_id,
    )
    logger.info("Created article %s", article.id)
    return article


def update_article(article_id: UUID, payload: ArticleUpdate) -> Optional[Article]:
    """Partial update; always touches updated_at."""
    article = get_article(article_id)
    if article is None:
        return None

    data = payload.dict(exclude_unset=True)
    if 'title' in data:
        article.title = _clean_title(data['title'])
    if data.get('category') is not None:
        article.category = data['category'].strip()
    if data.get('icon') is not None:
        article.icon = data['icon']
    if 'content' in data:
        article.content = data['content'] if data['content'] is not None else {}
    if data.get('metadata') is not None:
        article.metadata = data['metadata']

    article.save()
    logger.info("Updated article %s", article.id)
    return article


def delete_article(article_id: UUID) -> bool:
    deleted, _ = Article.objects.filter(id=article_id).delete()
    if deleted:
        logger.info("Deleted article %s", article_id)
    return bool(deleted)


# =============================================================================
# Categories
# =============================================================================

def list_categories() -> List[str]:
    """Distinct non-empty category names, alphabetical."""
    return list(
        Article.objects.exclude(category='')
        .order_by('category')
        .values_list('category', flat=True)
        .distinct()
    )


@transaction.atomic
def rename_category(old_name: str, new_name: str) -> int:
    """
    Move every article of `old_name` to `new_name`.

    Raises:
        ValueError: if the new name is blank
    """
    new_name = (new_name or '').strip()
    if not new_name:
        raise ValueError("Category name is required")

    updated = 0
    for article in Article.objects.filter(category=old_name):
        article.category = new_name
        article.save(update_fields=['category', 'updated_at'])
        updated += 1
    logger.info("Renamed category '%s' to '%s' on %d article(s)", old_name, new_name, updated)
    return updated


def delete_category(name: str) -> int:
    """Delete a category together with all of its articles."""
    deleted, _ = Article.objects.filter(category=name).delete()
    logger.info("Deleted category '%s' and %d article(s)", name, deleted)
    return deleted
