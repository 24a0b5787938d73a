import uuid
from django.db import models


def default_content():
    return {}


class Article(models.Model):
    """
    A knowledge base article.
    `content` is the editor document, stored as-is.
    `metadata` is a list of {"key": ..., "value": ...} pairs.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255, default='Untitled')
    category = models.CharField(max_length=100, blank=True, db_index=True)
    icon = models.CharField(max_length=50, blank=True)
    content = models.JSONField(default=default_content, blank=True)
    metadata = models.JSONField(default=list, blank=True)
    author_id = models.UUIDField(null=True, blank=True)  # No FK - modular boundary

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']

    def __str__(self):
        return self.title
