import json
from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from .models import Article
from .schemas import ArticleIn, ArticleUpdate, MetadataItem
from . import services

User = get_user_model()


class ArticleServiceTest(TestCase):
    def test_title_defaults_to_untitled(self):
        self.assertEqual(services.create_article(ArticleIn()).title, "Untitled")
        self.assertEqual(services.create_article(ArticleIn(title="   ")).title, "Untitled")

    def test_content_is_stored_as_is(self):
        doc = {"type": "doc", "content": [{"type": "paragraph", "text": "hi"}]}
        article = services.create_article(ArticleIn(
            title="Setup", content=doc, metadata=[MetadataItem(key="owner", value="ops")],
        ))
        article.refresh_from_db()
        self.assertEqual(article.content, doc)
        self.assertEqual(article.metadata, [{"key": "owner", "value": "ops"}])

    def test_update_touches_updated_at(self):
        article = services.create_article(ArticleIn(title="A"))
        before = article.updated_at
        updated = services.update_article(article.id, ArticleUpdate(icon="book"))
        self.assertGreaterEqual(updated.updated_at, before)
        self.assertEqual(updated.title, "A")

    def test_list_omits_content(self):
        services.create_article(ArticleIn(title="A", content={"big": "doc"}))
        listed = services.list_articles()
        self.assertIn('content', listed[0].get_deferred_fields())

    def test_rename_category(self):
        services.create_article(ArticleIn(title="A", category="Ops"))
        services.create_article(ArticleIn(title="B", category="Ops"))
        services.create_article(ArticleIn(title="C", category="Sales"))

        self.assertEqual(services.rename_category("Ops", "Operations"), 2)
        self.assertEqual(services.list_categories(), ["Operations", "Sales"])

        with self.assertRaises(ValueError):
            services.rename_category("Operations", "  ")

    def test_delete_category_deletes_articles(self):
        services.create_article(ArticleIn(title="A", category="Ops"))
        services.create_article(ArticleIn(title="B", category="Sales"))
        self.assertEqual(services.delete_category("Ops"), 1)
        self.assertEqual(list(Article.objects.values_list('title', flat=True)), ["B"])


class KnowledgeBaseAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/knowledge-base/articles').status_code, 401)

    def test_create_sets_author_and_list_hides_content(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/knowledge-base/articles',
            data=json.dumps({'title': 'How to', 'category': 'Ops', 'content': {'type': 'doc'}}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['author_id'], str(self.user.id))

        listing = self.client.get('/api/knowledge-base/articles').json()
        self.assertNotIn('content', listing[0])

        detail = self.client.get(f"/api/knowledge-base/articles/{response.json()['id']}").json()
        self.assertEqual(detail['content'], {'type': 'doc'})

    def test_rename_blank_is_400(self):
        self.client.force_login(self.user)
        response = self.client.put(
            '/api/knowledge-base/categories/Ops',
            data=json.dumps({'name': ''}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 400)
