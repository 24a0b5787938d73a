"""
Tests for company settings.
"""
import shutil
import tempfile
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, Client, override_settings
from django.contrib.auth import get_user_model

from apps.company import services
from apps.company.models import CompanySettings, SETTINGS_ID
from apps.company.schemas import CompanySettingsIn

User = get_user_model()


class CompanySettingsServiceTest(TestCase):
    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.media_override = override_settings(MEDIA_ROOT=self.media_root)
        self.media_override.enable()

    def tearDown(self):
        self.media_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_never_saved(self):
        self.assertIsNone(services.get_company_settings())
        self.assertEqual(services.get_company_settings_dto().name, "")

    def test_save_is_an_upsert(self):
        services.save_company_settings(CompanySettingsIn(name="Acme", cpf="111"))
        services.save_company_settings(CompanySettingsIn(name="Acme Ltda", cnpj="222"))
        self.assertEqual(CompanySettings.objects.count(), 1)
        dto = services.get_company_settings_dto()
        self.assertEqual(dto.name, "Acme Ltda")
        self.assertEqual(dto.document, "222")

    def test_logo_upload_keeps_settings(self):
        services.save_company_settings(CompanySettingsIn(name="Acme"))
        upload = SimpleUploadedFile("brand.PNG", b"\x89PNG fake", content_type="image/png")
        obj = services.save_company_logo(upload)
        self.assertEqual(obj.id, SETTINGS_ID)
        self.assertEqual(obj.name, "Acme")
        self.assertTrue(obj.logo.name.startswith("company/logo"))
        self.assertIsNotNone(services.get_company_settings_dto().logo_url)

    def test_logo_rejects_unsupported_type(self):
        upload = SimpleUploadedFile("notes.txt", b"hello")
        with self.assertRaises(ValueError):
            services.save_company_logo(upload)

    def test_logo_rejects_large_files(self):
        upload = SimpleUploadedFile("big.png", b"0" * (services.MAX_LOGO_SIZE + 1))
        with self.assertRaises(ValueError):
            services.save_company_logo(upload)


class CompanySettingsAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(username='a@test.com', email='a@test.com', password='pw')

    def test_requires_auth(self):
        self.assertEqual(self.client.get('/api/settings/company').status_code, 401)

    def test_get_and_put(self):
        self.client.force_login(self.user)
        self.assertIsNone(self.client.get('/api/settings/company').json())

        response = self.client.put(
            '/api/settings/company',
            data={'name': 'Acme', 'email': 'hi@acme.com'},
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['name'], 'Acme')
        self.assertIsNone(response.json()['logo_url'])

    def test_logo_upload_rejects_bad_type(self):
        self.client.force_login(self.user)
        response = self.client.post(
            '/api/settings/company/logo',
            {'file': SimpleUploadedFile("notes.txt", b"hello")},
        )
        self.assertEqual(response.status_code, 400)
