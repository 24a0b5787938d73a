from django.conf import settings
from django.test import TestCase, Client

from .models import User
from .dtos import AdminCreate, AdminUpdate
from .jwt_auth import create_session_token, decode_token
from .services import admin_exists, create_admin, update_admin


class AdminSetupServiceTest(TestCase):
    def test_create_admin_only_once(self):
        self.assertFalse(admin_exists())
        dto = create_admin(AdminCreate(name="Ana", email="Ana@Example.com", password="secret123"))
        self.assertEqual(dto.email, "ana@example.com")
        self.assertTrue(admin_exists())

        with self.assertRaises(ValueError):
            create_admin(AdminCreate(name="Bia", email="bia@example.com", password="secret123"))

    def test_update_admin_rejects_taken_email(self):
        first = create_admin(AdminCreate(name="Ana", email="ana@example.com", password="pw"))
        User.objects.create_user(username="bia@example.com", email="bia@example.com", password="pw")

        with self.assertRaises(ValueError):
            update_admin(first.id, AdminUpdate(email="bia@example.com"))

    def test_update_admin_changes_password(self):
        dto = create_admin(AdminCreate(name="Ana", email="ana@example.com", password="old"))
        update_admin(dto.id, AdminUpdate(password="new"))
        self.assertTrue(User.objects.get(id=dto.id).check_password("new"))


class SessionTokenTest(TestCase):
    def test_payload_shape(self):
        user = User.objects.create_user(username="c@x.com", email="c@x.com", password="pw", name="Carla")
        payload = decode_token(create_session_token(user))
        self.assertEqual(payload['user'], {'id': str(user.id), 'name': "Carla", 'email': "c@x.com"})
        self.assertEqual(payload['exp'] - payload['iat'], 24 * 60 * 60)

    def test_tampered_token_is_rejected(self):
        user = User.objects.create_user(username="c@x.com", email="c@x.com", password="pw")
        token = create_session_token(user)
        self.assertIsNone(decode_token(token[:-2] + "xx"))


class AuthApiTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(
            username="ana@example.com", email="ana@example.com", password="secret123", name="Ana"
        )

    def test_login_sets_session_cookie(self):
        response = self.client.post(
            "/api/auth/login",
            {"email": "ANA@example.com", "password": "secret123"},
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertIn(settings.SESSION_TOKEN_COOKIE, response.cookies)
        self.assertTrue(response.cookies[settings.SESSION_TOKEN_COOKIE]['httponly'])

        me = self.client.get("/api/auth/me")
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()['email'], "ana@example.com")

    def test_login_wrong_password(self):
        response = self.client.post(
            "/api/auth/login",
            {"email": "ana@example.com", "password": "nope"},
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 401)

    def test_me_requires_auth(self):
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

    def test_logout_clears_cookie(self):
        self.client.cookies[settings.SESSION_TOKEN_COOKIE] = create_session_token(self.user)
        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.cookies[settings.SESSION_TOKEN_COOKIE].value, "")

    def test_setup_rejected_when_user_exists(self):
        self.assertTrue(self.client.get("/api/auth/setup").json()['admin_exists'])
        response = self.client.post(
            "/api/auth/setup",
            {"name": "Bia", "email": "bia@example.com", "password": "pw"},
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 400)
