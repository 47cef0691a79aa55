from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase


class AuthFlowTests(APITestCase):
    def setUp(self):
        self.password = "StrongPass123!"
        self.user = get_user_model().objects.create_user(
            username="storekeeper", email="store@example.com", password=self.password
        )

    def _signin(self):
        return self.client.post(
            "/api/v1/auth/token/",
            {"username": self.user.username, "password": self.password},
            format="json",
        )

    def test_signin_returns_tokens(self):
        resp = self._signin()
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIn("access", resp.data)
        self.assertIn("refresh", resp.data)

    def test_signin_with_bad_password_fails(self):
        resp = self.client.post(
            "/api/v1/auth/token/", {"username": self.user.username, "password": "wrong"}, format="json"
        )
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_access_token_allows_ledger_writes(self):
        access = self._signin().data["access"]
        resp = self.client.post("/api/v1/locations/", {"name": "WH1"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        resp = self.client.post("/api/v1/locations/", {"name": "WH1"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

    def test_signout_blacklists_refresh(self):
        refresh = self._signin().data["refresh"]
        resp = self.client.post("/api/v1/auth/signout/", {"refresh": refresh}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_205_RESET_CONTENT)
        # Refreshing with the blacklisted token is rejected
        resp2 = self.client.post("/api/v1/auth/token/refresh/", {"refresh": refresh}, format="json")
        self.assertEqual(resp2.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_signout_requires_token(self):
        resp = self.client.post("/api/v1/auth/signout/", {}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
