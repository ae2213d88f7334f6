import unittest

from tests.support import API, ApiTestCase


class TestAuthentication(ApiTestCase):

    def test_protected_route_requires_token(self):
        response = self.client.get(f"{API}/vehicles/")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {
            "success": False,
            "message": "Authentication required. Please log in.",
            "error_type": "unauthorized",
        })

    def test_invalid_token(self):
        response = self.client.get(f"{API}/vehicles/", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid or expired token")

    def test_bad_credentials(self):
        response = self.client.post(f"{API}/auth/login", json={"username": "admin", "password": "wrong"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["message"], "Invalid username or password")

    def test_login_returns_user(self):
        response = self.client.post(f"{API}/auth/login", json={"username": "admin", "password": "admin123"})
        data = response.json()
        self.assertEqual(data["token_type"], "bearer")
        self.assertEqual(data["user"]["username"], "admin")
        self.assertEqual(data["user"]["role"], "admin")
        self.assertIn("access_token", response.cookies)

    def test_me(self):
        response = self.get("/auth/me")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["username"], "admin")

    def test_session_cookie_authenticates(self):
        token = self.headers["Authorization"].split(" ", 1)[1]
        self.client.cookies.set("access_token", token)
        response = self.client.get(f"{API}/auth/me")
        self.assertEqual(response.status_code, 200)

    def test_logout_clears_cookie(self):
        self.client.post(f"{API}/auth/login", json={"username": "admin", "password": "admin123"})
        self.assertEqual(self.client.get(f"{API}/auth/me").status_code, 200)

        response = self.client.post(f"{API}/auth/logout")
        self.assertTrue(response.json()["success"])
        self.assertEqual(self.client.get(f"{API}/auth/me").status_code, 401)

    def test_public_endpoints(self):
        self.assertEqual(self.client.get("/health").json()["status"], "healthy")
        self.assertIn("version", self.client.get("/").json())


class TestRegistration(ApiTestCase):

    def register(self, username="attendant1", email="attendant1@smartpark.rw"):
        return self.client.post(f"{API}/auth/register", json={
            "username": username,
            "email": email,
            "full_name": "Claudine Mukamana",
            "password": "secret123",
        })

    def test_register_then_login(self):
        response = self.register()
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["role"], "attendant")
        self.assertNotIn("password", response.json())
        self.assertNotIn("hashed_password", response.json())

        headers = self.login("attendant1", "secret123")
        me = self.client.get(f"{API}/auth/me", headers=headers).json()
        self.assertEqual(me["email"], "attendant1@smartpark.rw")

    def test_duplicate_username(self):
        self.register()
        response = self.register(email="other@smartpark.rw")
        self.assertEqual(response.status_code, 409)

    def test_short_password(self):
        response = self.client.post(f"{API}/auth/register", json={"username": "shorty", "password": "123"})
        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
