"""
Shared base class for API tests.

Each test gets an empty database, a running app (lifespan included, so the
admin user is seeded) and a bearer token.
"""
import asyncio
import unittest

from fastapi.testclient import TestClient

from app.config import get_settings
from app.database import drop_db
from app.main import app

API = get_settings().api_v1_prefix


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        asyncio.run(drop_db())
        self.client = TestClient(app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)
        self.addCleanup(app.dependency_overrides.clear)
        self.headers = self.login("admin", "admin123")

    def login(self, username, password):
        response = self.client.post(f"{API}/auth/login", json={"username": username, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        # Authenticate explicitly through the header, not the cookie jar.
        self.client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    # Request helpers ----------------------------------------------------

    def get(self, path, **kwargs):
        return self.client.get(f"{API}{path}", headers=self.headers, **kwargs)

    def post(self, path, json=None):
        return self.client.post(f"{API}{path}", json=json, headers=self.headers)

    def put(self, path, json=None):
        return self.client.put(f"{API}{path}", json=json, headers=self.headers)

    def delete(self, path):
        return self.client.delete(f"{API}{path}", headers=self.headers)

    # Fixtures -----------------------------------------------------------

    def create_vehicle(self, plate="RAB123A", driver="Jean Mugabo"):
        response = self.post("/vehicles/", {
            "plate_number": plate,
            "vehicle_type": "Sedan",
            "driver_name": driver,
            "phone_number": "0788000000",
        })
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_rate(self, name="Standard", price=500, billing_mode="HOURLY"):
        response = self.post("/rates/", {"name": name, "price": price, "billing_mode": billing_mode})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def open_ticket(self, plate, rate_id, entry_time=None):
        body = {"plate_number": plate, "rate_id": rate_id}
        if entry_time:
            body["entry_time"] = entry_time
        response = self.post("/tickets/", body)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def complete_ticket(self, ticket_id, exit_time=None):
        return self.put(f"/tickets/{ticket_id}/complete", {"exit_time": exit_time} if exit_time else None)

    def pay(self, ticket_id, amount, method=None):
        body = {"ticket_id": ticket_id, "amount_paid": amount}
        if method:
            body["method"] = method
        return self.post("/payments/", body)

    def closed_ticket(self, plate, rate_id, entry_time, exit_time):
        ticket = self.open_ticket(plate, rate_id, entry_time)
        response = self.complete_ticket(ticket["id"], exit_time)
        self.assertEqual(response.status_code, 200, response.text)
        return ticket["id"], response.json()
