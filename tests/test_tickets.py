import unittest

from app.config import Settings, get_settings
from app.main import app
from tests.support import ApiTestCase


class TestOpenTicket(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.vehicle = self.create_vehicle("RAB123A")
        self.rate = self.create_rate("Standard", 500)

    def test_open_ticket(self):
        """Opening a ticket starts an OPEN interval for the vehicle"""
        ticket = self.open_ticket("rab123a", self.rate["id"], "2026-10-19T10:00:00")
        self.assertEqual(ticket["status"], "OPEN")
        self.assertEqual(ticket["vehicle_id"], self.vehicle["id"])
        self.assertEqual(ticket["vehicle"]["plate_number"], "RAB123A")
        self.assertEqual(ticket["rate"]["name"], "Standard")
        self.assertIsNone(ticket["exit_time"])
        self.assertIsNone(ticket["billed_amount"])

    def test_unknown_vehicle(self):
        response = self.post("/tickets/", {"plate_number": "NOPE000", "rate_id": self.rate["id"]})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {
            "success": False,
            "message": "Vehicle not found",
            "error_type": "not_found",
        })

    def test_unknown_rate(self):
        response = self.post("/tickets/", {"plate_number": "RAB123A", "rate_id": 999})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Rate not found")

    def test_missing_rate_is_a_validation_error(self):
        response = self.post("/tickets/", {"plate_number": "RAB123A"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error_type"], "validation_error")

    def test_vehicle_cannot_hold_two_open_tickets(self):
        self.open_ticket("RAB123A", self.rate["id"])
        response = self.post("/tickets/", {"plate_number": "RAB123A", "rate_id": self.rate["id"]})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(len(self.get("/tickets/").json()), 1)

    def test_vehicle_can_reenter_after_completion(self):
        self.closed_ticket("RAB123A", self.rate["id"], "2026-10-19T08:00:00", "2026-10-19T09:00:00")
        ticket = self.open_ticket("RAB123A", self.rate["id"])
        self.assertEqual(ticket["status"], "OPEN")

    def test_list_filters_by_status(self):
        other = self.create_vehicle("RAC456B", "Aline Uwase")
        self.closed_ticket("RAB123A", self.rate["id"], "2026-10-19T08:00:00", "2026-10-19T09:00:00")
        self.open_ticket(other["plate_number"], self.rate["id"], "2026-10-19T09:30:00")

        open_tickets = self.get("/tickets/", params={"status": "OPEN"}).json()
        closed_tickets = self.get("/tickets/", params={"status": "CLOSED"}).json()
        self.assertEqual([t["vehicle"]["plate_number"] for t in open_tickets], ["RAC456B"])
        self.assertEqual([t["vehicle"]["plate_number"] for t in closed_tickets], ["RAB123A"])

    def test_get_ticket(self):
        ticket = self.open_ticket("RAB123A", self.rate["id"])
        response = self.get(f"/tickets/{ticket['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["id"], ticket["id"])
        self.assertEqual(self.get("/tickets/999").status_code, 404)


class TestCompleteTicket(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.create_vehicle("RAB123A")
        self.rate = self.create_rate("Standard", 500)

    def test_minimum_charge(self):
        """One second of parking bills one full hour"""
        ticket = self.open_ticket("RAB123A", self.rate["id"], "2026-10-19T10:00:00")
        response = self.complete_ticket(ticket["id"], "2026-10-19T10:00:01")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["duration"], 1)
        self.assertEqual(data["billedAmount"], 500)

    def test_partial_hours_round_up(self):
        ticket_id, data = self.closed_ticket(
            "RAB123A", self.rate["id"], "2026-10-19T10:00:00", "2026-10-19T12:01:00"
        )
        self.assertEqual(data["ticketNumber"], ticket_id)
        self.assertEqual(data["plateNumber"], "RAB123A")
        self.assertEqual(data["duration"], 3)
        self.assertEqual(data["billedAmount"], 1500)
        self.assertEqual(data["status"], "CLOSED")
        self.assertTrue(data["closedAt"].startswith("2026-10-19T12:01:00"))

        stored = self.get(f"/tickets/{ticket_id}").json()
        self.assertEqual(stored["status"], "CLOSED")
        self.assertEqual(stored["duration_hours"], 3)
        self.assertEqual(stored["billed_amount"], 1500)

    def test_complete_without_body_uses_current_time(self):
        ticket = self.open_ticket("RAB123A", self.rate["id"])
        data = self.complete_ticket(ticket["id"]).json()
        self.assertEqual(data["duration"], 1)
        self.assertEqual(data["billedAmount"], 500)

    def test_cannot_complete_twice(self):
        ticket_id, first = self.closed_ticket(
            "RAB123A", self.rate["id"], "2026-10-19T10:00:00", "2026-10-19T11:30:00"
        )
        response = self.complete_ticket(ticket_id, "2026-10-19T18:00:00")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error_type"], "invalid_state")
        stored = self.get(f"/tickets/{ticket_id}").json()
        self.assertEqual(stored["billed_amount"], first["billedAmount"])

    def test_complete_unknown_ticket(self):
        response = self.complete_ticket(999)
        self.assertEqual(response.status_code, 404)

    def test_flat_rate_bills_package_price(self):
        flat = self.create_rate("Day Pass", 3000, "FLAT")
        ticket = self.open_ticket("RAB123A", flat["id"], "2026-10-19T06:00:00")
        data = self.complete_ticket(ticket["id"], "2026-10-19T19:45:00").json()
        self.assertIsNone(data["duration"])
        self.assertEqual(data["billedAmount"], 3000)

    def test_negative_duration_is_clamped(self):
        ticket = self.open_ticket("RAB123A", self.rate["id"], "2026-10-19T10:00:00")
        data = self.complete_ticket(ticket["id"], "2026-10-19T09:00:00").json()
        self.assertEqual(data["duration"], 1)
        self.assertEqual(data["billedAmount"], 500)

    def test_negative_duration_rejected_by_policy(self):
        app.dependency_overrides[get_settings] = lambda: Settings(negative_duration_policy="reject")
        ticket = self.open_ticket("RAB123A", self.rate["id"], "2026-10-19T10:00:00")

        response = self.complete_ticket(ticket["id"], "2026-10-19T09:00:00")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error_type"], "invalid_state")
        self.assertEqual(self.get(f"/tickets/{ticket['id']}").json()["status"], "OPEN")

    def test_rate_change_does_not_rebill_closed_tickets(self):
        ticket_id, _ = self.closed_ticket(
            "RAB123A", self.rate["id"], "2026-10-19T10:00:00", "2026-10-19T11:00:00"
        )
        self.put(f"/rates/{self.rate['id']}", {"price": 900})
        self.assertEqual(self.get(f"/tickets/{ticket_id}").json()["billed_amount"], 500)


class TestDeleteTicket(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.create_vehicle("RAB123A")
        self.rate = self.create_rate("Standard", 500)

    def test_delete_open_ticket(self):
        ticket = self.open_ticket("RAB123A", self.rate["id"])
        self.assertEqual(self.delete(f"/tickets/{ticket['id']}").status_code, 204)
        self.assertEqual(self.get(f"/tickets/{ticket['id']}").status_code, 404)
        self.assertEqual(self.open_ticket("RAB123A", self.rate["id"])["status"], "OPEN")

    def test_delete_removes_payment(self):
        ticket_id, _ = self.closed_ticket(
            "RAB123A", self.rate["id"], "2026-10-19T08:00:00", "2026-10-19T09:00:00"
        )
        payment = self.pay(ticket_id, 500).json()

        self.assertEqual(self.delete(f"/tickets/{ticket_id}").status_code, 204)
        self.assertEqual(self.get(f"/payments/{payment['id']}").status_code, 404)
        self.assertEqual(self.get("/payments/").json(), [])
        self.assertEqual(self.get("/tickets/").json(), [])

    def test_unknown_ticket(self):
        response = self.delete("/tickets/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Ticket not found")


if __name__ == "__main__":
    unittest.main()
