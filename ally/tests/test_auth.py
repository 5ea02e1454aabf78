import unittest
from datetime import datetime

from ally.tests.fakes import (
    ANN_PHONE,
    ANN_TOKEN,
    BOB_TOKEN,
    BrokenStore,
    NO_PHONE_TOKEN,
    make_client,
    new_store,
)


def _users(db):
    return {doc.id: doc.to_dict() for doc in db.collection("Users").stream()}


class RegisterTests(unittest.TestCase):
    def setUp(self):
        self.db = new_store()
        self.client = make_client(db=self.db)

    def test_register_pwd_profile(self):
        response = self.client.post(
            "/api/auth/register",
            json={"phoneNumber": ANN_PHONE, "name": "Ann", "role": "PWD", "disabilityType": "visual"},
        )
        self.assertEqual(response.status_code, 201)
        self.assertIn("message", response.json())

        profile = _users(self.db)[ANN_PHONE]
        self.assertEqual(profile["name"], "Ann")
        self.assertEqual(profile["role"], "PWD")
        self.assertFalse(profile["isVerified"])
        self.assertIsNone(profile["isAvailable"])
        self.assertEqual(profile["disabilityType"], "visual")
        self.assertIsNone(profile["rollNumber"])
        self.assertIsInstance(profile["createdAt"], datetime)

    def test_register_volunteer_drops_disability_type(self):
        response = self.client.post(
            "/api/auth/register",
            json={
                "phoneNumber": "+1777",
                "name": "Vik",
                "role": "Volunteer",
                "disabilityType": "visual",
                "rollNumber": "CS-042",
            },
        )
        self.assertEqual(response.status_code, 201)

        profile = _users(self.db)["+1777"]
        self.assertIs(profile["isAvailable"], False)
        self.assertIsNone(profile["disabilityType"])
        self.assertEqual(profile["rollNumber"], "CS-042")

    def test_duplicate_registration_conflicts(self):
        body = {"phoneNumber": ANN_PHONE, "name": "Ann", "role": "PWD", "disabilityType": "visual"}
        self.assertEqual(self.client.post("/api/auth/register", json=body).status_code, 201)

        response = self.client.post("/api/auth/register", json=body)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json(), {"message": "User already registered."})

    def test_existing_profile_is_never_overwritten(self):
        self.db.collection("Users").document(ANN_PHONE).set({"name": "Ann", "role": "NGO"})
        response = self.client.post(
            "/api/auth/register", json={"phoneNumber": ANN_PHONE, "name": "Mallory", "role": "PWD"}
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(_users(self.db)[ANN_PHONE], {"name": "Ann", "role": "NGO"})

    def test_missing_required_fields_create_nothing(self):
        complete = {"phoneNumber": ANN_PHONE, "name": "Ann", "role": "PWD"}
        for field in complete:
            body = {k: v for k, v in complete.items() if k != field}
            response = self.client.post("/api/auth/register", json=body)
            self.assertEqual(response.status_code, 400, field)
            self.assertEqual(response.json(), {"message": "Missing required fields."})

        blank = dict(complete, name="   ")
        self.assertEqual(self.client.post("/api/auth/register", json=blank).status_code, 400)
        self.assertEqual(_users(self.db), {})

    def test_unknown_role_is_rejected(self):
        response = self.client.post(
            "/api/auth/register", json={"phoneNumber": ANN_PHONE, "name": "Ann", "role": "Admin"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(_users(self.db), {})

    def test_store_failure_is_internal_error(self):
        client = make_client(db=BrokenStore())
        response = client.post(
            "/api/auth/register", json={"phoneNumber": ANN_PHONE, "name": "Ann", "role": "PWD"}
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Server error during registration."})


class VerifiedLoginTests(unittest.TestCase):
    def setUp(self):
        self.db = new_store()
        self.client = make_client(db=self.db)
        self.client.post(
            "/api/auth/register",
            json={"phoneNumber": ANN_PHONE, "name": "Ann", "role": "PWD", "disabilityType": "visual"},
        )

    def test_login_returns_role_and_name_from_claim(self):
        response = self.client.post("/api/auth/login", json={"idToken": ANN_TOKEN})
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["role"], "PWD")
        self.assertEqual(payload["name"], "Ann")
        self.assertEqual(payload["token"], ANN_TOKEN)

    def test_client_phone_number_is_not_trusted(self):
        response = self.client.post("/api/auth/login", json={"phoneNumber": ANN_PHONE})
        self.assertEqual(response.status_code, 400)

    def test_invalid_token_is_unauthorized(self):
        response = self.client.post("/api/auth/login", json={"idToken": "forged"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Authentication failed. Invalid or expired token."})

    def test_token_without_phone_number_is_unauthorized(self):
        response = self.client.post("/api/auth/login", json={"idToken": NO_PHONE_TOKEN})
        self.assertEqual(response.status_code, 401)

    def test_unregistered_user_is_not_found(self):
        before = _users(self.db)
        response = self.client.post("/api/auth/login", json={"idToken": BOB_TOKEN})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(_users(self.db), before)


class PhoneLookupLoginTests(unittest.TestCase):
    def setUp(self):
        self.db = new_store()
        self.client = make_client(db=self.db, LOGIN_MODE="phone_lookup")
        self.client.post("/api/auth/register", json={"phoneNumber": ANN_PHONE, "name": "Ann", "role": "NGO"})

    def test_lookup_echoes_client_token(self):
        response = self.client.post("/api/auth/login", json={"phoneNumber": ANN_PHONE, "idToken": "mock"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["role"], "NGO")
        self.assertEqual(response.json()["token"], "mock")

    def test_lookup_requires_phone_number(self):
        response = self.client.post("/api/auth/login", json={"idToken": "mock"})
        self.assertEqual(response.status_code, 400)

    def test_lookup_unknown_phone_is_not_found(self):
        response = self.client.post("/api/auth/login", json={"phoneNumber": "+1999"})
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
