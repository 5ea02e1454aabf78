import os
import unittest

from ally.config.seed import load_seed
from ally.tests.fakes import ANN_PHONE, ANN_TOKEN, bearer, make_client, new_store

SEED_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "db_seed.json")


def _seed():
    return {"Places": load_seed(SEED_PATH)["Places"]}


def _reviews(db):
    return [doc.to_dict() for doc in db.collection("Reviews").stream()]


class AccessiblePlacesTests(unittest.TestCase):
    def setUp(self):
        self.db = new_store(_seed())
        self.client = make_client(db=self.db, LOCATION_AUTH="bypass")

    def test_lists_every_place_without_filter(self):
        response = self.client.get("/api/location/accessible")
        self.assertEqual(response.status_code, 200)
        ids = {place["id"] for place in response.json()}
        self.assertEqual(ids, {"central_library", "city_museum", "lakeside_park"})

    def test_filters_by_feature_tag(self):
        response = self.client.get("/api/location/accessible", params={"disabilityType": "hearing"})
        self.assertEqual(response.status_code, 200)
        places = response.json()
        self.assertEqual([p["id"] for p in places], ["city_museum"])
        self.assertEqual(places[0]["accessibilityFeatures"], ["hearing"])
        self.assertEqual(places[0]["location"], {"latitude": 12.9763, "longitude": 77.6033})

    def test_unknown_tag_returns_empty_list(self):
        response = self.client.get("/api/location/accessible", params={"disabilityType": "cognitive"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_coordinates_in_query_are_accepted(self):
        response = self.client.get(
            "/api/location/accessible", params={"latitude": 12.9, "longitude": 77.6, "disabilityType": "visual"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 2)


class SchemalessPlaceTests(unittest.TestCase):
    def setUp(self):
        self.db = new_store()
        self.client = make_client(db=self.db, LOCATION_AUTH="bypass")

    def _places(self, **params):
        response = self.client.get("/api/location/accessible", params=params)
        self.assertEqual(response.status_code, 200)
        return {place["id"]: place for place in response.json()}

    def _add(self, place_id, data):
        self.db.collection("Places").document(place_id).set(data)

    def test_single_string_tag_is_one_feature(self):
        self._add("p", {"name": "Ramped Cafe", "accessibilityFeatures": "wheelchair"})
        self.assertEqual(self._places()["p"]["accessibilityFeatures"], ["wheelchair"])

    def test_non_list_tags_are_no_features(self):
        self._add("p", {"accessibilityFeatures": 7})
        self._add("q", {"accessibilityFeatures": {"wheelchair": True}})
        places = self._places()
        self.assertEqual(places["p"]["accessibilityFeatures"], [])
        self.assertEqual(places["q"]["accessibilityFeatures"], [])

    def test_unlisted_stored_fields_pass_through(self):
        self._add("p", {"name": "Library", "openingHours": "9-17", "phone": "+91 80 1234"})
        place = self._places()["p"]
        self.assertEqual(place["openingHours"], "9-17")
        self.assertEqual(place["phone"], "+91 80 1234")

    def test_unrenderable_place_is_skipped(self):
        self._add("good", {"name": "Library", "location": {"latitude": 12.9, "longitude": 77.6}})
        self._add("bad", {"name": "Nowhere", "location": {"latitude": 500, "longitude": 77.6}})
        places = self._places()
        self.assertEqual(list(places), ["good"])
        self.assertEqual(places["good"]["location"], {"latitude": 12.9, "longitude": 77.6})

    def test_unreadable_location_is_served_as_null(self):
        self._add("p", {"name": "Museum", "location": {"latitude": "north", "longitude": 77.6}})
        self.assertIsNone(self._places()["p"]["location"])


class ReviewTests(unittest.TestCase):
    def setUp(self):
        self.db = new_store(_seed())
        self.client = make_client(db=self.db, LOCATION_AUTH="bypass")

    def test_review_is_stored_under_placeholder_identity(self):
        response = self.client.post("/api/location/review/city_museum", json={"rating": 4})
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json(), {"message": "Accessibility review submitted successfully."})

        reviews = _reviews(self.db)
        self.assertEqual(len(reviews), 1)
        self.assertEqual(reviews[0]["placeId"], "city_museum")
        self.assertEqual(reviews[0]["userId"], "MOCK_USER")
        self.assertEqual(reviews[0]["rating"], 4)
        self.assertIsNone(reviews[0]["comments"])
        self.assertIsNotNone(reviews[0]["createdAt"])

    def test_missing_rating_is_rejected(self):
        response = self.client.post("/api/location/review/city_museum", json={"comments": "Great ramps"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Missing required fields (rating or placeId)."})
        self.assertEqual(_reviews(self.db), [])

    def test_out_of_range_rating_is_rejected(self):
        for rating in (0, 6):
            response = self.client.post("/api/location/review/city_museum", json={"rating": rating})
            self.assertEqual(response.status_code, 400)
        self.assertEqual(_reviews(self.db), [])

    def test_place_is_not_updated_by_reviews(self):
        before = self.db.collection("Places").document("city_museum").get().to_dict()
        self.client.post("/api/location/review/city_museum", json={"rating": 5, "comments": "Loved it"})
        after = self.db.collection("Places").document("city_museum").get().to_dict()
        self.assertEqual(before, after)


class VerifiedLocationGateTests(unittest.TestCase):
    def setUp(self):
        self.db = new_store(_seed())
        self.client = make_client(db=self.db)

    def test_token_required(self):
        self.assertEqual(self.client.get("/api/location/accessible").status_code, 401)

    def test_review_carries_verified_user(self):
        response = self.client.post(
            "/api/location/review/lakeside_park",
            json={"rating": 3, "comments": "Bumpy path"},
            headers=bearer(ANN_TOKEN),
        )
        self.assertEqual(response.status_code, 201)
        review = _reviews(self.db)[0]
        self.assertEqual(review["userId"], ANN_PHONE)
        self.assertEqual(review["comments"], "Bumpy path")


if __name__ == "__main__":
    unittest.main()
