import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from core.exceptions import Conflict


class OrganizationRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    # --- LIST ---

    @patch("organization.router.service.list_organizations")
    def test_list_organizations_happy_path(self, mock_list):
        mock_list.return_value = [
            Obj(id=1, name="Org A", timezone="Atlantic/Reykjavik"),
            Obj(id=2, name="Org B", timezone="UTC"),
        ]
        resp = self.client.get("/api/organizations")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(
            resp.json(),
            [
                {"id": 1, "name": "Org A", "timezone": "Atlantic/Reykjavik"},
                {"id": 2, "name": "Org B", "timezone": "UTC"},
            ],
        )

    # --- GET ---

    @patch("organization.router.service.get_organization")
    def test_get_organization_200(self, mock_get):
        mock_get.return_value = Obj(id=1, name="My Org", timezone="UTC")
        resp = self.client.get("/api/organizations/1")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["name"], "My Org")

    @patch("organization.router.service.get_organization")
    def test_get_organization_404(self, mock_get):
        mock_get.return_value = None
        resp = self.client.get("/api/organizations/999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"detail": "organization not found", "kind": "not_found"})

    # --- CREATE ---

    @patch("organization.router.service.create_organization")
    def test_create_organization_201_defaults_timezone(self, mock_create):
        mock_create.return_value = Obj(id=3, name="New Org", timezone="UTC")
        resp = self.client.post("/api/organizations", json={"name": "New Org"})
        self.assertEqual(resp.status_code, 201, resp.text)
        (_, dto), _ = mock_create.call_args
        self.assertEqual(dto.timezone, "UTC")

    @patch("organization.router.service.create_organization")
    def test_create_organization_duplicate_409(self, mock_create):
        mock_create.side_effect = Conflict("organization name already exists")
        resp = self.client.post("/api/organizations", json={"name": "Dupe"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["kind"], "conflict")

    def test_health(self):
        resp = self.client.get("/health")
        self.assertEqual(resp.json(), {"health": "true"})


if __name__ == "__main__":
    unittest.main()
