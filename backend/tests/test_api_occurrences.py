"""Tests for entry, feed and occurrence API endpoints."""

import pytest
from datetime import date


@pytest.fixture
def rent_ref(rent_series):
    def ref(index):
        return {"recurring_config_id": rent_series, "index": index}
    return ref


def feed(client, **params):
    params.setdefault("horizon", "2026-12-31")
    response = client.get("/api/v1/feed", params=params)
    assert response.status_code == 200
    return response.json()


class TestEntriesAPI:
    """Test creating entries."""

    def test_create_standalone(self, client):
        """Should create a standalone entry that shows up in the feed."""
        response = client.post("/api/v1/entries", json={
            "name": "Coffee",
            "type": "expense",
            "amount": "3.5",
            "date": "2024-01-02",
        })
        assert response.status_code == 201
        entry_id = response.json()["id"]

        data = feed(client)
        assert data["total"] == 1
        line = data["entries"][0]
        assert line["id"] == entry_id
        assert line["index"] == 0
        assert line["details"]["amount"] == "3.50000000"
        assert line["details"]["currency_code"] == "USD"

    def test_create_recurring(self, client, sample_tag):
        """Should create a series and return its config id."""
        response = client.post("/api/v1/entries", json={
            "name": "Salary",
            "type": "income",
            "amount": "3000",
            "date": "2024-01-25",
            "tag_id": sample_tag.id,
            "recurrence": {"frequency": "month", "interval": 6},
        })
        assert response.status_code == 201
        config_id = response.json()["id"]

        response = client.get(f"/api/v1/recurring/{config_id}/occurrences")
        assert response.status_code == 200
        lines = response.json()
        assert [line["date"] for line in lines] == [
            "2024-01-25", "2024-02-25", "2024-03-25",
            "2024-04-25", "2024-05-25", "2024-06-25",
        ]
        assert lines[0]["details"]["tag"]["name"] == "Rent"
        assert lines[0]["config"]["interval"] == 6

    def test_invalid_frequency(self, client):
        """Should reject unknown frequencies."""
        response = client.post("/api/v1/entries", json={
            "name": "Salary",
            "type": "income",
            "amount": "3000",
            "date": "2024-01-25",
            "recurrence": {"frequency": "day"},
        })
        assert response.status_code == 422

    def test_requires_user(self, client):
        """Writes without an identity should be rejected."""
        response = client.post("/api/v1/entries", headers={"X-User-Id": ""}, json={
            "name": "Coffee",
            "type": "expense",
            "amount": "3",
            "date": "2024-01-02",
        })
        assert response.status_code == 401


class TestFeedAPI:
    """Test the feed endpoint."""

    def test_empty(self, client):
        """Should return an empty feed."""
        data = feed(client)
        assert data["entries"] == []
        assert data["total"] == 0
        assert data["horizon"] == "2026-12-31"

    def test_series(self, client, rent_series, sample_group):
        """Should project the series and list lookups."""
        data = feed(client)
        assert data["total"] == 12
        assert [line["index"] for line in data["entries"]] == list(range(1, 13))
        assert data["groups"][0]["name"] == "Home"
        assert data["recurring_configs"][0]["id"] == rent_series

    def test_scoped_to_user(self, client, rent_series):
        """Another user should not see the series."""
        response = client.get("/api/v1/feed", headers={"X-User-Id": "user-2"})
        assert response.json()["entries"] == []


class TestOccurrencesAPI:
    """Test occurrence mutations."""

    def test_toggle_fulfilled(self, client, rent_series, rent_ref):
        """Toggling should mark only that occurrence."""
        response = client.post("/api/v1/occurrences/toggle-fulfilled", json={
            "occurrence": rent_ref(5),
        })
        assert response.status_code == 200
        assert response.json()["success"] is True

        lines = feed(client)["entries"]
        assert [line["index"] for line in lines if line["details"]["fullfilled"]] == [5]
        assert lines[4]["exclusion_id"] is not None

    def test_toggle_standalone(self, client, ledger):
        """Standalone entries are addressed by entry_id."""
        created = ledger.create_entry("Coffee", "expense", "3", date(2024, 1, 1))

        response = client.post("/api/v1/occurrences/toggle-fulfilled", json={
            "occurrence": {"entry_id": created.id},
        })
        assert response.status_code == 200
        assert feed(client)["entries"][0]["details"]["fullfilled"] is True

    def test_edit_with_subsequents(self, client, rent_series, rent_ref):
        """Editing with apply_to_subsequents should split the series."""
        response = client.post("/api/v1/occurrences/edit", json={
            "occurrence": rent_ref(5),
            "name": "Rent",
            "amount": "1300",
            "apply_to_subsequents": True,
        })
        assert response.status_code == 200
        new_config_id = response.json()["id"]
        assert new_config_id != rent_series

        lines = feed(client)["entries"]
        assert len(lines) == 12
        amounts = [line["details"]["amount"] for line in lines]
        assert amounts == ["1200.00000000"] * 4 + ["1300.00000000"] * 8
        assert len(feed(client)["recurring_configs"]) == 2

    def test_edit_single(self, client, rent_series, rent_ref):
        """Editing one occurrence should leave the others alone."""
        response = client.post("/api/v1/occurrences/edit", json={
            "occurrence": rent_ref(2),
            "name": "Rent (late)",
            "amount": "1210",
        })
        assert response.status_code == 200

        lines = feed(client)["entries"]
        assert lines[1]["details"]["name"] == "Rent (late)"
        assert lines[2]["details"]["name"] == "Rent"

    def test_delete_with_subsequents(self, client, rent_series, rent_ref):
        """Deleting with subsequents should keep earlier occurrences."""
        response = client.post("/api/v1/occurrences/delete", json={
            "occurrence": rent_ref(5),
            "with_subsequents": True,
        })
        assert response.status_code == 200
        assert feed(client)["total"] == 4

    def test_delete_twice_is_not_found(self, client, rent_series, rent_ref):
        """A deleted occurrence reference should be stale."""
        payload = {"occurrence": rent_ref(3)}
        assert client.post("/api/v1/occurrences/delete", json=payload).status_code == 200
        assert client.post("/api/v1/occurrences/delete", json=payload).status_code == 404

    def test_ref_requires_target(self, client):
        """A reference without entry_id or config id is invalid."""
        response = client.post("/api/v1/occurrences/delete", json={"occurrence": {}})
        assert response.status_code == 422

    def test_unknown_series(self, client):
        """Unknown series should 404."""
        response = client.get("/api/v1/recurring/nope/occurrences")
        assert response.status_code == 404


class TestDataAPI:
    """Test bulk data endpoints."""

    def test_erase(self, client, rent_series, sample_group, sample_tag):
        """Erase should wipe everything and be repeatable."""
        for _ in range(2):
            response = client.post("/api/v1/data/erase")
            assert response.status_code == 200
            assert response.json()["success"] is True

        data = feed(client)
        assert data["entries"] == []
        assert data["groups"] == []
        assert data["tags"] == []
        assert client.get("/api/v1/recurring").json() == []
