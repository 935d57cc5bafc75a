"""
Unit tests for event listing endpoints.
"""

from datetime import datetime, timedelta
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from locator.schemas.location import LocationKind
from locator.services.location_store import LocationQueryError
from tests.helpers import create_location

BASE_URL = "/api/v1/locationsearch"
BASE_START = datetime(2025, 6, 1, 18, 0)


def ids(data) -> list:
    return [item["location_id"] for item in data]


def create_event(db: Session, location_id: int, kind: LocationKind, day: int, **fields):
    return create_location(
        db, location_id, kind, event_start_date=BASE_START + timedelta(days=day), **fields
    )


def test_list_online_events(client: TestClient, db: Session):
    create_event(db, 1, LocationKind.ONLINE_EVENT, 2)
    create_event(db, 2, LocationKind.ONLINE_EVENT, 1)
    create_event(db, 3, LocationKind.EVENT, 0)

    response = client.get(f"{BASE_URL}/ListOnlineEvents")

    assert response.status_code == 200
    data = response.json()
    assert ids(data) == [2, 1]
    assert data[0]["location_type"] == "OnlineEvent"


def test_list_events_by_tag(client: TestClient, db: Session):
    create_event(db, 1, LocationKind.ONLINE_EVENT, 1, location_tag="#kirtan#")
    create_event(db, 2, LocationKind.EVENT, 2, location_tag="#kirtan#")
    create_event(db, 3, LocationKind.EVENT, 3, center_id=9)

    online = client.get(f"{BASE_URL}/ListOnlineEventsByTag/Kirtan").json()
    everything = client.get(f"{BASE_URL}/ListAllEventsByTag/kirtan").json()
    in_person = client.get(f"{BASE_URL}/ListEventsByTag/kirtan/9").json()

    assert ids(online) == [1]
    assert ids(everything) == [1, 2]
    assert ids(in_person) == [2, 3]


def test_online_event_by_conference_id(client: TestClient, db: Session):
    create_event(db, 1, LocationKind.ONLINE_EVENT, 1, conference_id="zoom-1")

    response = client.get(f"{BASE_URL}/OnlineEventByConferenceId/zoom-1")

    assert ids(response.json()) == [1]


def test_get_upcoming_online_events(client: TestClient, db: Session):
    for location_id in range(1, 8):
        create_event(db, location_id, LocationKind.ONLINE_EVENT, location_id)

    response = client.get(f"{BASE_URL}/GetUpcomingOnlineEvents/1")

    assert ids(response.json()) == [2, 3, 4, 5, 6]


def test_master_event_listings(client: TestClient, db: Session):
    for location_id in range(1, 8):
        create_event(db, location_id, LocationKind.MASTER_EVENT, location_id)

    all_events = client.get(f"{BASE_URL}/listMasterEvents").json()
    latest = client.get(f"{BASE_URL}/listLatestFiveMasterEvents").json()

    assert ids(all_events) == [1, 2, 3, 4, 5, 6, 7]
    assert ids(latest) == [1, 2, 3, 4, 5]


def test_listing_failure_returns_503(client: TestClient):
    """Test a failing catalog query returns 503"""
    with patch(
        "locator.services.event_service.event_service.list_online_events",
        side_effect=LocationQueryError("connection lost"),
    ):
        response = client.get(f"{BASE_URL}/ListOnlineEvents")

    assert response.status_code == 503
    assert "connection lost" in response.json()["detail"]
