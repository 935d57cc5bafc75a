from typing import List

from fastapi import APIRouter, Depends

from locator.api.v1.endpoints.errors import store_error_response
from locator.schemas.location import LocationRecord
from locator.services.event_service import event_service
from locator.services.location_store import (
    LocationStore,
    LocationStoreError,
    get_location_store,
)

router = APIRouter()


@router.get("/ListOnlineEvents", response_model=List[LocationRecord])
async def list_online_events(store: LocationStore = Depends(get_location_store)):
    try:
        return event_service.list_online_events(store)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/ListOnlineEventsByTag/{tag_name}", response_model=List[LocationRecord])
async def list_online_events_by_tag(
    tag_name: str, store: LocationStore = Depends(get_location_store)
):
    try:
        return event_service.online_events_by_tag(store, tag_name)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/ListAllEventsByTag/{tag_name}", response_model=List[LocationRecord])
async def list_all_events_by_tag(tag_name: str, store: LocationStore = Depends(get_location_store)):
    try:
        return event_service.all_events_by_tag(store, tag_name)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/OnlineEventByConferenceId/{conference_id}", response_model=List[LocationRecord])
async def online_event_by_conference_id(
    conference_id: str, store: LocationStore = Depends(get_location_store)
):
    try:
        return event_service.online_events_by_conference(store, conference_id)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/GetUpcomingOnlineEvents/{event_id}", response_model=List[LocationRecord])
async def get_upcoming_online_events(
    event_id: int, store: LocationStore = Depends(get_location_store)
):
    """
    The next five online events, excluding the one currently shown.
    """
    try:
        return event_service.upcoming_online_events(store, event_id)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/ListEventsByTag/{tag_name}/{center_id}", response_model=List[LocationRecord])
async def list_events_by_tag(
    tag_name: str, center_id: int, store: LocationStore = Depends(get_location_store)
):
    try:
        return event_service.events_by_tag(store, tag_name, center_id)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/listMasterEvents", response_model=List[LocationRecord])
async def list_master_events(store: LocationStore = Depends(get_location_store)):
    try:
        return event_service.list_master_events(store)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/listLatestFiveMasterEvents", response_model=List[LocationRecord])
async def list_latest_five_master_events(store: LocationStore = Depends(get_location_store)):
    try:
        return event_service.latest_master_events(store)
    except LocationStoreError as e:
        raise store_error_response(e) from e
