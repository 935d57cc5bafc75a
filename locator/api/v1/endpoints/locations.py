"""
Location Search API Endpoints

Proximity, tag, keyword and URL lookups over the location catalog.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from locator.api.v1.endpoints.errors import store_error_response
from locator.schemas.geo import Coordinates
from locator.schemas.location import LocationLookup, LocationRecord, SearchResult
from locator.schemas.search import (
    BoundsRequest,
    CenterRequest,
    CountryRequest,
    NearbyRequest,
    NearestEventsRequest,
    SearchQuery,
)
from locator.services.location_store import (
    LocationStore,
    LocationStoreError,
    get_location_store,
)
from locator.services.nearest_service import nearest_service
from locator.services.radius_search_service import radius_search_service
from locator.services.search_service import search_service
from locator.services.url_resolver_service import url_resolver_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/searchLocationByURL/{location_url}", response_model=LocationLookup)
async def search_location_by_url(
    location_url: str, store: LocationStore = Depends(get_location_store)
):
    """
    Resolve a center or satsang page by its URL slug.

    Returns the location with its photo gallery, or ``empty`` with the
    normalized slug when nothing matches.
    """
    try:
        return url_resolver_service.resolve_location(store, location_url)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/searchEventByURL/{event_url}", response_model=LocationLookup)
async def search_event_by_url(event_url: str, store: LocationStore = Depends(get_location_store)):
    try:
        return url_resolver_service.resolve_event(store, event_url)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/searchMasterEventByURL/{event_url}", response_model=LocationLookup)
async def search_master_event_by_url(
    event_url: str, store: LocationStore = Depends(get_location_store)
):
    try:
        return url_resolver_service.resolve_master_event(store, event_url)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchAllLocationsByTagAndRadius", response_model=List[SearchResult])
async def search_all_locations_by_tag_and_radius(
    query: SearchQuery, store: LocationStore = Depends(get_location_store)
):
    try:
        return search_service.search_by_tag_and_radius(store, query)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchAllLocationsByKeywordsAndRadius", response_model=List[SearchResult])
async def search_all_locations_by_keywords_and_radius(
    query: SearchQuery, store: LocationStore = Depends(get_location_store)
):
    """
    Centers and satsangs near the origin, plus events matching the keywords.
    """
    try:
        return search_service.search_by_keywords_and_radius(store, query)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchAllLocations", response_model=List[SearchResult])
async def search_all_locations(query: SearchQuery, store: LocationStore = Depends(get_location_store)):
    try:
        return search_service.search_all_locations(store, query)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchLocations", response_model=List[SearchResult])
async def search_locations(request: NearbyRequest, store: LocationStore = Depends(get_location_store)):
    try:
        return search_service.search_locations(store, request.origin, request.radius)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchLocationsByBounds", response_model=List[LocationRecord])
async def search_locations_by_bounds(
    bounds: BoundsRequest, store: LocationStore = Depends(get_location_store)
):
    try:
        return search_service.search_by_bounds(store, bounds)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchNearestSix", response_model=List[SearchResult])
async def search_nearest_six(origin: Coordinates, store: LocationStore = Depends(get_location_store)):
    """
    The six nearest distinct map points, preferring the center or satsang
    at each point.
    """
    try:
        return nearest_service.nearest_points(store, origin)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchLocationsByCenter", response_model=List[LocationRecord])
async def search_locations_by_center(
    request: CenterRequest, store: LocationStore = Depends(get_location_store)
):
    try:
        return search_service.locations_by_center(store, request.center_id)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchLocationsByCountry", response_model=List[LocationRecord])
async def search_locations_by_country(
    request: CountryRequest, store: LocationStore = Depends(get_location_store)
):
    try:
        return search_service.locations_by_country(store, request.country)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchNearestFourEvents", response_model=List[SearchResult])
async def search_nearest_four_events(
    origin: Coordinates, store: LocationStore = Depends(get_location_store)
):
    try:
        return search_service.search_nearest_four_events(store, origin)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/searchNearestFiveEvents", response_model=List[SearchResult])
async def search_nearest_five_events(
    request: NearestEventsRequest, store: LocationStore = Depends(get_location_store)
):
    try:
        return search_service.search_nearest_five_events(
            store, request.origin, request.radius, request.event_id
        )
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get("/searchEventsByLocation/{location_url}", response_model=List[SearchResult])
async def search_events_by_location(
    location_url: str, store: LocationStore = Depends(get_location_store)
):
    """
    Events around a location, widening the radius until enough are found.
    """
    try:
        return radius_search_service.events_by_location(store, location_url)
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.get(
    "/searchEventsWithinRadiusByLocation/{location_url}/{radius_limit}",
    response_model=List[SearchResult],
)
async def search_events_within_radius_by_location(
    location_url: str, radius_limit: str, store: LocationStore = Depends(get_location_store)
):
    try:
        return radius_search_service.events_within_radius_by_location(
            store, location_url, radius_limit
        )
    except LocationStoreError as e:
        raise store_error_response(e) from e


@router.post("/fetchLocalesByLocation", response_model=List[str])
async def fetch_locales_by_location(
    origin: Coordinates, store: LocationStore = Depends(get_location_store)
):
    try:
        return search_service.locales_at(store, origin)
    except LocationStoreError as e:
        raise store_error_response(e) from e
