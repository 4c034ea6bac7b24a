"""
Event endpoints: create, edit, list and delete events.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from dayplanner.api.deps import get_current_user_id, get_event_service, get_preferences_service
from dayplanner.exceptions import EventNotFoundError, ValidationError
from dayplanner.schemas.event import Event, EventCreate, EventUpdate, SaveResult
from dayplanner.services.events import EventService
from dayplanner.services.preferences import PreferencesService

router = APIRouter()


@router.get("", response_model=List[Event])
async def list_events(
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    """List the user's events."""
    return await service.list_events(user_id)


@router.get("/{event_id}", response_model=Event)
async def get_event(
    event_id: str,
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    """Get one event."""
    try:
        return await service.get_event(user_id, event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=SaveResult, status_code=status.HTTP_201_CREATED)
async def create_event(
    event_data: EventCreate,
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
    preferences: PreferencesService = Depends(get_preferences_service),
):
    """Create an event and schedule its notification."""
    policy = await preferences.get_weather_policy()

    try:
        return await service.create_event(user_id, event_data, policy)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.put("/{event_id}", response_model=SaveResult)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
    preferences: PreferencesService = Depends(get_preferences_service),
):
    """Edit an event; its notification is cancelled and planned again."""
    policy = await preferences.get_weather_policy()

    try:
        return await service.update_event(user_id, event_id, event_data, policy)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except EventNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: str,
    user_id: str = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service),
):
    """Delete an event after cancelling its notification."""
    try:
        await service.delete_event(user_id, event_id)
    except EventNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
