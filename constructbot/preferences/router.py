"""FastAPI router for display preferences."""

from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from constructbot.preferences.store import (
    PreferenceStore,
    PreferenceValue,
    get_preference_store,
)

router = APIRouter(prefix="/preferences", tags=["Preferences"])

PreferenceKey = Annotated[str, Path(pattern=r"^[a-z0-9_\-]{1,64}$")]


class Preference(BaseModel):
    """A single preference."""

    key: str
    value: PreferenceValue


class PreferenceUpdate(BaseModel):
    """Request body for setting a preference."""

    value: PreferenceValue


class PreferencesResponse(BaseModel):
    """All preferences, defaults included."""

    preferences: dict[str, PreferenceValue]


@router.get("", response_model=PreferencesResponse)
async def list_preferences(
    store: Annotated[PreferenceStore, Depends(get_preference_store)],
) -> PreferencesResponse:
    """Return every preference with defaults applied."""
    return PreferencesResponse(preferences=store.all())


@router.get("/{key}", response_model=Preference)
async def get_preference(
    key: PreferenceKey,
    store: Annotated[PreferenceStore, Depends(get_preference_store)],
) -> Preference:
    """
    Return one preference.

    Raises:
        HTTPException: 404 if the key has neither a value nor a default
    """
    value = store.get(key)
    if value is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail=f"Preference {key} not found"
        )
    return Preference(key=key, value=value)


@router.put("/{key}", response_model=Preference)
async def set_preference(
    key: PreferenceKey,
    update: PreferenceUpdate,
    store: Annotated[PreferenceStore, Depends(get_preference_store)],
) -> Preference:
    """Store one preference."""
    store.set(key, update.value)
    return Preference(key=key, value=update.value)
