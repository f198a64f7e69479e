"""Preferences routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie
from pydantic import BaseModel

from spark.application.usecase.preferences import (
    GetPreferenceOptionsUseCase,
    GetPreferencesRequest,
    GetPreferencesUseCase,
    PreferenceOptionsResponse,
    PreferencesResponse,
    ResetPreferencesRequest,
    ResetPreferencesUseCase,
    UpdatePreferencesRequest,
    UpdatePreferencesUseCase,
)
from spark.domain.service import JWTService
from spark.interface.api.auth import require_user_id

router = APIRouter(prefix="/preferences", tags=["preferences"], route_class=DishkaRoute)


class UpdatePreferencesAPIRequest(BaseModel):
    """API request for a partial preferences update."""

    preferred_categories: list[str] | None = None
    preferred_tech_stack: list[str] | None = None
    preferred_difficulty: list[str] | None = None
    preferred_time_commitment: list[str] | None = None
    enable_recommendations: bool | None = None
    enable_trending: bool | None = None
    recommendation_weight: dict[str, float] | None = None


@router.get("/options", response_model=PreferenceOptionsResponse)
async def get_preference_options(
    get_preference_options_use_case: FromDishka[GetPreferenceOptionsUseCase],
) -> PreferenceOptionsResponse:
    """Values offered by the preferences form."""
    return await get_preference_options_use_case.execute()


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    get_preferences_use_case: FromDishka[GetPreferencesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PreferencesResponse:
    """Get the caller's preferences, or defaults if none were saved."""
    user_id = require_user_id(jwt_service, auth_token, "read preferences")
    return await get_preferences_use_case.execute(
        GetPreferencesRequest(user_id=user_id)
    )


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    body: UpdatePreferencesAPIRequest,
    update_preferences_use_case: FromDishka[UpdatePreferencesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PreferencesResponse:
    """Partially update the caller's preferences.

    Raises:
        InvalidArgumentError: If a value is not valid for its field
    """
    user_id = require_user_id(jwt_service, auth_token, "update preferences")
    request = UpdatePreferencesRequest(user_id=user_id, **body.model_dump())
    return await update_preferences_use_case.execute(request)


@router.delete("", response_model=PreferencesResponse)
async def reset_preferences(
    reset_preferences_use_case: FromDishka[ResetPreferencesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PreferencesResponse:
    """Reset the caller's preferences to defaults."""
    user_id = require_user_id(jwt_service, auth_token, "reset preferences")
    return await reset_preferences_use_case.execute(
        ResetPreferencesRequest(user_id=user_id)
    )
