"""Preferences use cases."""

from .preferences import (
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

__all__ = [
    "GetPreferenceOptionsUseCase",
    "GetPreferencesRequest",
    "GetPreferencesUseCase",
    "PreferenceOptionsResponse",
    "PreferencesResponse",
    "ResetPreferencesRequest",
    "ResetPreferencesUseCase",
    "UpdatePreferencesRequest",
    "UpdatePreferencesUseCase",
]
