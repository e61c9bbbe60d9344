"""Signed-in user profile and preferences."""

from menuscan.application.profile.preferences import ProfileService

__all__ = ["ProfileService"]
