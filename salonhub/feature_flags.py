"""Feature flags module for centralized feature toggle management."""

from typing import Literal

from pydantic import BaseModel, Field

from salonhub.config import get_settings


class FeatureFlags(BaseModel):
    """Pydantic model defining all feature flags in the application."""

    user_registrations: bool = Field(..., description="Whether customer registration is enabled")
    online_booking: bool = Field(..., description="Whether web and mobile bookings are accepted")


# Type alias for valid feature flag keys
FeatureFlagKey = Literal["user_registrations", "online_booking"]


def get_feature_flags() -> FeatureFlags:
    """
    Get current feature flags based on application configuration.

    Returns:
        FeatureFlags instance with current flag values
    """
    settings = get_settings()

    return FeatureFlags(
        user_registrations=settings.ALLOW_USER_REGISTRATIONS,
        online_booking=settings.ALLOW_ONLINE_BOOKING,
    )


def get_feature_flag(key: FeatureFlagKey) -> bool:
    """Get the value of a specific feature flag."""
    flags = get_feature_flags()
    return getattr(flags, key)


def is_user_registrations_enabled() -> bool:
    """Check if customer registrations are enabled."""
    return get_feature_flag("user_registrations")


def is_online_booking_enabled() -> bool:
    """Check if online bookings are accepted platform-wide."""
    return get_feature_flag("online_booking")
