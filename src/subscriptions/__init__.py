"""Subscription feature gating.

Maps a subscription tier (none / pro / elite) to the features and
limits it unlocks, including access to live signal streaming.
"""

from src.subscriptions.config import (
    SubscriptionTier,
    FeatureAccess,
    SUBSCRIPTION_FEATURES,
    UPGRADE_MESSAGES,
    UNLIMITED,
)
from src.subscriptions.access import (
    resolve_tier,
    get_feature_access,
    has_access,
    within_limit,
    get_upgrade_message,
    get_plan_badge_color,
)

__all__ = [
    "SubscriptionTier",
    "FeatureAccess",
    "SUBSCRIPTION_FEATURES",
    "UPGRADE_MESSAGES",
    "UNLIMITED",
    "resolve_tier",
    "get_feature_access",
    "has_access",
    "within_limit",
    "get_upgrade_message",
    "get_plan_badge_color",
]
