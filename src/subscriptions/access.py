"""Feature-gate lookups for a user's subscription tier."""

import logging
from typing import Optional, Union

from src.subscriptions.config import (
    DEFAULT_UPGRADE_MESSAGE,
    PLAN_BADGE_COLORS,
    SUBSCRIPTION_FEATURES,
    UNLIMITED,
    UPGRADE_MESSAGES,
    FeatureAccess,
    SubscriptionTier,
)

logger = logging.getLogger(__name__)

TierLike = Union[SubscriptionTier, str, None]


def resolve_tier(tier: TierLike) -> SubscriptionTier:
    """Normalise a tier name; unknown or missing tiers map to NONE."""
    if isinstance(tier, SubscriptionTier):
        return tier
    try:
        return SubscriptionTier((tier or "").strip().lower())
    except ValueError:
        return SubscriptionTier.NONE


def get_feature_access(tier: TierLike = None) -> FeatureAccess:
    """Feature gates for *tier*."""
    return SUBSCRIPTION_FEATURES[resolve_tier(tier)]


def has_access(tier: TierLike, feature: str) -> bool:
    """Whether *tier* unlocks *feature*.

    Numeric limits count as access when non-zero (UNLIMITED included).

    Raises:
        KeyError: *feature* is not a known feature name.
    """
    access = get_feature_access(tier)
    if feature not in FeatureAccess.feature_names():
        raise KeyError(f"Unknown feature: {feature}")
    allowed = bool(getattr(access, feature))
    logger.debug("Access check tier=%s feature=%s allowed=%s", resolve_tier(tier).value, feature, allowed)
    return allowed


def within_limit(tier: TierLike, limit: str, used: int) -> bool:
    """Whether *used* items stay within the tier's numeric *limit*."""
    if limit not in FeatureAccess.feature_names():
        raise KeyError(f"Unknown limit: {limit}")
    cap = getattr(get_feature_access(tier), limit)
    if isinstance(cap, bool):
        raise KeyError(f"Not a numeric limit: {limit}")
    return cap == UNLIMITED or used < cap


def get_upgrade_message(feature: str) -> str:
    return UPGRADE_MESSAGES.get(feature, DEFAULT_UPGRADE_MESSAGE)


def get_plan_badge_color(tier: Optional[str]) -> str:
    """CSS classes for the plan badge; only Elite gets the gold badge."""
    if resolve_tier(tier) == SubscriptionTier.ELITE:
        return PLAN_BADGE_COLORS[SubscriptionTier.ELITE]
    return PLAN_BADGE_COLORS[SubscriptionTier.NONE]
