"""Tests for subscription feature gating."""

import dataclasses

import pytest

from src.subscriptions import (
    SUBSCRIPTION_FEATURES,
    UNLIMITED,
    FeatureAccess,
    SubscriptionTier,
    get_feature_access,
    get_plan_badge_color,
    get_upgrade_message,
    has_access,
    resolve_tier,
    within_limit,
)


class TestResolveTier:
    def test_known_tiers(self):
        assert resolve_tier("elite") == SubscriptionTier.ELITE
        assert resolve_tier(" Pro ") == SubscriptionTier.PRO
        assert resolve_tier(SubscriptionTier.NONE) == SubscriptionTier.NONE

    @pytest.mark.parametrize("tier", [None, "", "platinum", "free"])
    def test_unknown_tiers_map_to_none(self, tier):
        assert resolve_tier(tier) == SubscriptionTier.NONE


class TestFeatureAccess:
    """Tests for the per-tier feature tables."""

    def test_every_tier_has_features(self):
        assert set(SUBSCRIPTION_FEATURES) == set(SubscriptionTier)

    def test_none_tier_has_nothing(self):
        access = get_feature_access("none")
        for name in FeatureAccess.feature_names():
            assert not getattr(access, name), name

    def test_pro_tier(self):
        access = get_feature_access("pro")
        assert access.live_streaming is True
        assert access.premium_signals is True
        assert access.admin_access is False
        assert access.white_label is False
        assert access.max_tickers == UNLIMITED

    def test_elite_adds_white_label(self):
        pro = get_feature_access(SubscriptionTier.PRO)
        elite = get_feature_access(SubscriptionTier.ELITE)
        assert elite.white_label is True
        assert elite.admin_access is False
        assert dataclasses.replace(elite, white_label=False) == pro

    def test_default_is_no_access(self):
        assert get_feature_access() == get_feature_access("none")

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            get_feature_access("elite").live_streaming = False


class TestHasAccess:
    def test_live_streaming_gate(self):
        assert has_access("elite", "live_streaming") is True
        assert has_access("pro", "live_streaming") is True
        assert has_access("none", "live_streaming") is False
        assert has_access("unknown-tier", "live_streaming") is False

    def test_numeric_limits(self):
        assert has_access("elite", "max_tickers") is True
        assert has_access("none", "max_tickers") is False

    def test_unknown_feature(self):
        with pytest.raises(KeyError):
            has_access("elite", "teleportation")


class TestWithinLimit:
    def test_unlimited(self):
        assert within_limit("elite", "max_tickers", 10_000) is True

    def test_zero_cap(self):
        assert within_limit("none", "max_signals_per_month", 0) is False

    def test_boolean_feature_rejected(self):
        with pytest.raises(KeyError):
            within_limit("elite", "live_streaming", 1)

    def test_unknown_limit(self):
        with pytest.raises(KeyError):
            within_limit("elite", "max_bananas", 1)


class TestMessages:
    def test_specific_upgrade_message(self):
        assert get_upgrade_message("sms_alerts") == "Upgrade to Elite plan to enable SMS alerts"

    def test_default_upgrade_message(self):
        assert get_upgrade_message("live_streaming") == "Upgrade to Elite plan to access this feature"

    def test_badge_colors(self):
        assert "yellow" in get_plan_badge_color("elite")
        assert get_plan_badge_color("pro") == "bg-gray-500 text-white"
        assert get_plan_badge_color(None) == "bg-gray-500 text-white"
