"""Subscription tiers and their feature gates."""

from dataclasses import dataclass, fields, replace
from enum import Enum

UNLIMITED = -1


class SubscriptionTier(str, Enum):
    """Subscription tiers with feature gates."""
    NONE = "none"
    PRO = "pro"
    ELITE = "elite"


@dataclass(frozen=True)
class FeatureAccess:
    """What a tier unlocks. Limits use UNLIMITED (-1) for no cap."""

    # Core
    basic_signals: bool = False
    premium_signals: bool = False
    real_time_alerts: bool = False
    trading_dashboard: bool = False
    # Charts
    basic_charts: bool = False
    advanced_charts: bool = False
    heatmap_analysis: bool = False
    cycle_forecasting: bool = False
    trading_playground: bool = False
    # Alerts
    email_alerts: bool = False
    sms_alerts: bool = False
    telegram_alerts: bool = False
    push_notifications: bool = False
    advanced_alerts: bool = False
    multi_channel_alerts: bool = False
    # Limits
    max_tickers: int = 0
    max_signals_per_month: int = 0
    # Analytics
    advanced_analytics: bool = False
    historical_data: bool = False
    live_streaming: bool = False
    # Admin
    admin_access: bool = False
    # Premium
    api_access: bool = False
    priority_support: bool = False
    custom_indicators: bool = False
    white_label: bool = False

    @classmethod
    def feature_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


_NO_ACCESS = FeatureAccess()

# Pro gets every boolean feature except admin and white label
_PRO = replace(
    _NO_ACCESS,
    **{name: True for name in FeatureAccess.feature_names()
       if name not in ("max_tickers", "max_signals_per_month", "admin_access", "white_label")},
    max_tickers=UNLIMITED,
    max_signals_per_month=UNLIMITED,
)

SUBSCRIPTION_FEATURES: dict[SubscriptionTier, FeatureAccess] = {
    SubscriptionTier.NONE: _NO_ACCESS,
    SubscriptionTier.PRO: _PRO,
    SubscriptionTier.ELITE: replace(_PRO, white_label=True),
}

DEFAULT_UPGRADE_MESSAGE = "Upgrade to Elite plan to access this feature"

UPGRADE_MESSAGES: dict[str, str] = {
    "premium_signals": "Upgrade to Elite plan to access premium trading signals",
    "advanced_charts": "Upgrade to Elite plan to unlock advanced chart features",
    "heatmap_analysis": "Upgrade to Elite plan to view 200-week heatmap analysis",
    "cycle_forecasting": "Upgrade to Elite plan to access cycle forecasting",
    "sms_alerts": "Upgrade to Elite plan to enable SMS alerts",
    "telegram_alerts": "Upgrade to Elite plan to enable Telegram notifications",
    "advanced_alerts": "Upgrade to Elite plan to create advanced alert conditions",
    "advanced_analytics": "Upgrade to Elite plan to unlock advanced analytics",
    "api_access": "Upgrade to Elite plan to access API features",
    "custom_indicators": "Upgrade to Elite plan to create custom indicators",
    "white_label": "Upgrade to Elite plan for white-label solutions",
    "real_time_alerts": "Upgrade to Elite plan to access real-time alerts",
    "trading_dashboard": "Upgrade to Elite plan to access the trading dashboard",
    "basic_signals": "Upgrade to Elite plan to access trading signals",
}

PLAN_BADGE_COLORS: dict[SubscriptionTier, str] = {
    SubscriptionTier.ELITE: "bg-gradient-to-r from-yellow-400 to-yellow-600 text-black font-bold",
    SubscriptionTier.NONE: "bg-gray-500 text-white",
}
