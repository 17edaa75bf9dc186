"""Dependency container wiring for the application."""

from dataclasses import dataclass

from pantry_tracker.config import Settings
from pantry_tracker.services.nutrition import NutritionService
from pantry_tracker.services.pricing import PricingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    nutrition_service: NutritionService
    pricing_service: PricingService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    nutrition_service = NutritionService(
        table_max_digits=resolved_settings.table_max_digits,
        debug=resolved_settings.debug,
    )
    pricing_service = PricingService(debug=resolved_settings.debug)
    return AppContainer(
        settings=resolved_settings,
        nutrition_service=nutrition_service,
        pricing_service=pricing_service,
    )
