"""
Provider Registry - Maps provider names to adapter classes.
The active provider is chosen with the RATES_PROVIDER setting.
"""

import logging
from datetime import date

from django.conf import settings
from django.utils import timezone

from apps.rates.domain.interfaces import BaseExchangeRateProvider
from apps.rates.domain.models import DateWindow
from apps.rates.infrastructure.providers.free_currency_api import FreeCurrencyApiProvider
from apps.rates.infrastructure.providers.mock import MockProvider

logger = logging.getLogger(__name__)

FREE_CURRENCY_API = "free_currency_api"
MOCK = "mock"

# Registry: Maps provider name to the corresponding adapter class
PROVIDER_REGISTRY: dict[str, type[BaseExchangeRateProvider]] = {
    FREE_CURRENCY_API: FreeCurrencyApiProvider,
    MOCK: MockProvider,
}


def get_date_window() -> DateWindow:
    return DateWindow(earliest=date.fromisoformat(settings.RATES_EARLIEST_DATE))


def get_provider_instance(provider_name: str) -> BaseExchangeRateProvider | None:
    """
    Get an instance of a provider by its name, configured from settings.

    Args:
        provider_name: A key of PROVIDER_REGISTRY

    Returns:
        Instance of the provider adapter, or None if not found
    """
    provider_class = PROVIDER_REGISTRY.get(provider_name)

    if provider_class is None:
        logger.error("Provider '%s' not found in registry", provider_name)
        return None

    if provider_class is FreeCurrencyApiProvider:
        return FreeCurrencyApiProvider(
            api_key=settings.FREE_CURRENCY_API_KEY,
            base_url=settings.FREE_CURRENCY_API_URL,
            date_window=get_date_window(),
            timeout=settings.RATES_HTTP_TIMEOUT,
            today=timezone.localdate,
        )

    return provider_class(get_date_window(), today=timezone.localdate)


def get_configured_provider() -> BaseExchangeRateProvider | None:
    """Get the provider selected by the RATES_PROVIDER setting."""
    return get_provider_instance(settings.RATES_PROVIDER)
