import pytest
from datetime import date

from apps.rates.infrastructure.providers.registry import (
    FREE_CURRENCY_API,
    MOCK,
    PROVIDER_REGISTRY,
    get_configured_provider,
    get_provider_instance,
)
from apps.rates.infrastructure.providers.free_currency_api import FreeCurrencyApiProvider
from apps.rates.infrastructure.providers.mock import MockProvider


class TestProviderRegistry:
    """Tests for provider registry functions."""

    def test_provider_registry_contains_providers(self):
        assert FREE_CURRENCY_API in PROVIDER_REGISTRY
        assert MOCK in PROVIDER_REGISTRY

    def test_get_provider_instance_free_currency_api(self, settings):
        """
        Test that the real provider is configured from settings.
        """
        settings.FREE_CURRENCY_API_KEY = "abc"
        settings.FREE_CURRENCY_API_URL = "https://example.test"
        settings.RATES_EARLIEST_DATE = "2000-01-01"
        settings.RATES_HTTP_TIMEOUT = 3

        instance = get_provider_instance(FREE_CURRENCY_API)

        assert isinstance(instance, FreeCurrencyApiProvider)
        assert instance.api_key == "abc"
        assert instance.base_url == "https://example.test"
        assert instance.timeout == 3
        assert instance.date_window.earliest == date(2000, 1, 1)

    def test_get_provider_instance_mock(self):
        instance = get_provider_instance(MOCK)

        assert isinstance(instance, MockProvider)

    def test_get_provider_instance_invalid(self):
        instance = get_provider_instance("invalid_provider")

        assert instance is None

    def test_get_configured_provider(self, settings):
        settings.RATES_PROVIDER = MOCK

        assert isinstance(get_configured_provider(), MockProvider)

    def test_get_configured_provider_unknown(self, settings):
        settings.RATES_PROVIDER = "nope"

        assert get_configured_provider() is None
