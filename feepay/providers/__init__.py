from typing import Dict, Type
from feepay.providers.base import PaymentProvider
from feepay.providers.swiftpay_provider import SwiftPayProvider
from flask import current_app

# Provider registry
PROVIDERS: Dict[str, Type[PaymentProvider]] = {
    'swiftpay': SwiftPayProvider,
}

DEFAULT_PROVIDER = 'swiftpay'


def get_provider(provider_name: str = DEFAULT_PROVIDER) -> PaymentProvider:
    """
    Get provider instance by name.

    Args:
        provider_name: Name of the provider ('swiftpay')

    Returns:
        Initialized provider instance

    Raises:
        ValueError: If provider not found
        ProviderConfigurationError: If required credentials are missing
    """
    provider_class = PROVIDERS.get(provider_name.lower())

    if not provider_class:
        raise ValueError(
            f'Unknown provider: {provider_name}. Available: {", ".join(list_available_providers())}'
        )

    config = _get_provider_config(provider_name.lower())
    return provider_class(config)


def _get_provider_config(provider_name: str) -> dict:
    """Get provider configuration from Flask app config."""

    if provider_name == 'swiftpay':
        return {
            # Required
            'api_key':  current_app.config.get('SWIFTPAY_API_KEY'),
            # Required for initiation only
            'till_id':  current_app.config.get('SWIFTPAY_TILL_ID'),
            # Optional
            'base_url': current_app.config.get('SWIFTPAY_BACKEND_URL'),
            'timeout':  current_app.config.get('SWIFTPAY_TIMEOUT', 30),
        }

    return {}


def list_available_providers():
    """List all available providers."""
    return list(PROVIDERS.keys())


__all__ = ['get_provider', 'list_available_providers', 'PROVIDERS', 'DEFAULT_PROVIDER']
