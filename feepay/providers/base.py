from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from feepay.models.payment import ChargeRequest


class PaymentProvider(ABC):
    """Abstract base class for mobile-money gateways"""

    def __init__(self, config: Dict[str, Any]):
        """
        Initialize provider with configuration

        Args:
            config: Provider-specific configuration
        """
        self.config = config
        self.provider_name = self.__class__.__name__.replace('Provider', '').lower()

    @abstractmethod
    def initiate_charge(self, charge: ChargeRequest) -> Dict[str, Any]:
        """
        Send one charge request (STK push) to the gateway

        Args:
            charge: Validated charge request

        Returns:
            Dict containing:
                - transaction_id: Gateway checkout identifier
                - status: "initiated"
                - message: Gateway message, if any
                - additional_data: raw_response and provider-specific data

        Raises:
            PaymentInitializationError: If the gateway declined or answered
                with a body that carries no checkout identifier
        """
        pass

    @abstractmethod
    def query_status(self, checkout_id: str) -> Dict[str, Any]:
        """
        Look up the current state of a charge

        Args:
            checkout_id: Gateway checkout identifier

        Returns:
            Dict containing:
                - status: "paid" | "failed" | "pending"
                - message: Gateway message, if any
                - additional_data: raw_response and provider-specific data

        Raises:
            PaymentVerificationError: If the lookup could not be completed
        """
        pass

    def get_provider_name(self) -> str:
        """Get provider name"""
        return self.provider_name

    def close(self) -> None:
        """Release any connections held by the provider"""
        pass


class PaymentProviderError(Exception):
    """Base exception for provider errors"""

    def __init__(self, message: str, status_code: Optional[int] = None, raw: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.raw = raw


class ProviderConfigurationError(PaymentProviderError):
    """Raised when required gateway credentials are missing"""
    pass


class PaymentInitializationError(PaymentProviderError):
    """Raised when payment initialization fails"""
    pass


class PaymentVerificationError(PaymentProviderError):
    """Raised when payment verification fails"""
    pass
