import logging
import threading
import time
from dataclasses import replace
from typing import Any, Callable, Optional

from flask import current_app

from feepay.errors.exceptions import (
    GatewayRejected,
    InvalidPhone,
    MissingCheckoutId,
    ServiceMisconfigured,
)
from feepay.models.payment import ChargeRequest, CheckoutHandle, PaymentOutcome, PaymentStatus
from feepay.providers import DEFAULT_PROVIDER, get_provider
from feepay.providers.base import (
    PaymentInitializationError,
    PaymentProvider,
    PaymentVerificationError,
    ProviderConfigurationError,
)
from feepay.services.tracking_service import derive_tracking_number
from feepay.utils.validators import normalize_phone, validate_amount

logger = logging.getLogger(__name__)

PHONE_FORMAT_HINT = 'Invalid phone number format. Use 07XXXXXXXX or 2547XXXXXXXX.'
MISCONFIGURED_MESSAGE = 'Payment service is not configured'


class PaymentService:
    """Initiates fee payments and reconciles their outcome with the gateway"""

    @staticmethod
    def initiate_payment(
            phone: Any,
            amount: Any,
            reference: Optional[str] = None,
            description: Optional[str] = None,
            provider: str = DEFAULT_PROVIDER
    ) -> CheckoutHandle:
        """
        Send one charge request to the gateway

        Input is validated before any network call. The gateway is called
        exactly once; a failed call is never retried here; the applicant
        retries with a new reference.

        Args:
            phone: Applicant phone number in any accepted local format
            amount: Amount to charge (KES)
            reference: Idempotency token for this charge; generated if absent
            description: Text shown on the applicant's phone
            provider: Gateway name

        Returns:
            CheckoutHandle for polling

        Raises:
            InvalidPhone, InvalidAmount: Bad input, nothing was sent
            ServiceMisconfigured: Gateway credentials missing
            GatewayRejected: Gateway declined or returned no checkout id
        """
        normalized_phone = normalize_phone(phone)
        if normalized_phone is None:
            raise InvalidPhone(PHONE_FORMAT_HINT)

        charge = ChargeRequest(
            phone=normalized_phone,
            amount=validate_amount(amount),
            reference=reference or f'ORDER-{int(time.time() * 1000)}',
            description=description or 'Payment',
        )

        provider_instance = PaymentService._load_provider(provider)

        try:
            result = provider_instance.initiate_charge(charge)
        except ProviderConfigurationError as e:
            logger.error('Payment initiation blocked (%s): %s', provider_instance.get_provider_name(), e.message)
            raise ServiceMisconfigured(MISCONFIGURED_MESSAGE) from e
        except PaymentInitializationError as e:
            logger.warning(
                'Payment initiation rejected by %s (reference=%s, status=%s): %s',
                provider_instance.get_provider_name(), charge.reference, e.status_code, e.message
            )
            status_code = e.status_code if e.status_code and e.status_code >= 400 else None
            raise GatewayRejected(e.message, raw=e.raw, status_code=status_code) from e
        finally:
            provider_instance.close()

        handle = CheckoutHandle(
            checkout_id=result['transaction_id'],
            message=result.get('message'),
            raw=result.get('additional_data', {}).get('raw_response'),
        )

        logger.info(
            'Payment initiated with %s (reference=%s, checkout_id=%s)',
            provider_instance.get_provider_name(), charge.reference, handle.checkout_id
        )

        return handle

    @staticmethod
    def check_status(checkout_id: Any, provider: str = DEFAULT_PROVIDER) -> PaymentOutcome:
        """
        Probe the gateway once for the state of a charge

        Probe faults come back as an ERROR outcome rather than an exception.

        Args:
            checkout_id: Checkout identifier from initiation
            provider: Gateway name

        Returns:
            PaymentOutcome; PAID outcomes carry the tracking number
        """
        checkout_id = PaymentService._require_checkout_id(checkout_id)
        provider_instance = PaymentService._load_provider(provider)
        try:
            return PaymentService._probe(provider_instance, checkout_id)
        finally:
            provider_instance.close()

    @staticmethod
    def poll_until_terminal(
            checkout_id: Any,
            max_attempts: Optional[int] = None,
            interval: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None,
            on_probe: Optional[Callable[[PaymentOutcome], None]] = None,
            provider: str = DEFAULT_PROVIDER
    ) -> PaymentOutcome:
        """
        Probe until PAID or FAILED, or until max_attempts probes were made

        Waits `interval` seconds before every probe. Nothing is kept between
        probes except the attempt counter, so an interrupted caller can
        simply call this again with the same checkout id.

        Args:
            checkout_id: Checkout identifier from initiation
            max_attempts: Probe budget (PAYMENT_POLL_MAX_ATTEMPTS by default)
            interval: Seconds between probes (PAYMENT_POLL_INTERVAL by default)
            cancel_event: Set it to abandon the loop; a probe that finishes
                after cancellation is discarded
            on_probe: Called with every surfaced probe outcome
            provider: Gateway name

        Returns:
            The terminal outcome, or PENDING when the budget ran out or the
            loop was cancelled
        """
        checkout_id = PaymentService._require_checkout_id(checkout_id)

        if max_attempts is None:
            max_attempts = current_app.config['PAYMENT_POLL_MAX_ATTEMPTS']
        if interval is None:
            interval = current_app.config['PAYMENT_POLL_INTERVAL']
        if cancel_event is None:
            cancel_event = threading.Event()

        provider_instance = PaymentService._load_provider(provider)
        last_raw = None

        try:
            for attempt in range(1, max_attempts + 1):
                if cancel_event.wait(interval):
                    return PaymentService._cancelled(checkout_id, attempt - 1)

                outcome = PaymentService._probe(provider_instance, checkout_id)

                if cancel_event.is_set():
                    logger.info('Discarding probe %d for %s: polling cancelled', attempt, checkout_id)
                    return PaymentService._cancelled(checkout_id, attempt)

                outcome = replace(outcome, attempts=attempt)

                if on_probe is not None:
                    on_probe(outcome)

                if outcome.is_terminal:
                    logger.info(
                        'Payment %s reached %s after %d attempt(s)',
                        checkout_id, outcome.status.value, attempt
                    )
                    return outcome

                last_raw = outcome.raw
        finally:
            provider_instance.close()

        logger.info('Payment %s still pending after %d attempt(s)', checkout_id, max_attempts)

        return PaymentOutcome(
            status=PaymentStatus.PENDING,
            checkout_id=checkout_id,
            message='Payment is still pending. Check again shortly.',
            raw=last_raw,
            attempts=max_attempts,
        )

    # Private helpers

    @staticmethod
    def _probe(provider_instance: PaymentProvider, checkout_id: str) -> PaymentOutcome:
        try:
            result = provider_instance.query_status(checkout_id)
        except PaymentVerificationError as e:
            logger.warning(
                'Status check for %s via %s failed: %s',
                checkout_id, provider_instance.get_provider_name(), e.message
            )
            return PaymentOutcome(
                status=PaymentStatus.ERROR,
                checkout_id=checkout_id,
                message=e.message,
                raw=e.raw,
            )

        status = PaymentStatus(result['status'])
        raw = result.get('additional_data', {}).get('raw_response')

        return PaymentOutcome(
            status=status,
            checkout_id=checkout_id,
            message=result.get('message'),
            raw=raw,
            tracking_number=derive_tracking_number(checkout_id) if status == PaymentStatus.PAID else None,
        )

    @staticmethod
    def _cancelled(checkout_id: str, attempts: int) -> PaymentOutcome:
        return PaymentOutcome(
            status=PaymentStatus.PENDING,
            checkout_id=checkout_id,
            message='Polling cancelled',
            attempts=attempts,
        )

    @staticmethod
    def _require_checkout_id(checkout_id: Any) -> str:
        if checkout_id is None or not str(checkout_id).strip():
            raise MissingCheckoutId('Missing checkoutId')
        return str(checkout_id).strip()

    @staticmethod
    def _load_provider(provider: str) -> PaymentProvider:
        try:
            return get_provider(provider)
        except ProviderConfigurationError as e:
            logger.error('Payment provider %s not configured: %s', provider, e.message)
            raise ServiceMisconfigured(MISCONFIGURED_MESSAGE) from e
