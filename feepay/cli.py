"""
Payment CLI
Flask commands for initiating a fee payment and resuming reconciliation
from another process:

    flask payments initiate --phone 0712345678 --wait
    flask payments poll ws_CO_0601202412345678
"""

import click
from flask import current_app
from flask.cli import AppGroup

from feepay.errors.exceptions import AppError
from feepay.models.payment import PaymentOutcome, PaymentStatus
from feepay.services.payment_service import PaymentService

payments_cli = AppGroup('payments', help='Processing fee payments.')

EXIT_CODES = {
    PaymentStatus.PAID: 0,
    PaymentStatus.FAILED: 1,
    PaymentStatus.PENDING: 2,
}


def _echo_probe(outcome: PaymentOutcome):
    click.echo(f'  attempt {outcome.attempts}: {outcome.status.value}')


def _reconcile(checkout_id, attempts, interval):
    try:
        outcome = PaymentService.poll_until_terminal(
            checkout_id,
            max_attempts=attempts,
            interval=interval,
            on_probe=_echo_probe
        )
    except KeyboardInterrupt:
        click.echo(f'Cancelled. Resume with: flask payments poll {checkout_id}')
        outcome = PaymentOutcome(status=PaymentStatus.PENDING, checkout_id=checkout_id)
    except AppError as e:
        raise click.ClickException(e.message)

    if outcome.status == PaymentStatus.PAID:
        click.echo(f'Payment confirmed. Tracking number: {outcome.tracking_number}')
    elif outcome.status == PaymentStatus.FAILED:
        click.echo(f'Payment not completed: {outcome.message or "you can try again with a new reference"}')
    else:
        click.echo(f'Payment still pending. Re-check with: flask payments poll {checkout_id}')

    click.get_current_context().exit(EXIT_CODES.get(outcome.status, 2))


@payments_cli.command('initiate')
@click.option('--phone', required=True, help='Applicant M-Pesa number, e.g. 0712345678.')
@click.option('--amount', type=float, default=None, help='Amount in KES (defaults to PROCESSING_FEE).')
@click.option('--reference', default=None, help='Unique reference for this charge.')
@click.option('--description', default='Application processing fee', show_default=True)
@click.option('--wait/--no-wait', default=False, help='Poll until the payment settles.')
@click.option('--attempts', type=int, default=None, help='Probe budget when waiting.')
@click.option('--interval', type=float, default=None, help='Seconds between probes when waiting.')
def initiate_command(phone, amount, reference, description, wait, attempts, interval):
    """Send an STK push to PHONE."""
    if amount is None:
        amount = current_app.config['PROCESSING_FEE']

    try:
        handle = PaymentService.initiate_payment(
            phone=phone,
            amount=amount,
            reference=reference,
            description=description
        )
    except AppError as e:
        raise click.ClickException(e.message)

    click.echo(f'STK prompt sent. Checkout id: {handle.checkout_id}')

    if wait:
        _reconcile(handle.checkout_id, attempts, interval)


@payments_cli.command('poll')
@click.argument('checkout_id')
@click.option('--attempts', type=int, default=None, help='Probe budget.')
@click.option('--interval', type=float, default=None, help='Seconds between probes.')
def poll_command(checkout_id, attempts, interval):
    """Poll CHECKOUT_ID until it is paid or failed."""
    _reconcile(checkout_id, attempts, interval)
