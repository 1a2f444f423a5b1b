import re
import uuid

TRACKING_PREFIX = 'NYOTA-TRK-'
SEGMENT_LENGTH = 8

_NON_ALNUM = re.compile(r'[^a-zA-Z0-9]')


def derive_tracking_number(checkout_id: str) -> str:
    """
    Derive the applicant-facing tracking number from a checkout id.

    Pure function of checkout_id: the last 8 alphanumeric characters,
    uppercased. Two ids that share those characters share a tracking number.
    Ids with fewer than 8 alphanumerics get a random segment instead.
    """
    suffix = _NON_ALNUM.sub('', str(checkout_id))[-SEGMENT_LENGTH:].upper()
    if len(suffix) < SEGMENT_LENGTH:
        suffix = uuid.uuid4().hex[:SEGMENT_LENGTH].upper()
    return f'{TRACKING_PREFIX}{suffix}'
