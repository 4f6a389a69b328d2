import time

from shared.config import settings


def time_token() -> str:
    """Millisecond epoch timestamp."""
    return str(int(time.time() * 1000))


def format_order_number(sequence: int, prefix: str = settings.ORDER_NUMBER_PREFIX) -> str:
    """e.g. ART-1718000000000-0042"""
    if sequence < 1:
        raise ValueError("Order sequence starts at 1")
    return f"{prefix}-{time_token()}-{sequence:04d}"
