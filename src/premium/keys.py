from __future__ import annotations

RATE_KEY_DELIMITER = ":"


def rate_key(product_code: str, sum_insured: str) -> str:
    """Key under which the premiums of one product/insured-sum band are grouped.

    No escaping: codes or sums containing the delimiter are ambiguous.
    """
    return f"{product_code}{RATE_KEY_DELIMITER}{sum_insured}"
