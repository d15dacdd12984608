"""Checks that are not part of a published schematron."""

from .types import Rule

BR_USER_05 = Rule(
    "BR-USER-05",
    ("BT-131", "BT-129", "BT-146"),
    "Invoice line net amount must match calculated amount (qty × price ÷ base qty ± allowances/charges).",
)
UNEXPECTED_TAX_CURRENCY = Rule(
    "UNEXPECTED-TAX-CURRENCY",
    ("BT-110", "BT-111"),
    "TaxTotalAmount with unexpected currency (expected invoice currency BT-5 or accounting "
    "currency BT-6).",
)
CHECK_LINE_TOTAL = Rule(
    "CHECK",
    ("BT-131", "BT-129", "BT-146"),
    "Invoice line net amount (BT-131) must equal Invoiced quantity (BT-129) x Item net price (BT-146).",
)
