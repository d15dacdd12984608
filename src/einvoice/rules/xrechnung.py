"""XRechnung CIUS rules (BR-DE-*)."""

from .types import Rule, Severity

BR_DE_1 = Rule("BR-DE-1", ("BG-16",), "An invoice must contain information on PAYMENT INSTRUCTIONS (BG-16).")
BR_DE_2 = Rule("BR-DE-2", ("BG-6",), "The element group SELLER CONTACT (BG-6) must be transmitted.")
BR_DE_3 = Rule("BR-DE-3", ("BT-37",), "The element 'Seller city' (BT-37) must be transmitted.")
BR_DE_4 = Rule("BR-DE-4", ("BT-38",), "The element 'Seller post code' (BT-38) must be transmitted.")
BR_DE_5 = Rule("BR-DE-5", ("BT-41",), "The element 'Seller contact point' (BT-41) must be transmitted.")
BR_DE_6 = Rule(
    "BR-DE-6",
    ("BT-42",),
    "The element 'Seller contact telephone number' (BT-42) must be transmitted.",
)
BR_DE_7 = Rule(
    "BR-DE-7",
    ("BT-43",),
    "The element 'Seller contact email address' (BT-43) must be transmitted.",
)
BR_DE_8 = Rule("BR-DE-8", ("BT-52",), "The element 'Buyer city' (BT-52) must be transmitted.")
BR_DE_9 = Rule("BR-DE-9", ("BT-53",), "The element 'Buyer post code' (BT-53) must be transmitted.")
BR_DE_10 = Rule(
    "BR-DE-10",
    ("BT-77",),
    "The element 'Deliver to city' (BT-77) must be transmitted if the group 'DELIVER TO ADDRESS' "
    "(BG-15) is delivered.",
)
BR_DE_11 = Rule(
    "BR-DE-11",
    ("BT-78",),
    "The element 'Deliver to post code' (BT-78) must be transmitted if the group 'DELIVER TO "
    "ADDRESS' (BG-15) is delivered.",
)
BR_DE_15 = Rule("BR-DE-15", ("BT-10",), "The element 'Buyer reference' (BT-10) must be transmitted.")
BR_DE_16 = Rule(
    "BR-DE-16",
    ("BT-31", "BT-48", "BT-63"),
    "VAT identifiers (BT-31, BT-48, BT-63) must have a prefix in accordance with ISO code list "
    "3166-1 alpha-2.",
)
BR_DE_18 = Rule(
    "BR-DE-18",
    ("BT-20",),
    "Cash discount information in 'Payment terms' (BT-20) must follow the structure "
    "#SKONTO#TAGE=n#PROZENT=n.nn#[BASISBETRAG=n.nn#].",
)
BR_DE_19 = Rule(
    "BR-DE-19",
    ("BT-84",),
    "'Payment account identifier' (BT-84) should contain a valid IBAN if the payment means is "
    "SEPA credit transfer (58).",
)
BR_DE_20 = Rule(
    "BR-DE-20",
    ("BT-91",),
    "'Debited account identifier' (BT-91) should contain a valid IBAN if the payment means is "
    "SEPA direct debit (59).",
)
BR_DE_21 = Rule(
    "BR-DE-21",
    ("BT-24",),
    "The element 'Specification identifier' (BT-24) should syntactically correspond to the "
    "identifier of the XRechnung standard.",
    Severity.WARNING,
)
BR_DE_23_A = Rule(
    "BR-DE-23-a",
    ("BT-81", "BG-17"),
    "If 'Payment means type code' (BT-81) is a credit transfer (30, 58), 'CREDIT TRANSFER' "
    "(BG-17) must be transmitted.",
)
BR_DE_23_B = Rule(
    "BR-DE-23-b",
    ("BT-81", "BG-18", "BG-19"),
    "If 'Payment means type code' (BT-81) is a credit transfer (30, 58), 'PAYMENT CARD "
    "INFORMATION' (BG-18) and 'DIRECT DEBIT' (BG-19) must not be transmitted.",
)
BR_DE_24_A = Rule(
    "BR-DE-24-a",
    ("BT-81", "BG-18"),
    "If 'Payment means type code' (BT-81) is a payment card (48, 54, 55), 'PAYMENT CARD "
    "INFORMATION' (BG-18) must be transmitted.",
)
BR_DE_24_B = Rule(
    "BR-DE-24-b",
    ("BT-81", "BG-17", "BG-19"),
    "If 'Payment means type code' (BT-81) is a payment card (48, 54, 55), 'CREDIT TRANSFER' "
    "(BG-17) and 'DIRECT DEBIT' (BG-19) must not be transmitted.",
)
BR_DE_25_A = Rule(
    "BR-DE-25-a",
    ("BT-81", "BG-19"),
    "If 'Payment means type code' (BT-81) is a direct debit (59), 'DIRECT DEBIT' (BG-19) must "
    "be transmitted.",
)
BR_DE_25_B = Rule(
    "BR-DE-25-b",
    ("BT-81", "BG-17", "BG-18"),
    "If 'Payment means type code' (BT-81) is a direct debit (59), 'CREDIT TRANSFER' (BG-17) and "
    "'PAYMENT CARD INFORMATION' (BG-18) must not be transmitted.",
)
BR_DE_26 = Rule(
    "BR-DE-26",
    ("BT-3", "BG-3"),
    "If 'Invoice type code' (BT-3) is 384 (Corrected invoice), 'PRECEDING INVOICE REFERENCE' "
    "(BG-3) should be transmitted at least once.",
)
BR_DE_27 = Rule(
    "BR-DE-27",
    ("BT-42",),
    "'Seller contact telephone number' (BT-42) should contain at least three digits.",
)
BR_DE_28 = Rule(
    "BR-DE-28",
    ("BT-43",),
    "'Seller contact email address' (BT-43) should contain exactly one @ which is neither "
    "preceded nor followed by a whitespace or a dot, and at least two characters on each side.",
)
BR_DE_30 = Rule(
    "BR-DE-30",
    ("BT-90",),
    "If 'DIRECT DEBIT' (BG-19) is transmitted, 'Bank assigned creditor identifier' (BT-90) must "
    "be transmitted.",
)
BR_DE_31 = Rule(
    "BR-DE-31",
    ("BT-91",),
    "If 'DIRECT DEBIT' (BG-19) is transmitted, 'Debited account identifier' (BT-91) must be transmitted.",
)
