"""EN 16931 business rules (core, calculation, decimals and VAT categories)."""

from .types import Rule

# Core rules

BR_01 = Rule("BR-01", ("BT-24",), "An Invoice shall have a Specification identifier (BT-24).")
BR_02 = Rule("BR-02", ("BT-1",), "An Invoice shall have an Invoice number (BT-1).")
BR_03 = Rule("BR-03", ("BT-2",), "An Invoice shall have an Invoice issue date (BT-2).")
BR_04 = Rule("BR-04", ("BT-3",), "An Invoice shall have an Invoice type code (BT-3).")
BR_05 = Rule("BR-05", ("BT-5",), "An Invoice shall have an Invoice currency code (BT-5).")
BR_06 = Rule("BR-06", ("BT-27",), "An Invoice shall contain the Seller name (BT-27).")
BR_07 = Rule("BR-07", ("BT-44",), "An Invoice shall contain the Buyer name (BT-44).")
BR_08 = Rule("BR-08", ("BG-5",), "An Invoice shall contain the Seller postal address (BG-5).")
BR_09 = Rule(
    "BR-09",
    ("BT-40",),
    "The Seller postal address (BG-5) shall contain a Seller country code (BT-40).",
)
BR_10 = Rule("BR-10", ("BG-8",), "An Invoice shall contain the Buyer postal address (BG-8).")
BR_11 = Rule(
    "BR-11",
    ("BT-55",),
    "The Buyer postal address shall contain a Buyer country code (BT-55).",
)
BR_12 = Rule("BR-12", ("BT-106",), "An Invoice shall have the Sum of Invoice line net amount (BT-106).")
BR_13 = Rule("BR-13", ("BT-109",), "An Invoice shall have the Invoice total amount without VAT (BT-109).")
BR_14 = Rule("BR-14", ("BT-112",), "An Invoice shall have the Invoice total amount with VAT (BT-112).")
BR_15 = Rule("BR-15", ("BT-115",), "An Invoice shall have the Amount due for payment (BT-115).")
BR_16 = Rule("BR-16", ("BG-25",), "An Invoice shall have at least one Invoice line (BG-25).")
BR_17 = Rule(
    "BR-17",
    ("BT-59", "BG-10"),
    "The Payee name (BT-59) shall be provided in the Invoice, if the Payee (BG-10) "
    "is different from the Seller (BG-4).",
)
BR_18 = Rule(
    "BR-18",
    ("BT-62", "BG-11"),
    "The Seller tax representative name (BT-62) shall be provided in the Invoice, "
    "if the Seller (BG-4) has a Seller tax representative party (BG-11).",
)
BR_19 = Rule(
    "BR-19",
    ("BG-12", "BG-11"),
    "The Seller tax representative postal address (BG-12) shall be provided in the Invoice, "
    "if the Seller (BG-4) has a Seller tax representative party (BG-11).",
)
BR_20 = Rule(
    "BR-20",
    ("BT-69", "BG-12"),
    "The Seller tax representative postal address (BG-12) shall contain a Tax representative "
    "country code (BT-69), if the Seller (BG-4) has a Seller tax representative party (BG-11).",
)
BR_21 = Rule("BR-21", ("BT-126",), "Each Invoice line (BG-25) shall have an Invoice line identifier (BT-126).")
BR_22 = Rule("BR-22", ("BT-129",), "Each Invoice line (BG-25) shall have an Invoiced quantity (BT-129).")
BR_23 = Rule(
    "BR-23",
    ("BT-130",),
    "An Invoice line (BG-25) shall have an Invoiced quantity unit of measure code (BT-130).",
)
BR_24 = Rule("BR-24", ("BT-131",), "Each Invoice line (BG-25) shall have an Invoice line net amount (BT-131).")
BR_25 = Rule("BR-25", ("BT-153",), "Each Invoice line (BG-25) shall contain the Item name (BT-153).")
BR_26 = Rule("BR-26", ("BT-146",), "Each Invoice line (BG-25) shall contain the Item net price (BT-146).")
BR_27 = Rule("BR-27", ("BT-146",), "The Item net price (BT-146) shall NOT be negative.")
BR_28 = Rule("BR-28", ("BT-148",), "The Item gross price (BT-148) shall NOT be negative.")
BR_29 = Rule(
    "BR-29",
    ("BT-73", "BT-74"),
    "If both Invoicing period start date (BT-73) and Invoicing period end date (BT-74) are given "
    "then the Invoicing period end date (BT-74) shall be later or equal to the Invoicing period "
    "start date (BT-73).",
)
BR_30 = Rule(
    "BR-30",
    ("BT-134", "BT-135"),
    "If both Invoice line period start date (BT-134) and Invoice line period end date (BT-135) are "
    "given then the Invoice line period end date (BT-135) shall be later or equal to the Invoice "
    "line period start date (BT-134).",
)
BR_31 = Rule(
    "BR-31",
    ("BT-92",),
    "Each Document level allowance (BG-20) shall have a Document level allowance amount (BT-92).",
)
BR_32 = Rule(
    "BR-32",
    ("BT-95",),
    "Each Document level allowance (BG-20) shall have a Document level allowance VAT category "
    "code (BT-95).",
)
BR_33 = Rule(
    "BR-33",
    ("BT-97", "BT-98"),
    "Each Document level allowance (BG-20) shall have a Document level allowance reason (BT-97) "
    "or a Document level allowance reason code (BT-98).",
)
BR_34 = Rule("BR-34", ("BT-92",), "The Document level allowance amount (BT-92) shall not be negative.")
BR_35 = Rule("BR-35", ("BT-93",), "The Document level allowance base amount (BT-93) shall not be negative.")
BR_36 = Rule(
    "BR-36",
    ("BT-99",),
    "Each Document level charge (BG-21) shall have a Document level charge amount (BT-99).",
)
BR_37 = Rule(
    "BR-37",
    ("BT-102",),
    "Each Document level charge (BG-21) shall have a Document level charge VAT category code (BT-102).",
)
BR_38 = Rule(
    "BR-38",
    ("BT-104", "BT-105"),
    "Each Document level charge (BG-21) shall have a Document level charge reason (BT-104) or a "
    "Document level charge reason code (BT-105).",
)
BR_39 = Rule("BR-39", ("BT-99",), "The Document level charge amount (BT-99) shall not be negative.")
BR_40 = Rule("BR-40", ("BT-100",), "The Document level charge base amount (BT-100) shall not be negative.")
BR_41 = Rule(
    "BR-41",
    ("BT-136",),
    "Each Invoice line allowance (BG-27) shall have an Invoice line allowance amount (BT-136).",
)
BR_42 = Rule(
    "BR-42",
    ("BT-139", "BT-140"),
    "Each Invoice line allowance (BG-27) shall have an Invoice line allowance reason (BT-139) or "
    "an Invoice line allowance reason code (BT-140).",
)
BR_43 = Rule(
    "BR-43",
    ("BT-141",),
    "Each Invoice line charge (BG-28) shall have an Invoice line charge amount (BT-141).",
)
BR_44 = Rule(
    "BR-44",
    ("BT-144", "BT-145"),
    "Each Invoice line charge shall have an Invoice line charge reason (BT-144) or an invoice "
    "line charge reason code (BT-145).",
)
BR_45 = Rule(
    "BR-45",
    ("BT-116",),
    "Each VAT breakdown (BG-23) shall have a VAT category taxable amount (BT-116) equal to the sum "
    "of Invoice line net amounts minus document level allowances plus document level charges "
    "with the same VAT category code and rate.",
)
BR_47 = Rule(
    "BR-47",
    ("BT-118",),
    "Each VAT breakdown (BG-23) shall be defined through a VAT category code (BT-118).",
)
BR_49 = Rule(
    "BR-49",
    ("BT-81",),
    "A Payment instruction (BG-16) shall specify the Payment means type code (BT-81).",
)
BR_50 = Rule(
    "BR-50",
    ("BT-84",),
    "A Payment account identifier (BT-84) shall be present if Credit transfer (BG-17) "
    "information is provided in the Invoice.",
)
BR_52 = Rule(
    "BR-52",
    ("BT-122",),
    "Each Additional supporting document (BG-24) shall contain a Supporting document reference (BT-122).",
)
BR_53 = Rule(
    "BR-53",
    ("BT-111", "BT-6"),
    "If the VAT accounting currency code (BT-6) is present, then the Invoice total VAT amount in "
    "accounting currency (BT-111) shall be provided.",
)
BR_54 = Rule(
    "BR-54",
    ("BT-160", "BT-161"),
    "Each Item attribute (BG-32) shall contain an Item attribute name (BT-160) and an Item "
    "attribute value (BT-161).",
)
BR_55 = Rule(
    "BR-55",
    ("BT-25",),
    "Each Preceding Invoice reference (BG-3) shall contain a Preceding Invoice reference (BT-25).",
)
BR_56 = Rule(
    "BR-56",
    ("BT-63",),
    "Each Seller tax representative party (BG-11) shall have a Seller tax representative VAT "
    "identifier (BT-63).",
)
BR_57 = Rule(
    "BR-57",
    ("BT-80",),
    "Each Deliver to address (BG-15) shall contain a Deliver to country code (BT-80).",
)
# Not evaluated: the model cannot tell whether the account element existed in the source.
BR_61 = Rule(
    "BR-61",
    ("BT-84", "BT-81"),
    "If the Payment means type code (BT-81) means SEPA credit transfer, Local credit transfer or "
    "Non-SEPA international credit transfer, the Payment account identifier (BT-84) shall be present.",
)
BR_62 = Rule("BR-62", ("BT-34",), "The Seller electronic address (BT-34) shall have a Scheme identifier.")
BR_63 = Rule("BR-63", ("BT-49",), "The Buyer electronic address (BT-49) shall have a Scheme identifier.")
BR_64 = Rule("BR-64", ("BT-157",), "The Item standard identifier (BT-157) shall have a Scheme identifier.")
BR_65 = Rule(
    "BR-65",
    ("BT-158",),
    "The Item classification identifier (BT-158) shall have a Scheme identifier.",
)

# Split payment (Italy)

BR_B_01 = Rule(
    "BR-B-01",
    ("BT-151", "BT-95", "BT-102"),
    "An Invoice where the VAT category code (BT-151, BT-95 or BT-102) is 'Split payment' shall "
    "be a domestic Italian invoice.",
)
BR_B_02 = Rule(
    "BR-B-02",
    ("BT-151", "BT-95", "BT-102"),
    "An Invoice that contains an Invoice line (BG-25), a Document level allowance (BG-20) or a "
    "Document level charge (BG-21) where the VAT category code is 'Split payment' shall not "
    "contain an Invoice line, a Document level allowance or a Document level charge where the "
    "VAT category code is 'Standard rated'.",
)

# Calculation and cross-field rules

BR_CO_03 = Rule(
    "BR-CO-03",
    ("BT-7", "BT-8"),
    "Value added tax point date (BT-7) and Value added tax point date code (BT-8) are mutually exclusive.",
)
BR_CO_04 = Rule(
    "BR-CO-04",
    ("BT-151",),
    "Each Invoice line (BG-25) shall be categorized with an Invoiced item VAT category code (BT-151).",
)
BR_CO_09 = Rule(
    "BR-CO-09",
    ("BT-31", "BT-48", "BT-63"),
    "The Seller VAT identifier (BT-31), the Seller tax representative VAT identifier (BT-63) and "
    "the Buyer VAT identifier (BT-48) shall have a prefix in accordance with ISO code ISO 3166-1 "
    "alpha-2 by which the country of issue may be identified. Nevertheless, Greece may use the prefix 'EL'.",
)
BR_CO_10 = Rule(
    "BR-CO-10",
    ("BT-106", "BT-131"),
    "Sum of Invoice line net amount (BT-106) = Σ Invoice line net amount (BT-131).",
)
BR_CO_11 = Rule(
    "BR-CO-11",
    ("BT-107", "BT-92"),
    "Sum of allowances on document level (BT-107) = Σ Document level allowance amount (BT-92).",
)
BR_CO_12 = Rule(
    "BR-CO-12",
    ("BT-108", "BT-99"),
    "Sum of charges on document level (BT-108) = Σ Document level charge amount (BT-99).",
)
BR_CO_13 = Rule(
    "BR-CO-13",
    ("BT-109", "BT-106", "BT-107", "BT-108"),
    "Invoice total amount without VAT (BT-109) = Σ Invoice line net amount (BT-131) - Sum of "
    "allowances on document level (BT-107) + Sum of charges on document level (BT-108).",
)
BR_CO_14 = Rule(
    "BR-CO-14",
    ("BT-110", "BT-117"),
    "Invoice total VAT amount (BT-110) = Σ VAT category tax amount (BT-117).",
)
BR_CO_15 = Rule(
    "BR-CO-15",
    ("BT-112", "BT-109", "BT-110"),
    "Invoice total amount with VAT (BT-112) = Invoice total amount without VAT (BT-109) + "
    "Invoice total VAT amount (BT-110).",
)
BR_CO_16 = Rule(
    "BR-CO-16",
    ("BT-115", "BT-112", "BT-113", "BT-114"),
    "Amount due for payment (BT-115) = Invoice total amount with VAT (BT-112) - Paid amount "
    "(BT-113) + Rounding amount (BT-114).",
)
BR_CO_17 = Rule(
    "BR-CO-17",
    ("BT-117", "BT-116", "BT-119"),
    "VAT category tax amount (BT-117) = VAT category taxable amount (BT-116) x (VAT category "
    "rate (BT-119) / 100), rounded to two decimals.",
)
BR_CO_18 = Rule("BR-CO-18", ("BG-23",), "An Invoice shall at least have one VAT breakdown group (BG-23).")
BR_CO_19 = Rule(
    "BR-CO-19",
    ("BG-14", "BT-73", "BT-74"),
    "If Invoicing period (BG-14) is used, the Invoicing period start date (BT-73) or the "
    "Invoicing period end date (BT-74) shall be filled, or both.",
)
BR_CO_20 = Rule(
    "BR-CO-20",
    ("BG-26", "BT-134", "BT-135"),
    "If Invoice line period (BG-26) is used, the Invoice line period start date (BT-134) or the "
    "Invoice line period end date (BT-135) shall be filled, or both.",
)
BR_CO_25 = Rule(
    "BR-CO-25",
    ("BT-115", "BT-9", "BT-20"),
    "In case the Amount due for payment (BT-115) is positive, either the Payment due date (BT-9) "
    "or the Payment terms (BT-20) shall be present.",
)
BR_CO_26 = Rule(
    "BR-CO-26",
    ("BT-29", "BT-30", "BT-31"),
    "In order for the buyer to automatically identify a supplier, the Seller identifier (BT-29), "
    "the Seller legal registration identifier (BT-30) and/or the Seller VAT identifier (BT-31) "
    "shall be present.",
)


# Maximum fractional digits


def _decimals(code: str, field: str, name: str) -> Rule:
    return Rule(code, (field,), f"The allowed maximum number of decimals for the {name} ({field}) is 2.")


BR_DEC_01 = _decimals("BR-DEC-01", "BT-92", "Document level allowance amount")
BR_DEC_02 = _decimals("BR-DEC-02", "BT-93", "Document level allowance base amount")
BR_DEC_05 = _decimals("BR-DEC-05", "BT-99", "Document level charge amount")
BR_DEC_06 = _decimals("BR-DEC-06", "BT-100", "Document level charge base amount")
BR_DEC_09 = _decimals("BR-DEC-09", "BT-106", "Sum of Invoice line net amount")
BR_DEC_10 = _decimals("BR-DEC-10", "BT-107", "Sum of allowances on document level")
BR_DEC_11 = _decimals("BR-DEC-11", "BT-108", "Sum of charges on document level")
BR_DEC_12 = _decimals("BR-DEC-12", "BT-109", "Invoice total amount without VAT")
BR_DEC_13 = _decimals("BR-DEC-13", "BT-110", "Invoice total VAT amount")
BR_DEC_14 = _decimals("BR-DEC-14", "BT-112", "Invoice total amount with VAT")
BR_DEC_15 = _decimals("BR-DEC-15", "BT-111", "Invoice total VAT amount in accounting currency")
BR_DEC_16 = _decimals("BR-DEC-16", "BT-113", "Paid amount")
BR_DEC_17 = _decimals("BR-DEC-17", "BT-114", "Rounding amount")
BR_DEC_18 = _decimals("BR-DEC-18", "BT-115", "Amount due for payment")
BR_DEC_19 = _decimals("BR-DEC-19", "BT-116", "VAT category taxable amount")
BR_DEC_20 = _decimals("BR-DEC-20", "BT-117", "VAT category tax amount")
BR_DEC_23 = _decimals("BR-DEC-23", "BT-131", "Invoice line net amount")
BR_DEC_24 = _decimals("BR-DEC-24", "BT-136", "Invoice line allowance amount")
BR_DEC_25 = _decimals("BR-DEC-25", "BT-137", "Invoice line allowance base amount")
BR_DEC_27 = _decimals("BR-DEC-27", "BT-141", "Invoice line charge amount")
BR_DEC_28 = _decimals("BR-DEC-28", "BT-142", "Invoice line charge base amount")


# VAT category families
#
# Every family follows the same numbering: 01 breakdown present, 02-04 party
# identifiers for lines/allowances/charges, 05-07 rates, 08 taxable amount,
# 09 tax amount, 10 exemption reason. Intra-community supply adds 11 and 12,
# "not subject to VAT" replaces them with its own 11-14.

_SELLER_IDS = "the Seller VAT Identifier (BT-31), the Seller tax registration identifier (BT-32) and/or the Seller tax representative VAT identifier (BT-63)"

# category code -> (rule prefix, label, party identifier requirement, rate requirement,
#                   tax amount requirement, exemption requirement)
_FAMILIES: dict[str, tuple[str, str, str, str, str, str]] = {
    "S": (
        "BR-S",
        "Standard rated",
        f"shall contain {_SELLER_IDS}",
        "shall be greater than zero",
        "shall equal the sum of the VAT category taxable amounts multiplied by the VAT category rate",
        "shall not have a VAT exemption reason code (BT-121) or VAT exemption reason text (BT-120)",
    ),
    "Z": (
        "BR-Z",
        "Zero rated",
        f"shall contain {_SELLER_IDS}",
        "shall be 0 (zero)",
        "shall equal 0 (zero)",
        "shall not have a VAT exemption reason code (BT-121) or VAT exemption reason text (BT-120)",
    ),
    "E": (
        "BR-E",
        "Exempt from VAT",
        f"shall contain {_SELLER_IDS}",
        "shall be 0 (zero)",
        "shall equal 0 (zero)",
        "shall have a VAT exemption reason code (BT-121) or a VAT exemption reason text (BT-120)",
    ),
    "AE": (
        "BR-AE",
        "Reverse charge",
        "shall contain the Seller VAT Identifier (BT-31) or the Seller tax representative VAT "
        "identifier (BT-63) and the Buyer VAT identifier (BT-48) and/or the Buyer legal "
        "registration identifier (BT-47)",
        "shall be 0 (zero)",
        "shall equal 0 (zero)",
        "shall have a VAT exemption reason code (BT-121), meaning 'Reverse charge', or the VAT "
        "exemption reason text (BT-120) 'Reverse charge'",
    ),
    "K": (
        "BR-IC",
        "Intra-community supply",
        "shall contain the Seller VAT Identifier (BT-31) or the Seller tax representative VAT "
        "identifier (BT-63) and the Buyer VAT identifier (BT-48)",
        "shall be 0 (zero)",
        "shall equal 0 (zero)",
        "shall have a VAT exemption reason code (BT-121), meaning 'Intra-community supply', or "
        "the VAT exemption reason text (BT-120) 'Intra-community supply'",
    ),
    "G": (
        "BR-G",
        "Export outside the EU",
        "shall contain the Seller VAT Identifier (BT-31) or the Seller tax representative VAT "
        "identifier (BT-63)",
        "shall be 0 (zero)",
        "shall equal 0 (zero)",
        "shall have a VAT exemption reason code (BT-121), meaning 'Export outside the EU', or the "
        "VAT exemption reason text (BT-120) 'Export outside the EU'",
    ),
    "L": (
        "BR-AF",
        "IGIC",
        f"shall contain {_SELLER_IDS}",
        "shall be 0 (zero) or greater than zero",
        "shall equal the sum of the VAT category taxable amounts multiplied by the VAT category rate",
        "shall not have a VAT exemption reason code (BT-121) or VAT exemption reason text (BT-120)",
    ),
    "M": (
        "BR-AG",
        "IPSI",
        f"shall contain {_SELLER_IDS}",
        "shall be 0 (zero) or greater than zero",
        "shall equal the sum of the VAT category taxable amounts multiplied by the VAT category rate",
        "shall not have a VAT exemption reason code (BT-121) or VAT exemption reason text (BT-120)",
    ),
    "O": (
        "BR-O",
        "Not subject to VAT",
        "shall not contain the Seller VAT identifier (BT-31), the Seller tax representative VAT "
        "identifier (BT-63) or the Buyer VAT identifier (BT-48)",
        "shall not contain a VAT rate",
        "shall equal 0 (zero)",
        "shall have a VAT exemption reason code (BT-121), meaning 'Not subject to VAT', or a VAT "
        "exemption reason text (BT-120) 'Not subject to VAT'",
    ),
}

_GROUPS = (
    ("an Invoice line (BG-25)", "BT-151", "Invoiced item VAT rate (BT-152)", "BT-152"),
    ("a Document level allowance (BG-20)", "BT-95", "Document level allowance VAT rate (BT-96)", "BT-96"),
    ("a Document level charge (BG-21)", "BT-102", "Document level charge VAT rate (BT-103)", "BT-103"),
)


def _family(category: str) -> dict[int, Rule]:
    prefix, label, ids, rate, tax, exemption = _FAMILIES[category]
    rules: dict[int, Rule] = {
        1: Rule(
            f"{prefix}-01",
            ("BG-23", "BT-118"),
            f"An Invoice that contains an Invoice line (BG-25), a Document level allowance (BG-20) "
            f"or a Document level charge (BG-21) where the VAT category code (BT-151, BT-95 or "
            f"BT-102) is '{label}' shall contain in the VAT breakdown (BG-23) at least one VAT "
            f"category code (BT-118) equal with '{label}'.",
        ),
    }
    id_fields = ("BT-31", "BT-48", "BT-63") if category == "O" else ("BT-31", "BT-32", "BT-63")
    if category in ("AE", "K"):
        id_fields = ("BT-31", "BT-63", "BT-48")
    for offset, (group, category_field, rate_name, rate_field) in enumerate(_GROUPS):
        rules[2 + offset] = Rule(
            f"{prefix}-0{2 + offset}",
            (category_field,) + id_fields,
            f"An Invoice that contains {group} where the VAT category code ({category_field}) "
            f"is '{label}' {ids}.",
        )
        rules[5 + offset] = Rule(
            f"{prefix}-0{5 + offset}",
            (rate_field, category_field),
            f"In {group} where the VAT category code ({category_field}) is '{label}' the "
            f"{rate_name} {rate}.",
        )
    rules[8] = Rule(
        f"{prefix}-08",
        ("BT-116", "BT-118"),
        f"For each different value of VAT category rate (BT-119) where the VAT category code "
        f"(BT-118) is '{label}', the VAT category taxable amount (BT-116) in a VAT breakdown "
        f"(BG-23) shall equal the sum of Invoice line net amounts (BT-131) plus the sum of "
        f"document level charge amounts (BT-99) minus the sum of document level allowance "
        f"amounts (BT-92) where the VAT category code is '{label}' and the VAT rate equals the "
        f"VAT category rate (BT-119).",
    )
    rules[9] = Rule(
        f"{prefix}-09",
        ("BT-117", "BT-118"),
        f"The VAT category tax amount (BT-117) in a VAT breakdown (BG-23) where VAT category "
        f"code (BT-118) is '{label}' {tax}.",
    )
    rules[10] = Rule(
        f"{prefix}-10",
        ("BT-120", "BT-121"),
        f"A VAT breakdown (BG-23) with VAT Category code (BT-118) '{label}' {exemption}.",
    )
    return rules


VAT_CATEGORY_RULES: dict[str, dict[int, Rule]] = {code: _family(code) for code in _FAMILIES}

VAT_CATEGORY_RULES["K"][11] = Rule(
    "BR-IC-11",
    ("BT-72", "BG-14"),
    "In an Invoice with a VAT breakdown (BG-23) where the VAT category code (BT-118) is "
    "'Intra-community supply' the Actual delivery date (BT-72) or the Invoicing period (BG-14) "
    "shall not be blank.",
)
VAT_CATEGORY_RULES["K"][12] = Rule(
    "BR-IC-12",
    ("BT-80",),
    "In an Invoice with a VAT breakdown (BG-23) where the VAT category code (BT-118) is "
    "'Intra-community supply' the Deliver to country code (BT-80) shall not be blank.",
)
VAT_CATEGORY_RULES["O"][11] = Rule(
    "BR-O-11",
    ("BG-23", "BT-118"),
    "An Invoice that contains a VAT breakdown group (BG-23) with a VAT category code (BT-118) "
    "'Not subject to VAT' shall not contain other VAT breakdown groups (BG-23).",
)
VAT_CATEGORY_RULES["O"][12] = Rule(
    "BR-O-12",
    ("BT-151",),
    "An Invoice that contains a VAT breakdown group (BG-23) with a VAT category code (BT-118) "
    "'Not subject to VAT' shall not contain an Invoice line (BG-25) where the Invoiced item VAT "
    "category code (BT-151) is not 'Not subject to VAT'.",
)
VAT_CATEGORY_RULES["O"][13] = Rule(
    "BR-O-13",
    ("BT-95",),
    "An Invoice that contains a VAT breakdown group (BG-23) with a VAT category code (BT-118) "
    "'Not subject to VAT' shall not contain Document level allowances (BG-20) where Document "
    "level allowance VAT category code (BT-95) is not 'Not subject to VAT'.",
)
VAT_CATEGORY_RULES["O"][14] = Rule(
    "BR-O-14",
    ("BT-102",),
    "An Invoice that contains a VAT breakdown group (BG-23) with a VAT category code (BT-118) "
    "'Not subject to VAT' shall not contain Document level charges (BG-21) where Document level "
    "charge VAT category code (BT-102) is not 'Not subject to VAT'.",
)

# Validation order of the category families.
VAT_CATEGORY_ORDER = ("S", "AE", "E", "Z", "G", "K", "L", "M", "O")


def vat_category_rule(category: str, number: int) -> Rule:
    return VAT_CATEGORY_RULES[category][number]
