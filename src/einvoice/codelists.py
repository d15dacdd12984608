"""Human readable descriptions for the code lists used in electronic invoices."""

from functools import lru_cache

import pycountry

# UNTDID 1001, restricted to the codes allowed for BT-3
DOCUMENT_TYPES: dict[str, str] = {
    "71": "Request for payment",
    "80": "Debit note related to goods or services",
    "81": "Credit note related to goods or services",
    "82": "Metered services invoice",
    "83": "Credit note related to financial adjustments",
    "84": "Debit note related to financial adjustments",
    "102": "Tax notification",
    "130": "Invoicing data sheet",
    "202": "Direct payment valuation",
    "203": "Provisional payment valuation",
    "204": "Payment valuation",
    "211": "Interim application for payment",
    "218": "Final payment request based on completion of work",
    "219": "Payment request for completed units",
    "261": "Self billed credit note",
    "262": "Consolidated credit note - goods and services",
    "295": "Price variation invoice",
    "296": "Credit note for price variation",
    "308": "Delcredere credit note",
    "325": "Proforma invoice",
    "326": "Partial invoice",
    "331": "Commercial invoice which includes a packing list",
    "380": "Standard Invoice",
    "381": "Credit note",
    "382": "Commission note",
    "383": "Debit note",
    "384": "Corrected invoice",
    "385": "Consolidated invoice",
    "386": "Prepayment invoice",
    "387": "Hire invoice",
    "388": "Tax invoice",
    "389": "Self-billed invoice",
    "390": "Delcredere invoice",
    "393": "Factored invoice",
    "394": "Lease invoice",
    "395": "Consignment invoice",
    "396": "Factored credit note",
    "420": "Optical Character Reading (OCR) payment credit note",
    "456": "Debit advice",
    "457": "Reversal of debit",
    "458": "Reversal of credit",
    "527": "Self billed debit note",
    "532": "Forwarder's credit note",
    "553": "Forwarder's invoice discrepancy report",
    "575": "Insurer's invoice",
    "623": "Forwarder's invoice",
    "633": "Port charges documents",
    "751": "Invoice information for accounting purposes",
    "780": "Freight invoice",
    "817": "Claim notification",
    "870": "Consular invoice",
    "875": "Partial construction invoice",
    "876": "Partial final construction invoice",
    "877": "Final construction invoice",
    "935": "Customs invoice",
}

# UNECE Recommendation 20 / 21, the units seen on invoices
UNIT_CODES: dict[str, str] = {
    "C62": "one",
    "H87": "piece",
    "XPP": "package",
    "EA": "each",
    "PR": "pair",
    "SET": "set",
    "XBX": "box",
    "XPK": "pack",
    "XCT": "carton",
    "XPX": "pallet",
    "MTR": "metre",
    "CMT": "centimetre",
    "MMT": "millimetre",
    "KTM": "kilometre",
    "MTK": "square metre",
    "MTQ": "cubic metre",
    "LTR": "litre",
    "MLT": "millilitre",
    "KGM": "kilogram",
    "GRM": "gram",
    "TNE": "tonne (metric ton)",
    "SEC": "second [unit of time]",
    "MIN": "minute [unit of time]",
    "HUR": "hour",
    "DAY": "day",
    "WEE": "week",
    "MON": "month",
    "ANN": "year",
    "KWH": "kilowatt hour",
    "MWH": "megawatt hour (1000 kW.h)",
    "KWT": "kilowatt",
    "LS": "lump sum",
    "P1": "percent",
    "E48": "service unit",
    "ZZ": "mutually defined",
}

# UNCL 4451, subject qualifiers used for invoice notes (BT-21)
TEXT_SUBJECT_QUALIFIERS: dict[str, str] = {
    "AAA": "Goods item description",
    "AAB": "Payment term",
    "AAC": "Dangerous goods additional information",
    "AAI": "General information",
    "AAJ": "Additional conditions of sale/purchase",
    "AAK": "Price conditions",
    "ABL": "Government information",
    "ABN": "Accounting information",
    "ACB": "Additional information",
    "ACC": "Factor assignment clause",
    "ADU": "Note",
    "AFL": "Price note",
    "AGM": "Tax exemption reason",
    "ALQ": "Terms of payments",
    "AUT": "Authentication",
    "BLU": "Waste information",
    "CUS": "Customs declaration information",
    "PAC": "Packing/marking information",
    "PMD": "Payment detail/remittance information",
    "PMT": "Payment information",
    "PRD": "Product information",
    "PRF": "Price calculation formula",
    "REG": "Regulatory information",
    "SUR": "Supplier remarks",
    "TXD": "Tax declaration",
}

# UNTDID 4461 (BT-81)
PAYMENT_MEANS: dict[str, str] = {
    "1": "Instrument not defined",
    "10": "In cash",
    "20": "Cheque",
    "30": "Credit transfer",
    "31": "Debit transfer",
    "42": "Payment to bank account",
    "48": "Bank card",
    "49": "Direct debit",
    "54": "Credit card",
    "55": "Debit card",
    "57": "Standing agreement",
    "58": "SEPA credit transfer",
    "59": "SEPA direct debit",
    "68": "Online payment service",
    "97": "Clearing between partners",
    "ZZZ": "Mutually defined",
}

# UNCL 5305 subset allowed by EN 16931 (BT-118, BT-151)
VAT_CATEGORIES: dict[str, str] = {
    "S": "Standard rate",
    "Z": "Zero rated goods",
    "E": "Exempt from tax",
    "AE": "VAT Reverse Charge",
    "K": "VAT exempt for EEA intra-community supply of goods and services",
    "G": "Free export item, tax not charged",
    "O": "Services outside scope of tax",
    "L": "Canary Islands general indirect tax",
    "M": "Tax for production, services and importation in Ceuta and Melilla",
}


def document_type(code: str | int) -> str:
    """Description of a UNTDID 1001 document type code, "Unknown" when not listed."""
    return DOCUMENT_TYPES.get(str(code), "Unknown")


def unit_code(code: str) -> str:
    """Name of a UNECE Rec 20 unit; the code itself when not listed."""
    return UNIT_CODES.get(code, code)


def text_subject_qualifier(code: str) -> str:
    return TEXT_SUBJECT_QUALIFIERS.get(code, code)


def payment_means(code: str | int) -> str:
    return PAYMENT_MEANS.get(str(code), "Unknown")


def vat_category(code: str) -> str:
    return VAT_CATEGORIES.get(code, "Unknown")


@lru_cache(maxsize=256)
def country_name(code: str) -> str:
    """ISO 3166-1 alpha-2 code to country name; the code itself when unknown."""
    if len(code) != 2:
        return code
    country = pycountry.countries.get(alpha_2=code.upper())
    return country.name if country else code


@lru_cache(maxsize=256)
def currency_name(code: str) -> str:
    """ISO 4217 alpha code to currency name; the code itself when unknown."""
    if len(code) != 3:
        return code
    currency = pycountry.currencies.get(alpha_3=code.upper())
    return currency.name if currency else code
