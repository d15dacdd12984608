"""PEPPOL BIS Billing 3.0 rules."""

from .types import Rule

PEPPOL_R001 = Rule("PEPPOL-EN16931-R001", ("BT-23",), "Business process MUST be provided.")
PEPPOL_R002 = Rule("PEPPOL-EN16931-R002", ("BT-22",), "No more than one note is allowed on document level.")
PEPPOL_R003 = Rule(
    "PEPPOL-EN16931-R003",
    ("BT-10", "BT-13"),
    "A buyer reference or purchase order reference MUST be provided.",
)
PEPPOL_R007 = Rule(
    "PEPPOL-EN16931-R007",
    ("BT-23",),
    "Business process MUST be in the format 'urn:fdc:peppol.eu:2017:poacc:billing:NN:1.0' where "
    "NN indicates the process number.",
)
PEPPOL_R010 = Rule("PEPPOL-EN16931-R010", ("BT-49",), "Buyer electronic address MUST be provided.")
PEPPOL_R020 = Rule("PEPPOL-EN16931-R020", ("BT-34",), "Seller electronic address MUST be provided.")
PEPPOL_R120 = Rule(
    "PEPPOL-EN16931-R120",
    ("BT-131", "BT-129", "BT-146", "BT-149"),
    "Invoice line net amount MUST equal (Invoiced quantity * (Item net price/item price base "
    "quantity) + Sum of invoice line charge amount - sum of invoice line allowance amount.",
)
PEPPOL_R121 = Rule("PEPPOL-EN16931-R121", ("BT-149",), "Base quantity MUST be a positive number above zero.")
PEPPOL_R130 = Rule(
    "PEPPOL-EN16931-R130",
    ("BT-150", "BT-130"),
    "Unit code of price base quantity MUST be same as invoiced quantity.",
)
