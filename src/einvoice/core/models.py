"""Pydantic models for the EN 16931 invoice."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, BinaryIO

from pydantic import BaseModel, Field, PrivateAttr

from .errors import SemanticError, ValidationError
from .profiles import Profile, SchemaType, is_peppol_business_process, profile_from_urn

if TYPE_CHECKING:
    from ..config import Settings

ZERO = Decimal("0")


class Note(BaseModel):
    """Invoice note (BG-1)."""

    subject_code: str = Field(default="", description="UNCL 4451 subject code (BT-21)")
    text: str = Field(default="", description="Note text (BT-22)")


class PostalAddress(BaseModel):
    """Postal address of a party (BG-5, BG-8, BG-12, BG-15)."""

    line1: str = ""
    line2: str = ""
    line3: str = ""
    city: str = ""
    postcode: str = ""
    country_subdivision: str = ""
    country_id: str = Field(default="", description="ISO 3166-1 alpha-2 country code")


class GlobalID(BaseModel):
    scheme: str = ""
    id: str = ""


class LegalOrganization(BaseModel):
    """Legal registration of a party (BT-30, BT-47, BT-61)."""

    id: str = ""
    scheme: str = ""
    trading_name: str = Field(default="", description="Trading name (BT-28, BT-45)")


class Contact(BaseModel):
    """Contact point of a party (BG-6, BG-9)."""

    person_name: str = ""
    department: str = ""
    phone: str = ""
    email: str = ""


class Party(BaseModel):
    """
    A trade party.

    The same record is used for seller, buyer, payee, tax representative
    and ship-to; which fields are written depends on the position and the
    profile.
    """

    ids: list[str] = Field(default_factory=list, description="Party identifiers (BT-29, BT-46)")
    global_ids: list[GlobalID] = Field(default_factory=list)
    name: str = ""
    description: str = Field(default="", description="Additional legal information (BT-33)")
    legal_organization: LegalOrganization | None = None
    contacts: list[Contact] = Field(default_factory=list)
    postal_address: PostalAddress | None = None
    electronic_address: str = Field(default="", description="Electronic address (BT-34, BT-49)")
    electronic_address_scheme: str = ""
    vat_id: str = Field(default="", description="VAT identifier (BT-31, BT-48, BT-63)")
    fc_tax_id: str = Field(default="", description="Tax registration identifier (BT-32)")

    @property
    def country_id(self) -> str:
        return self.postal_address.country_id if self.postal_address else ""


class AllowanceCharge(BaseModel):
    """Allowance or charge on document, line or price level."""

    charge_indicator: bool = False
    calculation_percent: Decimal = ZERO
    basis_amount: Decimal = ZERO
    actual_amount: Decimal = ZERO
    reason_code: str = ""
    reason: str = ""
    tax_type_code: str = ""
    tax_category_code: str = ""
    tax_rate: Decimal = ZERO


class TradeTax(BaseModel):
    """VAT breakdown entry (BG-23)."""

    type_code: str = "VAT"
    category_code: str = Field(default="", description="VAT category code (BT-118)")
    percent: Decimal = Field(default=ZERO, description="VAT category rate (BT-119)")
    basis_amount: Decimal = Field(default=ZERO, description="Taxable amount (BT-116)")
    calculated_amount: Decimal = Field(default=ZERO, description="Tax amount (BT-117)")
    exemption_reason: str = Field(default="", description="BT-120")
    exemption_reason_code: str = Field(default="", description="BT-121")
    tax_point_date: date | None = Field(default=None, description="BT-7")
    due_date_type_code: str = Field(default="", description="BT-8")

    @property
    def key(self) -> tuple[str, Decimal]:
        """Grouping key: category code and rate, compared by value."""
        return self.category_code, self.percent.normalize()


class PaymentMeans(BaseModel):
    """Payment instructions (BG-16)."""

    type_code: int = Field(default=0, description="UNTDID 4461 code (BT-81)")
    information: str = Field(default="", description="BT-82")
    payee_iban: str = Field(default="", description="Payment account identifier (BT-84)")
    payee_account_name: str = Field(default="", description="BT-85")
    payee_proprietary_id: str = ""
    payee_bic: str = Field(default="", description="Payment service provider (BT-86)")
    payer_iban: str = Field(default="", description="Debited account identifier (BT-91)")
    card_id: str = Field(default="", description="Card primary account number (BT-87)")
    card_holder_name: str = Field(default="", description="BT-88")

    @property
    def has_credit_transfer(self) -> bool:
        return bool(self.payee_iban or self.payee_proprietary_id)

    @property
    def has_card(self) -> bool:
        return bool(self.card_id)

    @property
    def has_direct_debit(self) -> bool:
        return bool(self.payer_iban)


class PaymentTerm(BaseModel):
    description: str = Field(default="", description="Payment terms (BT-20)")
    due_date: date | None = Field(default=None, description="Payment due date (BT-9)")
    direct_debit_mandate_id: str = Field(default="", description="Mandate reference (BT-89)")


class ReferencedDocument(BaseModel):
    """Preceding invoice reference (BG-3)."""

    id: str = ""
    issue_date: date | None = None


class Document(BaseModel):
    """Additional supporting document (BG-24), also used for BT-17 and BT-18."""

    issuer_assigned_id: str = ""
    uri_id: str = ""
    type_code: str = ""
    name: str = ""
    attachment: bytes = b""
    attachment_mime_code: str = ""
    attachment_filename: str = ""
    reference_type_code: str = ""


class Characteristic(BaseModel):
    """Item attribute (BG-32)."""

    description: str = ""
    value: str = ""


class Classification(BaseModel):
    """Item classification identifier (BT-158)."""

    class_code: str = ""
    list_id: str = ""
    list_version_id: str = ""


class InvoiceLine(BaseModel):
    """Invoice line (BG-25)."""

    line_id: str = Field(default="", description="BT-126")
    note: str = Field(default="", description="BT-127")

    # Item (BG-31)
    global_id: str = Field(default="", description="Item standard identifier (BT-157)")
    global_id_scheme: str = ""
    seller_assigned_id: str = Field(default="", description="BT-155")
    buyer_assigned_id: str = Field(default="", description="BT-156")
    item_name: str = Field(default="", description="BT-153")
    description: str = Field(default="", description="BT-154")
    characteristics: list[Characteristic] = Field(default_factory=list)
    classifications: list[Classification] = Field(default_factory=list)
    origin_country: str = Field(default="", description="BT-159")

    # Price details (BG-29)
    buyer_order_line_id: str = Field(default="", description="BT-132")
    gross_price: Decimal = Field(default=ZERO, description="BT-148")
    price_allowance_charges: list[AllowanceCharge] = Field(default_factory=list)
    net_price: Decimal = Field(default=ZERO, description="BT-146")
    net_price_present: bool = False
    basis_quantity: Decimal = Field(default=ZERO, description="BT-149")
    basis_quantity_unit: str = Field(default="", description="BT-150")

    billed_quantity: Decimal = Field(default=ZERO, description="BT-129")
    billed_quantity_unit: str = Field(default="", description="BT-130")

    # Line VAT information (BG-30)
    tax_type_code: str = "VAT"
    tax_category_code: str = Field(default="", description="BT-151")
    tax_rate: Decimal = Field(default=ZERO, description="BT-152")

    # Invoice line period (BG-26)
    billing_period_start: date | None = None
    billing_period_end: date | None = None
    billing_period_present: bool = False

    allowances: list[AllowanceCharge] = Field(default_factory=list, description="BG-27")
    charges: list[AllowanceCharge] = Field(default_factory=list, description="BG-28")

    total: Decimal = Field(default=ZERO, description="Invoice line net amount (BT-131)")
    total_present: bool = False

    object_id: str = Field(default="", description="Invoice line object identifier (BT-128)")
    object_id_scheme: str = ""
    accounting_reference: str = Field(default="", description="BT-133")


class Invoice(BaseModel):
    """
    EN 16931 invoice.

    Money, quantities and rates are ``Decimal``; an absent date is ``None``.
    The ``*_present`` flags record whether an element existed in the parsed
    source, so "present but empty" can be told apart from "absent".
    """

    schema_type: SchemaType = SchemaType.CII
    guideline: str = Field(default="", description="Specification identifier (BT-24)")
    bp_specified: str = Field(default="", description="Business process type (BT-23)")

    # Exchanged document
    invoice_number: str = Field(default="", description="BT-1")
    invoice_type_code: int = Field(default=0, description="UNTDID 1001 code (BT-3)")
    invoice_date: date | None = Field(default=None, description="BT-2")
    notes: list[Note] = Field(default_factory=list)

    # Header trade agreement
    buyer_reference: str = Field(default="", description="BT-10")
    seller: Party = Field(default_factory=Party)
    buyer: Party = Field(default_factory=Party)
    seller_tax_representative: Party | None = None
    seller_order_reference: str = Field(default="", description="Sales order reference (BT-14)")
    buyer_order_reference: str = Field(default="", description="Purchase order reference (BT-13)")
    contract_reference: str = Field(default="", description="BT-12")
    additional_documents: list[Document] = Field(default_factory=list)
    project_id: str = Field(default="", description="BT-11")
    project_name: str = ""

    # Header trade delivery
    ship_to: Party | None = None
    occurrence_date: date | None = Field(default=None, description="Actual delivery date (BT-72)")
    despatch_advice_reference: str = Field(default="", description="BT-16")
    receiving_advice_reference: str = Field(default="", description="BT-15")

    # Header trade settlement
    creditor_reference_id: str = Field(default="", description="BT-90")
    payment_reference: str = Field(default="", description="Remittance information (BT-83)")
    tax_currency_code: str = Field(default="", description="VAT accounting currency (BT-6)")
    invoice_currency_code: str = Field(default="", description="BT-5")
    payee: Party | None = None
    payment_means: list[PaymentMeans] = Field(default_factory=list)
    trade_taxes: list[TradeTax] = Field(default_factory=list)
    billing_period_start: date | None = Field(default=None, description="BT-73")
    billing_period_end: date | None = Field(default=None, description="BT-74")
    billing_period_present: bool = False
    allowance_charges: list[AllowanceCharge] = Field(default_factory=list)
    payment_terms: list[PaymentTerm] = Field(default_factory=list)
    invoice_referenced_documents: list[ReferencedDocument] = Field(default_factory=list)
    receivable_accounting_account: str = Field(default="", description="Buyer accounting reference (BT-19)")

    # Document totals (BG-22)
    line_total: Decimal = Field(default=ZERO, description="BT-106")
    allowance_total: Decimal = Field(default=ZERO, description="BT-107")
    charge_total: Decimal = Field(default=ZERO, description="BT-108")
    tax_basis_total: Decimal = Field(default=ZERO, description="BT-109")
    tax_total: Decimal = Field(default=ZERO, description="BT-110")
    tax_total_accounting: Decimal = Field(default=ZERO, description="BT-111")
    grand_total: Decimal = Field(default=ZERO, description="BT-112")
    total_prepaid: Decimal = Field(default=ZERO, description="BT-113")
    rounding_amount: Decimal = Field(default=ZERO, description="BT-114")
    due_payable_amount: Decimal = Field(default=ZERO, description="BT-115")
    line_total_present: bool = False
    tax_basis_total_present: bool = False
    grand_total_present: bool = False
    due_payable_amount_present: bool = False

    lines: list[InvoiceLine] = Field(default_factory=list)

    # Currencies of tax totals matching neither BT-5 nor BT-6
    unexpected_tax_currencies: list[str] = Field(default_factory=list)

    _violations: list[SemanticError] = PrivateAttr(default_factory=list)

    @property
    def profile(self) -> Profile:
        return profile_from_urn(self.guideline)

    @property
    def is_peppol(self) -> bool:
        """True when the business process (BT-23) is a PEPPOL billing process."""
        return is_peppol_business_process(self.bp_specified)

    @property
    def is_xrechnung(self) -> bool:
        return self.profile is Profile.XRECHNUNG

    @property
    def violations(self) -> list[SemanticError]:
        """Violations of the last validation run."""
        return list(self._violations)

    def set_violations(self, violations: list[SemanticError]) -> None:
        self._violations = list(violations)

    def validate(self, settings: "Settings | None" = None) -> ValidationError | None:
        """Run every applicable business rule; returns None when nothing failed."""
        from ..validators import InvoiceValidator

        return InvoiceValidator(settings).validate(self)

    def write(self, sink: BinaryIO, schema: SchemaType | None = None) -> None:
        """Serialise the invoice as XML into a binary sink."""
        from ..writers import get_writer

        get_writer(schema or SchemaType.CII).write(self, sink)

    def update_applicable_trade_tax(self, exempt_reasons: dict[str, str] | None = None) -> None:
        from .totals import update_applicable_trade_tax

        update_applicable_trade_tax(self, exempt_reasons or {})

    def update_allowances_and_charges(self) -> None:
        from .totals import update_allowances_and_charges

        update_allowances_and_charges(self)

    def update_totals(self) -> None:
        from .totals import update_totals

        update_totals(self)
