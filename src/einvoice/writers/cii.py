"""Cross Industry Invoice writer (ZUGFeRD / Factur-X / XRechnung CII)."""

import base64
import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import BinaryIO

from lxml import etree

from ..core.errors import WriteError
from ..core.models import AllowanceCharge, Invoice, InvoiceLine, Party, PaymentMeans
from ..core.profiles import Profile
from ..parsers.cii import NS_QDT, NS_RAM, NS_RSM, NS_UDT
from .base import BaseWriter

logger = logging.getLogger(__name__)

NS_XS = "http://www.w3.org/2001/XMLSchema"

# Declaration order on the root element
NSMAP = {"rsm": NS_RSM, "qdt": NS_QDT, "ram": NS_RAM, "xs": NS_XS, "udt": NS_UDT}

DEFAULT_TAX_TYPE = "VAT"
INVOICED_OBJECT_TYPE_CODE = "130"


def format_amount(value: Decimal) -> str:
    """Fixed two decimals, rounded half up."""
    return f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"


def format_quantity(value: Decimal) -> str:
    return f"{value.quantize(Decimal('0.0001'), rounding=ROUND_HALF_UP):f}"


def format_percent(value: Decimal) -> str:
    """Four decimals with trailing zeros and a bare decimal point removed: 19.0000 -> 19."""
    text = f"{value.quantize(Decimal('0.0001'), rounding=ROUND_HALF_UP):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_price(value: Decimal, max_places: int) -> str:
    """At least two decimals; further digits are kept up to ``max_places``."""
    quantized = value.quantize(Decimal(1).scaleb(-max_places), rounding=ROUND_HALF_UP)
    if quantized == quantized.quantize(Decimal("0.01")):
        return format_amount(quantized)
    return f"{quantized.normalize():f}"


def format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def _qualify(tag: str) -> str:
    prefix, local = tag.split(":")
    return f"{{{NSMAP[prefix]}}}{local}"


class CIIWriter(BaseWriter):
    """
    Serialise an invoice as a CII document.

    Optional elements are written when they carry a value and the invoice's
    profile includes them; profiles compare by level, so XRechnung and
    Extended get everything EN 16931 gets. Element order follows the CII
    D16B schema.
    """

    @property
    def format_name(self) -> str:
        return "UN/CEFACT Cross Industry Invoice"

    @property
    def file_extension(self) -> str:
        return "xml"

    @property
    def mime_type(self) -> str:
        return "application/xml"

    def write(self, invoice: Invoice, sink: BinaryIO) -> None:
        content = self.build(invoice)
        try:
            sink.write(content)
        except OSError as e:
            raise WriteError(f"write CII: failed to write to the sink: {e}") from e
        logger.debug(f"Wrote CII invoice {invoice.invoice_number} ({len(content)} bytes)")

    def build(self, invoice: Invoice) -> bytes:
        """Return the complete XML document for an invoice."""
        root = etree.Element(_qualify("rsm:CrossIndustryInvoice"), nsmap=NSMAP)
        self._add_context(root, invoice)
        self._add_exchanged_document(root, invoice)

        transaction = self._add(root, "rsm:SupplyChainTradeTransaction")
        for line in invoice.lines:
            self._add_line(transaction, line, invoice)
        self._add_agreement(transaction, invoice)
        self._add_delivery(transaction, invoice)
        self._add_settlement(transaction, invoice)

        return etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=True)

    @staticmethod
    def _is(invoice: Invoice, level: Profile) -> bool:
        return invoice.profile >= level

    def _add(self, parent: etree._Element, tag: str, text: str | None = None, **attributes: str) -> etree._Element:
        element = etree.SubElement(parent, _qualify(tag))
        for name, value in attributes.items():
            element.set(name, value)
        if text is not None:
            element.text = text
        return element

    def _add_if(self, parent: etree._Element, tag: str, text: str) -> None:
        if text:
            self._add(parent, tag, text)

    def _add_date(self, parent: etree._Element, tag: str, value: date, data_type: str = "udt:DateTimeString") -> None:
        self._add(self._add(parent, tag), data_type, format_date(value), format="102")

    def _add_context(self, root: etree._Element, invoice: Invoice) -> None:
        context = self._add(root, "rsm:ExchangedDocumentContext")
        # BT-23 is mandatory in Extended
        if invoice.bp_specified or self._is(invoice, Profile.EXTENDED):
            process = self._add(context, "ram:BusinessProcessSpecifiedDocumentContextParameter")
            self._add(process, "ram:ID", invoice.bp_specified)
        guideline = self._add(context, "ram:GuidelineSpecifiedDocumentContextParameter")
        self._add(guideline, "ram:ID", invoice.guideline)

    def _add_exchanged_document(self, root: etree._Element, invoice: Invoice) -> None:
        document = self._add(root, "rsm:ExchangedDocument")
        self._add(document, "ram:ID", invoice.invoice_number)
        self._add(document, "ram:TypeCode", str(invoice.invoice_type_code))
        if invoice.invoice_date is not None:
            self._add_date(document, "ram:IssueDateTime", invoice.invoice_date)
        for note in invoice.notes:
            included = self._add(document, "ram:IncludedNote")
            self._add(included, "ram:Content", note.text)
            self._add_if(included, "ram:SubjectCode", note.subject_code)

    def _add_period(self, parent: etree._Element, start: date | None, end: date | None) -> None:
        # Never a synthetic zero date: each boundary only when it is set.
        if start is None and end is None:
            return
        period = self._add(parent, "ram:BillingSpecifiedPeriod")
        if start is not None:
            self._add_date(period, "ram:StartDateTime", start)
        if end is not None:
            self._add_date(period, "ram:EndDateTime", end)

    def _add_allowance_charge(self, parent: etree._Element, tag: str, ac: AllowanceCharge, with_tax: bool) -> None:
        element = self._add(parent, tag)
        self._add(self._add(element, "ram:ChargeIndicator"), "udt:Indicator", "true" if ac.charge_indicator else "false")
        if not ac.calculation_percent.is_zero():
            self._add(element, "ram:CalculationPercent", format_percent(ac.calculation_percent))
        if not ac.basis_amount.is_zero():
            self._add(element, "ram:BasisAmount", format_amount(ac.basis_amount))
        self._add(element, "ram:ActualAmount", format_amount(ac.actual_amount))
        self._add_if(element, "ram:ReasonCode", ac.reason_code)
        self._add_if(element, "ram:Reason", ac.reason)
        if with_tax:
            tax = self._add(element, "ram:CategoryTradeTax")
            self._add(tax, "ram:TypeCode", ac.tax_type_code or DEFAULT_TAX_TYPE)
            self._add(tax, "ram:CategoryCode", ac.tax_category_code)
            self._add(tax, "ram:RateApplicablePercent", format_percent(ac.tax_rate))

    def _add_line(self, transaction: etree._Element, line: InvoiceLine, invoice: Invoice) -> None:
        item = self._add(transaction, "ram:IncludedSupplyChainTradeLineItem")

        document = self._add(item, "ram:AssociatedDocumentLineDocument")
        self._add(document, "ram:LineID", line.line_id)
        if line.note:
            self._add(self._add(document, "ram:IncludedNote"), "ram:Content", line.note)

        product = self._add(item, "ram:SpecifiedTradeProduct")
        if line.global_id:
            self._add(product, "ram:GlobalID", line.global_id, schemeID=line.global_id_scheme)
        if self._is(invoice, Profile.EN16931):
            self._add_if(product, "ram:SellerAssignedID", line.seller_assigned_id)
            self._add_if(product, "ram:BuyerAssignedID", line.buyer_assigned_id)
        self._add(product, "ram:Name", line.item_name)
        self._add_if(product, "ram:Description", line.description)
        for characteristic in line.characteristics:
            element = self._add(product, "ram:ApplicableProductCharacteristic")
            self._add(element, "ram:Description", characteristic.description)
            self._add(element, "ram:Value", characteristic.value)
        for classification in line.classifications:
            element = self._add(product, "ram:DesignatedProductClassification")
            attributes = {}
            if classification.list_id:
                attributes["listID"] = classification.list_id
            if classification.list_version_id:
                attributes["listVersionID"] = classification.list_version_id
            self._add(element, "ram:ClassCode", classification.class_code, **attributes)
        if line.origin_country:
            self._add(self._add(product, "ram:OriginTradeCountry"), "ram:ID", line.origin_country)

        agreement = self._add(item, "ram:SpecifiedLineTradeAgreement")
        if line.buyer_order_line_id:
            order = self._add(agreement, "ram:BuyerOrderReferencedDocument")
            self._add(order, "ram:LineID", line.buyer_order_line_id)
        if not line.gross_price.is_zero() or line.price_allowance_charges:
            gross = self._add(agreement, "ram:GrossPriceProductTradePrice")
            self._add(gross, "ram:ChargeAmount", format_price(line.gross_price, 12))
            for ac in line.price_allowance_charges:
                self._add_allowance_charge(gross, "ram:AppliedTradeAllowanceCharge", ac, with_tax=False)
        net = self._add(agreement, "ram:NetPriceProductTradePrice")
        self._add(net, "ram:ChargeAmount", format_price(line.net_price, 4))
        if not line.basis_quantity.is_zero():
            attributes = {"unitCode": line.basis_quantity_unit} if line.basis_quantity_unit else {}
            self._add(net, "ram:BasisQuantity", format_quantity(line.basis_quantity), **attributes)

        delivery = self._add(item, "ram:SpecifiedLineTradeDelivery")
        self._add(
            delivery,
            "ram:BilledQuantity",
            format_quantity(line.billed_quantity),
            unitCode=line.billed_quantity_unit,
        )

        settlement = self._add(item, "ram:SpecifiedLineTradeSettlement")
        tax = self._add(settlement, "ram:ApplicableTradeTax")
        self._add(tax, "ram:TypeCode", line.tax_type_code or DEFAULT_TAX_TYPE)
        self._add(tax, "ram:CategoryCode", line.tax_category_code)
        self._add(tax, "ram:RateApplicablePercent", format_percent(line.tax_rate))
        self._add_period(settlement, line.billing_period_start, line.billing_period_end)
        for ac in [*line.allowances, *line.charges]:
            self._add_allowance_charge(
                settlement, "ram:SpecifiedTradeAllowanceCharge", ac, with_tax=bool(ac.tax_category_code)
            )
        summation = self._add(settlement, "ram:SpecifiedTradeSettlementLineMonetarySummation")
        self._add(summation, "ram:LineTotalAmount", format_amount(line.total))
        if line.object_id:
            reference = self._add(settlement, "ram:AdditionalReferencedDocument")
            self._add(reference, "ram:IssuerAssignedID", line.object_id)
            self._add(reference, "ram:TypeCode", INVOICED_OBJECT_TYPE_CODE)
            self._add_if(reference, "ram:ReferenceTypeCode", line.object_id_scheme)
        if line.accounting_reference:
            account = self._add(settlement, "ram:ReceivableSpecifiedTradeAccountingAccount")
            self._add(account, "ram:ID", line.accounting_reference)

    def _add_party(self, parent: etree._Element, tag: str, party: Party, invoice: Invoice, is_seller: bool) -> None:
        element = self._add(parent, tag)
        for party_id in party.ids:
            self._add(element, "ram:ID", party_id)
        for global_id in party.global_ids:
            self._add(element, "ram:GlobalID", global_id.id, schemeID=global_id.scheme)
        self._add_if(element, "ram:Name", party.name)
        self._add_if(element, "ram:Description", party.description)

        organization = party.legal_organization
        if organization is not None:
            legal = self._add(element, "ram:SpecifiedLegalOrganization")
            if organization.id:
                attributes = {"schemeID": organization.scheme} if organization.scheme else {}
                self._add(legal, "ram:ID", organization.id, **attributes)
            self._add_if(legal, "ram:TradingBusinessName", organization.trading_name)

        for contact in party.contacts:
            trade_contact = self._add(element, "ram:DefinedTradeContact")
            self._add_if(trade_contact, "ram:PersonName", contact.person_name)
            self._add_if(trade_contact, "ram:DepartmentName", contact.department)
            if contact.phone:
                phone = self._add(trade_contact, "ram:TelephoneUniversalCommunication")
                self._add(phone, "ram:CompleteNumber", contact.phone)
            if contact.email:
                email = self._add(trade_contact, "ram:EmailURIUniversalCommunication")
                self._add(email, "ram:URIID", contact.email)

        # Minimum has no buyer postal address (BG-8)
        address = party.postal_address
        if address is not None and (is_seller or self._is(invoice, Profile.BASIC)):
            postal = self._add(element, "ram:PostalTradeAddress")
            self._add_if(postal, "ram:PostcodeCode", address.postcode)
            self._add_if(postal, "ram:LineOne", address.line1)
            self._add_if(postal, "ram:LineTwo", address.line2)
            self._add_if(postal, "ram:LineThree", address.line3)
            self._add_if(postal, "ram:CityName", address.city)
            self._add_if(postal, "ram:CountryID", address.country_id)
            self._add_if(postal, "ram:CountrySubDivisionName", address.country_subdivision)

        if party.electronic_address:
            communication = self._add(element, "ram:URIUniversalCommunication")
            attributes = {"schemeID": party.electronic_address_scheme} if party.electronic_address_scheme else {}
            self._add(communication, "ram:URIID", party.electronic_address, **attributes)

        if party.fc_tax_id:
            self._add(self._add(element, "ram:SpecifiedTaxRegistration"), "ram:ID", party.fc_tax_id, schemeID="FC")
        if party.vat_id:
            self._add(self._add(element, "ram:SpecifiedTaxRegistration"), "ram:ID", party.vat_id, schemeID="VA")

    def _add_referenced_document(self, parent: etree._Element, tag: str, issuer_assigned_id: str) -> None:
        if issuer_assigned_id:
            self._add(self._add(parent, tag), "ram:IssuerAssignedID", issuer_assigned_id)

    def _add_agreement(self, transaction: etree._Element, invoice: Invoice) -> None:
        agreement = self._add(transaction, "ram:ApplicableHeaderTradeAgreement")
        self._add_if(agreement, "ram:BuyerReference", invoice.buyer_reference)
        self._add_party(agreement, "ram:SellerTradeParty", invoice.seller, invoice, is_seller=True)
        self._add_party(agreement, "ram:BuyerTradeParty", invoice.buyer, invoice, is_seller=False)
        if invoice.seller_tax_representative is not None:
            self._add_party(
                agreement,
                "ram:SellerTaxRepresentativeTradeParty",
                invoice.seller_tax_representative,
                invoice,
                is_seller=True,
            )
        self._add_referenced_document(agreement, "ram:SellerOrderReferencedDocument", invoice.seller_order_reference)
        self._add_referenced_document(agreement, "ram:BuyerOrderReferencedDocument", invoice.buyer_order_reference)
        self._add_referenced_document(agreement, "ram:ContractReferencedDocument", invoice.contract_reference)

        for document in invoice.additional_documents:
            reference = self._add(agreement, "ram:AdditionalReferencedDocument")
            self._add(reference, "ram:IssuerAssignedID", document.issuer_assigned_id)
            self._add_if(reference, "ram:URIID", document.uri_id)
            self._add(reference, "ram:TypeCode", document.type_code)
            self._add_if(reference, "ram:Name", document.name)
            if document.attachment:
                attributes = {}
                if document.attachment_mime_code:
                    attributes["mimeCode"] = document.attachment_mime_code
                if document.attachment_filename:
                    attributes["filename"] = document.attachment_filename
                encoded = base64.b64encode(document.attachment).decode("ascii")
                self._add(reference, "ram:AttachmentBinaryObject", encoded, **attributes)
            self._add_if(reference, "ram:ReferenceTypeCode", document.reference_type_code)

        if invoice.project_id:
            project = self._add(agreement, "ram:SpecifiedProcuringProject")
            self._add(project, "ram:ID", invoice.project_id)
            self._add(project, "ram:Name", invoice.project_name)

    def _add_delivery(self, transaction: etree._Element, invoice: Invoice) -> None:
        delivery = self._add(transaction, "ram:ApplicableHeaderTradeDelivery")
        if invoice.ship_to is not None:
            self._add_party(delivery, "ram:ShipToTradeParty", invoice.ship_to, invoice, is_seller=False)
        if invoice.occurrence_date is not None and self._is(invoice, Profile.BASIC):
            event = self._add(delivery, "ram:ActualDeliverySupplyChainEvent")
            self._add_date(event, "ram:OccurrenceDateTime", invoice.occurrence_date)
        self._add_referenced_document(delivery, "ram:DespatchAdviceReferencedDocument", invoice.despatch_advice_reference)
        self._add_referenced_document(
            delivery, "ram:ReceivingAdviceReferencedDocument", invoice.receiving_advice_reference
        )

    def _add_settlement(self, transaction: etree._Element, invoice: Invoice) -> None:
        settlement = self._add(transaction, "ram:ApplicableHeaderTradeSettlement")
        self._add_if(settlement, "ram:CreditorReferenceID", invoice.creditor_reference_id)
        self._add_if(settlement, "ram:PaymentReference", invoice.payment_reference)
        self._add_if(settlement, "ram:TaxCurrencyCode", invoice.tax_currency_code)
        self._add(settlement, "ram:InvoiceCurrencyCode", invoice.invoice_currency_code)
        if invoice.payee is not None:
            self._add_party(settlement, "ram:PayeeTradeParty", invoice.payee, invoice, is_seller=False)

        if self._is(invoice, Profile.BASIC_WL):
            for means in invoice.payment_means:
                self._add_payment_means(settlement, means)

        for trade_tax in invoice.trade_taxes:
            tax = self._add(settlement, "ram:ApplicableTradeTax")
            self._add(tax, "ram:CalculatedAmount", format_amount(trade_tax.calculated_amount))
            self._add(tax, "ram:TypeCode", trade_tax.type_code or DEFAULT_TAX_TYPE)
            self._add_if(tax, "ram:ExemptionReason", trade_tax.exemption_reason)
            self._add(tax, "ram:BasisAmount", format_amount(trade_tax.basis_amount))
            self._add(tax, "ram:CategoryCode", trade_tax.category_code)
            self._add_if(tax, "ram:ExemptionReasonCode", trade_tax.exemption_reason_code)
            if trade_tax.tax_point_date is not None:
                self._add_date(tax, "ram:TaxPointDate", trade_tax.tax_point_date, data_type="udt:DateString")
            self._add_if(tax, "ram:DueDateTypeCode", trade_tax.due_date_type_code)
            self._add(tax, "ram:RateApplicablePercent", format_percent(trade_tax.percent))

        self._add_period(settlement, invoice.billing_period_start, invoice.billing_period_end)

        for ac in invoice.allowance_charges:
            self._add_allowance_charge(settlement, "ram:SpecifiedTradeAllowanceCharge", ac, with_tax=True)

        for term in invoice.payment_terms:
            terms = self._add(settlement, "ram:SpecifiedTradePaymentTerms")
            self._add_if(terms, "ram:Description", term.description)
            if term.due_date is not None:
                self._add_date(terms, "ram:DueDateDateTime", term.due_date)
            self._add_if(terms, "ram:DirectDebitMandateID", term.direct_debit_mandate_id)

        self._add_monetary_summation(settlement, invoice)

        for reference in invoice.invoice_referenced_documents:
            document = self._add(settlement, "ram:InvoiceReferencedDocument")
            self._add(document, "ram:IssuerAssignedID", reference.id)
            if reference.issue_date is not None:
                self._add_date(
                    document, "ram:FormattedIssueDateTime", reference.issue_date, data_type="qdt:DateTimeString"
                )

        if invoice.receivable_accounting_account:
            account = self._add(settlement, "ram:ReceivableSpecifiedTradeAccountingAccount")
            self._add(account, "ram:ID", invoice.receivable_accounting_account)

    def _add_payment_means(self, settlement: etree._Element, means: PaymentMeans) -> None:
        element = self._add(settlement, "ram:SpecifiedTradeSettlementPaymentMeans")
        self._add(element, "ram:TypeCode", str(means.type_code))
        self._add_if(element, "ram:Information", means.information)
        if means.card_id:
            card = self._add(element, "ram:ApplicableTradeSettlementFinancialCard")
            self._add(card, "ram:ID", means.card_id)
            self._add_if(card, "ram:CardholderName", means.card_holder_name)
        if means.payer_iban:
            debtor = self._add(element, "ram:PayerPartyDebtorFinancialAccount")
            self._add(debtor, "ram:IBANID", means.payer_iban)
        if means.payee_iban or means.payee_proprietary_id or means.payee_account_name:
            account = self._add(element, "ram:PayeePartyCreditorFinancialAccount")
            self._add_if(account, "ram:IBANID", means.payee_iban)
            self._add_if(account, "ram:AccountName", means.payee_account_name)
            self._add_if(account, "ram:ProprietaryID", means.payee_proprietary_id)
        if means.payee_bic:
            institution = self._add(element, "ram:PayeeSpecifiedCreditorFinancialInstitution")
            self._add(institution, "ram:BICID", means.payee_bic)

    def _add_monetary_summation(self, settlement: etree._Element, invoice: Invoice) -> None:
        summation = self._add(settlement, "ram:SpecifiedTradeSettlementHeaderMonetarySummation")
        self._add(summation, "ram:LineTotalAmount", format_amount(invoice.line_total))
        if self._is(invoice, Profile.BASIC_WL):
            self._add(summation, "ram:ChargeTotalAmount", format_amount(invoice.charge_total))
            self._add(summation, "ram:AllowanceTotalAmount", format_amount(invoice.allowance_total))
        self._add(summation, "ram:TaxBasisTotalAmount", format_amount(invoice.tax_basis_total))

        # BT-110 in the invoice currency, BT-111 only when the VAT accounting currency differs
        self._add(
            summation, "ram:TaxTotalAmount", format_amount(invoice.tax_total), currencyID=invoice.invoice_currency_code
        )
        if invoice.tax_currency_code and invoice.tax_currency_code != invoice.invoice_currency_code:
            self._add(
                summation,
                "ram:TaxTotalAmount",
                format_amount(invoice.tax_total_accounting),
                currencyID=invoice.tax_currency_code,
            )

        if self._is(invoice, Profile.EN16931) and not invoice.rounding_amount.is_zero():
            self._add(summation, "ram:RoundingAmount", format_amount(invoice.rounding_amount))
        self._add(summation, "ram:GrandTotalAmount", format_amount(invoice.grand_total))
        if self._is(invoice, Profile.BASIC_WL):
            self._add(summation, "ram:TotalPrepaidAmount", format_amount(invoice.total_prepaid))
        self._add(summation, "ram:DuePayableAmount", format_amount(invoice.due_payable_amount))
