"""Cross Industry Invoice (ZUGFeRD / Factur-X / XRechnung CII) reader."""

import logging
import re
from datetime import date, datetime

from lxml import etree

from ..core.errors import InvalidDateError
from ..core.models import (
    AllowanceCharge,
    Characteristic,
    Classification,
    Contact,
    Document,
    GlobalID,
    Invoice,
    InvoiceLine,
    LegalOrganization,
    Note,
    Party,
    PaymentMeans,
    PaymentTerm,
    PostalAddress,
    ReferencedDocument,
    TradeTax,
)
from ..core.profiles import SchemaType
from .base import BaseParser

logger = logging.getLogger(__name__)

NS_RSM = "urn:un:unece:uncefact:data:standard:CrossIndustryInvoice:100"
NS_RAM = "urn:un:unece:uncefact:data:standard:ReusableAggregateBusinessInformationEntity:100"
NS_UDT = "urn:un:unece:uncefact:data:standard:UnqualifiedDataType:100"
NS_QDT = "urn:un:unece:uncefact:data:standard:QualifiedDataType:100"

CII_NAMESPACES = {"rsm": NS_RSM, "ram": NS_RAM, "udt": NS_UDT, "qdt": NS_QDT}

DATE_FORMAT_102 = "102"
INVOICED_OBJECT_TYPE_CODE = "130"


class CIIParser(BaseParser):
    """
    Read a ``rsm:CrossIndustryInvoice`` into the invoice model.

    The document is read top-down: context, exchanged document, then the
    supply chain trade transaction with its lines followed by the header
    agreement, delivery and settlement.
    """

    namespaces = CII_NAMESPACES
    date_pattern = re.compile(r"^\d{8}$")

    @property
    def format_name(self) -> str:
        return "CII"

    def parse(self, root: etree._Element) -> Invoice:
        invoice = Invoice(schema_type=SchemaType.CII)
        self._parse_context(self._node(root, "rsm:ExchangedDocumentContext"), invoice)
        self._parse_exchanged_document(self._node(root, "rsm:ExchangedDocument"), invoice)

        transaction = self._node(root, "rsm:SupplyChainTradeTransaction")
        for item in self._nodes(transaction, "ram:IncludedSupplyChainTradeLineItem"):
            invoice.lines.append(self._parse_line(item))
        self._parse_agreement(self._node(transaction, "ram:ApplicableHeaderTradeAgreement"), invoice)
        self._parse_delivery(self._node(transaction, "ram:ApplicableHeaderTradeDelivery"), invoice)
        self._parse_settlement(self._node(transaction, "ram:ApplicableHeaderTradeSettlement"), invoice)

        logger.debug(f"Read CII invoice {invoice.invoice_number} with {len(invoice.lines)} lines")
        return invoice

    def _parse_date_literal(self, value: str) -> date:
        return datetime.strptime(value, "%Y%m%d").date()

    def _date(self, node: etree._Element | None, path: str) -> date | None:
        # Only UNTDID 2379 format 102 (CCYYMMDD) is understood.
        date_format = self._text(node, f"{path}/@format")
        if date_format and date_format != DATE_FORMAT_102:
            raise InvalidDateError(self._text(node, path), path)
        return super()._date(node, path)

    def _parse_context(self, context: etree._Element | None, invoice: Invoice) -> None:
        invoice.guideline = self._text(context, "ram:GuidelineSpecifiedDocumentContextParameter/ram:ID")
        invoice.bp_specified = self._text(context, "ram:BusinessProcessSpecifiedDocumentContextParameter/ram:ID")

    def _parse_exchanged_document(self, document: etree._Element | None, invoice: Invoice) -> None:
        invoice.invoice_number = self._text(document, "ram:ID")
        invoice.invoice_type_code = self._int(document, "ram:TypeCode")
        invoice.invoice_date = self._date(document, "ram:IssueDateTime/udt:DateTimeString")
        for note in self._nodes(document, "ram:IncludedNote"):
            invoice.notes.append(
                Note(
                    subject_code=self._text(note, "ram:SubjectCode"),
                    text=self._text(note, "ram:Content"),
                )
            )

    def _parse_party(self, node: etree._Element) -> Party:
        """One routine for seller, buyer, payee, tax representative and ship-to."""
        party = Party(
            ids=self._texts(node, "ram:ID"),
            global_ids=[
                GlobalID(scheme=self._text(gid, "@schemeID"), id=self._text(gid, "."))
                for gid in self._nodes(node, "ram:GlobalID")
            ],
            name=self._text(node, "ram:Name"),
            description=self._text(node, "ram:Description"),
            electronic_address=self._text(node, "ram:URIUniversalCommunication/ram:URIID"),
            electronic_address_scheme=self._text(node, "ram:URIUniversalCommunication/ram:URIID/@schemeID"),
            fc_tax_id=self._text(node, "ram:SpecifiedTaxRegistration/ram:ID[@schemeID='FC']"),
            vat_id=self._text(node, "ram:SpecifiedTaxRegistration/ram:ID[@schemeID='VA']"),
        )

        organization = self._node(node, "ram:SpecifiedLegalOrganization")
        if organization is not None:
            party.legal_organization = LegalOrganization(
                id=self._text(organization, "ram:ID"),
                scheme=self._text(organization, "ram:ID/@schemeID"),
                trading_name=self._text(organization, "ram:TradingBusinessName"),
            )

        for contact in self._nodes(node, "ram:DefinedTradeContact"):
            party.contacts.append(
                Contact(
                    person_name=self._text(contact, "ram:PersonName"),
                    department=self._text(contact, "ram:DepartmentName"),
                    phone=self._text(contact, "ram:TelephoneUniversalCommunication/ram:CompleteNumber"),
                    email=self._text(contact, "ram:EmailURIUniversalCommunication/ram:URIID"),
                )
            )

        address = self._node(node, "ram:PostalTradeAddress")
        if address is not None:
            party.postal_address = PostalAddress(
                postcode=self._text(address, "ram:PostcodeCode"),
                line1=self._text(address, "ram:LineOne"),
                line2=self._text(address, "ram:LineTwo"),
                line3=self._text(address, "ram:LineThree"),
                city=self._text(address, "ram:CityName"),
                country_id=self._text(address, "ram:CountryID"),
                country_subdivision=self._text(address, "ram:CountrySubDivisionName"),
            )
        return party

    def _parse_optional_party(self, parent: etree._Element | None, path: str) -> Party | None:
        node = self._node(parent, path)
        return self._parse_party(node) if node is not None else None

    def _parse_allowance_charge(self, node: etree._Element) -> AllowanceCharge:
        return AllowanceCharge(
            charge_indicator=self._text(node, "ram:ChargeIndicator/udt:Indicator") == "true",
            calculation_percent=self._decimal(node, "ram:CalculationPercent"),
            basis_amount=self._decimal(node, "ram:BasisAmount"),
            actual_amount=self._decimal(node, "ram:ActualAmount"),
            reason_code=self._text(node, "ram:ReasonCode"),
            reason=self._text(node, "ram:Reason"),
            tax_type_code=self._text(node, "ram:CategoryTradeTax/ram:TypeCode"),
            tax_category_code=self._text(node, "ram:CategoryTradeTax/ram:CategoryCode"),
            tax_rate=self._decimal(node, "ram:CategoryTradeTax/ram:RateApplicablePercent"),
        )

    def _parse_line(self, item: etree._Element) -> InvoiceLine:
        line = InvoiceLine(
            line_id=self._text(item, "ram:AssociatedDocumentLineDocument/ram:LineID"),
            note=self._text(item, "ram:AssociatedDocumentLineDocument/ram:IncludedNote/ram:Content"),
        )

        product = self._node(item, "ram:SpecifiedTradeProduct")
        line.global_id = self._text(product, "ram:GlobalID")
        line.global_id_scheme = self._text(product, "ram:GlobalID/@schemeID")
        line.seller_assigned_id = self._text(product, "ram:SellerAssignedID")
        line.buyer_assigned_id = self._text(product, "ram:BuyerAssignedID")
        line.item_name = self._text(product, "ram:Name")
        line.description = self._text(product, "ram:Description")
        for characteristic in self._nodes(product, "ram:ApplicableProductCharacteristic"):
            line.characteristics.append(
                Characteristic(
                    description=self._text(characteristic, "ram:Description"),
                    value=self._text(characteristic, "ram:Value"),
                )
            )
        for classification in self._nodes(product, "ram:DesignatedProductClassification"):
            line.classifications.append(
                Classification(
                    class_code=self._text(classification, "ram:ClassCode"),
                    list_id=self._text(classification, "ram:ClassCode/@listID"),
                    list_version_id=self._text(classification, "ram:ClassCode/@listVersionID"),
                )
            )
        line.origin_country = self._text(product, "ram:OriginTradeCountry/ram:ID")

        agreement = self._node(item, "ram:SpecifiedLineTradeAgreement")
        line.buyer_order_line_id = self._text(agreement, "ram:BuyerOrderReferencedDocument/ram:LineID")
        line.gross_price = self._decimal(agreement, "ram:GrossPriceProductTradePrice/ram:ChargeAmount")
        line.price_allowance_charges = [
            self._parse_allowance_charge(node)
            for node in self._nodes(agreement, "ram:GrossPriceProductTradePrice/ram:AppliedTradeAllowanceCharge")
        ]
        line.net_price_present = self._exists(agreement, "ram:NetPriceProductTradePrice/ram:ChargeAmount")
        line.net_price = self._decimal(agreement, "ram:NetPriceProductTradePrice/ram:ChargeAmount")
        line.basis_quantity = self._decimal(agreement, "ram:NetPriceProductTradePrice/ram:BasisQuantity")
        line.basis_quantity_unit = self._text(agreement, "ram:NetPriceProductTradePrice/ram:BasisQuantity/@unitCode")

        line.billed_quantity = self._decimal(item, "ram:SpecifiedLineTradeDelivery/ram:BilledQuantity")
        line.billed_quantity_unit = self._text(item, "ram:SpecifiedLineTradeDelivery/ram:BilledQuantity/@unitCode")

        settlement = self._node(item, "ram:SpecifiedLineTradeSettlement")
        line.tax_type_code = self._text(settlement, "ram:ApplicableTradeTax/ram:TypeCode")
        line.tax_category_code = self._text(settlement, "ram:ApplicableTradeTax/ram:CategoryCode")
        line.tax_rate = self._decimal(settlement, "ram:ApplicableTradeTax/ram:RateApplicablePercent")

        line.billing_period_present = self._exists(settlement, "ram:BillingSpecifiedPeriod")
        line.billing_period_start = self._date(
            settlement, "ram:BillingSpecifiedPeriod/ram:StartDateTime/udt:DateTimeString"
        )
        line.billing_period_end = self._date(settlement, "ram:BillingSpecifiedPeriod/ram:EndDateTime/udt:DateTimeString")

        for node in self._nodes(settlement, "ram:SpecifiedTradeAllowanceCharge"):
            allowance_charge = self._parse_allowance_charge(node)
            if allowance_charge.charge_indicator:
                line.charges.append(allowance_charge)
            else:
                line.allowances.append(allowance_charge)

        summation = "ram:SpecifiedTradeSettlementLineMonetarySummation/ram:LineTotalAmount"
        line.total_present = self._exists(settlement, summation)
        line.total = self._decimal(settlement, summation)

        for document in self._nodes(settlement, "ram:AdditionalReferencedDocument"):
            if self._text(document, "ram:TypeCode") == INVOICED_OBJECT_TYPE_CODE:
                line.object_id = self._text(document, "ram:IssuerAssignedID")
                line.object_id_scheme = self._text(document, "ram:ReferenceTypeCode")
        line.accounting_reference = self._text(settlement, "ram:ReceivableSpecifiedTradeAccountingAccount/ram:ID")
        return line

    def _parse_agreement(self, agreement: etree._Element | None, invoice: Invoice) -> None:
        invoice.buyer_reference = self._text(agreement, "ram:BuyerReference")
        invoice.seller = self._parse_optional_party(agreement, "ram:SellerTradeParty") or Party()
        invoice.buyer = self._parse_optional_party(agreement, "ram:BuyerTradeParty") or Party()
        invoice.seller_tax_representative = self._parse_optional_party(
            agreement, "ram:SellerTaxRepresentativeTradeParty"
        )
        invoice.seller_order_reference = self._text(agreement, "ram:SellerOrderReferencedDocument/ram:IssuerAssignedID")
        invoice.buyer_order_reference = self._text(agreement, "ram:BuyerOrderReferencedDocument/ram:IssuerAssignedID")
        invoice.contract_reference = self._text(agreement, "ram:ContractReferencedDocument/ram:IssuerAssignedID")

        for node in self._nodes(agreement, "ram:AdditionalReferencedDocument"):
            invoice.additional_documents.append(
                Document(
                    issuer_assigned_id=self._text(node, "ram:IssuerAssignedID"),
                    uri_id=self._text(node, "ram:URIID"),
                    type_code=self._text(node, "ram:TypeCode"),
                    name=self._text(node, "ram:Name"),
                    attachment=self._binary(node, "ram:AttachmentBinaryObject"),
                    attachment_mime_code=self._text(node, "ram:AttachmentBinaryObject/@mimeCode"),
                    attachment_filename=self._text(node, "ram:AttachmentBinaryObject/@filename"),
                    reference_type_code=self._text(node, "ram:ReferenceTypeCode"),
                )
            )

        invoice.project_id = self._text(agreement, "ram:SpecifiedProcuringProject/ram:ID")
        invoice.project_name = self._text(agreement, "ram:SpecifiedProcuringProject/ram:Name")

    def _parse_delivery(self, delivery: etree._Element | None, invoice: Invoice) -> None:
        invoice.ship_to = self._parse_optional_party(delivery, "ram:ShipToTradeParty")
        invoice.occurrence_date = self._date(
            delivery, "ram:ActualDeliverySupplyChainEvent/ram:OccurrenceDateTime/udt:DateTimeString"
        )
        invoice.despatch_advice_reference = self._text(
            delivery, "ram:DespatchAdviceReferencedDocument/ram:IssuerAssignedID"
        )
        invoice.receiving_advice_reference = self._text(
            delivery, "ram:ReceivingAdviceReferencedDocument/ram:IssuerAssignedID"
        )

    def _parse_settlement(self, settlement: etree._Element | None, invoice: Invoice) -> None:
        invoice.creditor_reference_id = self._text(settlement, "ram:CreditorReferenceID")
        invoice.payment_reference = self._text(settlement, "ram:PaymentReference")
        invoice.tax_currency_code = self._text(settlement, "ram:TaxCurrencyCode")
        invoice.invoice_currency_code = self._text(settlement, "ram:InvoiceCurrencyCode")
        invoice.payee = self._parse_optional_party(settlement, "ram:PayeeTradeParty")

        for node in self._nodes(settlement, "ram:SpecifiedTradeSettlementPaymentMeans"):
            invoice.payment_means.append(
                PaymentMeans(
                    type_code=self._int(node, "ram:TypeCode"),
                    information=self._text(node, "ram:Information"),
                    payee_iban=self._text(node, "ram:PayeePartyCreditorFinancialAccount/ram:IBANID"),
                    payee_account_name=self._text(node, "ram:PayeePartyCreditorFinancialAccount/ram:AccountName"),
                    payee_proprietary_id=self._text(node, "ram:PayeePartyCreditorFinancialAccount/ram:ProprietaryID"),
                    payee_bic=self._text(node, "ram:PayeeSpecifiedCreditorFinancialInstitution/ram:BICID"),
                    payer_iban=self._text(node, "ram:PayerPartyDebtorFinancialAccount/ram:IBANID"),
                    card_id=self._text(node, "ram:ApplicableTradeSettlementFinancialCard/ram:ID"),
                    card_holder_name=self._text(node, "ram:ApplicableTradeSettlementFinancialCard/ram:CardholderName"),
                )
            )

        for node in self._nodes(settlement, "ram:ApplicableTradeTax"):
            invoice.trade_taxes.append(
                TradeTax(
                    type_code=self._text(node, "ram:TypeCode"),
                    category_code=self._text(node, "ram:CategoryCode"),
                    percent=self._decimal(node, "ram:RateApplicablePercent"),
                    basis_amount=self._decimal(node, "ram:BasisAmount"),
                    calculated_amount=self._decimal(node, "ram:CalculatedAmount"),
                    exemption_reason=self._text(node, "ram:ExemptionReason"),
                    exemption_reason_code=self._text(node, "ram:ExemptionReasonCode"),
                    tax_point_date=self._date(node, "ram:TaxPointDate/udt:DateString"),
                    due_date_type_code=self._text(node, "ram:DueDateTypeCode"),
                )
            )

        invoice.billing_period_present = self._exists(settlement, "ram:BillingSpecifiedPeriod")
        invoice.billing_period_start = self._date(
            settlement, "ram:BillingSpecifiedPeriod/ram:StartDateTime/udt:DateTimeString"
        )
        invoice.billing_period_end = self._date(
            settlement, "ram:BillingSpecifiedPeriod/ram:EndDateTime/udt:DateTimeString"
        )

        invoice.allowance_charges = [
            self._parse_allowance_charge(node) for node in self._nodes(settlement, "ram:SpecifiedTradeAllowanceCharge")
        ]

        for node in self._nodes(settlement, "ram:SpecifiedTradePaymentTerms"):
            invoice.payment_terms.append(
                PaymentTerm(
                    description=self._text(node, "ram:Description"),
                    due_date=self._date(node, "ram:DueDateDateTime/udt:DateTimeString"),
                    direct_debit_mandate_id=self._text(node, "ram:DirectDebitMandateID"),
                )
            )

        self._parse_monetary_summation(
            self._node(settlement, "ram:SpecifiedTradeSettlementHeaderMonetarySummation"), invoice
        )

        for node in self._nodes(settlement, "ram:InvoiceReferencedDocument"):
            invoice.invoice_referenced_documents.append(
                ReferencedDocument(
                    id=self._text(node, "ram:IssuerAssignedID"),
                    issue_date=self._date(node, "ram:FormattedIssueDateTime/qdt:DateTimeString"),
                )
            )
        invoice.receivable_accounting_account = self._text(
            settlement, "ram:ReceivableSpecifiedTradeAccountingAccount/ram:ID"
        )

    def _parse_monetary_summation(self, summation: etree._Element | None, invoice: Invoice) -> None:
        invoice.line_total_present = self._exists(summation, "ram:LineTotalAmount")
        invoice.tax_basis_total_present = self._exists(summation, "ram:TaxBasisTotalAmount")
        invoice.grand_total_present = self._exists(summation, "ram:GrandTotalAmount")
        invoice.due_payable_amount_present = self._exists(summation, "ram:DuePayableAmount")

        invoice.line_total = self._decimal(summation, "ram:LineTotalAmount")
        invoice.charge_total = self._decimal(summation, "ram:ChargeTotalAmount")
        invoice.allowance_total = self._decimal(summation, "ram:AllowanceTotalAmount")
        invoice.tax_basis_total = self._decimal(summation, "ram:TaxBasisTotalAmount")
        invoice.rounding_amount = self._decimal(summation, "ram:RoundingAmount")
        invoice.grand_total = self._decimal(summation, "ram:GrandTotalAmount")
        invoice.total_prepaid = self._decimal(summation, "ram:TotalPrepaidAmount")
        invoice.due_payable_amount = self._decimal(summation, "ram:DuePayableAmount")

        # Tax totals are bound by currency: BT-110 in the invoice currency, BT-111 in the VAT accounting currency.
        for position, node in enumerate(self._nodes(summation, "ram:TaxTotalAmount"), start=1):
            path = f"ram:TaxTotalAmount[{position}]"
            currency = self._text(node, "@currencyID") or invoice.invoice_currency_code
            amount = self._decimal(summation, path)
            if currency == invoice.invoice_currency_code:
                invoice.tax_total = amount
            elif invoice.tax_currency_code and currency == invoice.tax_currency_code:
                invoice.tax_total_accounting = amount
            else:
                logger.warning(f"Tax total in unexpected currency {currency} on invoice {invoice.invoice_number}")
                invoice.unexpected_tax_currencies.append(currency)
