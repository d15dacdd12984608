"""UBL 2.1 Invoice and CreditNote reader."""

import logging

from lxml import etree

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

NS_UBL_INVOICE = "urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"
NS_UBL_CREDIT_NOTE = "urn:oasis:names:specification:ubl:schema:xsd:CreditNote-2"
NS_UBL_CAC = "urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
NS_UBL_CBC = "urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2"

UBL_NAMESPACES = {
    "inv": NS_UBL_INVOICE,
    "cn": NS_UBL_CREDIT_NOTE,
    "cac": NS_UBL_CAC,
    "cbc": NS_UBL_CBC,
}

TAX_SCHEME_VAT = "VAT"
TAX_SCHEME_FC = "FC"


class UBLParser(BaseParser):
    """
    Read a UBL ``Invoice`` or ``CreditNote`` into the invoice model.

    Credit notes differ only in the line container (``CreditNoteLine`` with
    ``CreditedQuantity``) and the type code element.
    """

    namespaces = UBL_NAMESPACES

    @property
    def format_name(self) -> str:
        return "UBL"

    def parse(self, root: etree._Element) -> Invoice:
        is_credit_note = etree.QName(root).localname == "CreditNote"
        invoice = Invoice(schema_type=SchemaType.UBL)

        self._parse_header(root, invoice)
        self._parse_parties(root, invoice)
        self._parse_delivery(root, invoice)
        invoice.allowance_charges = [
            self._parse_allowance_charge(node) for node in self._nodes(root, "cac:AllowanceCharge")
        ]
        self._parse_tax_totals(root, invoice)
        self._parse_monetary_total(self._node(root, "cac:LegalMonetaryTotal"), invoice)
        self._parse_payment_means(root, invoice)
        self._parse_payment_terms(root, invoice)

        if is_credit_note:
            line_path, quantity_path = "cac:CreditNoteLine", "cbc:CreditedQuantity"
        else:
            line_path, quantity_path = "cac:InvoiceLine", "cbc:InvoicedQuantity"
        for node in self._nodes(root, line_path):
            invoice.lines.append(self._parse_line(node, quantity_path))

        logger.debug(
            f"Read UBL {'credit note' if is_credit_note else 'invoice'} {invoice.invoice_number} "
            f"with {len(invoice.lines)} lines"
        )
        return invoice

    def _parse_header(self, root: etree._Element, invoice: Invoice) -> None:
        invoice.guideline = self._text(root, "cbc:CustomizationID")
        invoice.bp_specified = self._text(root, "cbc:ProfileID")
        invoice.invoice_number = self._text(root, "cbc:ID")
        invoice.invoice_type_code = self._int(root, "cbc:InvoiceTypeCode") or self._int(root, "cbc:CreditNoteTypeCode")
        invoice.invoice_date = self._date(root, "cbc:IssueDate")
        invoice.invoice_currency_code = self._text(root, "cbc:DocumentCurrencyCode")
        invoice.tax_currency_code = self._text(root, "cbc:TaxCurrencyCode")
        invoice.buyer_reference = self._text(root, "cbc:BuyerReference")
        invoice.receivable_accounting_account = self._text(root, "cbc:AccountingCost")
        invoice.buyer_order_reference = self._text(root, "cac:OrderReference/cbc:ID")
        invoice.seller_order_reference = self._text(root, "cac:OrderReference/cbc:SalesOrderID")
        invoice.contract_reference = self._text(root, "cac:ContractDocumentReference/cbc:ID")
        invoice.project_id = self._text(root, "cac:ProjectReference/cbc:ID")
        invoice.despatch_advice_reference = self._text(root, "cac:DespatchDocumentReference/cbc:ID")
        invoice.receiving_advice_reference = self._text(root, "cac:ReceiptDocumentReference/cbc:ID")

        invoice.notes = [Note(text=text) for text in self._texts(root, "cbc:Note")]

        for node in self._nodes(root, "cac:BillingReference/cac:InvoiceDocumentReference"):
            invoice.invoice_referenced_documents.append(
                ReferencedDocument(id=self._text(node, "cbc:ID"), issue_date=self._date(node, "cbc:IssueDate"))
            )

        invoice.billing_period_present = self._exists(root, "cac:InvoicePeriod")
        invoice.billing_period_start = self._date(root, "cac:InvoicePeriod/cbc:StartDate")
        invoice.billing_period_end = self._date(root, "cac:InvoicePeriod/cbc:EndDate")

        for node in self._nodes(root, "cac:AdditionalDocumentReference"):
            invoice.additional_documents.append(
                Document(
                    issuer_assigned_id=self._text(node, "cbc:ID"),
                    type_code=self._text(node, "cbc:DocumentTypeCode"),
                    name=self._text(node, "cbc:DocumentDescription"),
                    uri_id=self._text(node, "cac:Attachment/cac:ExternalReference/cbc:URI"),
                    attachment=self._binary(node, "cac:Attachment/cbc:EmbeddedDocumentBinaryObject"),
                    attachment_mime_code=self._text(node, "cac:Attachment/cbc:EmbeddedDocumentBinaryObject/@mimeCode"),
                    attachment_filename=self._text(node, "cac:Attachment/cbc:EmbeddedDocumentBinaryObject/@filename"),
                    reference_type_code=self._text(node, "cbc:ID/@schemeID"),
                )
            )

    def _parse_address(self, node: etree._Element) -> PostalAddress:
        return PostalAddress(
            line1=self._text(node, "cbc:StreetName"),
            line2=self._text(node, "cbc:AdditionalStreetName"),
            line3=self._text(node, "cac:AddressLine/cbc:Line"),
            city=self._text(node, "cbc:CityName"),
            postcode=self._text(node, "cbc:PostalZone"),
            country_subdivision=self._text(node, "cbc:CountrySubentity"),
            country_id=self._text(node, "cac:Country/cbc:IdentificationCode"),
        )

    def _parse_party(self, node: etree._Element) -> Party:
        party = Party(
            electronic_address=self._text(node, "cbc:EndpointID"),
            electronic_address_scheme=self._text(node, "cbc:EndpointID/@schemeID"),
            # BT-27 lives in the legal entity when no trading name is given.
            name=self._text(node, "cac:PartyName/cbc:Name")
            or self._text(node, "cac:PartyLegalEntity/cbc:RegistrationName"),
        )

        for identification in self._nodes(node, "cac:PartyIdentification"):
            value = self._text(identification, "cbc:ID")
            scheme = self._text(identification, "cbc:ID/@schemeID")
            if scheme:
                party.global_ids.append(GlobalID(scheme=scheme, id=value))
            else:
                party.ids.append(value)

        address = self._node(node, "cac:PostalAddress")
        if address is not None:
            party.postal_address = self._parse_address(address)

        legal_entity = self._node(node, "cac:PartyLegalEntity")
        if legal_entity is not None:
            party.legal_organization = LegalOrganization(
                id=self._text(legal_entity, "cbc:CompanyID"),
                scheme=self._text(legal_entity, "cbc:CompanyID/@schemeID"),
                # BT-27 registration name, not the PartyName/Name trading name (BT-28)
                trading_name=self._text(legal_entity, "cbc:RegistrationName"),
            )
            party.description = self._text(legal_entity, "cbc:CompanyLegalForm")

        for tax_scheme in self._nodes(node, "cac:PartyTaxScheme"):
            tax_id = self._text(tax_scheme, "cbc:CompanyID")
            scheme = self._text(tax_scheme, "cac:TaxScheme/cbc:ID")
            if scheme == TAX_SCHEME_VAT:
                party.vat_id = tax_id
            elif scheme == TAX_SCHEME_FC:
                party.fc_tax_id = tax_id

        for contact in self._nodes(node, "cac:Contact"):
            party.contacts.append(
                Contact(
                    person_name=self._text(contact, "cbc:Name"),
                    phone=self._text(contact, "cbc:Telephone"),
                    email=self._text(contact, "cbc:ElectronicMail"),
                )
            )
        return party

    def _parse_parties(self, root: etree._Element, invoice: Invoice) -> None:
        seller = self._node(root, "cac:AccountingSupplierParty/cac:Party")
        buyer = self._node(root, "cac:AccountingCustomerParty/cac:Party")
        invoice.seller = self._parse_party(seller) if seller is not None else Party()
        invoice.buyer = self._parse_party(buyer) if buyer is not None else Party()

        payee = self._node(root, "cac:PayeeParty")
        if payee is not None:
            invoice.payee = self._parse_party(payee)
        representative = self._node(root, "cac:TaxRepresentativeParty")
        if representative is not None:
            invoice.seller_tax_representative = self._parse_party(representative)

    def _parse_delivery(self, root: etree._Element, invoice: Invoice) -> None:
        delivery = self._node(root, "cac:Delivery")
        invoice.occurrence_date = self._date(delivery, "cbc:ActualDeliveryDate")
        if delivery is None:
            return

        party = self._node(delivery, "cac:DeliveryParty")
        location = self._node(delivery, "cac:DeliveryLocation")
        if party is not None:
            invoice.ship_to = self._parse_party(party)
        elif location is not None:
            ship_to = Party()
            address = self._node(location, "cac:Address")
            if address is not None:
                ship_to.postal_address = self._parse_address(address)
            invoice.ship_to = ship_to

    def _parse_allowance_charge(self, node: etree._Element) -> AllowanceCharge:
        return AllowanceCharge(
            charge_indicator=self._text(node, "cbc:ChargeIndicator") == "true",
            calculation_percent=self._decimal(node, "cbc:MultiplierFactorNumeric"),
            basis_amount=self._decimal(node, "cbc:BaseAmount"),
            actual_amount=self._decimal(node, "cbc:Amount"),
            reason_code=self._text(node, "cbc:AllowanceChargeReasonCode"),
            reason=self._text(node, "cbc:AllowanceChargeReason"),
            tax_type_code=self._text(node, "cac:TaxCategory/cac:TaxScheme/cbc:ID"),
            tax_category_code=self._text(node, "cac:TaxCategory/cbc:ID"),
            tax_rate=self._decimal(node, "cac:TaxCategory/cbc:Percent"),
        )

    def _parse_tax_totals(self, root: etree._Element, invoice: Invoice) -> None:
        # Bound by currency, never by position.
        for position, node in enumerate(self._nodes(root, "cac:TaxTotal"), start=1):
            currency = self._text(node, "cbc:TaxAmount/@currencyID") or invoice.invoice_currency_code
            amount = self._decimal(root, f"cac:TaxTotal[{position}]/cbc:TaxAmount")
            if currency == invoice.invoice_currency_code:
                invoice.tax_total = amount
            elif invoice.tax_currency_code and currency == invoice.tax_currency_code:
                invoice.tax_total_accounting = amount
            else:
                logger.warning(f"Tax total in unexpected currency {currency} on invoice {invoice.invoice_number}")
                invoice.unexpected_tax_currencies.append(currency)

        for node in self._nodes(root, "cac:TaxTotal/cac:TaxSubtotal"):
            invoice.trade_taxes.append(
                TradeTax(
                    type_code=self._text(node, "cac:TaxCategory/cac:TaxScheme/cbc:ID") or TAX_SCHEME_VAT,
                    category_code=self._text(node, "cac:TaxCategory/cbc:ID"),
                    percent=self._decimal(node, "cac:TaxCategory/cbc:Percent"),
                    basis_amount=self._decimal(node, "cbc:TaxableAmount"),
                    calculated_amount=self._decimal(node, "cbc:TaxAmount"),
                    exemption_reason=self._text(node, "cac:TaxCategory/cbc:TaxExemptionReason"),
                    exemption_reason_code=self._text(node, "cac:TaxCategory/cbc:TaxExemptionReasonCode"),
                )
            )

    def _parse_monetary_total(self, total: etree._Element | None, invoice: Invoice) -> None:
        invoice.line_total_present = self._exists(total, "cbc:LineExtensionAmount")
        invoice.tax_basis_total_present = self._exists(total, "cbc:TaxExclusiveAmount")
        invoice.grand_total_present = self._exists(total, "cbc:TaxInclusiveAmount")
        invoice.due_payable_amount_present = self._exists(total, "cbc:PayableAmount")

        invoice.line_total = self._decimal(total, "cbc:LineExtensionAmount")
        invoice.allowance_total = self._decimal(total, "cbc:AllowanceTotalAmount")
        invoice.charge_total = self._decimal(total, "cbc:ChargeTotalAmount")
        invoice.tax_basis_total = self._decimal(total, "cbc:TaxExclusiveAmount")
        invoice.grand_total = self._decimal(total, "cbc:TaxInclusiveAmount")
        invoice.total_prepaid = self._decimal(total, "cbc:PrepaidAmount")
        invoice.rounding_amount = self._decimal(total, "cbc:PayableRoundingAmount")
        invoice.due_payable_amount = self._decimal(total, "cbc:PayableAmount")

    def _parse_payment_means(self, root: etree._Element, invoice: Invoice) -> None:
        for node in self._nodes(root, "cac:PaymentMeans"):
            payment_id = self._text(node, "cbc:PaymentID")
            if payment_id:
                invoice.payment_reference = payment_id
            invoice.payment_means.append(
                PaymentMeans(
                    type_code=self._int(node, "cbc:PaymentMeansCode"),
                    information=self._text(node, "cbc:InstructionNote"),
                    payee_iban=self._text(node, "cac:PayeeFinancialAccount/cbc:ID"),
                    payee_account_name=self._text(node, "cac:PayeeFinancialAccount/cbc:Name"),
                    payee_bic=self._text(node, "cac:PayeeFinancialAccount/cac:FinancialInstitutionBranch/cbc:ID"),
                    card_id=self._text(node, "cac:CardAccount/cbc:PrimaryAccountNumberID"),
                    card_holder_name=self._text(node, "cac:CardAccount/cbc:HolderName"),
                    payer_iban=self._text(node, "cac:PaymentMandate/cac:PayerFinancialAccount/cbc:ID"),
                )
            )

    def _parse_payment_terms(self, root: etree._Element, invoice: Invoice) -> None:
        # BT-9 sits on the document root in UBL.
        due_date = self._date(root, "cbc:DueDate")
        terms = self._nodes(root, "cac:PaymentTerms")
        for node in terms:
            invoice.payment_terms.append(
                PaymentTerm(
                    description=self._text(node, "cbc:Note"),
                    due_date=self._date(node, "cbc:PaymentDueDate") or due_date,
                    direct_debit_mandate_id=self._text(node, "cbc:PaymentMeansID"),
                )
            )
        if not terms and due_date is not None:
            invoice.payment_terms.append(PaymentTerm(due_date=due_date))

    def _parse_line(self, node: etree._Element, quantity_path: str) -> InvoiceLine:
        line = InvoiceLine(
            line_id=self._text(node, "cbc:ID"),
            note=self._text(node, "cbc:Note"),
            object_id=self._text(node, "cac:DocumentReference/cbc:ID"),
            object_id_scheme=self._text(node, "cac:DocumentReference/cbc:ID/@schemeID"),
            buyer_order_line_id=self._text(node, "cac:OrderLineReference/cbc:LineID"),
            accounting_reference=self._text(node, "cbc:AccountingCost"),
            billed_quantity=self._decimal(node, quantity_path),
            billed_quantity_unit=self._text(node, f"{quantity_path}/@unitCode"),
            total_present=self._exists(node, "cbc:LineExtensionAmount"),
            total=self._decimal(node, "cbc:LineExtensionAmount"),
            billing_period_present=self._exists(node, "cac:InvoicePeriod"),
            billing_period_start=self._date(node, "cac:InvoicePeriod/cbc:StartDate"),
            billing_period_end=self._date(node, "cac:InvoicePeriod/cbc:EndDate"),
        )

        for allowance_charge in map(self._parse_allowance_charge, self._nodes(node, "cac:AllowanceCharge")):
            if allowance_charge.charge_indicator:
                line.charges.append(allowance_charge)
            else:
                line.allowances.append(allowance_charge)

        item = self._node(node, "cac:Item")
        line.item_name = self._text(item, "cbc:Name")
        line.description = self._text(item, "cbc:Description")
        line.seller_assigned_id = self._text(item, "cac:SellersItemIdentification/cbc:ID")
        line.buyer_assigned_id = self._text(item, "cac:BuyersItemIdentification/cbc:ID")
        line.global_id = self._text(item, "cac:StandardItemIdentification/cbc:ID")
        line.global_id_scheme = self._text(item, "cac:StandardItemIdentification/cbc:ID/@schemeID")
        line.origin_country = self._text(item, "cac:OriginCountry/cbc:IdentificationCode")
        for classification in self._nodes(item, "cac:CommodityClassification"):
            line.classifications.append(
                Classification(
                    class_code=self._text(classification, "cbc:ItemClassificationCode"),
                    list_id=self._text(classification, "cbc:ItemClassificationCode/@listID"),
                    list_version_id=self._text(classification, "cbc:ItemClassificationCode/@listVersionID"),
                )
            )
        for attribute in self._nodes(item, "cac:AdditionalItemProperty"):
            line.characteristics.append(
                Characteristic(description=self._text(attribute, "cbc:Name"), value=self._text(attribute, "cbc:Value"))
            )

        tax_category = self._node(item, "cac:ClassifiedTaxCategory")
        line.tax_type_code = self._text(tax_category, "cac:TaxScheme/cbc:ID") or TAX_SCHEME_VAT
        line.tax_category_code = self._text(tax_category, "cbc:ID")
        line.tax_rate = self._decimal(tax_category, "cbc:Percent")

        price = self._node(node, "cac:Price")
        line.net_price_present = self._exists(price, "cbc:PriceAmount")
        line.net_price = self._decimal(price, "cbc:PriceAmount")
        line.basis_quantity = self._decimal(price, "cbc:BaseQuantity")
        line.basis_quantity_unit = self._text(price, "cbc:BaseQuantity/@unitCode")
        line.price_allowance_charges = [
            self._parse_allowance_charge(ac) for ac in self._nodes(price, "cac:AllowanceCharge")
        ]
        # UBL has no gross price element; the price discount's base amount carries BT-148.
        if line.price_allowance_charges:
            line.gross_price = line.price_allowance_charges[0].basis_amount
        return line
