"""Static document-type table: type id -> display name, folder, milestone."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

OTHER = "other"


@dataclass(frozen=True)
class DocumentTypeInfo:
    id: str
    name: str
    folder: str
    milestone: str


def _info(type_id: str, name: str, folder: str, milestone: str) -> tuple[str, DocumentTypeInfo]:
    return type_id, DocumentTypeInfo(id=type_id, name=name, folder=folder, milestone=milestone)


DOCUMENT_TYPES: Mapping[str, DocumentTypeInfo] = MappingProxyType(dict([
    _info("nric_front", "NRIC Front", "NRIC", "test_drive"),
    _info("nric_back", "NRIC Back", "NRIC", "test_drive"),
    _info("nric", "NRIC (Combined)", "NRIC", "test_drive"),
    _info("driving_license", "Driving License", "Driving License", "test_drive"),
    _info("driving_license_front", "Driving License Front", "Driving License", "test_drive"),
    _info("driving_license_back", "Driving License Back", "Driving License", "test_drive"),
    _info("test_drive_form", "Test Drive Form", "Test Drive", "test_drive"),
    _info("vsa", "Vehicle Sales Agreement", "VSA", "close_deal"),
    _info("pdpa", "PDPA Consent Form", "PDPA", "close_deal"),
    _info("loan_approval", "Loan Approval Letter", "Finance", "close_deal"),
    _info("loan_application", "Loan Application", "Finance", "close_deal"),
    _info("insurance_quote", "Insurance Quote", "Insurance", "registration"),
    _info("insurance_policy", "Insurance Policy", "Insurance", "registration"),
    _info("insurance_acceptance", "Insurance Acceptance", "Insurance", "registration"),
    _info("insurance_cancellation", "Insurance Cancellation", "Insurance", "delivery"),
    _info("payment_proof", "Payment Proof", "Payments", "registration"),
    _info("delivery_checklist", "Delivery Checklist", "Delivery", "delivery"),
    _info("registration_card", "Registration Card", "Registration", "delivery"),
    _info("trade_in_docs", "Trade-in Documents", "Trade-In", "close_deal"),
    _info("coe_bidding", "COE Bidding Form", "COE", "close_deal"),
    _info("purchase_agreement", "Purchase Agreement", "Trade-In", "close_deal"),
    _info("parf_rebate", "PARF/COE Rebate", "Trade-In", "close_deal"),
    _info("authorized_letter", "Authorized Letter", "Other", "close_deal"),
    _info("proposal_form", "Proposal Form", "VSA", "close_deal"),
    _info("price_list", "Price List", "Other", "test_drive"),
    _info("id_documents", "ID Documents (Multiple)", "ID Documents", "test_drive"),
    _info(OTHER, "Other Document", "Other", "test_drive"),
]))


def is_known_document_type(type_id: str) -> bool:
    return type_id in DOCUMENT_TYPES


def resolve_document_type(type_id: str | None) -> DocumentTypeInfo:
    """Return table entry for type_id; unknown or empty ids resolve to 'other'."""
    if not type_id:
        return DOCUMENT_TYPES[OTHER]
    return DOCUMENT_TYPES.get(type_id, DOCUMENT_TYPES[OTHER])


def available_document_types() -> list[tuple[str, str]]:
    """(id, display name) pairs in table order, for type pickers."""
    return [(info.id, info.name) for info in DOCUMENT_TYPES.values()]
