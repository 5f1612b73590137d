"""Match extracted document fields against a caller-supplied customer list."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

AUTO_ATTACH_SIMILARITY = 0.95
REVIEW_SIMILARITY = 0.85


class MatchType(str, Enum):
    NRIC_EXACT = "nric_exact"
    NAME_FUZZY = "name_fuzzy"
    CONTACT = "contact"
    NO_MATCH = "no_match"


class MatchConfidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    NONE = "none"


class SuggestedAction(str, Enum):
    AUTO_ATTACH = "auto_attach"
    REVIEW = "review"
    CREATE_CUSTOMER = "create_customer"


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    nric: str = ""
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class CustomerMatch:
    customer: Customer | None
    match_type: MatchType
    confidence: MatchConfidence
    suggested_action: SuggestedAction
    similarity: float | None = None
    suggested_customer: dict[str, str] = field(default_factory=dict)

    @property
    def customer_id(self) -> str | None:
        return self.customer.id if self.customer else None


def name_similarity(first: str, second: str) -> float:
    """Levenshtein similarity in [0, 1], relative to the longer string."""
    longer, shorter = (first, second) if len(first) >= len(second) else (second, first)
    if not longer:
        return 1.0
    return (len(longer) - _edit_distance(longer, shorter)) / len(longer)


def _edit_distance(first: str, second: str) -> int:
    previous = list(range(len(second) + 1))
    for i, first_char in enumerate(first, start=1):
        current = [i]
        for j, second_char in enumerate(second, start=1):
            cost = 0 if first_char == second_char else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def _field(fields: Mapping[str, Any], key: str) -> str:
    value = fields.get(key)
    return "" if value is None else str(value).strip()


def match_customer(fields: Mapping[str, Any], customers: Sequence[Customer]) -> CustomerMatch:
    """Find the customer a document belongs to.

    Tried in order: exact NRIC, closest name above the review threshold,
    then phone or email. With no match, the extracted fields are returned
    as data for a new customer. NRIC and email compare case-insensitively.
    """
    nric = _field(fields, "nric").upper()
    if nric:
        for customer in customers:
            if customer.nric.strip().upper() == nric:
                return CustomerMatch(
                    customer,
                    MatchType.NRIC_EXACT,
                    MatchConfidence.HIGH,
                    SuggestedAction.AUTO_ATTACH,
                )

    name = _field(fields, "name").lower()
    if name:
        best: tuple[float, Customer] | None = None
        for customer in customers:
            similarity = name_similarity(name, customer.name.strip().lower())
            if similarity > REVIEW_SIMILARITY and (best is None or similarity > best[0]):
                best = (similarity, customer)
        if best is not None:
            similarity, customer = best
            certain = similarity > AUTO_ATTACH_SIMILARITY
            return CustomerMatch(
                customer,
                MatchType.NAME_FUZZY,
                MatchConfidence.HIGH if certain else MatchConfidence.MEDIUM,
                SuggestedAction.AUTO_ATTACH if certain else SuggestedAction.REVIEW,
                similarity=similarity,
            )

    phone = _field(fields, "phone")
    email = _field(fields, "email").lower()
    for customer in customers:
        if (phone and customer.phone.strip() == phone) or (
            email and customer.email.strip().lower() == email
        ):
            return CustomerMatch(
                customer,
                MatchType.CONTACT,
                MatchConfidence.MEDIUM,
                SuggestedAction.REVIEW,
            )

    return CustomerMatch(
        None,
        MatchType.NO_MATCH,
        MatchConfidence.NONE,
        SuggestedAction.CREATE_CUSTOMER,
        suggested_customer={
            key: _field(fields, key)
            for key in ("name", "nric", "phone", "email", "address", "dateOfBirth")
        },
    )
