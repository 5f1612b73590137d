from docpipe.documents.document_types import (
    DOCUMENT_TYPES,
    OTHER,
    available_document_types,
    is_known_document_type,
    resolve_document_type,
)


class TestResolveDocumentType:
    def test_known_type_returns_table_entry(self) -> None:
        info = resolve_document_type("vsa")
        assert info.name == "Vehicle Sales Agreement"
        assert info.folder == "VSA"
        assert info.milestone == "close_deal"

    def test_unknown_type_resolves_to_other(self) -> None:
        assert resolve_document_type("passport").id == OTHER

    def test_empty_and_none_resolve_to_other(self) -> None:
        assert resolve_document_type("").id == OTHER
        assert resolve_document_type(None).id == OTHER


class TestTable:
    def test_table_is_read_only(self) -> None:
        try:
            DOCUMENT_TYPES["new"] = DOCUMENT_TYPES[OTHER]  # type: ignore[index]
        except TypeError:
            return
        raise AssertionError("table accepted a write")

    def test_every_entry_id_matches_key(self) -> None:
        for key, info in DOCUMENT_TYPES.items():
            assert key == info.id

    def test_is_known_document_type(self) -> None:
        assert is_known_document_type("loan_application")
        assert not is_known_document_type("passport")

    def test_available_types_lists_pairs_in_order(self) -> None:
        pairs = available_document_types()
        assert pairs[0] == ("nric_front", "NRIC Front")
        assert (OTHER, "Other Document") in pairs
        assert len(pairs) == len(DOCUMENT_TYPES)
