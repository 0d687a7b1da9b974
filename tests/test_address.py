"""Customer identity, order type and address line derivation."""

import pytest
from pydantic import TypeAdapter

from conftest import make_address
from pricing_service.core.enums import OrderType, UserType
from pricing_service.models.domain import (
    LegacyAddressLine,
    ResolvedAddressLines,
    StructuredAddressLines
)
from pricing_service.services.address import (
    get_address_lines_for_gelato,
    get_combined_address,
    get_customer_email,
    get_customer_name,
    get_order_type,
    resolve_address_lines
)


class TestOrderType:

    @pytest.mark.parametrize("user_type, is_for_client, expected", [
        ("partner", True, OrderType.PARTNER_FOR_CLIENT),
        ("partner", False, OrderType.PARTNER),
        ("customer", False, OrderType.CUSTOMER),
        ("customer", True, OrderType.CUSTOMER),
        (UserType.PARTNER, True, OrderType.PARTNER_FOR_CLIENT),
    ])
    def test_decision_table(self, user_type, is_for_client, expected):
        assert get_order_type(user_type, is_for_client) == expected

    def test_values_match_stored_strings(self):
        assert get_order_type("partner", True) == "partner_for_client"


class TestCustomerIdentity:

    def test_own_order_uses_submitter(self):
        address = make_address(clientEmail="client@example.com", clientName="Client")
        assert get_customer_email(address) == "jane@example.com"
        assert get_customer_name(address) == "Jane Smith"

    def test_client_order_uses_client(self):
        address = make_address(isForClient=True, clientEmail="client@example.com", clientName="Bob Client")
        assert get_customer_email(address) == "client@example.com"
        assert get_customer_name(address) == "Bob Client"

    def test_client_order_without_client_details_falls_back(self):
        address = make_address(isForClient=True)
        assert get_customer_email(address) == "jane@example.com"
        assert get_customer_name(address) == "Jane Smith"

    def test_name_is_trimmed(self):
        assert get_customer_name(make_address(lastName=None)) == "Jane"


class TestAddressLines:

    def test_structured_lines(self):
        address = make_address(addressLine1=" Flat 2 ", addressLine2=" 10 High Street ")
        lines = get_address_lines_for_gelato(address)
        assert lines.address1 == "Flat 2"
        assert lines.address2 == "10 High Street"

    def test_blank_line2_dropped(self):
        lines = get_address_lines_for_gelato(make_address(addressLine2="   "))
        assert lines.address2 is None

    def test_legacy_address_passed_through_as_line1(self):
        address = make_address(addressLine1=None, address="221B Baker Street, Marylebone")
        lines = get_address_lines_for_gelato(address)
        assert lines.address1 == "221B Baker Street, Marylebone"
        assert lines.address2 is None

    def test_resolution_is_tagged(self):
        assert isinstance(resolve_address_lines(make_address()), StructuredAddressLines)
        legacy = resolve_address_lines(make_address(addressLine1=None, address="1 Road"))
        assert isinstance(legacy, LegacyAddressLine)
        assert legacy.kind == "legacy"

    def test_resolved_lines_parse_by_kind(self):
        adapter = TypeAdapter(ResolvedAddressLines)
        parsed = adapter.validate_python({"kind": "legacy", "line": "1 Road"})
        assert isinstance(parsed, LegacyAddressLine)
        dumped = adapter.dump_python(resolve_address_lines(make_address()))
        assert dumped == {"kind": "structured", "line1": "10 Downing Street", "line2": None}

    def test_combined_address(self):
        assert get_combined_address(make_address(addressLine2="Westminster")) == \
            "10 Downing Street, Westminster"
        assert get_combined_address(make_address()) == "10 Downing Street"
        assert get_combined_address(make_address(addressLine1=None, address=None)) == ""

    def test_combined_address_from_vendor_lines_keeps_both_lines(self):
        original = make_address(addressLine1="Flat 2", addressLine2="10 High Street")
        lines = get_address_lines_for_gelato(original)
        rebuilt = make_address(addressLine1=lines.address1, addressLine2=lines.address2)

        combined = get_combined_address(rebuilt)
        assert "Flat 2" in combined
        assert "10 High Street" in combined
