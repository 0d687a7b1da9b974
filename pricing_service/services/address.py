"""
Customer identity, order type and address line derivation
"""
from typing import Optional, Union

from pricing_service.core.enums import OrderType, UserType
from pricing_service.models.domain import (
    Address,
    AddressLines,
    LegacyAddressLine,
    ResolvedAddressLines,
    StructuredAddressLines
)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def resolve_address_lines(address: Address) -> ResolvedAddressLines:
    """
    Resolve which address format the record uses

    Structured lines win whenever address_line1 is non-empty (whitespace counts);
    otherwise the legacy single-line field is used as-is.
    """
    if address.address_line1:
        return StructuredAddressLines(
            line1=address.address_line1.strip(),
            line2=_clean(address.address_line2) or None
        )
    return LegacyAddressLine(line=_clean(address.address))


def get_customer_email(address: Address) -> str:
    """Client email for partner-for-client orders, the submitter's otherwise"""
    if address.is_for_client and address.client_email:
        return address.client_email
    return address.email or ""


def get_customer_name(address: Address) -> str:
    if address.is_for_client and address.client_name:
        return address.client_name
    return f"{address.first_name or ''} {address.last_name or ''}".strip()


def get_order_type(user_type: Union[UserType, str], is_for_client: bool) -> OrderType:
    if user_type == UserType.PARTNER:
        return OrderType.PARTNER_FOR_CLIENT if is_for_client else OrderType.PARTNER
    return OrderType.CUSTOMER


def get_address_lines_for_gelato(address: Address) -> AddressLines:
    """
    Address lines in the print vendor's format

    Legacy single-line addresses become line 1 unchanged; nothing is split
    into line 2.
    """
    lines = resolve_address_lines(address)
    if isinstance(lines, StructuredAddressLines):
        return AddressLines(address1=lines.line1, address2=lines.line2)
    return AddressLines(address1=lines.line, address2=None)


def get_combined_address(address: Address) -> str:
    """Single display string, lines joined with a comma"""
    lines = resolve_address_lines(address)
    if isinstance(lines, StructuredAddressLines):
        return f"{lines.line1}, {lines.line2}" if lines.line2 else lines.line1
    return lines.line
