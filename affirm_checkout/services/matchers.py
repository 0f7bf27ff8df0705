"""Comparisons between Affirm checkout details and order data"""

from typing import Optional

from ..models.address import Address
from ..models.checkout import CheckoutContact, CheckoutName


def _text(value: Optional[str]) -> str:
    return " ".join((value or "").split())


def region_matches(existing: Address, region_code: Optional[str]) -> bool:
    """Region code equals the address region's abbreviation or name"""
    code = _text(region_code).casefold()
    if existing.region is None:
        return code == _text(existing.region_code).casefold()
    return code in (existing.region.abbr.casefold(), existing.region.name.casefold())


def names_match(existing: Address, name: CheckoutName) -> bool:
    if name.first or name.last:
        return (
            _text(name.first) == _text(existing.firstname)
            and _text(name.last) == _text(existing.lastname)
        )
    return _text(name.full) == _text(existing.full_name)


def addresses_match(existing: Optional[Address], incoming: CheckoutContact) -> bool:
    """Check an order address against an Affirm billing or shipping block"""
    if existing is None:
        return False

    address = incoming.address
    return (
        _text(address.line1) == _text(existing.address1)
        and _text(address.line2) == _text(existing.address2)
        and _text(address.city) == _text(existing.city)
        and _text(address.zipcode) == _text(existing.zipcode)
        and region_matches(existing, address.state)
        and names_match(existing, incoming.name)
    )


def emails_match(existing: Optional[str], incoming: Optional[str]) -> bool:
    """Check an order email against the Affirm billing email.

    A blank Affirm email never counts as a mismatch.
    """
    if not _text(incoming):
        return True
    return _text(incoming).casefold() == _text(existing).casefold()
