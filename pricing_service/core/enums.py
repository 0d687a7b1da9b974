"""
Enums for type safety
"""
from enum import Enum


class UserType(str, Enum):
    """Who is placing the order"""
    CUSTOMER = "customer"
    PARTNER = "partner"


class OrderType(str, Enum):
    """Order classification stored with the order"""
    CUSTOMER = "customer"
    PARTNER = "partner"
    PARTNER_FOR_CLIENT = "partner_for_client"


class MessageRole(str, Enum):
    """Audience of a discount message"""
    CUSTOMER = "customer"
    PARTNER = "partner"
    ADMIN = "admin"


class RateSource(str, Enum):
    """Where an exchange rate came from"""
    API = "api"
    FALLBACK = "fallback"
