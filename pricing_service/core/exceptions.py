"""
Custom exceptions for the pricing service
"""


class PricingServiceError(Exception):
    """Base exception for the pricing service"""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentError(PricingServiceError):
    """Caller passed an argument the calculation cannot accept"""
    pass


class ConfigurationError(PricingServiceError):
    """Deployment or setup defect (missing tiers, credentials, ...)"""
    pass


class RemoteServiceError(PricingServiceError):
    """Outbound HTTP call failed or returned a non-2xx status"""
    pass
