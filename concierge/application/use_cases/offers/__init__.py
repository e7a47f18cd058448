"""Offer use cases."""

from concierge.application.use_cases.offers.offer_operations import OfferService

__all__ = ["OfferService"]
