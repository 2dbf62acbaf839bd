"""Seller platform clients."""

from .base import SellerPlatform
from .platform import PlatformClient

__all__ = ["SellerPlatform", "PlatformClient"]
