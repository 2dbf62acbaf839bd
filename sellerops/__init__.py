"""
SellerOps - natural-language command pipeline for marketplace sellers.

Text is classified into a typed command, previewed against live listing
data, confirmed by the seller, executed against the platform and recorded.
"""

__version__ = "0.1.0"
