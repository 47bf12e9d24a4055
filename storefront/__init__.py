"""
Fabric Elite Storefront Service

Backend for the Fabric Elite Shopify storefront:
- Home page with critical and progressively rendered deferred regions
- Footer content and menu-derived quick links
- Contact form forwarding to an external endpoint
"""

__version__ = "1.0.0"
