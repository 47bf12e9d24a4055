"""
Storefront services: data loading, progressive rendering, footer and contact form
"""

from .storefront_client import StorefrontClient, StorefrontQueryError
from .loader import HomePageLoader, PageLoadResult, CriticalPayload
from .home import HomePage
from .footer import FooterBuilder
from .contact_form import ContactFormController, ContactFormSubmitter, ContactSubmissionError

__all__ = [
    "StorefrontClient",
    "StorefrontQueryError",
    "HomePageLoader",
    "PageLoadResult",
    "CriticalPayload",
    "HomePage",
    "FooterBuilder",
    "ContactFormController",
    "ContactFormSubmitter",
    "ContactSubmissionError"
]
