import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    # API Configuration
    API_TITLE = "Fabric Elite Storefront"
    API_VERSION = "1.0.0"
    API_DESCRIPTION = "Home page, footer and contact form services for the Fabric Elite Shopify storefront"

    # Server Configuration
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 8000))
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"

    # Request Configuration
    REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", 30))

    # Shopify Storefront API
    SHOPIFY_STORE_DOMAIN = os.getenv("SHOPIFY_STORE_DOMAIN", "fabric-elite.myshopify.com")
    SHOPIFY_STOREFRONT_API_TOKEN = os.getenv("SHOPIFY_STOREFRONT_API_TOKEN", "")
    SHOPIFY_STOREFRONT_API_VERSION = os.getenv("SHOPIFY_STOREFRONT_API_VERSION", "2024-07")
    STOREFRONT_COUNTRY = os.getenv("STOREFRONT_COUNTRY", "US")
    STOREFRONT_LANGUAGE = os.getenv("STOREFRONT_LANGUAGE", "EN")
    HEADER_MENU_HANDLE = os.getenv("HEADER_MENU_HANDLE", "main-menu")

    # Contact form destination (Formspree or any JSON endpoint)
    CONTACT_FORM_ENDPOINT = os.getenv("CONTACT_FORM_ENDPOINT", "")

    # Home page layout
    MAX_COLLECTION_TILES = 3
    MAX_RECOMMENDED_PRODUCTS = 3

    # Logging Configuration
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Security Configuration
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

    # Brand
    STORE_NAME = os.getenv("STORE_NAME", "Fabric Elite")
    STORE_ADDRESS = os.getenv("STORE_ADDRESS", "123 Main Street, Suite 400, City, Country")
    STORE_PHONE = os.getenv("STORE_PHONE", "(123) 456-7890")
    SOCIAL_PLATFORMS = ["Facebook", "Instagram", "Twitter", "LinkedIn"]

    @property
    def storefront_api_url(self) -> str:
        return f"https://{self.SHOPIFY_STORE_DOMAIN}/api/{self.SHOPIFY_STOREFRONT_API_VERSION}/graphql.json"


# Create settings instance
settings = Settings()


# Environment check
def get_environment():
    """Get current environment"""
    return os.getenv("ENVIRONMENT", "development")


def is_production():
    """Check if running in production"""
    return get_environment().lower() == "production"


def is_development():
    """Check if running in development"""
    return get_environment().lower() == "development"
