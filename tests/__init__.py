# =============================================================================
# tests/ - Test Suite
# =============================================================================
# - test_loader.py: critical/deferred data loading
# - test_rendering.py: progressive region rendering and product selection
# - test_contact_form.py: contact form state machine and submitter
# - test_footer.py: footer view model and menu link derivation
# - test_storefront_client.py: Storefront API transport
# - test_api.py: HTTP endpoints
#
# Run tests with: pytest
# =============================================================================
