# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the image API:
# - test_models.py: Enums, lookup tables and response schemas
# - test_utils.py: Filename, timestamp and error helpers
# - test_config.py: Settings defaults and parsing
# - test_services.py: Service layer against the Supabase fake
# - test_upload_image.py: End-to-end tests for the upload endpoint
#
# Run tests with: pytest
# =============================================================================
