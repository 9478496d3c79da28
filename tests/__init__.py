# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Places API:
# - test_credentials.py, test_geocoder.py, test_utils.py: lib/ units
# - test_models.py: Pydantic model validation
# - test_place_service.py, test_user_service.py: service layer
# - test_auth.py, test_places_api.py, test_users_api.py: HTTP endpoints
# - test_error_handlers.py: fallback error responses and CORS
#
# Run tests with: pytest
# =============================================================================
