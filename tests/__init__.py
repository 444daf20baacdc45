# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the CareLink API:
# - test_roles.py / test_passwords.py / test_tokens.py: auth primitives
# - test_supabase_client.py: store wrapper against a mocked supabase client
# - test_storage_service.py: prescription upload ordering
# - test_auth_api.py / test_resources_api.py: endpoints through TestClient
#
# Run tests with: pytest
# =============================================================================
