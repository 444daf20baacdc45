# =============================================================================
# core/ - Domain Package
# =============================================================================
# This package contains the domain types and services:
# - models/: Role tags, table names and record schemas
# - services/: Identity, record and prescription operations
#
# Code in this package should NOT import from FastAPI.
# =============================================================================
