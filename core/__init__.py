# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic business logic:
# - models/: Pydantic schemas and the entity/image lookup tables
# - services/: Session resolution, ownership checks, storage, upload pipeline
#
# Route definitions and request parsing stay in app/; services receive
# plain values so they can be tested without an HTTP client.
# =============================================================================
