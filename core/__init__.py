# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the application's business logic:
# - models/: SQLAlchemy tables and pydantic schemas
# - store/: Session-scoped repositories over the tables
# - services/: Place and account services plus the service context
#
# Routes in app/ stay thin and delegate here.
# =============================================================================
