"""Database initialization script."""

from src.storefront.core.services.catalog.seed_data import seed_catalog
from src.storefront.core.services.database.db_session import DbSessionService


def init_db(seed: bool = True) -> int:
    """Create all catalog tables and optionally load the sample catalogue.

    Returns the number of products seeded (0 when the catalog already had data).
    """
    db_service = DbSessionService()
    db_service.create_all()
    if not seed:
        return 0
    with db_service.session_scope() as session:
        return seed_catalog(session)


if __name__ == "__main__":
    init_db()
