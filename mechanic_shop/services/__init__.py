"""Services for the mechanic shop front end."""

from mechanic_shop.services.database import (
    close_db,
    create_session_factory,
    init_db,
    next_identifier,
)

__all__ = ["init_db", "close_db", "create_session_factory", "next_identifier"]
