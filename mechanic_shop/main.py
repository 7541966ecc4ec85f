"""
Entry point: mechanic-shop <dbname> <port> <user>

Connects to PostgreSQL, runs the main menu until EXIT (or end of input),
then disconnects.
"""

import argparse
import logging
import sys
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from mechanic_shop.cli.console import Console
from mechanic_shop.cli.menu import MechanicShop
from mechanic_shop.config import settings
from mechanic_shop.services.database import close_db, create_session_factory, init_db

logger = logging.getLogger(__name__)


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure root logging; SQLAlchemy stays at WARNING unless echo is on."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=log_file or settings.LOG_FILE or None,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)


def setup_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mechanic-shop",
        description="Mechanic shop database front end",
    )
    parser.add_argument("dbname", help="PostgreSQL database name")
    parser.add_argument("port", type=int, help="PostgreSQL port")
    parser.add_argument("user", help="PostgreSQL user")
    parser.add_argument(
        "--host", default=None, help=f"Database host (default: {settings.DB_HOST})"
    )
    parser.add_argument("--echo", action="store_true", help="Echo SQL statements")
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Run the front end. Returns the exit status (also used for sys.exit)."""
    args = setup_argparser().parse_args(argv)
    setup_logging()
    console = console or Console()

    url = settings.database_url(args.dbname, args.port, args.user, host=args.host)
    echo = args.echo or settings.DB_ECHO

    console.say("Connecting to database...")
    try:
        engine = init_db(url, echo=echo, create_tables=settings.DB_CREATE_TABLES)
    except SQLAlchemyError as e:
        logger.error(f"Unable to connect to {url.render_as_string(hide_password=True)}: {e}")
        console.error(f"Error - Unable to Connect to Database: {e}")
        console.error("Make sure you started postgres on this machine")
        return 1
    console.say("Done")

    session_factory = create_session_factory(engine)
    try:
        with session_factory() as db:
            MechanicShop(db, console).run()
    except (EOFError, KeyboardInterrupt):
        console.say("")
        logger.info("Input closed, leaving menu")
    finally:
        console.say("Disconnecting from database...")
        close_db(engine)
        console.say("Done\n\nBye !")

    return 0


if __name__ == "__main__":
    sys.exit(main())
