"""Tests for the command-line entry point."""

from unittest.mock import patch

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from mechanic_shop.config import Settings
from mechanic_shop.main import main, setup_argparser, setup_logging
from mechanic_shop.models.base import Base
from mechanic_shop.services.database import init_db


class TestArguments:
    @pytest.mark.parametrize("argv", [[], ["shopdb"], ["shopdb", "5432"], ["a", "1", "b", "c"]])
    def test_wrong_argument_count_exits_nonzero(self, argv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)

        assert exc_info.value.code != 0
        assert "usage" in capsys.readouterr().err.lower()

    def test_port_must_be_numeric(self):
        with pytest.raises(SystemExit):
            setup_argparser().parse_args(["shopdb", "port", "postgres"])

    def test_database_url_from_arguments(self):
        url = Settings(DB_PASSWORD="").database_url("shopdb", 5432, "postgres")

        assert url.drivername == "postgresql+psycopg2"
        assert (url.host, url.port, url.database, url.username) == (
            "localhost",
            5432,
            "shopdb",
            "postgres",
        )
        assert url.password is None

    def test_database_url_host_override(self):
        url = Settings().database_url("shopdb", 5433, "postgres", host="db.internal")
        assert url.host == "db.internal"


class TestConnection:
    def test_connection_failure_exits_with_error(self, console_factory):
        console = console_factory()
        failure = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with patch("mechanic_shop.main.init_db", side_effect=failure):
            status = main(["shopdb", "5432", "postgres"], console=console)

        assert status == 1
        assert "Unable to Connect to Database" in console.errors
        assert "connection refused" in console.errors

    def test_runs_menu_and_disconnects(self, db_engine, console_factory):
        console = console_factory("11")

        with patch("mechanic_shop.main.init_db", return_value=db_engine) as init_db:
            status = main(["shopdb", "5432", "postgres"], console=console)

        assert status == 0
        init_db.assert_called_once()
        assert "MAIN MENU" in console.output
        assert "Bye !" in console.output

    def test_end_of_input_disconnects_cleanly(self, db_engine, console_factory):
        console = console_factory()

        with patch("mechanic_shop.main.init_db", return_value=db_engine):
            status = main(["shopdb", "5432", "postgres"], console=console)

        assert status == 0
        assert "Disconnecting from database..." in console.output


class TestStartup:
    def test_lower_case_log_level_is_accepted(self):
        with patch("mechanic_shop.main.logging.basicConfig") as basic_config:
            setup_logging(level="warning")

        assert basic_config.call_args.kwargs["level"] == "WARNING"

    def test_table_creation_failure_disposes_engine(self):
        failure = OperationalError("CREATE TABLE", {}, Exception("permission denied"))

        with patch.object(Base.metadata, "create_all", side_effect=failure), patch.object(
            Engine, "dispose"
        ) as dispose:
            with pytest.raises(OperationalError):
                init_db("sqlite://")

        dispose.assert_called_once()

    def test_connected_engine_is_returned(self):
        engine = init_db("sqlite://")
        try:
            assert "service_request" in Base.metadata.tables
            assert engine.url.drivername == "sqlite"
        finally:
            engine.dispose()
