from sqlalchemy import inspect
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import configure_mappers
from sqlalchemy.schema import CreateTable

from studiobook.db.base import Base
from studiobook.models.booking import Booking


def test_mappers_configure():
    configure_mappers()
    assert {"studios", "bookings"} <= set(Base.metadata.tables)


def test_booking_table_ddl_has_time_order_check():
    ddl = str(CreateTable(Booking.__table__).compile(dialect=postgresql.dialect()))

    assert "ck_booking_time_order" in ddl
    assert "end_time > start_time" in ddl


def test_tables_create_on_sqlite(engine):
    # The exclusion constraint is PostgreSQL-only and must not break SQLite
    assert {"studios", "bookings"} <= set(inspect(engine).get_table_names())
