"""SQLAlchemy table definitions and engine construction."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine, make_url

logger = logging.getLogger(__name__)

metadata = MetaData()

products = Table(
    "products",
    metadata,
    Column("id", String(50), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("brand", String(100), nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("original_price", Numeric(10, 2), nullable=True),
    Column("currency", String(3), nullable=False),
    Column("images", JSON, nullable=False),
    Column("description", Text, nullable=False),
    Column("sizes", JSON, nullable=False),
    Column("category", String(100), nullable=False, index=True),
    Column("featured", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

categories = Table(
    "categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("slug", String(200), nullable=False, unique=True),
)

orders = Table(
    "orders",
    metadata,
    Column("id", String(50), primary_key=True),
    Column("customer_id", String(50), nullable=True),
    Column("customer_name", String(255), nullable=False),
    Column("customer_email", String(254), nullable=False),
    Column("customer_phone", String(20), nullable=True),
    Column("delivery_line", String(100), nullable=True),
    Column("delivery_station", String(100), nullable=True),
    Column("delivery_address", Text, nullable=True),
    Column("total", Numeric(10, 2), nullable=False),
    Column("currency", String(3), nullable=False),
    Column("payment_method", String(20), nullable=False),
    Column("status", String(20), nullable=False),
    Column("notes", Text, nullable=False, default=""),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True),
)

# No foreign key to products: lines must outlive catalog deletions.
order_items = Table(
    "order_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "order_id",
        String(50),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("product_id", String(50), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("size", String(20), nullable=False),
    Column("price_at_purchase", Numeric(10, 2), nullable=False),
    Column("currency", String(3), nullable=False),
)

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(254), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("role", String(20), nullable=False),
)


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create the engine; SQLite gets foreign keys and a busy timeout."""
    if url.startswith("sqlite"):
        database = make_url(url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 10},
        )
        event.listen(engine, "connect", _sqlite_pragmas)
    else:
        engine = create_engine(url, echo=echo, pool_pre_ping=True)
    return engine


def _sqlite_pragmas(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA busy_timeout=10000")
    cursor.close()


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)
    logger.info("Schema verified/created on %s", engine.url.render_as_string(hide_password=True))
