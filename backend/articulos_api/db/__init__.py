import logging
from decimal import Decimal

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from articulos_api.config import settings

log = logging.getLogger(__name__)

Base = declarative_base()

# price lists every installation starts with
SEED_LISTAS = [
    {"codlis": 1, "nomlis": "ENTIDADES PUBLICAS", "porlis": Decimal("45.00")},
    {"codlis": 2, "nomlis": "INSTITUCIONES PRIVADAS", "porlis": Decimal("40.00")},
    {"codlis": 3, "nomlis": "FARMACIAS", "porlis": Decimal("37.00")},
]


def build_engine(url: str = None, **overrides) -> Engine:
    """
    Create an engine for `url` (defaults to settings.DATABASE_URL).

    SQLite gets check_same_thread=False since FastAPI runs sync handlers in a
    threadpool; in-memory SQLite additionally shares one connection
    (StaticPool) so every session sees the same database. Other backends get
    the pool sizing and connect timeout from settings.
    """
    url = make_url(url or settings.DATABASE_URL)
    kwargs = {"future": True, "echo": False}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
        )
        if url.get_backend_name() == "postgresql":
            kwargs["connect_args"] = {"connect_timeout": settings.DB_CONNECT_TIMEOUT}
    kwargs.update(overrides)
    eng = create_engine(url, **kwargs)

    @event.listens_for(eng, "connect")
    def _on_connect(dbapi_connection, connection_record):
        log.debug("new database connection established (%s)", url.get_backend_name())

    return eng


engine = build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def check_connection(bind: Engine = None) -> None:
    """Run a trivial query; raises the driver error when the database is unreachable."""
    with (bind or engine).connect() as conn:
        conn.execute(text("SELECT 1"))


def init_db(bind: Engine = None, reset: bool = False) -> None:
    """
    Create the _articulos and _listas tables and seed the default price lists.

    Tables are created only when missing; with `reset` they are dropped first.
    Seeding inserts only the price lists that do not exist yet, so calling this
    repeatedly is safe.
    """
    # models must be imported so Base.metadata knows the tables
    from articulos_api.models.articulo import Articulo  # noqa: F401
    from articulos_api.models.lista import Lista

    bind = bind or engine
    if reset:
        log.warning("Resetting database: dropping all tables")
        Base.metadata.drop_all(bind=bind)

    log.info("Creating database tables if missing...")
    Base.metadata.create_all(bind=bind)

    factory = sessionmaker(autocommit=False, autoflush=False, bind=bind)
    s = factory()
    try:
        created = 0
        for ent in SEED_LISTAS:
            if s.get(Lista, ent["codlis"]) is None:
                s.add(Lista(**ent))
                created += 1
        if created:
            s.commit()
            log.info("Seeded %d missing price lists.", created)
    finally:
        s.close()
    log.info("Database initialized.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
