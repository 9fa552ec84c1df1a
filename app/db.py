from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.config import get_settings
from app.log import get_logger

log = get_logger(__name__)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        # in-memory databases live per connection, so share one
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
    )


settings = get_settings()
engine = build_engine(settings.database_url, echo=settings.database_echo)


def init_db(bind: Engine = engine) -> None:
    # Loading models
    from app.models import Product  # noqa: F401

    SQLModel.metadata.create_all(bind)
    log.info("schema_synchronized", tables=sorted(SQLModel.metadata.tables))


# Dependency
def get_session():
    with Session(engine) as session:
        yield session
