from __future__ import annotations

import logging

from sqlalchemy.orm import Session, sessionmaker

from parceltrack.infrastructure.config import Settings
from parceltrack.infrastructure.database import build_engine, build_session_factory, create_schema
from parceltrack.infrastructure.log_config import configure_logging

logger = logging.getLogger(__name__)


def bootstrap(settings: Settings | None = None) -> sessionmaker[Session]:
    """
    Prepare the parcel store for an embedding application: logging, engine and,
    when enabled, the `parcel` table. Returns the session factory to pass into
    the services.
    """
    if settings is None:
        from parceltrack.infrastructure.config import settings

    configure_logging(settings.log_level)
    engine = build_engine(settings.database_url, echo=settings.echo_sql)
    if settings.create_schema:
        create_schema(engine)

    logger.info("Parcel store ready on %s", engine.url.render_as_string(hide_password=True))
    return build_session_factory(engine)
