from fastapi import FastAPI

from roombook.infrastructure.config import settings
from roombook.infrastructure.database import Base, engine, session_scope
from roombook.infrastructure.logging_config import get_logger, setup_logging
from roombook.infrastructure.models import models  # noqa: F401  (registers ORM tables on Base)
from roombook.infrastructure.seed import seed_directory
from roombook.presentation.routers import router

setup_logging(settings.log_level, settings.log_file)
logger = get_logger(__name__)

app = FastAPI(title="roombook", description="Room reservation conflict-detection and lifecycle service")


@app.on_event("startup")
def _seed_directory_on_startup() -> None:
    """
    Load rooms and requesters from the configured YAML seed file into an empty directory
    """
    if settings.directory_seed_path is None:
        return

    with session_scope() as db:
        seed_directory(db, settings.directory_seed_path)


Base.metadata.create_all(bind=engine)
app.include_router(router)
logger.info("roombook configured with database %s", engine.url.render_as_string(hide_password=True))
