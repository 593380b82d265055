"""Process start-up and shut-down for the letterbox backend.

Whatever hosts the application (a web server lifespan, a worker, a script)
calls ``initialize_application()`` once before serving and
``shutdown_application()`` once when done.
"""

from __future__ import annotations

from iam.infrastructure.user_repository import UserRepository
from infrastructure.database import (
    close_database_connections,
    load_all_models,
    session_scope,
)
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import get_settings
from letters.application.services import ThrowService
from letters.domain.aggregates import CATEGORY_TALLY_ID
from letters.infrastructure.letter_status_repository import LetterStatusRepository
from letters.infrastructure.throw_letter_repository import (
    ThrowLetterCategoryRepository,
    ThrowLetterRepository,
)


async def initialize_application(probe: StartupProbe | None = None) -> None:
    """Configure logging and create the throw-letter category tally.

    Creating the tally is idempotent, so several processes may start at the
    same time.

    Raises:
        Exception: Any database error; the process should not start serving
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = probe or DefaultStartupProbe()
    probe.application_starting(settings.app_name, settings.debug)
    load_all_models()

    try:
        async with session_scope() as session:
            throw_service = ThrowService(
                session=session,
                letter_status_repository=LetterStatusRepository(session),
                throw_letter_repository=ThrowLetterRepository(session),
                category_repository=ThrowLetterCategoryRepository(session),
                user_repository=UserRepository(session),
            )
            await throw_service.ensure_category_tally()
    except Exception as e:
        probe.startup_failed(str(e))
        raise

    probe.category_tally_ready(CATEGORY_TALLY_ID)


async def shutdown_application(probe: StartupProbe | None = None) -> None:
    """Release pooled database connections."""
    probe = probe or DefaultStartupProbe()
    await close_database_connections()
    probe.application_stopped()
