"""Registration of every ORM model on the shared metadata.

Foreign keys cross bounded contexts (letters and notifications reference
users), so every context's models must be imported before the first flush
or a ``create_all``.
"""

from sqlalchemy import MetaData

from infrastructure.database.models import Base


def load_all_models() -> MetaData:
    """Import the models of every bounded context and return the metadata."""
    import iam.infrastructure.models  # noqa: F401
    import letters.infrastructure.models  # noqa: F401
    import notifications.infrastructure.models  # noqa: F401

    return Base.metadata
