import logging

from glintstore.core.config import get_settings
from glintstore.core.exceptions import GlintStoreError
from glintstore.core.log import configure_logging
from glintstore.storage import Storage

logger = logging.getLogger(__name__)


def main() -> int:
    """Connect with the configured settings and make sure the schema exists."""
    settings = get_settings()
    configure_logging(settings.log_level)

    storage = Storage(settings=settings)
    try:
        with storage:
            storage.connect_url()
            storage.setup()
    except GlintStoreError:
        logger.exception("Database setup failed")
        return 1
    logger.info("Database ready")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
