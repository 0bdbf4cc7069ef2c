"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, the
            database settings in config are ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.connections import ConnectionService
        from services.transaction_cache import TransactionCacheService
        from services.chat_history import ChatHistoryService
        from services.accessor import TransactionAccessor

        self.connections = ConnectionService(self.db_manager)
        self.transaction_cache = TransactionCacheService(self.db_manager)
        self.chat_history = ChatHistoryService(
            self.db_manager, limit=config.chat_history_limit
        )
        self.accessor = TransactionAccessor(self.connections, self.transaction_cache)
