"""Base MongoDB store with reusable patterns.

Provides common functionality for the kiosk MongoDB stores:
- Connection management
- Document mapping (domain <-> MongoDB)
- Index creation (explicit ``initialize()`` call at startup)
- Error translation to PersistenceError
- Logging

All concrete MongoDB stores should inherit from MongoBaseStore.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, TypeVar
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from domain.kiosk.core.exceptions.domain_errors import PersistenceError
from infrastructure.config import get_mongodb_database, get_mongodb_uri

TEntity = TypeVar("TEntity")

IndexSpec = List[Tuple[str, int]]

logger = logging.getLogger(__name__)


class MongoBaseStore(ABC, Generic[TEntity]):
    """
    Abstract base class for MongoDB stores.

    Subclasses must implement:
    - collection_name: Name of MongoDB collection
    - to_document(): Convert domain entity to MongoDB document
    - from_document(): Convert MongoDB document to domain entity

    Subclasses may override ``indexes`` to declare the compound indexes
    created by ``initialize()``.

    Example:
        class MongoScoreStore(MongoBaseStore[ScoreRecord], IScoreStore):
            @property
            def collection_name(self) -> str:
                return "user_scores"
            ...
    """

    def __init__(self, client: Optional[AsyncIOMotorClient] = None):
        """
        Initialize store with optional client.

        Args:
            client: Motor client (if None, creates new one from config)

        Raises:
            ValueError: If no client is given and MONGODB_URI is not set
        """
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ValueError(
                    "MONGODB_URI not configured. "
                    "Set MONGODB_URI, MONGODB_USER, "
                    "and MONGODB_PASSWORD environment variables."
                )
            self._client: AsyncIOMotorClient = AsyncIOMotorClient(uri)
        else:
            self._client = client

        database_name = get_mongodb_database()
        self._db = self._client[database_name]
        self._collection = self._db[self.collection_name]

        logger.info(
            f"Initialized {self.__class__.__name__} for collection '{self.collection_name}'"
        )

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """MongoDB collection name."""
        pass

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        """Convert domain entity to MongoDB document."""
        pass

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """
        Convert MongoDB document to domain entity.

        Raises:
            ValueError: If document is invalid or missing required fields
        """
        pass

    @property
    def indexes(self) -> Sequence[IndexSpec]:
        """Compound indexes created by ``initialize()``."""
        return ()

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Get MongoDB collection handle."""
        return self._collection

    async def initialize(self) -> None:
        """Create the declared indexes (idempotent, call once at startup)."""
        try:
            for spec in self.indexes:
                await self._collection.create_index(spec)
        except Exception as e:
            logger.error(
                f"Error creating indexes: collection={self.collection_name}, error={e}"
            )
            raise PersistenceError(f"Index creation failed on {self.collection_name}") from e

        logger.info(
            "MongoDB indexes ready",
            extra={"collection": self.collection_name, "count": len(self.indexes)},
        )

    @staticmethod
    def datetime_to_iso(dt: datetime) -> str:
        """
        Convert datetime to ISO string in UTC.

        Normalizing to UTC keeps string order equal to chronological order.

        Raises:
            ValueError: If dt is naive
        """
        if dt.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware")
        return dt.astimezone(timezone.utc).isoformat()

    @staticmethod
    def iso_to_datetime(iso_str: str) -> datetime:
        """Convert ISO string to timezone-aware datetime (naive means UTC)."""
        dt = datetime.fromisoformat(iso_str)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    async def _find_one(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[IndexSpec] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Find single document.

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            return await self._collection.find_one(filter_dict, sort=sort)
        except Exception as e:
            logger.error(
                f"Error in find_one: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise PersistenceError(f"find_one failed on {self.collection_name}") from e

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[IndexSpec] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents.

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            cursor = self._collection.find(filter_dict)
            if sort:
                cursor = cursor.sort(sort)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=limit)
        except Exception as e:
            logger.error(
                f"Error in find_many: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise PersistenceError(f"find failed on {self.collection_name}") from e

    async def _insert_one(self, document: Dict[str, Any]) -> None:
        """
        Insert single document.

        Raises:
            PersistenceError: If MongoDB operation fails
        """
        try:
            await self._collection.insert_one(document)
        except Exception as e:
            logger.error(f"Error in insert_one: collection={self.collection_name}, error={e}")
            raise PersistenceError(f"insert failed on {self.collection_name}") from e

    async def close(self) -> None:
        """Close MongoDB connection."""
        self._client.close()
        logger.info(f"Closed connection for {self.__class__.__name__}")
