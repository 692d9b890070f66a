"""
Entity store: the single owner of users, routes, progress and saved routes.

One instance is built at process start (see `main.create_app`) and handed to
every request through `dependencies.get_store`. Tests build a fresh one per
test.
"""
import threading
from contextlib import contextmanager, nullcontext
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from database import build_engine, build_session_factory, init_db, new_id, utcnow
from exceptions import StoreFailure
from models.User import User
from utils.logger import get_logger

logger = get_logger("store")

T = TypeVar("T")

# fixed pool of key locks; distinct keys may share a stripe
LOCK_STRIPES = 64


class EntityStore:
    def __init__(self, database_url: str = "sqlite://"):
        self.database_url = database_url
        self.engine = build_engine(database_url)
        self._session_factory = build_session_factory(self.engine)
        self._locks = [threading.RLock() for _ in range(LOCK_STRIPES)]
        # a StaticPool hands every session the same connection, so sessions must take turns
        self._connection_lock = threading.RLock() if isinstance(self.engine.pool, StaticPool) else None
        init_db(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """One transaction: commit on success, roll back on any error."""
        db = None
        with self._connection_lock or nullcontext():
            try:
                db = self._session_factory()
                yield db
                db.commit()
            except SQLAlchemyError as exc:
                if db is not None:
                    db.rollback()
                logger.error("Store operation failed: %s", exc)
                raise StoreFailure(str(exc)) from exc
            except Exception:
                if db is not None:
                    db.rollback()
                raise
            finally:
                if db is not None:
                    db.close()

    def lock_for(self, *key: Any) -> threading.RLock:
        """Mutual exclusion for writes touching one composite key."""
        return self._locks[hash(key) % LOCK_STRIPES]

    # ---------- Generic CRUD ----------

    def get(self, kind: Type[T], record_id: str) -> Optional[T]:
        with self.session() as db:
            return db.get(kind, record_id)

    def list(self, kind: Type[T]) -> List[T]:
        with self.session() as db:
            return db.query(kind).all()

    def create(self, kind: Type[T], data: Dict[str, Any]) -> T:
        record = kind(**data)
        record.id = new_id()
        if hasattr(kind, "created_at"):
            record.created_at = utcnow()
        with self.session() as db:
            db.add(record)
            db.flush()
        logger.info("Created %s %s", kind.__name__, record.id)
        return record

    def update(self, kind: Type[T], record_id: str, partial: Dict[str, Any]) -> Optional[T]:
        with self.lock_for(kind.__name__, record_id):
            with self.session() as db:
                record = db.get(kind, record_id)
                if record is None:
                    return None
                for field, value in partial.items():
                    setattr(record, field, value)
                db.flush()
        logger.info("Updated %s %s fields=%s", kind.__name__, record_id, sorted(partial))
        return record

    # ---------- Composite-key records ----------

    def _key_lock(self, kind: type, key: Dict[str, Any]) -> threading.RLock:
        return self.lock_for(kind.__name__, *sorted(key.items()))

    def find(self, kind: Type[T], **key: Any) -> Optional[T]:
        with self.session() as db:
            return db.query(kind).filter_by(**key).first()

    def upsert(
        self,
        kind: Type[T],
        key: Dict[str, Any],
        apply: Callable[[T, bool], None],
        defaults: Optional[Dict[str, Any]] = None,
    ) -> T:
        """Create or update the single record identified by `key`.

        `apply(record, created)` mutates the record inside the transaction.
        Calls for the same key are serialised, so neither duplicates nor lost
        updates can occur.
        """
        with self._key_lock(kind, key):
            with self.session() as db:
                record = db.query(kind).filter_by(**key).first()
                created = record is None
                if created:
                    record = kind(id=new_id(), **key, **(defaults or {}))
                    db.add(record)
                apply(record, created)
                db.flush()
        if created:
            logger.info("Created %s %s for %s", kind.__name__, record.id, key)
        return record

    def delete_first(self, kind: type, **key: Any) -> bool:
        """Delete the first record matching `key`; False if there was none."""
        with self._key_lock(kind, key):
            with self.session() as db:
                record = db.query(kind).filter_by(**key).first()
                if record is None:
                    return False
                db.delete(record)
        logger.info("Deleted %s for %s", kind.__name__, key)
        return True

    # ---------- Lookups ----------

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self.session() as db:
            return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self.session() as db:
            return db.query(User).filter(User.email == email).first()

    def dispose(self) -> None:
        self.engine.dispose()
