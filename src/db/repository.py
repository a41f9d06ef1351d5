"""
Repository
----------
Thin persistence layer over a SQLAlchemy session. Updates and deletes are
issued as single statements filtered by primary key so each one applies
atomically; nothing here composes a read-modify-write.
"""
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from src.db.database import BootcampDB

logger = logging.getLogger(__name__)


class Repository:
    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    def find_by_id(self, entity_id):
        return self.db.get(self.model, entity_id)

    def find_one(self, **filters):
        return self.db.query(self.model).filter_by(**filters).first()

    def find_all(self, **filters):
        return self.db.query(self.model).filter_by(**filters).all()

    def insert(self, values):
        entity = self.model(**values)
        self.db.add(entity)
        self._commit()
        self.db.refresh(entity)
        return entity

    def atomic_update(self, entity_id, values):
        """Apply ``values`` to one row and return the new state, or None if the row is gone."""
        matched = (
            self.db.query(self.model)
            .filter(self.model.id == entity_id)
            .update(values)
        )
        self._commit()
        if matched == 0:
            return None
        return self.find_by_id(entity_id)

    def atomic_delete(self, entity_id, commit=True):
        deleted = (
            self.db.query(self.model)
            .filter(self.model.id == entity_id)
            .delete()
        )
        if commit:
            self._commit()
        return deleted > 0

    def delete_many(self, commit=True, **filters):
        deleted = self.db.query(self.model).filter_by(**filters).delete()
        if commit:
            self._commit()
        return deleted

    def commit(self):
        self._commit()

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error on {self.model.__tablename__}: {e}")
            raise


class BootcampRepository(Repository):
    def __init__(self, db: Session):
        super().__init__(db, BootcampDB)

    def find_within(self, predicate):
        """Return bootcamps whose stored point satisfies ``predicate``.

        The predicate's bounding box narrows the SQL query; the exact
        spherical test runs on the candidates.
        """
        min_lng, min_lat, max_lng, max_lat = predicate.bounding_box()
        query = self.db.query(BootcampDB).filter(
            BootcampDB.latitude >= min_lat,
            BootcampDB.latitude <= max_lat,
        )
        if min_lng is not None:
            query = query.filter(
                BootcampDB.longitude >= min_lng,
                BootcampDB.longitude <= max_lng,
            )
        candidates = query.all()
        return [b for b in candidates if predicate.contains(b.longitude, b.latitude)]
