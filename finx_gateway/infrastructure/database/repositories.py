"""Data access layer for the stored finance session"""

from typing import Optional
from sqlalchemy.orm import Session
from finx_gateway.domain.session import FinanceSession
from finx_gateway.infrastructure.database.codec import (
    decode_achievements,
    decode_snapshot,
    encode_achievements,
    encode_snapshot,
)
from finx_gateway.infrastructure.database.models import StoredState

SNAPSHOT_KEY = "finx-data"
ACHIEVEMENTS_KEY = "finx-achievements"


class StateRepository:
    """Repository for the snapshot and achievement blobs"""

    def __init__(self, db: Session):
        self.db = db

    def _get(self, key: str) -> Optional[str]:
        row = self.db.get(StoredState, key)
        return row.value if row else None

    def _put(self, key: str, value: str) -> None:
        row = self.db.get(StoredState, key)
        if row is None:
            self.db.add(StoredState(key=key, value=value))
        else:
            row.value = value
        self.db.flush()

    def load_session(self) -> FinanceSession:
        """Rebuild the session from storage, migrating and defaulting as needed"""
        snapshot = decode_snapshot(self._get(SNAPSHOT_KEY))
        achievements = decode_achievements(self._get(ACHIEVEMENTS_KEY))
        return FinanceSession(snapshot=snapshot, achievements=achievements)

    def save_session(self, session: FinanceSession) -> None:
        """Persist snapshot and achievements (flushed, not committed)"""
        self._put(SNAPSHOT_KEY, encode_snapshot(session.snapshot))
        self._put(ACHIEVEMENTS_KEY, encode_achievements(session.achievements))

    def clear(self) -> None:
        """Remove both stored blobs"""
        (
            self.db.query(StoredState)
            .filter(StoredState.key.in_([SNAPSHOT_KEY, ACHIEVEMENTS_KEY]))
            .delete(synchronize_session=False)
        )
