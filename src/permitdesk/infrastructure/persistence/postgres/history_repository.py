"""PostgreSQL permit history repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from permitdesk.domain.entities import HistoryEntry


def _params(entry: HistoryEntry) -> tuple:
    return (
        entry.id,
        UUID(entry.subject_id),
        entry.action,
        entry.actor_identity,
        entry.timestamp,
        Jsonb(entry.metadata),
    )


class PostgresHistoryRepository:
    """Append-only permit_history. No update or delete statements."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        """Insert history row."""
        await self._conn.execute(
            "INSERT INTO permit_history (id, permit_id, action, action_by, action_at, metadata) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            _params(entry),
        )
        return entry

    async def append_batch(self, entries: list[HistoryEntry]) -> None:
        """Insert several history rows."""
        if not entries:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO permit_history (id, permit_id, action, action_by, action_at, metadata) "
                "VALUES (%s, %s, %s, %s, %s, %s)",
                [_params(e) for e in entries],
            )

    async def list_for_subject(self, subject_id: str) -> list[HistoryEntry]:
        """List history of a permit, newest first. Equal timestamps keep insertion order."""
        cur = await self._conn.execute(
            "SELECT id, permit_id, action, action_by, action_at, metadata "
            "FROM permit_history WHERE permit_id = %s ORDER BY action_at DESC, seq DESC",
            (UUID(subject_id),),
        )
        rows = await cur.fetchall()
        return [
            HistoryEntry(
                id=r[0],
                subject_id=str(r[1]),
                action=r[2],
                actor_identity=r[3],
                timestamp=r[4],
                metadata=r[5] or {},
            )
            for r in rows
        ]
