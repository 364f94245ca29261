"""PostgreSQL user login and activity repository implementation."""

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from permitdesk.domain.entities import HistoryEntry, LoginRecord


class PostgresActivityRepository:
    """Append-only user_login and user_activity."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def record_login(self, record: LoginRecord) -> None:
        """Insert login row."""
        await self._conn.execute(
            "INSERT INTO user_login (id, user_id, user_name, user_email, login_at, success) "
            "VALUES (%s, %s, %s, %s, %s, %s)",
            (
                record.id,
                record.identity,
                record.display_name,
                record.email,
                record.login_at,
                record.success,
            ),
        )

    async def append(self, entry: HistoryEntry) -> HistoryEntry:
        """Insert activity row."""
        await self._conn.execute(
            "INSERT INTO user_activity "
            "(id, user_id, user_name, user_email, action, entity_type, entity_id, metadata, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)",
            (
                entry.id,
                entry.actor_identity,
                entry.metadata.get("user_name"),
                entry.metadata.get("user_email"),
                entry.action,
                entry.entity_type,
                entry.subject_id,
                Jsonb(entry.metadata),
                entry.timestamp,
            ),
        )
        return entry

    async def list_for_identity(self, identity: str) -> list[HistoryEntry]:
        """List activity of a user, newest first."""
        cur = await self._conn.execute(
            "SELECT id, entity_id, action, user_id, created_at, metadata, entity_type "
            "FROM user_activity WHERE user_id = %s ORDER BY created_at DESC, seq DESC",
            (identity,),
        )
        rows = await cur.fetchall()
        return [
            HistoryEntry(
                id=r[0],
                subject_id=r[1],
                action=r[2],
                actor_identity=r[3],
                timestamp=r[4],
                metadata=r[5] or {},
                entity_type=r[6],
            )
            for r in rows
        ]
