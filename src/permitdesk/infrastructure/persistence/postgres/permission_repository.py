"""PostgreSQL permission repository implementation."""

from psycopg import AsyncConnection

from permitdesk.domain.entities import CapabilityFlags, PageAccessEntry
from permitdesk.domain.value_objects import PageId

_CAPABILITY_COLUMNS = CapabilityFlags.names()


class PostgresPermissionRepository:
    """user_page_access, user_permissions and user_settings rows."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def list_page_access(self, identity: str) -> list[PageAccessEntry]:
        """List page access rows of identity. Unknown pages are skipped."""
        cur = await self._conn.execute(
            "SELECT page, can_view, can_edit, can_delete, can_create "
            "FROM user_page_access WHERE user_id = %s",
            (identity,),
        )
        rows = await cur.fetchall()
        known = {p.value for p in PageId}
        return [
            PageAccessEntry(
                page=PageId(r[0]),
                can_view=bool(r[1]),
                can_edit=bool(r[2]),
                can_delete=bool(r[3]),
                can_create=bool(r[4]),
            )
            for r in rows
            if r[0] in known
        ]

    async def get_capabilities(self, identity: str) -> CapabilityFlags | None:
        """Get capability row of identity."""
        cur = await self._conn.execute(
            f"SELECT {', '.join(_CAPABILITY_COLUMNS)} FROM user_permissions WHERE user_id = %s",
            (identity,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return CapabilityFlags(**{name: bool(value) for name, value in zip(_CAPABILITY_COLUMNS, r)})

    async def upsert_page_access(
        self,
        identity: str,
        entries: list[PageAccessEntry],
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        """Insert or update one row per (user_id, page)."""
        if not entries:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO user_page_access "
                "(user_id, user_name, user_email, page, can_view, can_edit, can_delete, can_create) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s) "
                "ON CONFLICT (user_id, page) DO UPDATE SET "
                "user_name = EXCLUDED.user_name, user_email = EXCLUDED.user_email, "
                "can_view = EXCLUDED.can_view, can_edit = EXCLUDED.can_edit, "
                "can_delete = EXCLUDED.can_delete, can_create = EXCLUDED.can_create",
                [
                    (
                        identity,
                        display_name,
                        email,
                        PageId(e.page).value,
                        e.can_view,
                        e.can_edit,
                        e.can_delete,
                        e.can_create,
                    )
                    for e in entries
                ],
            )

    async def upsert_capabilities(
        self,
        identity: str,
        flags: CapabilityFlags,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        """Insert or update the capability row of identity."""
        columns = ", ".join(_CAPABILITY_COLUMNS)
        placeholders = ", ".join(["%s"] * len(_CAPABILITY_COLUMNS))
        updates = ", ".join(f"{c} = EXCLUDED.{c}" for c in _CAPABILITY_COLUMNS)
        await self._conn.execute(
            f"INSERT INTO user_permissions (user_id, user_name, user_email, {columns}) "
            f"VALUES (%s, %s, %s, {placeholders}) "
            f"ON CONFLICT (user_id) DO UPDATE SET "
            f"user_name = EXCLUDED.user_name, user_email = EXCLUDED.user_email, {updates}",
            (identity, display_name, email, *(getattr(flags, c) for c in _CAPABILITY_COLUMNS)),
        )

    async def upsert_settings(
        self,
        identity: str,
        display_name: str | None = None,
        email: str | None = None,
    ) -> None:
        """Ensure the settings row of identity exists."""
        await self._conn.execute(
            "INSERT INTO user_settings (user_id, user_name, user_email) VALUES (%s, %s, %s) "
            "ON CONFLICT (user_id) DO UPDATE SET "
            "user_name = EXCLUDED.user_name, user_email = EXCLUDED.user_email",
            (identity, display_name, email),
        )
