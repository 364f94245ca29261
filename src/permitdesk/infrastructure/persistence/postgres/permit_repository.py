"""PostgreSQL permit repository implementation."""

from __future__ import annotations

from uuid import UUID

from psycopg import AsyncConnection

from permitdesk.domain.entities import Permit
from permitdesk.domain.exceptions import NotFound
from permitdesk.domain.value_objects import PermitStatus

_COLUMNS = (
    "id, permit_code, guest_name, arrival_date, departure_date, status, uploaded, "
    "last_updated_at, updated_by, nationality, passport_no, created_at, created_by"
)


def _row_to_permit(r: tuple) -> Permit:
    return Permit(
        id=r[0],
        permit_code=r[1],
        guest_name=r[2],
        arrival_date=r[3],
        departure_date=r[4],
        status=PermitStatus(r[5]),
        uploaded=bool(r[6]),
        last_updated_at=r[7],
        updated_by=r[8],
        nationality=r[9],
        passport_no=r[10],
        created_at=r[11],
        created_by=r[12],
    )


def _permit_params(p: Permit) -> tuple:
    return (
        p.id,
        p.permit_code,
        p.guest_name,
        p.arrival_date,
        p.departure_date,
        PermitStatus(p.status).value,
        p.uploaded,
        p.last_updated_at,
        p.updated_by,
        p.nationality,
        p.passport_no,
        p.created_at,
        p.created_by,
    )


class PostgresPermitRepository:
    """Permit repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permit_id: UUID) -> Permit | None:
        """Get permit by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permits WHERE id = %s",
            (permit_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_permit(r)

    async def list(self, *, status: PermitStatus | None = None) -> list[Permit]:
        """List permits, newest first."""
        if status is None:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM permits ORDER BY created_at DESC"
            )
        else:
            cur = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM permits WHERE status = %s ORDER BY created_at DESC",
                (PermitStatus(status).value,),
            )
        rows = await cur.fetchall()
        return [_row_to_permit(r) for r in rows]

    async def create(self, permit: Permit) -> Permit:
        """Create permit. The database assigns permit_code when none is given."""
        cur = await self._conn.execute(
            f"INSERT INTO permits ({_COLUMNS}) "
            "VALUES (%s, COALESCE(%s, 'PRM-' || nextval('permit_code_seq')), "
            "%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s) "
            f"RETURNING {_COLUMNS}",
            _permit_params(permit),
        )
        r = await cur.fetchone()
        return _row_to_permit(r)

    async def create_batch(self, permits: list[Permit]) -> list[Permit]:
        """Create several permits."""
        return [await self.create(p) for p in permits]

    async def update(self, permit: Permit) -> None:
        """Update editable fields and status."""
        await self._conn.execute(
            "UPDATE permits SET guest_name=%s, arrival_date=%s, departure_date=%s, "
            "nationality=%s, passport_no=%s, status=%s, uploaded=%s, "
            "last_updated_at=%s, updated_by=%s WHERE id=%s",
            (
                permit.guest_name,
                permit.arrival_date,
                permit.departure_date,
                permit.nationality,
                permit.passport_no,
                PermitStatus(permit.status).value,
                permit.uploaded,
                permit.last_updated_at,
                permit.updated_by,
                permit.id,
            ),
        )

    async def update_status(self, permit: Permit) -> None:
        """Update status columns only."""
        cur = await self._conn.execute(
            "UPDATE permits SET status=%s, uploaded=%s, last_updated_at=%s, updated_by=%s "
            "WHERE id=%s",
            (
                PermitStatus(permit.status).value,
                permit.uploaded,
                permit.last_updated_at,
                permit.updated_by,
                permit.id,
            ),
        )
        if cur.rowcount == 0:
            raise NotFound("Permit", str(permit.id))

    async def delete(self, permit_id: UUID) -> None:
        """Delete permit. permit_history rows cascade."""
        await self._conn.execute(
            "DELETE FROM permits WHERE id = %s",
            (permit_id,),
        )
