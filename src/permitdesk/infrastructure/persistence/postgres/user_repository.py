"""PostgreSQL user repository implementation."""

from datetime import datetime

from psycopg import AsyncConnection

from permitdesk.domain.entities import UserProfile
from permitdesk.domain.value_objects import Role


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_identity(self, identity: str) -> UserProfile | None:
        """Get profile by auth user id."""
        cur = await self._conn.execute(
            "SELECT auth_user_id, name, email, role, avatar FROM users WHERE auth_user_id = %s",
            (identity,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return UserProfile(
            identity=r[0],
            display_name=r[1],
            email=r[2],
            role=Role.parse(r[3]),
            avatar=r[4],
        )

    async def upsert(self, profile: UserProfile) -> UserProfile:
        """Create or update profile keyed by auth user id."""
        await self._conn.execute(
            "INSERT INTO users (auth_user_id, name, email, role, avatar) "
            "VALUES (%s, %s, %s, %s, %s) "
            "ON CONFLICT (auth_user_id) DO UPDATE SET "
            "name = EXCLUDED.name, email = EXCLUDED.email, role = EXCLUDED.role, "
            "avatar = COALESCE(EXCLUDED.avatar, users.avatar)",
            (
                profile.identity,
                profile.display_name,
                profile.email,
                Role.parse(profile.role).value,
                profile.avatar,
            ),
        )
        return profile

    async def touch_login(
        self, identity: str, login_at: datetime, avatar: str | None = None
    ) -> None:
        """Set last_login_at and, when given, the avatar."""
        if avatar:
            await self._conn.execute(
                "UPDATE users SET avatar = %s, last_login_at = %s WHERE auth_user_id = %s",
                (avatar, login_at, identity),
            )
        else:
            await self._conn.execute(
                "UPDATE users SET last_login_at = %s WHERE auth_user_id = %s",
                (login_at, identity),
            )
