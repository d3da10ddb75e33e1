"""PostgreSQL user repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from wikirag.domain.entities import User


class PostgresUserRepository:
    """User repository over the wiki's users table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get active user by id."""
        cur = await self._conn.execute(
            "SELECT id, team_id, name FROM users WHERE id = %s AND deleted_at IS NULL",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return User(id=r[0], team_id=r[1], name=r[2] or "")

    async def collection_ids(self, user_id: UUID, team_id: UUID) -> list[UUID]:
        """Collections readable by the user: team-wide ones plus memberships."""
        cur = await self._conn.execute(
            """
            SELECT c.id FROM collections c
            WHERE c.team_id = %(team_id)s
              AND c.deleted_at IS NULL
              AND (
                c.permission IS NOT NULL
                OR EXISTS (
                  SELECT 1 FROM collection_memberships cm
                  WHERE cm.collection_id = c.id AND cm.user_id = %(user_id)s
                )
              )
            ORDER BY c.id
            """,
            {"team_id": team_id, "user_id": user_id},
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def has_document_membership(self, user_id: UUID, document_id: UUID) -> bool:
        """Whether the document is shared with the user directly."""
        cur = await self._conn.execute(
            "SELECT 1 FROM user_memberships WHERE user_id = %s AND document_id = %s LIMIT 1",
            (user_id, document_id),
        )
        return await cur.fetchone() is not None
