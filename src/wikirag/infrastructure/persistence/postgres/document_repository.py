"""PostgreSQL document repository implementation (read side)."""

from uuid import UUID

from psycopg import AsyncConnection

from wikirag.application.dto.search_dto import KeywordHit
from wikirag.domain.entities import Document

_COLUMNS = (
    "id, team_id, collection_id, title, text, version, "
    "published_at, deleted_at, archived_at"
)


def _row_to_document(r: tuple) -> Document:
    return Document(
        id=r[0],
        team_id=r[1],
        collection_id=r[2],
        title=r[3] or "",
        text=r[4] or "",
        version=r[5],
        published_at=r[6],
        deleted_at=r[7],
        archived_at=r[8],
    )


class PostgresDocumentRepository:
    """Document repository over the wiki's documents table."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, document_id: UUID) -> Document | None:
        """Get document by id, including deleted ones."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
            (document_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return _row_to_document(r)

    async def list_searchable_ids(self, team_id: UUID) -> list[UUID]:
        """Ids of published, non-deleted, non-archived documents of a team."""
        cur = await self._conn.execute(
            "SELECT id FROM documents "
            "WHERE team_id = %s AND published_at IS NOT NULL "
            "AND deleted_at IS NULL AND archived_at IS NULL "
            "ORDER BY id",
            (team_id,),
        )
        rows = await cur.fetchall()
        return [r[0] for r in rows]

    async def search_text(
        self,
        *,
        team_id: UUID,
        user_id: UUID,
        collection_ids: list[UUID],
        query: str,
        limit: int = 10,
    ) -> list[KeywordHit]:
        """Full-text search over readable documents, best ranked first."""
        cur = await self._conn.execute(
            """
            SELECT d.id, d.title, d.collection_id,
                   ts_headline('english', d.text, q, 'MaxFragments=1, MaxWords=30') AS context,
                   ts_rank(d.search_vector, q) AS ranking
            FROM documents d, plainto_tsquery('english', %(query)s) q
            WHERE d.team_id = %(team_id)s
              AND d.published_at IS NOT NULL
              AND d.deleted_at IS NULL
              AND d.archived_at IS NULL
              AND d.search_vector @@ q
              AND (
                d.collection_id = ANY(%(collection_ids)s::uuid[])
                OR EXISTS (
                  SELECT 1 FROM user_memberships um
                  WHERE um.document_id = d.id AND um.user_id = %(user_id)s
                )
              )
            ORDER BY ranking DESC, d.updated_at DESC
            LIMIT %(limit)s
            """,
            {
                "query": query,
                "team_id": team_id,
                "user_id": user_id,
                "collection_ids": list(collection_ids),
                "limit": limit,
            },
        )
        rows = await cur.fetchall()
        return [
            KeywordHit(
                document_id=r[0],
                title=r[1] or "",
                collection_id=r[2],
                context=r[3] or "",
                ranking=float(r[4]),
            )
            for r in rows
        ]
