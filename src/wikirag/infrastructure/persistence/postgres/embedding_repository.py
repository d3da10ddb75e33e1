"""PostgreSQL embedding repository implementation (pgvector)."""

from uuid import UUID

from psycopg import AsyncConnection

from wikirag.application.dto.search_dto import SearchResult, SearchScope
from wikirag.domain.entities import DocumentEmbedding


def _build_scope_conditions(scope: SearchScope) -> tuple[list[str], dict[str, object]]:
    """Build SQL AND conditions and params restricting rows to what the user may read."""
    conditions = [
        "de.team_id = %(team_id)s",
        "de.model_id = %(model_id)s",
        "d.published_at IS NOT NULL",
        "d.deleted_at IS NULL",
        "d.archived_at IS NULL",
        "("
        "d.collection_id = ANY(%(collection_ids)s::uuid[]) "
        "OR EXISTS (SELECT 1 FROM user_memberships um "
        "WHERE um.document_id = d.id AND um.user_id = %(user_id)s) "
        "OR EXISTS (SELECT 1 FROM collection_memberships cm "
        "WHERE cm.collection_id = d.collection_id AND cm.user_id = %(user_id)s)"
        ")",
    ]
    params: dict[str, object] = {
        "team_id": scope.team_id,
        "model_id": scope.model_id,
        "user_id": scope.user_id,
        "collection_ids": sorted(scope.collection_ids, key=str),
    }
    if scope.collection_id is not None:
        conditions.append("d.collection_id = %(collection_id)s")
        params["collection_id"] = scope.collection_id
    if scope.document_id is not None:
        conditions.append("d.id = %(document_id)s")
        params["document_id"] = scope.document_id
    return conditions, params


class PostgresEmbeddingRepository:
    """Embedding repository with cosine k-NN search over the HNSW index."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def replace_for_document(
        self, document_id: UUID, model_id: str, embeddings: list[DocumentEmbedding]
    ) -> None:
        """Delete all rows for (document, model) and insert the new set.

        Must run inside the caller's unit of work so the swap commits atomically.
        """
        await self._conn.execute(
            "DELETE FROM document_embeddings WHERE document_id = %s AND model_id = %s",
            (document_id, model_id),
        )
        if not embeddings:
            return
        async with self._conn.cursor() as cur:
            await cur.executemany(
                "INSERT INTO document_embeddings "
                "(id, document_id, team_id, model_id, document_version, chunk_index, "
                "context, embedding, created_at, updated_at) "
                "VALUES (%s, %s, %s, %s, %s, %s, %s, %s::vector, NOW(), NOW())",
                [
                    (
                        e.id,
                        e.document_id,
                        e.team_id,
                        e.model_id,
                        e.document_version,
                        e.chunk_index,
                        e.context,
                        e.embedding,
                    )
                    for e in embeddings
                ],
            )

    async def latest_version(self, document_id: UUID, model_id: str) -> int | None:
        """Highest document_version stored for (document, model), None if no rows."""
        cur = await self._conn.execute(
            "SELECT MAX(document_version) FROM document_embeddings "
            "WHERE document_id = %s AND model_id = %s",
            (document_id, model_id),
        )
        r = await cur.fetchone()
        return r[0] if r else None

    async def delete_for_document(self, document_id: UUID, model_id: str) -> int:
        """Delete all rows for (document, model). Returns rows removed."""
        cur = await self._conn.execute(
            "DELETE FROM document_embeddings WHERE document_id = %s AND model_id = %s",
            (document_id, model_id),
        )
        return cur.rowcount

    async def delete_obsolete(self, active_model_id: str, team_id: UUID | None = None) -> int:
        """Delete rows whose model is not the active one. Returns rows removed."""
        q = "DELETE FROM document_embeddings WHERE model_id <> %s"
        params: list[object] = [active_model_id]
        if team_id is not None:
            q += " AND team_id = %s"
            params.append(team_id)
        cur = await self._conn.execute(q, params)
        return cur.rowcount

    async def nearest(
        self,
        query_embedding: list[float],
        scope: SearchScope,
        limit: int = 10,
        threshold: float = 0.7,
    ) -> list[SearchResult]:
        """Chunks closest to the query by cosine similarity, above threshold."""
        conditions, params = _build_scope_conditions(scope)
        params.update(
            {
                "query_embedding": query_embedding,
                "threshold": threshold,
                "limit": limit,
            }
        )
        where = " AND ".join(conditions)
        cur = await self._conn.execute(
            f"""
            SELECT * FROM (
                SELECT de.id, de.document_id, de.context, de.chunk_index,
                       d.title, d.collection_id,
                       1 - (de.embedding <=> %(query_embedding)s::vector) AS score
                FROM document_embeddings de
                JOIN documents d ON d.id = de.document_id
                WHERE {where}
                ORDER BY de.embedding <=> %(query_embedding)s::vector
                LIMIT %(limit)s
            ) ranked
            WHERE score > %(threshold)s
            ORDER BY score DESC
            """,
            params,
        )
        rows = await cur.fetchall()
        return [
            SearchResult(
                id=str(r[0]),
                document_id=r[1],
                title=r[4] or "",
                collection_id=r[5],
                score=float(r[6]),
                context=r[2],
                chunk_index=r[3],
            )
            for r in rows
        ]
