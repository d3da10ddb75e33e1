"""Operational CLI: embed a document or run a search as a user.

Usage:
  wikirag-query --embed <documentId>
  wikirag-query --query "how do we deploy" --user <userId> [--mode vector|hybrid]
  wikirag-query --reindex-team <teamId> [--force]
  wikirag-query --cleanup [--team <teamId>]
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from uuid import UUID

from wikirag.domain.exceptions import ValidationError, WikiRAGError
from wikirag.domain.value_objects import GenerationStatus, SearchMode
from wikirag.interfaces.schemas.search import parse_search_request


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wikirag-query", description="RAG embedding and search tool")
    parser.add_argument("-q", "--query", help="Search query")
    parser.add_argument("-e", "--embed", metavar="DOCUMENT_ID", help="Document ID to embed (forced)")
    parser.add_argument("-u", "--user", metavar="USER_ID", help="User ID to search as")
    parser.add_argument(
        "-m",
        "--mode",
        choices=[m.value for m in SearchMode],
        default=SearchMode.HYBRID.value,
        help="Search mode (default: hybrid)",
    )
    parser.add_argument("-l", "--limit", type=int, default=10, help="Maximum results")
    parser.add_argument("--reindex-team", metavar="TEAM_ID", help="Schedule embedding of a team's documents")
    parser.add_argument("--force", action="store_true", help="Regenerate even if up to date")
    parser.add_argument("--cleanup", action="store_true", help="Delete embeddings of obsolete models")
    parser.add_argument("--team", metavar="TEAM_ID", help="Restrict --cleanup to one team")
    return parser


def _parse_uuid(value: str, label: str) -> UUID:
    try:
        return UUID(value)
    except ValueError:
        raise ValidationError(f"{label} {value!r} is not a valid UUID") from None


async def run(args: argparse.Namespace, services, uow_factory) -> int:
    """Execute the requested action. Returns process exit status."""
    try:
        return await _run(args, services, uow_factory)
    except WikiRAGError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


async def _run(args: argparse.Namespace, services, uow_factory) -> int:
    if args.embed:
        document_id = _parse_uuid(args.embed, "Document")
        print(f"Embedding document {document_id}...")
        result = await services.generate_embeddings.execute(document_id, force=True)
        if result.status == GenerationStatus.SKIPPED_MISSING:
            print(f"Error: Document {document_id} not found", file=sys.stderr)
            return 1
        if result.status == GenerationStatus.SKIPPED_DISABLED:
            print("Error: RAG is not enabled (set RAG_ENABLED=true)", file=sys.stderr)
            return 1
        print(f"Done: {result.status.value} ({result.chunk_count} chunks)")
        return 0

    if args.query:
        if not args.user:
            print("Error: --user <userId> is required for search", file=sys.stderr)
            return 1
        user_id = _parse_uuid(args.user, "User")
        async with uow_factory() as uow:
            user = await uow.users.get_by_id(user_id)
        if not user:
            print(f"Error: User {args.user} not found", file=sys.stderr)
            return 1

        input_data = parse_search_request(
            {"query": args.query, "mode": args.mode, "limit": args.limit}
        )
        print(f'Searching for: "{args.query}" (mode: {args.mode}) as user {user.name}...')
        results = await services.hybrid_search.execute(user, input_data)

        print("\nResults:")
        if not results:
            print("  (no results)")
        for i, r in enumerate(results, start=1):
            fused = f" fused={r.fused_score:.4f}" if r.fused_score is not None else ""
            print(f"{i:>2}. {r.title} [{r.document_id}] chunk={r.chunk_index} score={r.score:.4f}{fused}")
            if r.context:
                snippet = " ".join(r.context.split())
                print(f"    {snippet[:200]}")
        return 0

    if args.reindex_team:
        team_id = _parse_uuid(args.reindex_team, "Team")
        scheduled = await services.bulk_index.execute(team_id, force=args.force)
        print(f"Scheduled {scheduled} documents for team {team_id}")
        return 0

    if args.cleanup:
        team_id = _parse_uuid(args.team, "Team") if args.team else None
        deleted = await services.cleanup_obsolete.execute(team_id)
        print(f"Deleted {deleted} obsolete embeddings")
        return 0

    build_parser().print_help(sys.stderr)
    return 1


async def _main_async(args: argparse.Namespace) -> int:
    from wikirag.config import get_settings
    from wikirag.infrastructure.persistence.postgres.connection import open_pool
    from wikirag.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
    from wikirag.log import setup_logging
    from wikirag.main import build_services

    settings = get_settings()
    setup_logging(settings)
    async with open_pool(settings.database_url) as pool:
        uow_factory = create_uow_factory(pool)
        services = build_services(settings, uow_factory)
        return await run(args, services, uow_factory)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(_main_async(args))


if __name__ == "__main__":
    sys.exit(main())
