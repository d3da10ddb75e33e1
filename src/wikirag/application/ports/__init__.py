"""Application ports - interfaces for external adapters."""

from wikirag.application.ports.access_control import AccessControl
from wikirag.application.ports.chunker import Chunker
from wikirag.application.ports.embedding_provider import EmbeddingProvider
from wikirag.application.ports.keyword_search import KeywordSearch
from wikirag.application.ports.task_scheduler import TaskScheduler
from wikirag.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "AccessControl",
    "Chunker",
    "EmbeddingProvider",
    "KeywordSearch",
    "TaskScheduler",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
