"""LiteLLM embedding provider (OpenAI-compatible /embeddings endpoint)."""

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from wikirag.domain.exceptions import ConfigurationError, UpstreamServiceError
from wikirag.log import get_logger

logger = get_logger(__name__)


def _upstream_message(exc: APIStatusError) -> str:
    """Extract ``error.message`` from an upstream error body."""
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return f"LiteLLM error: {exc.status_code}"


class LiteLLMEmbeddingProvider:
    """Embedding provider using a LiteLLM proxy through the OpenAI SDK."""

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        model: str,
        batch_size: int = 20,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url
        self._model = model
        self._batch_size = batch_size
        self._client: AsyncOpenAI | None = None
        if base_url:
            self._client = AsyncOpenAI(
                base_url=base_url.rstrip("/"),
                # The SDK refuses an empty key; LiteLLM may run without one.
                api_key=api_key or "unused",
                timeout=timeout,
                max_retries=0,
                http_client=http_client,
            )

    @property
    def model(self) -> str:
        return self._model

    def _require_client(self) -> AsyncOpenAI:
        if self._client is None:
            raise ConfigurationError("RAG_LITELLM_BASE_URL is not configured")
        return self._client

    async def create_embedding(
        self, input: str | list[str]
    ) -> list[float] | list[list[float]]:
        """Embed a string (one vector) or a list of strings (one vector each, in order)."""
        client = self._require_client()
        try:
            response = await client.embeddings.create(
                model=self._model, input=input, encoding_format="float"
            )
        except APIStatusError as e:
            raise UpstreamServiceError(_upstream_message(e), status_code=e.status_code) from e
        except APIConnectionError as e:
            raise UpstreamServiceError(f"LiteLLM unreachable: {e}") from e

        vectors = [d.embedding for d in sorted(response.data, key=lambda d: d.index)]
        expected = 1 if isinstance(input, str) else len(input)
        if len(vectors) != expected:
            raise UpstreamServiceError(
                f"LiteLLM returned {len(vectors)} embeddings for {expected} inputs"
            )
        if isinstance(input, str):
            return vectors[0]
        return vectors

    async def batch_create_embeddings(
        self, texts: list[str], batch_size: int | None = None
    ) -> list[list[float]]:
        """Embed texts in sub-batches of ``batch_size``, preserving input order."""
        if not texts:
            return []
        size = batch_size or self._batch_size
        vectors: list[list[float]] = []
        for offset in range(0, len(texts), size):
            batch = texts[offset : offset + size]
            vectors.extend(await self.create_embedding(batch))
        logger.debug("Embedded %d texts in batches of %d", len(texts), size)
        return vectors

    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts."""
        return await self.batch_create_embeddings(texts)

    async def embed_one(self, text: str) -> list[float]:
        """Generate embedding for a single text."""
        return await self.create_embedding(text)
