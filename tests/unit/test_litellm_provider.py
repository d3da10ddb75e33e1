"""Unit tests for LiteLLMEmbeddingProvider against a mocked HTTP transport."""

import json

import httpx
import pytest

from wikirag.domain.exceptions import ConfigurationError, UpstreamServiceError
from wikirag.infrastructure.embedding.litellm_provider import LiteLLMEmbeddingProvider


def _embedding_response(vectors: list[list[float]], reverse: bool = False) -> httpx.Response:
    data = [
        {"object": "embedding", "index": i, "embedding": v} for i, v in enumerate(vectors)
    ]
    if reverse:
        data.reverse()
    return httpx.Response(
        200,
        json={
            "object": "list",
            "data": data,
            "model": "m1",
            "usage": {"prompt_tokens": 1, "total_tokens": 1},
        },
    )


def _provider(handler, batch_size: int = 20) -> LiteLLMEmbeddingProvider:
    return LiteLLMEmbeddingProvider(
        base_url="http://litellm.test/",
        api_key="secret",
        model="m1",
        batch_size=batch_size,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_embed_one_posts_model_and_input() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return _embedding_response([[0.1, 0.2, 0.3]])

    vector = await _provider(handler).embed_one("hello world")

    assert vector == [0.1, 0.2, 0.3]
    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/embeddings"
    assert request.headers["authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["model"] == "m1"
    assert body["input"] == "hello world"


@pytest.mark.asyncio
async def test_embed_splits_into_batches_and_keeps_order() -> None:
    """Responses listed out of index order are re-sorted; batches concatenate."""
    inputs_seen: list[list[str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        texts = json.loads(request.content)["input"]
        inputs_seen.append(texts)
        return _embedding_response([[float(t)] for t in texts], reverse=True)

    texts = [str(i) for i in range(5)]
    vectors = await _provider(handler, batch_size=2).embed(texts)

    assert inputs_seen == [["0", "1"], ["2", "3"], ["4"]]
    assert vectors == [[0.0], [1.0], [2.0], [3.0], [4.0]]


@pytest.mark.asyncio
async def test_embed_empty_list_makes_no_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    assert await _provider(handler).embed([]) == []


@pytest.mark.asyncio
async def test_error_status_surfaces_upstream_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "model not found"}})

    with pytest.raises(UpstreamServiceError, match="model not found") as exc_info:
        await _provider(handler).embed_one("hello")
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_connection_failure_is_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamServiceError, match="unreachable"):
        await _provider(handler).embed(["hello"])


@pytest.mark.asyncio
async def test_count_mismatch_is_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return _embedding_response([[1.0]])

    with pytest.raises(UpstreamServiceError, match="returned 1 embeddings for 2 inputs"):
        await _provider(handler).embed(["a", "b"])


@pytest.mark.asyncio
async def test_missing_base_url_is_configuration_error() -> None:
    provider = LiteLLMEmbeddingProvider(base_url=None, api_key=None, model="m1")
    assert provider.model == "m1"
    with pytest.raises(ConfigurationError, match="RAG_LITELLM_BASE_URL"):
        await provider.embed_one("hello")
