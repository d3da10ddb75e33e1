"""Unit tests for WikiAccessControl."""

from uuid import uuid4

import pytest

from wikirag.infrastructure.permission.access_control import WikiAccessControl

from tests.conftest import make_document


@pytest.mark.asyncio
async def test_collection_ids(uow_factory, user, collection_id) -> None:
    assert await WikiAccessControl(uow_factory).collection_ids(user) == [collection_id]


@pytest.mark.asyncio
async def test_can_read_document_in_readable_collection(uow_factory, user, collection_id) -> None:
    document = make_document(team_id=user.team_id, collection_id=collection_id)
    assert await WikiAccessControl(uow_factory).can_read(user, document) is True


@pytest.mark.asyncio
async def test_cannot_read_document_in_other_collection(uow_factory, user) -> None:
    document = make_document(team_id=user.team_id, collection_id=uuid4())
    assert await WikiAccessControl(uow_factory).can_read(user, document) is False


@pytest.mark.asyncio
async def test_can_read_directly_shared_document(uow_factory, fake_uow, user) -> None:
    document = make_document(team_id=user.team_id, collection_id=None)
    fake_uow.users.document_memberships.add((user.id, document.id))
    assert await WikiAccessControl(uow_factory).can_read(user, document) is True


@pytest.mark.asyncio
async def test_cannot_read_other_team(uow_factory, fake_uow, user, collection_id) -> None:
    document = make_document(team_id=uuid4(), collection_id=collection_id)
    fake_uow.users.document_memberships.add((user.id, document.id))
    assert await WikiAccessControl(uow_factory).can_read(user, document) is False
