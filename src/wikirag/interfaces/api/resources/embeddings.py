"""Embedding generation API resource."""

from uuid import UUID

import falcon
import falcon.asgi

from wikirag.application.ports import AccessControl
from wikirag.application.use_cases.embedding.generate_embeddings import (
    GenerateDocumentEmbeddingsUseCase,
)
from wikirag.domain.exceptions import NotFound, PermissionDenied, ValidationError
from wikirag.interfaces.api.resources.users import resolve_user


class DocumentEmbeddingsResource:
    """POST /v1/rag/documents/{document_id}/embeddings - regenerate one document."""

    def __init__(
        self,
        generate_embeddings: GenerateDocumentEmbeddingsUseCase,
        access_control: AccessControl,
        unit_of_work_factory: type,
    ) -> None:
        self._generate_embeddings = generate_embeddings
        self._access_control = access_control
        self._uow_factory = unit_of_work_factory

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        document_id: str,
    ) -> None:
        """Regenerate embeddings; ?force=true ignores the version check."""
        user = await resolve_user(req, self._uow_factory)
        try:
            doc_id = UUID(document_id)
        except ValueError as e:
            raise ValidationError("Invalid document ID") from e

        async with self._uow_factory() as uow:
            document = await uow.documents.get_by_id(doc_id)
        if not document or document.team_id != user.team_id:
            raise NotFound("Document", document_id)
        if not await self._access_control.can_read(user, document):
            raise PermissionDenied(f"User cannot read document {document_id}")

        force = req.get_param_as_bool("force", default=False)
        result = await self._generate_embeddings.execute(doc_id, force=force)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200
