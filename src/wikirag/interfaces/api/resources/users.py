"""Resolve the authenticated request user to a wiki user."""

from uuid import UUID

import falcon
import falcon.asgi

from wikirag.domain.entities import User


async def resolve_user(req: falcon.asgi.Request, unit_of_work_factory: type) -> User:
    """Return the wiki user behind the request or raise 401."""
    request_user = getattr(req.context, "user", None)
    if not request_user:
        raise falcon.HTTPUnauthorized(title="Unauthorized")
    try:
        user_id = UUID(request_user.user_id)
    except ValueError:
        raise falcon.HTTPUnauthorized(title="Unauthorized", description="Invalid user id")

    async with unit_of_work_factory() as uow:
        user = await uow.users.get_by_id(user_id)
    if not user:
        raise falcon.HTTPUnauthorized(title="Unauthorized", description="Unknown user")
    return user
