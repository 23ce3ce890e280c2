from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry

from ...errors import AuthenticationError, ValidationError
from ...inputs import SavedBook, parse_input
from ...logging import get_logger
from ..types.user import User

if TYPE_CHECKING:
    from ..context import BookshelfContext
    from ..mutations.root import SaveBookInput

logger = get_logger(__name__)


def require_user_id(info: strawberry.Info) -> UUID:
    """Return the caller's user id or raise if the request is anonymous."""
    context: BookshelfContext = info.context
    user_id = context.auth.user_id
    if user_id is None:
        raise AuthenticationError("You need to be logged in!")
    return user_id


async def save_book(info: strawberry.Info, input: SaveBookInput | None) -> User | None:
    """
    Add a book to the caller's saved list.

    Saving a book identical in every field to one already saved changes
    nothing, so retries are harmless.
    """
    user_id = require_user_id(info)
    if input is None:
        raise ValidationError("input: Field required")

    book = parse_input(
        SavedBook,
        {
            "bookId": input.book_id,
            "title": input.title,
            "authors": input.authors,
            "description": input.description,
            "image": input.image,
            "link": input.link,
        },
    )

    context: BookshelfContext = info.context
    user = await context.services.users.add_saved_book(user_id, book.to_document())
    if user is None:
        logger.warning("Authenticated user no longer exists", user_id=str(user_id))
        return None

    logger.info("Book saved", book_id=book.book_id, saved_count=len(user.saved_books))
    return User.from_model(user)


async def delete_book(info: strawberry.Info, book_id: str | None) -> User | None:
    """Remove every saved entry with this bookId. Unknown ids are a no-op."""
    user_id = require_user_id(info)
    if book_id is None:
        raise ValidationError("bookId: Field required")

    context: BookshelfContext = info.context
    user = await context.services.users.pull_saved_books(user_id, book_id)
    if user is None:
        logger.warning("Authenticated user no longer exists", user_id=str(user_id))
        return None

    logger.info("Book removed", book_id=book_id, saved_count=len(user.saved_books))
    return User.from_model(user)
