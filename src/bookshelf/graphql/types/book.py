"""
Book GraphQL type definitions
"""

from typing import Any

import strawberry


@strawberry.type
class Book:
    """A book saved to a user's list."""

    book_id: str | None
    title: str | None
    authors: list[str | None] | None
    description: str | None
    image: str | None
    link: str | None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Book":
        return cls(
            book_id=document.get("bookId"),
            title=document.get("title"),
            authors=document.get("authors"),
            description=document.get("description"),
            image=document.get("image"),
            link=document.get("link"),
        )
