from __future__ import annotations

from typing import Optional

from lending.validators import LiteraryValidator, TextValidator

# Borrower id of a book nobody holds.
NOT_BORROWED = -1


class Book:
    """A single book of the library with its literary values and current borrower."""

    def __init__(self, title: str, author: str, comic_value: int, dramatic_value: int, educational_value: int,
                 year_of_publication: Optional[int] = None) -> None:
        self.title = title.strip()
        self.author = author.strip()
        self.year_of_publication = year_of_publication

        # Literary values, fixed for the lifetime of the book
        self.comic_value = comic_value
        self.dramatic_value = dramatic_value
        self.educational_value = educational_value

        self._borrower_id = NOT_BORROWED

    def __str__(self) -> str:
        year = self.year_of_publication if self.year_of_publication is not None else "-"
        return f"[{self.title},{self.author},{year},{self.literary_value}]"

    @property
    def literary_value(self) -> int:
        return self.comic_value + self.dramatic_value + self.educational_value

    def borrower_id(self) -> int:
        """Id of the patron holding this book, or NOT_BORROWED."""
        return self._borrower_id

    def set_borrower(self, patron_id: int) -> None:
        """Set (or clear with NOT_BORROWED) the borrower.

        No checks happen here; the Library decides who may borrow.
        """
        self._borrower_id = patron_id

    def is_borrowed(self) -> bool:
        return self._borrower_id != NOT_BORROWED

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "author": self.author,
            "year_of_publication": self.year_of_publication,
            "comic_value": self.comic_value,
            "dramatic_value": self.dramatic_value,
            "educational_value": self.educational_value,
            "borrower_id": self._borrower_id,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        title = data.get("title", "")
        author = data.get("author", "")
        if not TextValidator.validate_title(title):
            raise ValueError(f"Invalid book title: {title!r}")
        if not TextValidator.validate_name(author):
            raise ValueError(f"Invalid author for '{title}': {author!r}")

        values = {}
        for key in ("comic_value", "dramatic_value", "educational_value"):
            values[key] = LiteraryValidator.literary_value(data.get(key, 0), key)

        year = data.get("year_of_publication")
        if year is not None:
            year = LiteraryValidator.integer(year, "year_of_publication")

        return Book(title=title, author=author, year_of_publication=year, **values)
