from __future__ import annotations

from lending.book import Book
from lending.validators import LiteraryValidator, TextValidator


class Patron:
    """A library patron who weighs the literary aspects of books.

    All attributes are fixed at creation. Equality is identity: two patrons
    with the same name and weights are still two patrons.
    """

    def __init__(self, first_name: str, last_name: str, comic_tendency: int, dramatic_tendency: int,
                 educational_tendency: int, enjoyment_threshold: int) -> None:
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()
        self.comic_tendency = comic_tendency
        self.dramatic_tendency = dramatic_tendency
        self.educational_tendency = educational_tendency
        self.enjoyment_threshold = enjoyment_threshold

    def __str__(self) -> str:
        return self.display_name()

    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def score(self, book: Book) -> int:
        """Literary value this patron assigns to ``book``."""
        return (book.comic_value * self.comic_tendency
                + book.dramatic_value * self.dramatic_tendency
                + book.educational_value * self.educational_tendency)

    def will_enjoy(self, book: Book) -> bool:
        """True when the book scores at least the enjoyment threshold."""
        return self.score(book) >= self.enjoyment_threshold

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "comic_tendency": self.comic_tendency,
            "dramatic_tendency": self.dramatic_tendency,
            "educational_tendency": self.educational_tendency,
            "enjoyment_threshold": self.enjoyment_threshold,
        }

    @staticmethod
    def from_dict(data: dict) -> "Patron":
        first_name = data.get("first_name", "")
        last_name = data.get("last_name", "")
        for field, name in (("first_name", first_name), ("last_name", last_name)):
            if not TextValidator.validate_name(name):
                raise ValueError(f"Invalid patron {field}: {name!r}")

        # Tendencies may be negative: a patron can dislike an aspect
        weights = {}
        for key in ("comic_tendency", "dramatic_tendency", "educational_tendency", "enjoyment_threshold"):
            weights[key] = LiteraryValidator.integer(data.get(key, 0), key)

        return Patron(first_name=first_name, last_name=last_name, **weights)
