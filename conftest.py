import json

import pytest

from lending.book import Book
from lending.library import Library
from lending.patron import Patron


@pytest.fixture
def lib():
    # 2 books, 1 concurrent borrow per patron, 2 patrons
    return Library(2, 1, 2)


@pytest.fixture
def comic_book():
    return Book("Three Men in a Boat", "Jerome K. Jerome", comic_value=3, dramatic_value=0, educational_value=0)


@pytest.fixture
def drama_book():
    return Book("Hamlet", "William Shakespeare", comic_value=0, dramatic_value=5, educational_value=0)


@pytest.fixture
def comic_fan():
    return Patron("Ricky", "Bobby", comic_tendency=2, dramatic_tendency=0, educational_tendency=0,
                  enjoyment_threshold=5)


@pytest.fixture
def scenario_data():
    return {
        "library": {"max_book_capacity": 2, "max_borrowed_books": 1, "max_patron_capacity": 2},
        "books": [
            {"title": "Three Men in a Boat", "author": "Jerome K. Jerome",
             "comic_value": 3, "dramatic_value": 0, "educational_value": 0},
            {"title": "Hamlet", "author": "William Shakespeare",
             "comic_value": 0, "dramatic_value": 5, "educational_value": 0},
        ],
        "patrons": [
            {"first_name": "Ricky", "last_name": "Bobby", "comic_tendency": 2, "dramatic_tendency": 0,
             "educational_tendency": 0, "enjoyment_threshold": 5},
        ],
        "actions": [
            {"op": "borrow", "book": 0, "patron": 0},
            {"op": "borrow", "book": 1, "patron": 0},
            {"op": "return", "book": 0},
            {"op": "borrow", "book": 1, "patron": 0},
            {"op": "suggest", "patron": 0},
        ],
    }


@pytest.fixture
def scenario_file(tmp_path, scenario_data):
    path = tmp_path / "scenario.json"
    path.write_text(json.dumps(scenario_data), encoding="utf-8")
    return path
