import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from lending.book import NOT_BORROWED, Book
from lending.patron import Patron

logger = logging.getLogger(__name__)

# Id returned when a registration or lookup fails.
NOT_FOUND = -1


class BorrowRefusal(str, Enum):
    """Why a borrow request was turned down, in the order the guards are checked."""
    INVALID_BOOK = "invalid_book"
    INVALID_PATRON = "invalid_patron"
    UNAVAILABLE = "unavailable"
    NOT_ENJOYED = "not_enjoyed"
    LIMIT_REACHED = "limit_reached"


class Library:
    """A fixed-capacity catalog of books and roster of patrons.

    Books and patrons live in slot lists sized at construction. A slot index
    is the id callers use for every later operation. Slots are filled left to
    right and nothing is ever removed, so the occupied slots are always the
    prefix ``[0, count)``.

    Failures are reported the way callers of the registry expect them: a
    ``NOT_FOUND`` id, a ``False`` result or ``None``. Nothing here raises for
    a refused operation. Not safe for concurrent use.
    """

    def __init__(self, max_book_capacity: int, max_borrowed_books: int, max_patron_capacity: int,
                 *, scan_full_catalog: bool = False) -> None:
        self.max_book_capacity = max_book_capacity
        self.max_borrowed_books = max_borrowed_books
        self.max_patron_capacity = max_patron_capacity
        self.scan_full_catalog = scan_full_catalog

        # Zero or negative capacities give a library that is always full
        self._books: List[Optional[Book]] = [None] * max(max_book_capacity, 0)
        self._patrons: List[Optional[Patron]] = [None] * max(max_patron_capacity, 0)

    # ------------------------- Registration ------------------------- #
    @staticmethod
    def _place(slots: List[Any], entity: Any) -> int:
        """Return the slot already holding ``entity``, else fill the first empty one."""
        for i, current in enumerate(slots):
            if current is entity:
                return i
            if current is None:
                slots[i] = entity
                return i
        return NOT_FOUND

    @staticmethod
    def _find(slots: List[Any], entity: Any) -> int:
        for i, current in enumerate(slots):
            if current is entity:
                return i
            if current is None:
                # end of the occupied prefix
                break
        return NOT_FOUND

    def add_book(self, book: Book) -> int:
        """Add ``book`` to the catalog.

        Returns the book's id, which is its existing id when it was added
        before, or NOT_FOUND when the catalog is full.
        """
        book_id = self._place(self._books, book)
        if book_id == NOT_FOUND:
            logger.warning(f"Catalog full ({self.max_book_capacity} books), could not add '{book.title}'")
        else:
            logger.info(f"Book '{book.title}' registered with id {book_id}")
        return book_id

    def register_patron(self, patron: Patron) -> int:
        """Register ``patron``; same idempotent slot rules as add_book."""
        patron_id = self._place(self._patrons, patron)
        if patron_id == NOT_FOUND:
            logger.warning(f"Roster full ({self.max_patron_capacity} patrons), "
                           f"could not register {patron.display_name()}")
        else:
            logger.info(f"Patron {patron.display_name()} registered with id {patron_id}")
        return patron_id

    def book_id(self, book: Book) -> int:
        return self._find(self._books, book)

    def patron_id(self, patron: Patron) -> int:
        return self._find(self._patrons, patron)

    # ------------------------- Validity ------------------------- #
    def is_book_id_valid(self, book_id: int) -> bool:
        return 0 <= book_id < len(self._books) and self._books[book_id] is not None

    def is_patron_id_valid(self, patron_id: int) -> bool:
        return 0 <= patron_id < len(self._patrons) and self._patrons[patron_id] is not None

    def is_book_available(self, book_id: int) -> bool:
        return self.is_book_id_valid(book_id) and self._books[book_id].borrower_id() == NOT_BORROWED

    def get_book(self, book_id: int) -> Optional[Book]:
        return self._books[book_id] if self.is_book_id_valid(book_id) else None

    def get_patron(self, patron_id: int) -> Optional[Patron]:
        return self._patrons[patron_id] if self.is_patron_id_valid(patron_id) else None

    # ------------------------- Borrowing ------------------------- #
    def borrowed_count(self, patron_id: int) -> int:
        """Number of books currently held by ``patron_id``, recomputed from the catalog."""
        return sum(1 for book in self._books if book is not None and book.borrower_id() == patron_id)

    def borrowed_books(self, patron_id: int) -> List[Book]:
        return [book for book in self._books if book is not None and book.borrower_id() == patron_id]

    def check_borrow(self, book_id: int, patron_id: int) -> Optional[BorrowRefusal]:
        """Return the first guard that would refuse this borrow, or None if it would succeed.

        Guards: both ids valid, book available, patron enjoys the book,
        patron below the borrow limit. Does not change any state.
        """
        if not self.is_book_id_valid(book_id):
            return BorrowRefusal.INVALID_BOOK
        if not self.is_patron_id_valid(patron_id):
            return BorrowRefusal.INVALID_PATRON

        book = self._books[book_id]
        patron = self._patrons[patron_id]
        if book.borrower_id() != NOT_BORROWED:
            return BorrowRefusal.UNAVAILABLE
        if not patron.will_enjoy(book):
            return BorrowRefusal.NOT_ENJOYED
        if self.borrowed_count(patron_id) >= self.max_borrowed_books:
            return BorrowRefusal.LIMIT_REACHED
        return None

    def borrow_book(self, book_id: int, patron_id: int) -> bool:
        """Mark the book as borrowed by the patron if every guard passes."""
        refusal = self.check_borrow(book_id, patron_id)
        if refusal is not None:
            logger.debug(f"Borrow of book {book_id} by patron {patron_id} refused: {refusal.value}")
            return False

        self._books[book_id].set_borrower(patron_id)
        logger.info(f"Book {book_id} borrowed by patron {patron_id}")
        return True

    def return_book(self, book_id: int) -> bool:
        """Return the book to the shelf.

        An invalid id changes nothing and yields False. Returning a book that
        is not borrowed is allowed and yields True.
        """
        if not self.is_book_id_valid(book_id):
            logger.warning(f"Ignoring return of unknown book id {book_id}")
            return False

        self._books[book_id].set_borrower(NOT_BORROWED)
        logger.info(f"Book {book_id} returned")
        return True

    # ------------------------- Suggestion ------------------------- #
    def _suggestion_bound(self) -> int:
        # Literal bound: only the first max_borrowed_books slots are considered.
        if self.scan_full_catalog:
            return len(self._books)
        return max(min(self.max_borrowed_books, len(self._books)), 0)

    def suggest_book(self, patron_id: int) -> Optional[Book]:
        """Suggest the available book the patron will enjoy the most.

        Only a strictly positive score can win; ties go to the lowest id.
        Returns None for an unknown patron or when nothing qualifies.
        """
        patron = self.get_patron(patron_id)
        if patron is None:
            return None

        best: Optional[Book] = None
        best_score = 0
        for i in range(self._suggestion_bound()):
            book = self._books[i]
            if book is None:
                break
            if not self.is_book_available(i) or not patron.will_enjoy(book):
                continue
            score = patron.score(book)
            if score > best_score:
                best, best_score = book, score

        if best is None:
            logger.debug(f"No suggestion for patron {patron_id}")
        return best

    # ------------------------- Read helpers ------------------------- #
    def books(self) -> Iterator[Tuple[int, Book]]:
        for i, book in enumerate(self._books):
            if book is None:
                break
            yield i, book

    def patrons(self) -> Iterator[Tuple[int, Patron]]:
        for i, patron in enumerate(self._patrons):
            if patron is None:
                break
            yield i, patron

    def get_statistics(self) -> Dict[str, Any]:
        """Get library statistics."""
        total_books = sum(1 for _ in self.books())
        borrowed = sum(1 for _, book in self.books() if book.is_borrowed())
        return {
            "total_books": total_books,
            "available_books": total_books - borrowed,
            "borrowed_books": borrowed,
            "total_patrons": sum(1 for _ in self.patrons()),
            "book_capacity": self.max_book_capacity,
            "patron_capacity": self.max_patron_capacity,
            "max_borrowed_books": self.max_borrowed_books,
        }
