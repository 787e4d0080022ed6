"""Build a Library from a JSON scenario file and replay its action script.

A scenario holds the library limits, the books and patrons to register and
an ordered list of actions (``borrow``, ``return``, ``suggest``). Book and
patron numbers in actions are the ids the library assigned on registration.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from lending.book import Book
from lending.config import Settings, settings as default_settings
from lending.library import NOT_FOUND, Library
from lending.patron import Patron
from lending.validators import LiteraryValidator

logger = logging.getLogger(__name__)

ACTION_FIELDS = {
    "borrow": ("book", "patron"),
    "return": ("book",),
    "suggest": ("patron",),
}


class ScenarioError(Exception):
    pass


@dataclass
class ActionResult:
    op: str
    args: Dict[str, int]
    ok: bool
    detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {"op": self.op, **self.args, "ok": self.ok, "detail": self.detail}


@dataclass
class Scenario:
    library: Library
    book_ids: List[int] = field(default_factory=list)
    patron_ids: List[int] = field(default_factory=list)
    actions: List[Dict[str, Any]] = field(default_factory=list)

    def apply(self, action: Dict[str, Any]) -> ActionResult:
        op = action["op"]
        args = {name: action[name] for name in ACTION_FIELDS[op]}
        lib = self.library

        if op == "borrow":
            refusal = lib.check_borrow(args["book"], args["patron"])
            ok = lib.borrow_book(args["book"], args["patron"])
            return ActionResult(op, args, ok, None if ok else refusal.value)
        if op == "return":
            ok = lib.return_book(args["book"])
            return ActionResult(op, args, ok, None if ok else "invalid_book")

        book = lib.suggest_book(args["patron"])
        return ActionResult(op, args, book is not None, book.title if book else None)

    def run(self) -> List[ActionResult]:
        """Replay every action in order against the library."""
        results = [self.apply(action) for action in self.actions]
        logger.info(f"Replayed {len(results)} actions, {sum(r.ok for r in results)} succeeded")
        return results


def _parse_action(raw: Any, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ScenarioError(f"Action #{index} must be an object")
    op = raw.get("op")
    if op not in ACTION_FIELDS:
        raise ScenarioError(f"Action #{index}: unknown op {op!r}")

    action: Dict[str, Any] = {"op": op}
    for name in ACTION_FIELDS[op]:
        if name not in raw:
            raise ScenarioError(f"Action #{index} ({op}) is missing '{name}'")
        try:
            action[name] = LiteraryValidator.integer(raw[name], name)
        except ValueError as e:
            raise ScenarioError(f"Action #{index} ({op}): {e}") from e
    return action


def _record(raw: Any, section: str, index: int) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ScenarioError(f"{section} #{index} must be an object")
    return raw


def build_scenario(data: Dict[str, Any], settings: Optional[Settings] = None) -> Scenario:
    """Create the library described by ``data`` and register its books and patrons.

    Capacities missing from the ``library`` section fall back to ``settings``.
    A book or patron that does not fit is logged and recorded with NOT_FOUND.
    """
    settings = settings or default_settings
    if not isinstance(data, dict):
        raise ScenarioError("Scenario must be a JSON object")

    limits = data.get("library") or {}
    if not isinstance(limits, dict):
        raise ScenarioError("'library' must be an object")
    sections = {}
    for name in ("books", "patrons", "actions"):
        sections[name] = data.get(name, [])
        if not isinstance(sections[name], list):
            raise ScenarioError(f"'{name}' must be a list")

    try:
        library = Library(
            LiteraryValidator.capacity(limits.get("max_book_capacity", settings.max_book_capacity),
                                       "max_book_capacity"),
            LiteraryValidator.capacity(limits.get("max_borrowed_books", settings.max_borrowed_books),
                                       "max_borrowed_books"),
            LiteraryValidator.capacity(limits.get("max_patron_capacity", settings.max_patron_capacity),
                                       "max_patron_capacity"),
            scan_full_catalog=LiteraryValidator.boolean(limits.get("scan_full_catalog", settings.scan_full_catalog),
                                                        "scan_full_catalog"),
        )
        books = [Book.from_dict(_record(item, "books", i)) for i, item in enumerate(sections["books"])]
        patrons = [Patron.from_dict(_record(item, "patrons", i)) for i, item in enumerate(sections["patrons"])]
    except ValueError as e:
        raise ScenarioError(str(e)) from e

    scenario = Scenario(library=library)
    for book in books:
        scenario.book_ids.append(library.add_book(book))
    for patron in patrons:
        scenario.patron_ids.append(library.register_patron(patron))

    dropped = scenario.book_ids.count(NOT_FOUND) + scenario.patron_ids.count(NOT_FOUND)
    if dropped:
        logger.warning(f"{dropped} records did not fit into the library")

    scenario.actions = [_parse_action(raw, i) for i, raw in enumerate(sections["actions"])]
    return scenario


def load_scenario(path: Union[str, Path], settings: Optional[Settings] = None) -> Scenario:
    path = Path(path)
    if not path.exists():
        raise ScenarioError(f"File not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ScenarioError(f"Invalid JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ScenarioError(f"{path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ScenarioError(f"Could not read {path}: {e}") from e
    logger.debug(f"Loaded scenario from {path}")
    return build_scenario(data, settings)
