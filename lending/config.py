import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Library limits used when a scenario does not set its own
    max_book_capacity: int = 100
    max_borrowed_books: int = 3
    max_patron_capacity: int = 50

    # Suggestions look past the first max_borrowed_books slots only when enabled
    scan_full_catalog: bool = False

    # Logging / output
    log_level: str = "WARNING"
    output_mode: str = "plain"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from LENDING_* environment variables, falling back to the defaults above."""
        return cls(
            max_book_capacity=int(os.getenv("LENDING_MAX_BOOK_CAPACITY", str(cls.max_book_capacity))),
            max_borrowed_books=int(os.getenv("LENDING_MAX_BORROWED_BOOKS", str(cls.max_borrowed_books))),
            max_patron_capacity=int(os.getenv("LENDING_MAX_PATRON_CAPACITY", str(cls.max_patron_capacity))),
            scan_full_catalog=_env_bool("LENDING_SCAN_FULL_CATALOG", str(cls.scan_full_catalog)),
            log_level=os.getenv("LENDING_LOG_LEVEL", cls.log_level).upper(),
            output_mode=os.getenv("LENDING_OUTPUT", cls.output_mode).lower(),
        )


settings = Settings.from_env()
