"""Lending Library - Core Package

This package contains the lending library modules:
- Book and Patron records (book.py, patron.py)
- Library registry with borrowing and suggestion rules (library.py)
- Settings loaded from the environment (config.py)
- Scenario loading and replay (scenario.py)
- CLI interface (cli.py)
"""
