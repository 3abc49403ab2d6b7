"""Bookshelf - In-Memory Book Collection

This package contains the application modules:
- Data model (book.py)
- Validation and id generation (validators.py)
- Error types and result wrapper (errors.py, result.py)
- Book store (library.py)
- CLI interface and output helpers (main.py, ui_helpers.py)
"""

__version__ = "1.0.0"
