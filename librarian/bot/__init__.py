# librarian/bot/__init__.py
