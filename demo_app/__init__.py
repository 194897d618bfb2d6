"""Demo HTTP backend for FakeStore products and database-backed tasks."""

__version__ = "0.1.0"
