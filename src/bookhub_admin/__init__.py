"""
BookHub Admin: a Reflex back-office client for the BookHub bookstore API.

This package provides the administrative web interface for the book
catalog, category tree, pricing policies, publishers, stock levels,
employee sign-up and account recovery, and branch stock statistics.

Subpackages:
- controllers: List, category, validation and CRUD orchestration
- screens: Per-page composition of controllers
- models: Envelope, queries, items and request forms
- services: Remote-call boundary (httpx and in-memory demo implementations)
- components: Reflex UI components
- data: Demo seed records

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
