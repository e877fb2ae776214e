"""
Static demo data for the BookHub admin client.

This package contains fixture payloads used by DemoBookhubService for
development, testing, and demonstrations without a running back end.

Modules:
- demo_data: Seed policies, publishers, books, stock, categories and branches
"""
