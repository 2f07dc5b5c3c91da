# src/fxcross/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains adapters between the application and the outside:
- Formatting (console output)
"""

__all__ = []
