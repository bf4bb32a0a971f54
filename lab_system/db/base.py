"""
Database model registry.

Importing this module ensures all table models are registered with
SQLModel's metadata, which is required before calling ``create_all()``.
"""

from sqlmodel import SQLModel

import lab_system.models  # noqa: F401

metadata = SQLModel.metadata
