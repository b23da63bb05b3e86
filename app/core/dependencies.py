"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, Request

from app.core.config import Settings
from app.services.store import GradebookStore


def get_store(request: Request) -> GradebookStore:
    """Get the gradebook store owned by the running application."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings


# Type aliases for dependency injection
Store = Annotated[GradebookStore, Depends(get_store)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
