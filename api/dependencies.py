"""
API dependencies for dependency injection
"""

from typing import Generator, Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from api.security import get_caller
from domain.models import get_db_session
from domain.schemas.caller import CallerContext


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def get_caller_context(
    request: Request, caller: Optional[CallerContext] = Depends(get_caller)
) -> Optional[CallerContext]:
    """
    Caller context dependency; None when the request is anonymous.

    The resolved caller is kept on request.state so middleware can log it.
    """
    request.state.caller = caller
    return caller
