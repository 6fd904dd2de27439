from __future__ import annotations

from typing import Generator

from sqlalchemy.orm import Session

from apps.api.db.session import get_db_session


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()
