"""Shared plumbing for the use-case services"""

from typing import Callable, Optional

from sqlalchemy.orm import Session

from .database import run_in_transaction
from .id_generator import generate_record_id
from .migrations import DEFAULT_CONFIG, get_project_config


class BaseService:
    """Holds the session factory and the project settings, read once per service

    Args:
        session_factory: factory for transactional sessions; the global one when omitted
        config: project settings; ``.taskboard/config.json`` when omitted
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None,
                 config: Optional[dict] = None):
        self.session_factory = session_factory
        self.config = dict(DEFAULT_CONFIG, **(config if config is not None else get_project_config()))

    def _run(self, work):
        return run_in_transaction(
            work,
            self.session_factory,
            attempts=int(self.config["transaction_attempts"]),
            backoff_seconds=float(self.config["retry_backoff_seconds"]),
        )

    def _new_id(self, session: Session, model) -> str:
        return generate_record_id(session, model, prefix=self.config["id_prefix"])
