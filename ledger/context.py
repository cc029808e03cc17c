"""Application context handed to request dependencies."""

import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ledger.config import Settings
from ledger.services.auth import CredentialManager


@dataclass
class AppContext:
    """Process-wide collaborators, built once by the application factory.

    The engine and session factory are filled in at startup and are
    read-only afterwards.
    """

    settings: Settings
    logger: logging.Logger
    credentials: CredentialManager
    engine: Engine | None = None
    session_factory: sessionmaker | None = None

    def child_logger(self, name: str) -> logging.Logger:
        return self.logger.getChild(name)
