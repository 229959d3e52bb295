import logging
from dataclasses import dataclass
from config import Settings

ROOT_LOGGER_NAME = "taskmanager"


@dataclass(frozen=True)
class AppContext:
    """Settings snapshot plus the logging sink shared by repositories, services and routes"""
    settings: Settings
    logger: logging.Logger

    @classmethod
    def create(cls, settings: Settings) -> "AppContext":
        return cls(settings=settings, logger=logging.getLogger(ROOT_LOGGER_NAME))

    def get_logger(self, name: str) -> logging.Logger:
        return self.logger.getChild(name)
