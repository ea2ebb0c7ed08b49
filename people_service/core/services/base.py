"""Base service class for business logic."""

from __future__ import annotations

import logging

from people_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for services.

    Loggers:
        - self.logger: standard logger for INFO/WARNING/ERROR
        - self._lazy: lazy logger for DEBUG (no formatting cost when disabled)
    """

    def __init__(self) -> None:
        name = f"{self.__class__.__module__}.{self.__class__.__name__}"
        self.logger = logging.getLogger(name)
        self._lazy = get_lazy_logger(name)
