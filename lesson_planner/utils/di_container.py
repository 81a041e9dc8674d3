"""
Service wiring for the lesson planner.

The CLI builds one DIContainer per run. configure_default_services()
registers the config, the package logger and every collaborator of
LessonPlannerService, so tests can swap any of them before resolving.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Type


logger = logging.getLogger(__name__)


@dataclass
class _Registration:
    factory: Callable[[], Any]
    singleton: bool
    instance: Optional[Any] = None


class DIContainer:
    """
    Maps a type to the factory that builds it.

    Singletons are built on first resolve and reused afterwards;
    other registrations call their factory every time.

    Examples:
        >>> container = DIContainer()
        >>> container.register(JsonPlanStore, lambda: JsonPlanStore(Path("data")), singleton=True)
        >>> container.resolve(JsonPlanStore) is container.resolve(JsonPlanStore)
        True
    """

    def __init__(self):
        self._registrations: Dict[Type, _Registration] = {}

    def register(self, interface: Type, factory: Callable[[], Any], singleton: bool = False):
        """Register `factory` for `interface`, replacing any earlier registration."""
        self._registrations[interface] = _Registration(factory, singleton)
        logger.debug(f"Registered {interface.__name__} (singleton={singleton})")

    def resolve(self, interface: Type) -> Any:
        """
        Build or fetch the instance registered for `interface`.

        Raises:
            ValueError: If nothing is registered for `interface`
        """
        registration = self._registrations.get(interface)
        if registration is None:
            known = ", ".join(t.__name__ for t in self._registrations) or "none"
            raise ValueError(f"Service not registered: {interface.__name__} (registered: {known})")

        if not registration.singleton:
            return registration.factory()

        if registration.instance is None:
            logger.debug(f"Building {interface.__name__}")
            registration.instance = registration.factory()
        return registration.instance

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations

    def clear(self):
        self._registrations.clear()


def configure_default_services(container: DIContainer, settings=None):
    """
    Register the planner's services.

    Args:
        container: DI container to configure
        settings: Config to use (default: module-level config)

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container)
        >>> service = container.resolve(LessonPlannerService)
    """
    from datetime import timedelta

    from .config import Config, config
    from .logger import setup_logger
    from ..errors import ExtractionError
    from ..export.browser_config import BrowserConfig
    from ..export.pdf_exporter import PdfExporter
    from ..extraction.extractor import LessonPlanExtractor
    from ..resilience.circuit_breaker import CircuitBreaker
    from ..service import LessonPlannerService
    from ..storage.plan_store import JsonPlanStore

    settings = settings or config

    container.register(Config, lambda: settings, singleton=True)

    container.register(
        logging.Logger,
        lambda: setup_logger(
            "lesson_planner",
            level=getattr(logging, settings.log_level, logging.INFO),
            log_file=str(settings.output_dir / "logs" / "lesson_planner.log")
        ),
        singleton=True
    )

    container.register(
        LessonPlanExtractor,
        lambda: LessonPlanExtractor(settings=settings),
        singleton=True
    )

    container.register(
        JsonPlanStore,
        lambda: JsonPlanStore(settings.data_dir),
        singleton=True
    )

    container.register(
        PdfExporter,
        lambda: PdfExporter(
            BrowserConfig.from_settings(settings.browser_headless, settings.browser_timeout)
        ),
        singleton=True
    )

    container.register(
        LessonPlannerService,
        lambda: LessonPlannerService(
            extractor=container.resolve(LessonPlanExtractor),
            store=container.resolve(JsonPlanStore),
            pdf_exporter=container.resolve(PdfExporter),
            circuit_breaker=CircuitBreaker(
                failure_threshold=settings.extraction_failure_threshold,
                timeout=timedelta(seconds=settings.extraction_reset_seconds),
                expected_exception=ExtractionError
            )
        ),
        singleton=True
    )

    logger.debug("Default services configured")
