"""
Dependency Injection Container.

This module provides a simple DI container for managing dependencies
and promoting loose coupling.
"""

import logging
from typing import Dict, Type, Callable, Any


logger = logging.getLogger(__name__)


class DIContainer:
    """
    Simple dependency injection container.

    Factories are registered per type; a singleton factory runs once,
    on first resolve, and its instance is shared afterwards.

    Examples:
        >>> container = DIContainer()
        >>> container.register(Config, lambda: Config(), singleton=True)
        >>> config = container.resolve(Config)

        >>> # Register with dependencies
        >>> def create_storage():
        ...     config = container.resolve(Config)
        ...     return JsonFileStorage(config.data_file)
        >>> container.register(StateStorage, create_storage, singleton=True)
    """

    def __init__(self):
        """Initialize empty container."""
        self._services: Dict[Type, Callable] = {}
        self._singletons: Dict[Type, Any] = {}
        self._singleton_flags: Dict[Type, bool] = {}

        logger.debug("DI Container initialized")

    def register(
        self,
        interface: Type,
        implementation: Callable,
        singleton: bool = False
    ):
        """
        Register a service in the container.

        Args:
            interface: Service interface or type
            implementation: Factory function that creates the service
            singleton: Whether to create a single shared instance
        """
        self._services[interface] = implementation
        self._singleton_flags[interface] = singleton

        if singleton:
            self._singletons[interface] = None  # Lazy initialization

        logger.debug(
            f"Registered service: {interface.__name__} "
            f"(singleton={singleton})"
        )

    def resolve(self, interface: Type) -> Any:
        """
        Resolve a service from the container.

        Args:
            interface: Service interface or type to resolve

        Returns:
            Service instance

        Raises:
            ValueError: If service is not registered
        """
        if interface not in self._services:
            raise ValueError(
                f"Service not registered: {interface.__name__}. "
                f"Available services: {', '.join(s.__name__ for s in self._services.keys())}"
            )

        if self._singleton_flags.get(interface, False):
            if self._singletons[interface] is None:
                logger.debug(f"Creating singleton instance: {interface.__name__}")
                self._singletons[interface] = self._services[interface]()
            return self._singletons[interface]

        logger.debug(f"Creating transient instance: {interface.__name__}")
        return self._services[interface]()


def configure_default_services(container: DIContainer, app_config=None):
    """
    Register config, logger, storage and the application services.

    Storage and services are singletons sharing one StateStorage, so
    every service sees the same store.

    Args:
        container: DI container to configure
        app_config: Config to use (default: the module-level config)

    Examples:
        >>> container = DIContainer()
        >>> configure_default_services(container)
        >>> schedules = container.resolve(ScheduleService)
    """
    from .config import Config, config
    from .logger import setup_logger
    from ..storage.interfaces import StateStorage
    from ..storage.json_storage import JsonFileStorage
    from ..services.seed import seed_state
    from ..services.students import StudentService
    from ..services.lessons import LessonService
    from ..services.payments import PaymentService
    from ..services.schedules import ScheduleService
    from ..services.dashboard import DashboardService

    app_config = app_config or config

    container.register(Config, lambda: app_config, singleton=True)

    container.register(
        logging.Logger,
        lambda: setup_logger(
            "tutorbook",
            level=getattr(logging, app_config.log_level, logging.INFO)
        ),
        singleton=True
    )

    container.register(
        StateStorage,
        lambda: JsonFileStorage(
            app_config.data_file,
            initial_state=seed_state if app_config.seed_demo_data else None
        ),
        singleton=True
    )

    def defaults():
        return {
            "default_hourly_rate": app_config.default_hourly_rate,
            "default_duration": app_config.default_duration,
        }

    container.register(
        StudentService,
        lambda: StudentService(container.resolve(StateStorage), **defaults()),
        singleton=True
    )
    container.register(
        LessonService,
        lambda: LessonService(container.resolve(StateStorage), **defaults()),
        singleton=True
    )
    container.register(
        PaymentService,
        lambda: PaymentService(container.resolve(StateStorage), **defaults()),
        singleton=True
    )
    container.register(
        ScheduleService,
        lambda: ScheduleService(
            container.resolve(StateStorage),
            upcoming_days=app_config.upcoming_days,
            **defaults()
        ),
        singleton=True
    )
    container.register(
        DashboardService,
        lambda: DashboardService(
            container.resolve(StateStorage),
            preview_days=app_config.preview_days,
            preview_count=app_config.preview_count,
            **defaults()
        ),
        singleton=True
    )

    logger.info("Default services configured")
