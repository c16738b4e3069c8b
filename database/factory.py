"""
AppointmentServiceFactory - Factory for wiring the calendar's storage, store
and controller with dependency injection.
"""

from pathlib import Path

from utils.calendar_grid import CalendarGridBuilder
from utils.dates import DEFAULT_WEEK_START
from utils.logger import Logger

from .appointment_controller import AppointmentController
from .appointment_store import DEFAULT_STORAGE_KEY, AppointmentStore
from .interfaces import IAppointmentStorage, IDeleteConfirmation
from .storage import JsonFileStorage, MemoryStorage, SQLiteStorage

STORAGE_BACKENDS = ("json", "sqlite", "memory")


class AppointmentServiceFactory:
    """
    Factory for creating calendar components with proper dependency injection.
    The store is built once per session and handed to the controller.
    """

    def __init__(self):
        """Initialize factory."""
        self.logger = Logger()

    def create_storage(self, backend: str = "json", path: Path | str = "data") -> IAppointmentStorage:
        """
        Create a persistence adapter.

        Args:
            backend: One of "json", "sqlite" or "memory"
            path: Directory for json, database file (or its directory) for sqlite

        Returns:
            Storage adapter instance
        """
        backend = (backend or "json").strip().lower()
        if backend == "memory":
            return MemoryStorage()
        if backend == "json":
            return JsonFileStorage(Path(path))
        if backend == "sqlite":
            db_path = Path(path)
            if db_path.suffix != ".db":
                db_path = db_path / "calendar.db"
            return SQLiteStorage(db_path)
        raise ValueError(
            f"Unknown storage backend {backend!r}; expected one of {', '.join(STORAGE_BACKENDS)}"
        )

    def create_store(
        self, storage: IAppointmentStorage, key: str = DEFAULT_STORAGE_KEY
    ) -> AppointmentStore:
        return AppointmentStore(storage, key=key)

    def create_controller(
        self,
        backend: str = "json",
        path: Path | str = "data",
        key: str = DEFAULT_STORAGE_KEY,
        week_start: int = DEFAULT_WEEK_START,
        confirmation: IDeleteConfirmation | None = None,
    ) -> AppointmentController:
        """
        Create a fully initialized controller: storage, store, grid builder,
        persisted appointments loaded and the current month's grid built.
        """
        try:
            store = self.create_store(self.create_storage(backend, path), key)
            controller = AppointmentController(
                store,
                grid_builder=CalendarGridBuilder(week_start),
                confirmation=confirmation,
            )
            controller.initialize()
        except Exception as e:
            self.logger.error(f"Failed to create appointment controller: {str(e)}")
            raise
        self.logger.info(f"Appointment controller ready ({backend} storage, key {key!r})")
        return controller
