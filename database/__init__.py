"""
Database Package - Appointment persistence and orchestration
Contains storage adapters, the appointment store and the calendar controller
"""

# Keep initializer lightweight; import concrete modules directly at call sites.
__all__: list[str] = []
