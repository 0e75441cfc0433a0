"""Route modules."""

from .export_sets import router as export_sets_router
from .mount_targets import router as mount_targets_router

__all__ = ["export_sets_router", "mount_targets_router"]
