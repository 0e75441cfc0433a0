"""Dependency wiring for routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from fss.repositories.memory import InMemoryStore
from fss.services.export_sets import ExportSetService
from fss.services.mount_targets import MountTargetService


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_mount_target_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> MountTargetService:
    return MountTargetService(store)


def get_export_set_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> ExportSetService:
    return ExportSetService(store)
