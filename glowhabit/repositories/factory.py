"""
Wiring of every repository to its storage key.

Two layouts are supported: a shared KeyValueStore (one JSON text blob per
key) and a directory holding one ``<key>.json`` file per key.
"""
import logging
from pathlib import Path
from typing import Callable, NamedTuple, Optional

from glowhabit import settings
from glowhabit.repositories.base_repository import JsonFileStore, KeyValueStore, Store
from glowhabit.repositories.entity_repositories import (
    GlowMomentRepository, GoalRepository, HabitRepository, JournalRepository,
    ProjectRepository, RoutineRepository, SkinCareRepository,
)
from glowhabit.utils.constants import (
    STORAGE_GLOW_MOMENTS, STORAGE_GOALS, STORAGE_HABITS, STORAGE_JOURNAL,
    STORAGE_JOURNAL_SETTINGS, STORAGE_PROJECTS, STORAGE_ROUTINE_COMPLETIONS,
    STORAGE_ROUTINES, STORAGE_SESSIONS, STORAGE_SKINCARE, STORAGE_SKINCARE_COMPLETIONS,
)

logger = logging.getLogger(__name__)


class RepositorySet(NamedTuple):
    habits: HabitRepository
    goals: GoalRepository
    journal: JournalRepository
    routines: RoutineRepository
    skincare: SkinCareRepository
    projects: ProjectRepository
    glow_moments: GlowMomentRepository


def _build(store_for: Callable[[str], Store]) -> RepositorySet:
    return RepositorySet(
        habits=HabitRepository(store_for(STORAGE_HABITS)),
        goals=GoalRepository(store_for(STORAGE_GOALS)),
        journal=JournalRepository(store_for(STORAGE_JOURNAL), store_for(STORAGE_JOURNAL_SETTINGS)),
        routines=RoutineRepository(store_for(STORAGE_ROUTINES), store_for(STORAGE_ROUTINE_COMPLETIONS)),
        skincare=SkinCareRepository(store_for(STORAGE_SKINCARE), store_for(STORAGE_SKINCARE_COMPLETIONS)),
        projects=ProjectRepository(store_for(STORAGE_PROJECTS), store_for(STORAGE_SESSIONS)),
        glow_moments=GlowMomentRepository(store_for(STORAGE_GLOW_MOMENTS)),
    )


def open_key_value(backend: Optional[KeyValueStore] = None) -> RepositorySet:
    """All repositories over one key-value backend (a fresh empty one by default)."""
    backend = backend if backend is not None else KeyValueStore()
    return _build(backend.store)


def open_json_dir(data_dir=None) -> RepositorySet:
    """All repositories over ``<data_dir>/<key>.json`` files (default: settings.DATA_DIR)."""
    root = Path(data_dir) if data_dir is not None else settings.DATA_DIR
    logger.info(f"Opening JSON repositories in {root}")
    return _build(lambda key: JsonFileStore(root / f"{key}.json"))
