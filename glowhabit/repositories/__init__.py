"""
Repositories package for GlowHabit.

Data access layer using the Repository pattern over injectable stores:
- base_repository: Store interface, in-memory/key-value/file stores, BaseRepository
- entity_repositories: Habit, goal, journal, routine, skin-care, project and glow-moment writes
- factory: One RepositorySet wired to the storage keys (key-value or JSON directory)
"""
from .base_repository import (
    BaseRepository,
    InMemoryStore,
    JsonFileStore,
    KeyStore,
    KeyValueStore,
    Store,
    generate_id,
)
from .entity_repositories import (
    GlowMomentRepository,
    GoalRepository,
    HabitRepository,
    JournalRepository,
    ProjectRepository,
    RoutineRepository,
    SkinCareRepository,
)
from .factory import RepositorySet, open_json_dir, open_key_value

__all__ = [
    'BaseRepository',
    'InMemoryStore',
    'JsonFileStore',
    'KeyStore',
    'KeyValueStore',
    'Store',
    'generate_id',
    'GlowMomentRepository',
    'GoalRepository',
    'HabitRepository',
    'JournalRepository',
    'ProjectRepository',
    'RoutineRepository',
    'SkinCareRepository',
    'RepositorySet',
    'open_json_dir',
    'open_key_value',
]
