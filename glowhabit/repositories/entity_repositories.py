"""
Entity repositories: the write side of GlowHabit.

These mirror the mutations a user performs (toggle a habit, save a journal
entry, complete a routine). Each write reads the current collection,
replaces it and writes it back in one call; a single active session is the
only writer.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Set

from glowhabit.exceptions import DuplicateError, EntityNotFoundError, ValidationError
from glowhabit.models import (
    DeepWorkSession, Goal, Habit, JournalEntry, Project, Routine,
    RoutineCompletion, SkinCareCompletion, SkinCareRoutine, utc_now_iso,
)
from glowhabit.repositories.base_repository import BaseRepository, Store, generate_id
from glowhabit.serializers import load_collection, dump_collection
from glowhabit.utils.constants import LIFE_AREAS, MOOD_CHOICES, ROUTINE_TYPES
from glowhabit.utils.time_utils import DateLike, parse_iso_date, to_iso

logger = logging.getLogger(__name__)


# =============================================================================
# HABITS
# =============================================================================

class HabitRepository(BaseRepository[Habit]):
    model = Habit
    entity_name = 'Habit'

    def get(self, habit_id: str) -> Habit:
        for habit in self.all():
            if habit.id == habit_id:
                return habit
        raise EntityNotFoundError('Habit', habit_id)

    def add(self, name: str, category: str = 'custom', icon: str = '', color: str = '',
            life_area: Optional[str] = None, habit_id: Optional[str] = None,
            created_at: Optional[str] = None) -> Habit:
        if not name or not name.strip():
            raise ValidationError('name', 'must not be empty')

        habits = self.all()
        habit_id = habit_id or generate_id()
        if any(h.id == habit_id for h in habits):
            raise DuplicateError('Habit', habit_id)

        if life_area is None and category in LIFE_AREAS:
            life_area = category

        habit = Habit(
            id=habit_id,
            name=name.strip(),
            category=category,
            icon=icon,
            color=color,
            created_at=created_at or utc_now_iso(),
            order=len(habits),
            life_area=life_area,
        )
        habits.append(habit)
        self.save_all(habits)
        return habit

    def remove(self, habit_id: str) -> None:
        habits = self.all()
        remaining = [h for h in habits if h.id != habit_id]
        if len(remaining) == len(habits):
            raise EntityNotFoundError('Habit', habit_id)
        self.save_all(remaining)

    def update(self, habit_id: str, **changes) -> Habit:
        """
        Update name/icon/color/category/life_area.

        Changing the category to a life-area category moves the habit's
        life area with it; 'custom' leaves the life area untouched.
        """
        allowed = {'name', 'icon', 'color', 'category', 'life_area'}
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError(', '.join(sorted(unknown)), 'cannot be updated')

        habits = self.all()
        for habit in habits:
            if habit.id != habit_id:
                continue
            for key, value in changes.items():
                setattr(habit, key, value)
            category = changes.get('category')
            if category and category != 'custom' and category in LIFE_AREAS:
                habit.life_area = category
            self.save_all(habits)
            return habit
        raise EntityNotFoundError('Habit', habit_id)

    def toggle(self, habit_id: str, on_date: DateLike) -> bool:
        """Flip completion for a day. Returns the new completed state."""
        day = to_iso(on_date)
        habits = self.all()
        for habit in habits:
            if habit.id != habit_id:
                continue
            if day in habit.completed_dates:
                habit.completed_dates.discard(day)
                completed = False
            else:
                habit.completed_dates.add(day)
                completed = True
            self.save_all(habits)
            return completed
        raise EntityNotFoundError('Habit', habit_id)

    def reorder(self, start_index: int, end_index: int) -> List[Habit]:
        habits = self.all()
        if not (0 <= start_index < len(habits)) or not (0 <= end_index < len(habits)):
            raise ValidationError('index', f"out of range for {len(habits)} habits")
        moved = habits.pop(start_index)
        habits.insert(end_index, moved)
        for i, habit in enumerate(habits):
            habit.order = i
        self.save_all(habits)
        return habits


# =============================================================================
# GOALS
# =============================================================================

class GoalRepository(BaseRepository[Goal]):
    model = Goal
    entity_name = 'Goal'

    def add(self, title: str, description: str = '', target_date: str = '',
            life_area: Optional[str] = None, created_at: Optional[str] = None) -> Goal:
        if not title or not title.strip():
            raise ValidationError('title', 'must not be empty')
        goals = self.all()
        goal = Goal(
            id=generate_id(),
            title=title.strip(),
            description=description,
            target_date=target_date,
            created_at=created_at or utc_now_iso(),
            life_area=life_area,
        )
        goals.append(goal)
        self.save_all(goals)
        return goal

    def _mutate(self, goal_id: str, mutate) -> Goal:
        goals = self.all()
        for goal in goals:
            if goal.id == goal_id:
                mutate(goal)
                self.save_all(goals)
                return goal
        raise EntityNotFoundError('Goal', goal_id)

    def update_progress(self, goal_id: str, progress: float) -> Goal:
        """Set progress clamped to [0, 100]; completion follows the slider."""
        def apply(goal):
            goal.progress = min(100, max(0, progress))
            goal.is_completed = goal.progress >= 100
        return self._mutate(goal_id, apply)

    def toggle_complete(self, goal_id: str) -> Goal:
        """Toggle completion by hand. Completing also fills progress to 100."""
        def apply(goal):
            if not goal.is_completed:
                goal.progress = 100
            goal.is_completed = not goal.is_completed
        return self._mutate(goal_id, apply)

    def remove(self, goal_id: str) -> None:
        goals = self.all()
        remaining = [g for g in goals if g.id != goal_id]
        if len(remaining) == len(goals):
            raise EntityNotFoundError('Goal', goal_id)
        self.save_all(remaining)


# =============================================================================
# JOURNAL
# =============================================================================

class JournalRepository(BaseRepository[JournalEntry]):
    model = JournalEntry
    entity_name = 'JournalEntry'

    def __init__(self, store: Store, settings_store: Optional[Store] = None):
        super().__init__(store)
        self.settings_store = settings_store

    def get_by_date(self, on_date: DateLike) -> Optional[JournalEntry]:
        day = to_iso(on_date)
        for entry in self.all():
            if entry.date == day:
                return entry
        return None

    def upsert(self, entry: JournalEntry) -> JournalEntry:
        """Insert or replace the entry for ``entry.date``."""
        entries = [e for e in self.all() if e.date != entry.date]
        entries.append(entry)
        self.save_all(entries)
        return entry

    def delete(self, on_date: DateLike) -> None:
        day = to_iso(on_date)
        self.save_all([e for e in self.all() if e.date != day])

    def update_mood(self, on_date: DateLike, mood: str) -> JournalEntry:
        """Set a mood by hand; the entry becomes manual-mood for good."""
        if mood not in MOOD_CHOICES:
            raise ValidationError('mood', f"must be one of {', '.join(MOOD_CHOICES)}")
        day = to_iso(on_date)
        entries = self.all()
        for entry in entries:
            if entry.date == day:
                entry.mood = mood
                entry.manual_mood = True
                entry.updated_at = utc_now_iso()
                self.save_all(entries)
                return entry
        raise EntityNotFoundError('JournalEntry', day)

    def settings(self) -> Dict[str, bool]:
        stored = self.settings_store.get() if self.settings_store else None
        if not isinstance(stored, dict):
            return {'sentimentAnalysisEnabled': True}
        return {'sentimentAnalysisEnabled': bool(stored.get('sentimentAnalysisEnabled', True))}

    def update_settings(self, sentiment_analysis_enabled: bool) -> Dict[str, bool]:
        if self.settings_store is None:
            raise ValidationError('settings_store', 'no settings store configured')
        new_settings = {'sentimentAnalysisEnabled': bool(sentiment_analysis_enabled)}
        self.settings_store.set(new_settings)
        return new_settings


# =============================================================================
# ROUTINES & SKIN CARE
# =============================================================================

class RoutineRepository(BaseRepository[Routine]):
    model = Routine
    entity_name = 'Routine'

    def __init__(self, store: Store, completions_store: Store):
        super().__init__(store)
        self.completions_store = completions_store

    def add(self, routine: Routine) -> Routine:
        if routine.type not in ROUTINE_TYPES:
            raise ValidationError('type', f"must be one of {', '.join(ROUTINE_TYPES)}")
        routines = self.all()
        routines.append(routine)
        self.save_all(routines)
        return routine

    def completions(self) -> List[RoutineCompletion]:
        return load_collection(self.completions_store.get(), RoutineCompletion)

    def complete(self, routine_id: str, on_date: DateLike, duration: Optional[int] = None,
                 completed_at: Optional[str] = None) -> RoutineCompletion:
        """Record a completion for the day, replacing any same-day record."""
        routines = self.all()
        routine = next((r for r in routines if r.id == routine_id), None)
        if routine is None:
            raise EntityNotFoundError('Routine', routine_id)

        day = to_iso(on_date)
        completion = RoutineCompletion(
            date=day,
            routine_id=routine_id,
            completed_at=completed_at or utc_now_iso(),
            duration=duration,
            completed_habits=[h.id for h in routine.habits],
        )
        completions = [c for c in self.completions()
                       if not (c.routine_id == routine_id and c.date == day)]
        completions.append(completion)
        self.completions_store.set(dump_collection(completions))

        for step in routine.habits:
            step.is_completed = True
        self.save_all(routines)
        return completion


class SkinCareRepository(BaseRepository[SkinCareRoutine]):
    model = SkinCareRoutine
    entity_name = 'SkinCareRoutine'

    def __init__(self, store: Store, completions_store: Store):
        super().__init__(store)
        self.completions_store = completions_store

    def add(self, routine: SkinCareRoutine) -> SkinCareRoutine:
        if routine.type not in ROUTINE_TYPES:
            raise ValidationError('type', f"must be one of {', '.join(ROUTINE_TYPES)}")
        routines = self.all()
        routines.append(routine)
        self.save_all(routines)
        return routine

    def completions(self) -> List[SkinCareCompletion]:
        return load_collection(self.completions_store.get(), SkinCareCompletion)

    def complete(self, routine_id: str, on_date: DateLike,
                 completed_at: Optional[str] = None) -> SkinCareCompletion:
        """Record which steps were done and which optional steps were skipped."""
        routines = self.all()
        routine = next((r for r in routines if r.id == routine_id), None)
        if routine is None:
            raise EntityNotFoundError('SkinCareRoutine', routine_id)

        day = to_iso(on_date)
        completion = SkinCareCompletion(
            date=day,
            routine_id=routine_id,
            type=routine.type,
            completed_at=completed_at or utc_now_iso(),
            completed_steps=[s.id for s in routine.steps if s.is_completed],
            skipped_steps=[s.id for s in routine.steps if not s.is_completed and s.is_optional],
        )
        completions = [c for c in self.completions()
                       if not (c.routine_id == routine_id and c.date == day)]
        completions.append(completion)
        self.completions_store.set(dump_collection(completions))

        for step in routine.steps:
            step.is_completed = True
        self.save_all(routines)
        return completion


# =============================================================================
# DEEP WORK
# =============================================================================

class ProjectRepository(BaseRepository[Project]):
    model = Project
    entity_name = 'Project'

    def __init__(self, store: Store, sessions_store: Store):
        super().__init__(store)
        self.sessions_store = sessions_store

    def add(self, name: str, weekly_target: float = 10, description: str = '',
            deadline: Optional[str] = None) -> Project:
        if weekly_target is not None and weekly_target < 0:
            raise ValidationError('weekly_target', 'must not be negative')
        projects = self.all()
        project = Project(id=generate_id(), name=name, weekly_target=weekly_target,
                          description=description, deadline=deadline)
        projects.append(project)
        self.save_all(projects)
        return project

    def sessions(self) -> List[DeepWorkSession]:
        return load_collection(self.sessions_store.get(), DeepWorkSession)

    def add_session(self, project_id: str, duration: int, completed_at: Optional[datetime] = None,
                    notes: Optional[str] = None) -> DeepWorkSession:
        if duration <= 0:
            raise ValidationError('duration', 'must be positive')
        if not any(p.id == project_id for p in self.all()):
            raise EntityNotFoundError('Project', project_id)

        finished = completed_at or datetime.now()
        session = DeepWorkSession(
            id=generate_id(),
            project_id=project_id,
            duration=duration,
            date=parse_iso_date(finished).isoformat(),
            completed_at=finished.isoformat(),
            notes=notes,
        )
        sessions = self.sessions()
        sessions.append(session)
        self.sessions_store.set(dump_collection(sessions))
        return session


# =============================================================================
# GLOW MOMENTS
# =============================================================================

class GlowMomentRepository:
    """Owned store of glow-moment ids that were already revealed."""

    def __init__(self, store: Store):
        self.store = store

    def seen_ids(self) -> Set[str]:
        stored = self.store.get()
        if not isinstance(stored, dict):
            return set()
        return {i for i in stored.get('unlockedIds') or [] if isinstance(i, str)}

    def save_seen_ids(self, ids: Set[str]) -> None:
        self.store.set({'unlockedIds': sorted(ids)})
