"""
EventLog: read-only snapshot of every completion record the engines consume.

Engines never read stores. Callers build an EventLog (directly, or from the
repositories) and pass it in; nothing downstream mutates it.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from glowhabit.models import (
    DeepWorkSession, Goal, Habit, JournalEntry, Project, Routine,
    RoutineCompletion, SkinCareCompletion, SkinCareRoutine,
)
from glowhabit.utils.time_utils import DateLike, to_iso

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventLog:
    habits: List[Habit] = field(default_factory=list)
    goals: List[Goal] = field(default_factory=list)
    journal_entries: List[JournalEntry] = field(default_factory=list)
    routines: List[Routine] = field(default_factory=list)
    routine_completions: List[RoutineCompletion] = field(default_factory=list)
    skincare_routines: List[SkinCareRoutine] = field(default_factory=list)
    skincare_completions: List[SkinCareCompletion] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    sessions: List[DeepWorkSession] = field(default_factory=list)

    @classmethod
    def from_repositories(cls, habits=None, goals=None, journal=None, routines=None,
                          skincare=None, projects=None) -> "EventLog":
        """
        Snapshot whichever repositories are supplied; missing ones are empty.

        Args:
            habits: HabitRepository
            goals: GoalRepository
            journal: JournalRepository
            routines: RoutineRepository
            skincare: SkinCareRepository
            projects: ProjectRepository
        """
        log = cls(
            habits=habits.all() if habits else [],
            goals=goals.all() if goals else [],
            journal_entries=journal.all() if journal else [],
            routines=routines.all() if routines else [],
            routine_completions=routines.completions() if routines else [],
            skincare_routines=skincare.all() if skincare else [],
            skincare_completions=skincare.completions() if skincare else [],
            projects=projects.all() if projects else [],
            sessions=projects.sessions() if projects else [],
        )
        logger.debug(
            f"EventLog snapshot: {len(log.habits)} habits, "
            f"{len(log.journal_entries)} journal entries, {len(log.sessions)} sessions"
        )
        return log

    @classmethod
    def from_repository_set(cls, repos) -> "EventLog":
        """Snapshot a ``RepositorySet``."""
        return cls.from_repositories(
            habits=repos.habits,
            goals=repos.goals,
            journal=repos.journal,
            routines=repos.routines,
            skincare=repos.skincare,
            projects=repos.projects,
        )

    # ------------------------------------------------------------------
    # Date accessors
    # ------------------------------------------------------------------

    def habit_dates(self) -> Dict[str, Set[str]]:
        return {h.id: set(h.completed_dates) for h in self.habits}

    def all_habit_dates(self) -> Set[str]:
        """Days on which at least one habit was completed."""
        days = set()
        for habit in self.habits:
            days |= habit.completed_dates
        return days

    def journal_dates(self) -> Set[str]:
        return {e.date for e in self.journal_entries}

    def journal_entry(self, on_date: DateLike) -> Optional[JournalEntry]:
        day = to_iso(on_date)
        return next((e for e in self.journal_entries if e.date == day), None)

    def routine_dates(self, routine_type: Optional[str] = None) -> Set[str]:
        """Completion days across routines, optionally of one type only."""
        if routine_type is None:
            return {c.date for c in self.routine_completions}
        ids = {r.id for r in self.routines if r.type == routine_type}
        return {c.date for c in self.routine_completions if c.routine_id in ids}

    def skincare_dates(self, routine_type: Optional[str] = None) -> Set[str]:
        return {
            c.date for c in self.skincare_completions
            if routine_type is None or c.type == routine_type
        }

    def session_dates(self, project_id: Optional[str] = None) -> Set[str]:
        return {
            s.date for s in self.sessions
            if project_id is None or s.project_id == project_id
        }
