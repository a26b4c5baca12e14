"""
Persisted entities for GlowHabit.

Each entity is a dataclass with ``to_dict`` / ``from_dict`` converting to and
from the camelCase JSON shape written to the key-value store. Round-tripping
through these methods is lossless: ``Model.from_dict(m.to_dict()) == m``.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set

from glowhabit.exceptions import ValidationError


def utc_now_iso() -> str:
    """Current UTC timestamp in the ``2025-01-03T10:15:00.000Z`` form."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _require(data: Dict[str, Any], key: str) -> Any:
    if not isinstance(data, dict):
        raise ValidationError(key, f"expected an object, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ValidationError(key, "is required")
    return data[key]


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


def _string_list(value) -> List[str]:
    if not isinstance(value, (list, tuple, set)):
        return []
    return [str(v) for v in value if isinstance(v, str)]


def _number(value, default, cast=float):
    """
    Coerce a stored numeric field; None gives ``default``. Numbers keep
    their stored type, strings are parsed with ``cast``.

    Raises:
        TypeError, ValueError: for non-numeric or non-finite values
    """
    if value is None:
        return default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = value
    else:
        number = cast(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite number {value!r}")
    return number


# ============================================================================
# HABITS & GOALS
# ============================================================================

@dataclass
class Habit:
    """A daily habit and the set of ISO dates it was completed on."""
    id: str
    name: str
    category: str = 'custom'
    icon: str = ''
    color: str = ''
    completed_dates: Set[str] = field(default_factory=set)
    created_at: str = field(default_factory=utc_now_iso)
    order: int = 0
    life_area: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'name': self.name,
            'icon': self.icon,
            'category': self.category,
            'color': self.color,
            'completedDates': sorted(self.completed_dates),
            'createdAt': self.created_at,
            'order': self.order,
            'lifeArea': self.life_area,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        return cls(
            id=str(_require(data, 'id')),
            name=str(data.get('name', '')),
            category=data.get('category') or 'custom',
            icon=data.get('icon', ''),
            color=data.get('color', ''),
            completed_dates=set(_string_list(data.get('completedDates'))),
            created_at=data.get('createdAt') or utc_now_iso(),
            order=int(data.get('order', 0)),
            life_area=data.get('lifeArea'),
        )


@dataclass
class Goal:
    """
    A goal with a 0-100 progress slider.

    ``is_completed`` is stored independently of ``progress``; the two may
    diverge when completion is toggled by hand.
    """
    id: str
    title: str
    description: str = ''
    target_date: str = ''
    progress: float = 0
    is_completed: bool = False
    created_at: str = field(default_factory=utc_now_iso)
    life_area: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'targetDate': self.target_date,
            'progress': self.progress,
            'isCompleted': self.is_completed,
            'createdAt': self.created_at,
            'lifeArea': self.life_area,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            id=str(_require(data, 'id')),
            title=str(data.get('title', '')),
            description=data.get('description', ''),
            target_date=data.get('targetDate', ''),
            progress=_number(data.get('progress'), 0),
            is_completed=bool(data.get('isCompleted', False)),
            created_at=data.get('createdAt') or utc_now_iso(),
            life_area=data.get('lifeArea'),
        )


# ============================================================================
# JOURNAL
# ============================================================================

@dataclass
class HabitsSummary:
    """Same-day habit completion attached to a journal entry."""
    completed: int
    total: int
    habits: List[str] = field(default_factory=list)

    @property
    def completion_ratio(self) -> float:
        return self.completed / max(self.total, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {'completed': self.completed, 'total': self.total, 'habits': list(self.habits)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HabitsSummary":
        return cls(
            completed=int(_require(data, 'completed')),
            total=int(_require(data, 'total')),
            habits=_string_list(data.get('habits')),
        )


@dataclass
class SentimentData:
    """Stored result of analysing an entry's text."""
    score: int
    label: str
    confidence: str
    emotions: List[str] = field(default_factory=list)
    analyzed_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'label': self.label,
            'confidence': self.confidence,
            'emotions': list(self.emotions),
            'analyzedAt': self.analyzed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SentimentData":
        return cls(
            score=int(_require(data, 'score')),
            label=str(_require(data, 'label')),
            confidence=data.get('confidence', 'low'),
            emotions=_string_list(data.get('emotions')),
            analyzed_at=data.get('analyzedAt') or utc_now_iso(),
        )


@dataclass
class JournalEntry:
    """One journal entry; at most one per date."""
    id: str
    date: str
    content: str = ''
    mood: Optional[str] = None
    manual_mood: bool = False
    sentiment: Optional[SentimentData] = None
    habits_summary: Optional[HabitsSummary] = None
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'date': self.date,
            'content': self.content,
            'mood': self.mood,
            'manualMood': self.manual_mood,
            'sentiment': self.sentiment.to_dict() if self.sentiment else None,
            'habitsSummary': self.habits_summary.to_dict() if self.habits_summary else None,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JournalEntry":
        sentiment = data.get('sentiment') if isinstance(data, dict) else None
        summary = data.get('habitsSummary') if isinstance(data, dict) else None
        return cls(
            id=str(_require(data, 'id')),
            date=str(_require(data, 'date')),
            content=data.get('content') or '',
            mood=data.get('mood'),
            manual_mood=bool(data.get('manualMood', False)),
            sentiment=SentimentData.from_dict(sentiment) if sentiment else None,
            habits_summary=HabitsSummary.from_dict(summary) if summary else None,
            created_at=data.get('createdAt') or utc_now_iso(),
            updated_at=data.get('updatedAt') or utc_now_iso(),
        )


# ============================================================================
# ROUTINES
# ============================================================================

@dataclass
class RoutineHabit:
    id: str
    name: str
    icon: str = ''
    order: int = 0
    is_completed: bool = False
    habit_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'habitId': self.habit_id,
            'name': self.name,
            'icon': self.icon,
            'order': self.order,
            'isCompleted': self.is_completed,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutineHabit":
        return cls(
            id=str(_require(data, 'id')),
            name=str(data.get('name', '')),
            icon=data.get('icon', ''),
            order=int(data.get('order', 0)),
            is_completed=bool(data.get('isCompleted', False)),
            habit_id=data.get('habitId'),
        )


@dataclass
class Routine:
    """A morning or night routine made of ordered steps."""
    id: str
    name: str
    type: str
    habits: List[RoutineHabit] = field(default_factory=list)
    is_active: bool = True
    created_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'habits': [h.to_dict() for h in self.habits],
            'isActive': self.is_active,
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Routine":
        return cls(
            id=str(_require(data, 'id')),
            name=str(data.get('name', '')),
            type=str(_require(data, 'type')),
            habits=[RoutineHabit.from_dict(h) for h in data.get('habits') or []],
            is_active=bool(data.get('isActive', True)),
            created_at=data.get('createdAt') or utc_now_iso(),
        )


@dataclass
class RoutineCompletion:
    date: str
    routine_id: str
    completed_at: str = field(default_factory=utc_now_iso)
    duration: Optional[int] = None
    completed_habits: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'date': self.date,
            'routineId': self.routine_id,
            'completedAt': self.completed_at,
            'duration': self.duration,
            'completedHabits': list(self.completed_habits),
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoutineCompletion":
        return cls(
            date=str(_require(data, 'date')),
            routine_id=str(_require(data, 'routineId')),
            completed_at=data.get('completedAt') or utc_now_iso(),
            duration=_number(data.get('duration'), None, int),
            completed_habits=_string_list(data.get('completedHabits')),
        )


# ============================================================================
# SKIN CARE
# ============================================================================

@dataclass
class SkinCareStep:
    id: str
    name: str
    icon: str = ''
    order: int = 0
    is_optional: bool = False
    is_completed: bool = False
    product_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'name': self.name,
            'icon': self.icon,
            'productName': self.product_name,
            'isOptional': self.is_optional,
            'order': self.order,
            'isCompleted': self.is_completed,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkinCareStep":
        return cls(
            id=str(_require(data, 'id')),
            name=str(data.get('name', '')),
            icon=data.get('icon', ''),
            order=int(data.get('order', 0)),
            is_optional=bool(data.get('isOptional', False)),
            is_completed=bool(data.get('isCompleted', False)),
            product_name=data.get('productName'),
        )


@dataclass
class SkinCareRoutine:
    id: str
    type: str
    steps: List[SkinCareStep] = field(default_factory=list)
    is_active: bool = True
    created_at: str = field(default_factory=utc_now_iso)
    skin_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'type': self.type,
            'steps': [s.to_dict() for s in self.steps],
            'skinType': self.skin_type,
            'isActive': self.is_active,
            'createdAt': self.created_at,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkinCareRoutine":
        return cls(
            id=str(_require(data, 'id')),
            type=str(_require(data, 'type')),
            steps=[SkinCareStep.from_dict(s) for s in data.get('steps') or []],
            is_active=bool(data.get('isActive', True)),
            created_at=data.get('createdAt') or utc_now_iso(),
            skin_type=data.get('skinType'),
        )


@dataclass
class SkinCareCompletion:
    date: str
    routine_id: str
    type: str
    completed_at: str = field(default_factory=utc_now_iso)
    completed_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'routineId': self.routine_id,
            'type': self.type,
            'completedAt': self.completed_at,
            'completedSteps': list(self.completed_steps),
            'skippedSteps': list(self.skipped_steps),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkinCareCompletion":
        return cls(
            date=str(_require(data, 'date')),
            routine_id=str(_require(data, 'routineId')),
            type=str(_require(data, 'type')),
            completed_at=data.get('completedAt') or utc_now_iso(),
            completed_steps=_string_list(data.get('completedSteps')),
            skipped_steps=_string_list(data.get('skippedSteps')),
        )


# ============================================================================
# DEEP WORK
# ============================================================================

@dataclass
class Project:
    id: str
    name: str
    weekly_target: float = 10
    description: str = ''
    deadline: Optional[str] = None
    is_active: bool = True
    created_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'weeklyTarget': self.weekly_target,
            'deadline': self.deadline,
            'createdAt': self.created_at,
            'isActive': self.is_active,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            id=str(_require(data, 'id')),
            name=str(data.get('name', '')),
            weekly_target=_number(data.get('weeklyTarget'), 10),
            description=data.get('description', ''),
            deadline=data.get('deadline'),
            is_active=bool(data.get('isActive', True)),
            created_at=data.get('createdAt') or utc_now_iso(),
        )


@dataclass
class DeepWorkSession:
    id: str
    project_id: str
    duration: int
    date: str
    completed_at: str = field(default_factory=utc_now_iso)
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'projectId': self.project_id,
            'duration': self.duration,
            'completedAt': self.completed_at,
            'notes': self.notes,
            'date': self.date,
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeepWorkSession":
        return cls(
            id=str(_require(data, 'id')),
            project_id=str(_require(data, 'projectId')),
            duration=int(_require(data, 'duration')),
            date=str(_require(data, 'date')),
            completed_at=data.get('completedAt') or utc_now_iso(),
            notes=data.get('notes'),
        )
