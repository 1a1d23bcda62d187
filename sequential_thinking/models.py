"""
Thought records and the response returned to callers.

A Thought is a tagged union over three kinds. The kind is chosen by the
engine's classifier from whichever optional fields the caller supplied;
callers never tag a thought explicitly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ThoughtKind(str, Enum):
    """Kinds of thought a caller can submit."""

    REGULAR = "regular"
    REVISION = "revision"
    BRANCH = "branch"


@dataclass(frozen=True)
class ThoughtInput:
    """Raw caller-supplied fields, before validation and classification."""

    thought: str
    thought_number: int
    total_thoughts: int
    next_thought_needed: bool
    is_revision: Optional[bool] = None
    revises_thought: Optional[int] = None
    branch_from_thought: Optional[int] = None
    branch_id: Optional[str] = None
    needs_more_thoughts: Optional[bool] = None


@dataclass(frozen=True)
class Thought:
    """
    A single accepted reasoning step.

    Never instantiated directly; use one of the three variants below.

    Attributes:
        thought: Opaque, non-empty text of the step
        thought_number: Position of the step as declared by the caller
        total_thoughts: Caller's estimate of the session length, never
                        below thought_number once normalized
        next_thought_needed: Whether the caller expects more steps
    """

    thought: str
    thought_number: int
    total_thoughts: int
    next_thought_needed: bool

    kind: ThoughtKind = field(init=False, default=ThoughtKind.REGULAR)

    def to_dict(self) -> Dict[str, Any]:
        """Read-model representation with camelCase keys."""
        return {
            "kind": self.kind.value,
            "thought": self.thought,
            "thoughtNumber": self.thought_number,
            "totalThoughts": self.total_thoughts,
            "nextThoughtNeeded": self.next_thought_needed,
        }


@dataclass(frozen=True)
class RegularThought(Thought):
    """Plain step, optionally flagging that the estimate may need to grow."""

    needs_more_thoughts: bool = True

    kind: ThoughtKind = field(init=False, default=ThoughtKind.REGULAR)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["needsMoreThoughts"] = self.needs_more_thoughts
        return data


@dataclass(frozen=True)
class RevisionThought(Thought):
    """Step that reconsiders an earlier step by its number."""

    revises_thought: int

    kind: ThoughtKind = field(init=False, default=ThoughtKind.REVISION)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["revisesThought"] = self.revises_thought
        return data


@dataclass(frozen=True)
class BranchThought(Thought):
    """Step that starts or continues an alternative line of reasoning."""

    branch_from_thought: int
    branch_id: str

    kind: ThoughtKind = field(init=False, default=ThoughtKind.BRANCH)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["branchFromThought"] = self.branch_from_thought
        data["branchId"] = self.branch_id
        return data


@dataclass(frozen=True)
class ThoughtResponse:
    """Progress summary returned for every accepted thought."""

    thought_number: int
    total_thoughts: int
    next_thought_needed: bool
    branches: List[str] = field(default_factory=list)
    thought_history_length: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape expected by protocol adapters."""
        return {
            "thoughtNumber": self.thought_number,
            "totalThoughts": self.total_thoughts,
            "nextThoughtNeeded": self.next_thought_needed,
            "branches": list(self.branches),
            "thoughtHistoryLength": self.thought_history_length,
        }
