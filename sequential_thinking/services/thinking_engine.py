"""
Thinking engine: the process-wide accumulator of thought records.

Each submitted thought is validated, classified into one of the three
thought kinds, normalized, and committed to an append-only history. Branch
thoughts are additionally filed under their branch id. The caller gets back
a progress summary that already accounts for its own thought.

Thread safety:
- Validation, classification and normalization are pure and run lock-free.
- The commit (history append, counter increment, branch upsert) and the
  response snapshot run under a single lock, so the counter always equals
  the number of stored thoughts and per-branch order is commit order.
- Inside the lock the new branch bucket, the response and the log entries
  are all produced before the first mutation; the commit itself is plain
  assignments, so a failed call leaves no partial state.
"""

import threading
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from sequential_thinking.models import (
    BranchThought,
    RegularThought,
    RevisionThought,
    Thought,
    ThoughtInput,
    ThoughtResponse,
)
from sequential_thinking.utils.logging import get_logger
from sequential_thinking.utils.types import ErrorCategory, Failure, Result, Success

logger = get_logger(__name__)

# Validation messages surfaced to callers
INVALID_THOUGHT = "thought must be a non-empty string"
INVALID_THOUGHT_NUMBER = "thoughtNumber must be a positive number"
INVALID_TOTAL_THOUGHTS = "totalThoughts must be a positive number"


def _is_positive_int(value) -> bool:
    # bool is an int subclass; True must not pass as thought number 1
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def normalize_total_thoughts(thought: Thought) -> Thought:
    """Raise the total estimate to at least the thought's own number."""
    if thought.total_thoughts >= thought.thought_number:
        return thought
    return replace(thought, total_thoughts=thought.thought_number)


class ThinkingEngine:
    """
    Accumulates thoughts and branch lineages for the lifetime of the process.

    There is no reset or delete operation; history only grows.
    """

    def __init__(self):
        """Initialize with empty history and branch index."""
        self._history: List[Thought] = []
        self._branches: Dict[str, Tuple[BranchThought, ...]] = {}
        self._thought_count = 0
        self._lock = threading.Lock()

    # ===== Pipeline stages =====

    @staticmethod
    def validate(raw: ThoughtInput) -> Optional[Failure]:
        """
        Check the scalar fields of a submission.

        Returns:
            A validation Failure for the first violated rule, or None
        """
        if not isinstance(raw.thought, str) or not raw.thought.strip():
            return Failure(INVALID_THOUGHT, ErrorCategory.VALIDATION)
        if not _is_positive_int(raw.thought_number):
            return Failure(INVALID_THOUGHT_NUMBER, ErrorCategory.VALIDATION)
        if not _is_positive_int(raw.total_thoughts):
            return Failure(INVALID_TOTAL_THOUGHTS, ErrorCategory.VALIDATION)
        return None

    @staticmethod
    def classify(raw: ThoughtInput) -> Thought:
        """
        Build the thought variant implied by the optional fields.

        Precedence (first match wins):
        1. is_revision with revises_thought -> RevisionThought
        2. branch_from_thought with a non-empty branch_id -> BranchThought
        3. anything else -> RegularThought

        Revision and branch references are caller metadata and are not
        checked against history.
        """
        if raw.is_revision is True and raw.revises_thought is not None:
            return RevisionThought(
                thought=raw.thought,
                thought_number=raw.thought_number,
                total_thoughts=raw.total_thoughts,
                next_thought_needed=raw.next_thought_needed,
                revises_thought=raw.revises_thought,
            )

        if raw.branch_from_thought is not None and raw.branch_id:
            return BranchThought(
                thought=raw.thought,
                thought_number=raw.thought_number,
                total_thoughts=raw.total_thoughts,
                next_thought_needed=raw.next_thought_needed,
                branch_from_thought=raw.branch_from_thought,
                branch_id=raw.branch_id,
            )

        needs_more = raw.needs_more_thoughts
        return RegularThought(
            thought=raw.thought,
            thought_number=raw.thought_number,
            total_thoughts=raw.total_thoughts,
            next_thought_needed=raw.next_thought_needed,
            needs_more_thoughts=True if needs_more is None else needs_more,
        )

    def process_thought(self, raw: ThoughtInput) -> Result:
        """
        Validate, classify, normalize and commit a thought.

        Args:
            raw: Caller-supplied fields

        Returns:
            Success(ThoughtResponse) on acceptance, otherwise a Failure.
            Validation failures leave state untouched. Unexpected faults are
            reported as PROCESSING failures wrapping the underlying cause.
        """
        failure = self.validate(raw)
        if failure is not None:
            logger.warning(
                "Thought rejected",
                reason=failure.error,
                thought_number=raw.thought_number,
            )
            return failure

        try:
            thought = normalize_total_thoughts(self.classify(raw))
            response = self._commit(thought)
        except Exception as e:
            logger.exception(
                "Thought processing failed",
                thought_number=raw.thought_number,
                error=str(e),
            )
            return Failure(f"Processing error: {e}", ErrorCategory.PROCESSING)

        return Success(response)

    def _commit(self, thought: Thought) -> ThoughtResponse:
        with self._lock:
            # Everything that can fail runs before the first mutation
            branches = list(self._branches)
            bucket: Optional[Tuple[BranchThought, ...]] = None
            if isinstance(thought, BranchThought):
                existing = self._branches.get(thought.branch_id)
                if existing is None:
                    bucket = (thought,)
                    branches.append(thought.branch_id)
                    logger.info(
                        "Branch created",
                        branch_id=thought.branch_id,
                        branch_from_thought=thought.branch_from_thought,
                    )
                else:
                    bucket = existing + (thought,)

            history_length = self._thought_count + 1
            response = self._build_response(thought, branches, history_length)
            logger.debug(
                "Thought processed",
                kind=thought.kind.value,
                thought=thought.thought,
                thought_number=thought.thought_number,
                total_thoughts=thought.total_thoughts,
                history_length=history_length,
            )

            if bucket is not None:
                self._branches[thought.branch_id] = bucket
            self._history.append(thought)
            self._thought_count = history_length
            return response

    @staticmethod
    def _build_response(
        thought: Thought, branches: List[str], history_length: int
    ) -> ThoughtResponse:
        return ThoughtResponse(
            thought_number=thought.thought_number,
            total_thoughts=thought.total_thoughts,
            next_thought_needed=thought.next_thought_needed,
            branches=branches,
            thought_history_length=history_length,
        )

    # ===== Read model =====

    @property
    def thought_count(self) -> int:
        """Number of accepted thoughts."""
        with self._lock:
            return self._thought_count

    def history(self) -> Tuple[Thought, ...]:
        """Snapshot of all accepted thoughts in commit order."""
        with self._lock:
            return tuple(self._history)

    def branch_ids(self) -> List[str]:
        """Known branch ids in the order they were first seen."""
        with self._lock:
            return list(self._branches)

    def branch_thoughts(self, branch_id: str) -> Tuple[BranchThought, ...]:
        """Thoughts filed under a branch in commit order (empty if unknown)."""
        with self._lock:
            return self._branches.get(branch_id, ())

    def snapshot(self) -> Tuple[Tuple[Thought, ...], Dict[str, int]]:
        """
        History and per-branch thought counts taken under one lock.

        Returns:
            (thoughts in commit order, branch id -> thought count in
            first-seen order)
        """
        with self._lock:
            history = tuple(self._history)
            counts = {
                branch_id: len(bucket) for branch_id, bucket in self._branches.items()
            }
        return history, counts


# ===== Process-wide engine =====

_engine: Optional[ThinkingEngine] = None
_engine_lock = threading.Lock()


def get_thinking_engine() -> ThinkingEngine:
    """
    Get the shared engine instance, creating it on first use.

    Components that need an isolated engine (tests, embedding) should
    construct ThinkingEngine() directly instead.
    """
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = ThinkingEngine()
                logger.info("Thinking engine initialized")
    return _engine
