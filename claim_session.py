"""
Retaliation claim questionnaire flow
Walks the plaintiff through the three claim elements in fixed order
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from factual_scorer import ADVERSE_ACTION, CAUSAL_CONNECTION, PROTECTED_ACTIVITY

logger = logging.getLogger(__name__)


class ClaimFlowError(ValueError):
    """Base class for questionnaire flow errors"""


class ValidationError(ClaimFlowError):
    """Answer was empty or whitespace only"""


class SessionCompleteError(ClaimFlowError):
    """All elements already answered"""


@dataclass(frozen=True)
class Prompt:
    identity: str
    title: str
    question_text: str


@dataclass
class Answer:
    prompt_identity: str
    text: str
    score: Optional[int] = None  # set during final scoring only


@dataclass
class Session:
    current_index: int = 0
    answers: List[Answer] = field(default_factory=list)


CLAIM_ELEMENTS: Tuple[Prompt, ...] = (
    Prompt(
        identity=PROTECTED_ACTIVITY,
        title="Protected Activity",
        question_text=(
            "Plaintiff, describe your protected activity (e.g., filing an internal "
            "complaint, an EEOC charge, or requesting a reasonable accommodation). "
            "Include date and evidence."
        ),
    ),
    Prompt(
        identity=ADVERSE_ACTION,
        title="Adverse Employment Action",
        question_text=(
            "Describe the adverse action taken against you (e.g., suspension, demotion, "
            "termination, or significant change in duties). Include dates, effect on "
            "pay/responsibilities, and documents."
        ),
    ),
    Prompt(
        identity=CAUSAL_CONNECTION,
        title="Causal Connection / But-For Cause",
        question_text=(
            "Explain how the adverse action was caused by your protected activity "
            "(timing, statements, patterns, or other evidence)."
        ),
    ),
)


class FlowController:
    """
    Owns one Session and advances it one accepted answer at a time.

    States are 0..3; only a successful submit moves forward and 3 is terminal.
    """

    def __init__(self, prompts: Tuple[Prompt, ...] = CLAIM_ELEMENTS):
        self.prompts = prompts
        self.session = Session()
        self._lock = threading.Lock()

    @property
    def prompt_count(self) -> int:
        return len(self.prompts)

    def current_prompt(self) -> Optional[Prompt]:
        """Prompt awaiting an answer, or None once every element is answered"""
        if self.session.current_index >= self.prompt_count:
            return None
        return self.prompts[self.session.current_index]

    def is_complete(self) -> bool:
        return self.session.current_index >= self.prompt_count

    def progress(self) -> Tuple[int, int]:
        return self.session.current_index, self.prompt_count

    def submit(self, text: str) -> Answer:
        """Record an answer for the current prompt and advance"""
        answer_text = (text or "").strip()

        # Requests run on a thread pool; read-append-increment must not interleave
        with self._lock:
            prompt = self.current_prompt()
            if prompt is None:
                raise SessionCompleteError("All claim elements have already been answered.")

            if answer_text == "":
                raise ValidationError("Please provide specific facts for this element of the claim.")

            answer = Answer(prompt_identity=prompt.identity, text=answer_text)
            self.session.answers.append(answer)
            self.session.current_index += 1
            complete = self.is_complete()

        if complete:
            logger.info("questionnaire complete (%d answers)", len(self.session.answers))
        return answer
