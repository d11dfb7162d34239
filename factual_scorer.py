# factual_scorer.py
# Factual-indicator scoring for retaliation claim answers
#
# Philosophy:
# - Deterministic regex rules (no NLU)
# - Reward specifics: dates, named people, concrete actions
# - Causal element earns extra for timing and pretext evidence
# - Bare legal conclusions earn nothing

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple
import logging
import re

logger = logging.getLogger(__name__)

# ==============================================
# PROMPT IDENTITIES
# ==============================================

PROTECTED_ACTIVITY = "Protected Activity"
ADVERSE_ACTION = "Adverse Employment Action"
CAUSAL_CONNECTION = "Causal Connection"

ALL_ELEMENTS = frozenset({PROTECTED_ACTIVITY, ADVERSE_ACTION, CAUSAL_CONNECTION})

# ==============================================
# WEIGHTS
# ==============================================

SCORE_WEIGHTS = {
    "date_mention": 1,
    "named_person": 1,
    "specific_action": 1,
    "temporal_proximity": 2,  # Causal Connection only
    "pretext_policy": 1,      # Causal Connection only
}

SCORING_VERSION = {
    "rules": "factual_indicators_v1.0",
    "ruleset_hash": "rsh_c41e2",  # bump if you change rules materially
}

# ==============================================
# PATTERNS
# ==============================================

# Digit patterns are compiled with re.ASCII: Arabic-Indic and other Unicode digits do not count
DATE_PATTERN = (
    r"(\d{1,2}[/-]\d{1,2}[/-]\d{2,4}"
    r"|\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s\d{1,2}(?:st|nd|rd|th)?,\s\d{4}"
    r"|\b\d{4})"
)

# Shape test, so no IGNORECASE: "Jane Doe" yes, "was fired" no
NAME_PATTERN = r"([A-Z][a-z]+)\s([A-Z][a-z]+)"

ACTION_PATTERN = (
    r"(EEOC|accommodation|demotion|termination|pay cut|transfer|suspension"
    r"|fired|complaint|testified|disciplined)"
)

PROXIMITY_PATTERN = r"(\d{1,2}\s(?:days|weeks|week)|immediately|just\s[a-z]*\safter)"

POLICY_PATTERN = (
    r"(handbook|policy|procedure|standard practice|no warning|deviation"
    r"|sudden change|clean record)"
)

CONCLUSION_PATTERN = (
    r"(retaliated|discriminatory|illegal|unfair|unjust|harassment|hostile|bad faith)"
)


@dataclass(frozen=True)
class ScoringRule:
    """One independent heuristic: +weight if pattern matches anywhere."""
    name: str
    description: str
    pattern: re.Pattern
    weight: int
    applies_to: FrozenSet[str]

    def applies(self, element: str) -> bool:
        return element in self.applies_to

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


RULES: Tuple[ScoringRule, ...] = (
    ScoringRule(
        name="date_mention",
        description="Specific date or year",
        pattern=re.compile(DATE_PATTERN, re.IGNORECASE | re.ASCII),
        weight=SCORE_WEIGHTS["date_mention"],
        applies_to=ALL_ELEMENTS,
    ),
    ScoringRule(
        name="named_person",
        description="Named individual",
        pattern=re.compile(NAME_PATTERN),
        weight=SCORE_WEIGHTS["named_person"],
        applies_to=ALL_ELEMENTS,
    ),
    ScoringRule(
        name="specific_action",
        description="Specific, non-conclusory action",
        pattern=re.compile(ACTION_PATTERN, re.IGNORECASE),
        weight=SCORE_WEIGHTS["specific_action"],
        applies_to=frozenset({PROTECTED_ACTIVITY, ADVERSE_ACTION}),
    ),
    ScoringRule(
        name="temporal_proximity",
        description="Close timing between activity and action",
        pattern=re.compile(PROXIMITY_PATTERN, re.IGNORECASE | re.ASCII),
        weight=SCORE_WEIGHTS["temporal_proximity"],
        applies_to=frozenset({CAUSAL_CONNECTION}),
    ),
    ScoringRule(
        name="pretext_policy",
        description="Policy deviation or pretext evidence",
        pattern=re.compile(POLICY_PATTERN, re.IGNORECASE),
        weight=SCORE_WEIGHTS["pretext_policy"],
        applies_to=frozenset({CAUSAL_CONNECTION}),
    ),
)

CONCLUSION_TERMS = re.compile(CONCLUSION_PATTERN, re.IGNORECASE)

# Bonus weights subtracted back out before the conclusion check
BONUS_ALLOWANCE = {
    CAUSAL_CONNECTION: SCORE_WEIGHTS["temporal_proximity"] + SCORE_WEIGHTS["pretext_policy"],
}


@dataclass
class ScoreBreakdown:
    score: int
    hits: List[Tuple[str, str, int]]
    penalized: bool = False


# ==============================================
# SCORING
# ==============================================

def score_breakdown(text: str, element: str) -> ScoreBreakdown:
    """
    Score one answer and keep the per-rule log.

    Internal only: the breakdown is for diagnostics and must never be
    shown to the person answering.
    """
    total = 0
    log = []

    for rule in rules_for(element):
        if rule.matches(text):
            total += rule.weight
            log.append((rule.name, rule.description, rule.weight))
            logger.debug("rule %s matched for %s (+%d)", rule.name, element, rule.weight)

    # Conclusion penalty: a low factual score plus legal jargon reads as a conclusion.
    # The allowance is the fixed bonus total, not the bonuses actually earned.
    base_score = total - BONUS_ALLOWANCE.get(element, 0)
    if CONCLUSION_TERMS.search(text) and base_score < 1:
        logger.debug("conclusion penalty applied for %s (base=%d)", element, base_score)
        return ScoreBreakdown(score=0, hits=log, penalized=True)

    return ScoreBreakdown(score=total, hits=log)


def score(text: str, element: str) -> int:
    """Return the factual-indicator score (>= 0) for one answer."""
    return score_breakdown(text, element).score


def rules_for(element: Optional[str] = None) -> List[ScoringRule]:
    """Rules that apply to an element, or every rule when element is None."""
    if element is None:
        return list(RULES)
    return [r for r in RULES if r.applies(element)]


# Simple usage example
if __name__ == "__main__":
    samples = [
        ("I filed an EEOC complaint on 3/4/2022", PROTECTED_ACTIVITY),
        ("I was fired", ADVERSE_ACTION),
        ("I was fired immediately after, just 2 days after filing, "
         "due to a policy deviation from the handbook", CAUSAL_CONNECTION),
        ("This was clearly retaliated against me", CAUSAL_CONNECTION),
    ]
    for text, element in samples:
        result = score_breakdown(text, element)
        print(f"\n=== {element} ===")
        print(f"Text: {text}")
        print(f"Score: {result.score}  Penalized: {result.penalized}")
        for name, description, weight in result.hits:
            print(f"  +{weight} {name}: {description}")
