import logging
from dataclasses import dataclass
from typing import List, Tuple

import factual_scorer

logger = logging.getLogger(__name__)

# Below 3: Weak | 3 to 5: Plausible | 6+: Strong
SCORE_THRESHOLDS = {
    "weak": 3,
    "plausible": 6,
}

WEAK_DESCRIPTION = (
    "The allegations predominantly use **legal conclusions** rather than specific "
    "facts (Who, What, When). The claim fails to meet the **Plausibility Standard** "
    "and would likely be dismissed on a Motion to Dismiss (Rule 12(b)(6))."
)

PLAUSIBLE_DESCRIPTION = (
    "The facts are substantive and support the *prima facie* elements, meeting the "
    "**Plausibility Standard** (*Twombly/Iqbal*). The Motion to Dismiss would be "
    "DENIED, allowing the case to move to the rigorous factual investigation phase "
    "(Discovery)."
)

STRONG_DESCRIPTION = (
    "The claim is supported by **highly specific allegations**, including strong "
    "**temporal proximity** and/or evidence of **pretext** (policy deviation). This "
    "positions the Plaintiff favorably to withstand a later Motion for Summary Judgment."
)


@dataclass(frozen=True)
class Verdict:
    """Qualitative ruling shown to the plaintiff"""
    tier: str
    label: str
    description: str
    severity_class: str


WEAK_CLAIM = Verdict(
    tier="Weak",
    label="Weak Claim: Dismissed for Failure to State a Claim.",
    description=WEAK_DESCRIPTION,
    severity_class="weak-claim",
)

PLAUSIBLE_CLAIM = Verdict(
    tier="Plausible",
    label="Facially Plausible: Proceed to Discovery.",
    description=PLAUSIBLE_DESCRIPTION,
    severity_class="plausible-claim",
)

STRONG_CLAIM = Verdict(
    tier="Strong",
    label="Legally Strong: Well-Pled Complaint.",
    description=STRONG_DESCRIPTION,
    severity_class="strong-claim",
)


@dataclass
class Ruling:
    facts: List[Tuple[str, str]]  # (prompt identity, answer text) in prompt order
    verdict: Verdict
    raw_score: int  # Internal only - not shown to users


def map_verdict(total_score: int) -> Verdict:
    """Map a summed plausibility score to one of the three fixed verdicts"""
    if total_score < SCORE_THRESHOLDS["weak"]:
        return WEAK_CLAIM
    elif total_score < SCORE_THRESHOLDS["plausible"]:
        return PLAUSIBLE_CLAIM
    else:
        return STRONG_CLAIM


def compute_all_scores_and_verdict(answers) -> Ruling:
    """
    Score every answer, sum, and pick the verdict.

    Each answer's ``score`` attribute is filled in here; submission
    never scores.
    """
    total = 0
    facts = []

    for answer in answers:
        answer.score = factual_scorer.score(answer.text, answer.prompt_identity)
        total += answer.score
        facts.append((answer.prompt_identity, answer.text))

    verdict = map_verdict(total)
    logger.info("ruling issued: %s (%d answers)", verdict.tier, len(facts))
    return Ruling(facts=facts, verdict=verdict, raw_score=total)
