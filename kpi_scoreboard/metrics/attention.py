"""
Attention Rules

Flags team members a manager should act on. Rules look at a member's
KPIScoreResult and raise a flag when the overall status, or the status of
a metric, falls into the rule's statuses.

Evaluation is stateless: the same result always yields the same flags.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ..core.entities import KPIScoreResult, StatusTier


class AttentionAction(str, Enum):
    """What the manager is prompted to do."""
    REVIEW = "review"
    COACH = "coach"
    NUDGE = "nudge"


class AttentionStatus(str, Enum):
    """Summary attention state of a team member."""
    NEEDS_ATTENTION = "needs-attention"
    ON_TRACK = "on-track"


@dataclass(frozen=True)
class AttentionRule:
    """Definition of an attention rule."""
    name: str
    action: AttentionAction
    statuses: frozenset = field(default_factory=frozenset)

    # None checks the overall status; "*" checks every metric
    metric_key: Optional[str] = None

    # Skip metrics that carry no weight in the overall score
    weighted_only: bool = False


@dataclass(frozen=True)
class AttentionFlag:
    """A raised attention flag."""
    user_id: str
    rule_name: str
    action: AttentionAction
    status: StatusTier
    metric_key: Optional[str] = None
    message: str = ""


DEFAULT_RULES: tuple[AttentionRule, ...] = (
    AttentionRule(
        name="Overall Critical",
        action=AttentionAction.REVIEW,
        statuses=frozenset({StatusTier.CRITICAL})
    ),
    AttentionRule(
        name="Metric Critical",
        action=AttentionAction.COACH,
        statuses=frozenset({StatusTier.CRITICAL}),
        metric_key="*"
    ),
    AttentionRule(
        name="Missing Data",
        action=AttentionAction.NUDGE,
        statuses=frozenset({StatusTier.NO_DATA}),
        metric_key="*",
        weighted_only=True
    )
)

_ACTION_ORDER = {
    AttentionAction.REVIEW: 0,
    AttentionAction.COACH: 1,
    AttentionAction.NUDGE: 2
}


class AttentionEngine:
    """Evaluates attention rules against score results."""

    def __init__(self, rules: Optional[Iterable[AttentionRule]] = None):
        self._rules = tuple(DEFAULT_RULES if rules is None else rules)

    @property
    def rules(self) -> tuple[AttentionRule, ...]:
        return self._rules

    def evaluate(self, result: KPIScoreResult) -> tuple[AttentionFlag, ...]:
        """Evaluate all rules against one user's result."""
        flags = []

        for rule in self._rules:
            if rule.metric_key is None:
                if result.status in rule.statuses:
                    flags.append(AttentionFlag(
                        user_id=result.user_id,
                        rule_name=rule.name,
                        action=rule.action,
                        status=result.status,
                        message=f"Overall score {result.overall_score} is {result.status.value}"
                    ))
                continue

            for score in result.metric_scores:
                if rule.metric_key != "*" and score.metric_key != rule.metric_key:
                    continue
                if rule.weighted_only and score.weight <= 0:
                    continue
                if score.status in rule.statuses:
                    flags.append(AttentionFlag(
                        user_id=result.user_id,
                        rule_name=rule.name,
                        action=rule.action,
                        status=score.status,
                        metric_key=score.metric_key,
                        message=f"{score.metric_key} is {score.status.value}"
                    ))

        flags.sort(key=lambda f: _ACTION_ORDER[f.action])
        return tuple(flags)

    def evaluate_all(self, results: Iterable[KPIScoreResult]) -> tuple[AttentionFlag, ...]:
        """Evaluate every result, keeping input order within each action."""
        flags = []
        for result in results:
            flags.extend(self.evaluate(result))
        flags.sort(key=lambda f: _ACTION_ORDER[f.action])
        return tuple(flags)

    def attention_status(self, result: KPIScoreResult) -> AttentionStatus:
        if self.evaluate(result):
            return AttentionStatus.NEEDS_ATTENTION
        return AttentionStatus.ON_TRACK
