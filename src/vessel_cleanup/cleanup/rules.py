"""Time-bounded, per-ship correction rules and their compiled guards."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from vessel_core.runtime.shared import SupportsPropertyClean, SupportsPropertySample

__all__ = [
    "CalcTransform",
    "CatalogError",
    "CleanTransform",
    "CleanupGuard",
    "Clock",
    "CorrectionRule",
    "Stage",
    "compile_guards",
    "run_guards",
    "utc_now",
    "validate_catalog",
]

logger = logging.getLogger(__name__)

CalcTransform = Callable[[SupportsPropertySample], None]
CleanTransform = Callable[[SupportsPropertyClean], None]
Clock = Callable[[], datetime]


class Stage(str, Enum):
    """Pipeline points where corrections may run."""

    PRE = "pre-vessel-anatomy"
    POST = "post-vessel-anatomy"

    @classmethod
    def parse(cls, value: "str | Stage") -> "Stage":
        """Resolve ``value`` from a member, its value or a ``pre``/``post`` alias."""

        if isinstance(value, cls):
            return value
        token = str(value).strip().lower()
        for member in cls:
            if token in {member.value, member.name.lower()}:
                return member
        raise ValueError(f"Unknown cleanup stage {value!r}")


class CatalogError(ValueError):
    """Raised when the rule catalog contains an unattributed correction."""

    def __init__(self, message: str, *, index: int, ship_id: int) -> None:
        super().__init__(message)
        self.index = index
        self.ship_id = ship_id


@dataclass(frozen=True)
class CorrectionRule:
    """Declarative correction applied to one ship over an open time window.

    ``start``/``end`` set to ``None`` are unbounded. An unbounded ``end`` is
    resolved against the engine clock every time a guard is evaluated.
    """

    issue: str
    ship_id: int
    stage: Stage
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    unconditional: bool = False
    calc: Optional[CalcTransform] = None
    clean: Optional[CleanTransform] = None
    comment: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "stage", Stage.parse(self.stage))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


class CleanupGuard:
    """Per-sample callable form of a :class:`CorrectionRule`."""

    __slots__ = ("rule", "_clock", "_start", "_end")

    def __init__(self, rule: CorrectionRule, clock: Clock = utc_now) -> None:
        self.rule = rule
        self._clock = clock
        self._start = _as_utc(rule.start) if rule.start is not None else None
        self._end = _as_utc(rule.end) if rule.end is not None else None

    def __repr__(self) -> str:
        return f"CleanupGuard(issue={self.rule.issue!r}, ship_id={self.rule.ship_id})"

    def matches(self, sample: SupportsPropertySample) -> bool:
        """Return ``True`` when ``sample`` belongs to the rule's ship and window."""

        if sample.ship_id != self.rule.ship_id:
            return False
        moment = _as_utc(sample.time)
        end = self._end if self._end is not None else _as_utc(self._clock())
        if self._start is not None and not self._start < moment:
            return False
        return moment < end

    def apply(
        self,
        sample: SupportsPropertySample,
        cleaner: SupportsPropertyClean | None,
    ) -> bool:
        """Run the rule transforms on ``sample`` if it matches.

        ``cleaner`` is the clearable view of ``sample`` resolved by the caller,
        or ``None`` when the sample cannot be bulk-cleared. Returns whether the
        rule matched.
        """

        if not self.matches(sample):
            return False

        rule = self.rule
        logger.debug(
            "Cleaning up data on %s for ship %d because of %s",
            _as_utc(sample.time).isoformat(),
            rule.ship_id,
            rule.issue,
        )
        if rule.calc is not None:
            rule.calc(sample)
        if rule.clean is not None:
            if cleaner is not None:
                rule.clean(cleaner)
            else:
                logger.warning(
                    "Sample for ship %d does not support bulk clearing; skipping clean step of %s",
                    rule.ship_id,
                    rule.issue,
                    extra={
                        "event": "cleanup.clean_unsupported",
                        "issue": rule.issue,
                        "ship_id": rule.ship_id,
                    },
                )
        return True

    def __call__(self, sample: SupportsPropertySample) -> None:
        self.apply(sample, _clean_capability(sample))


def _clean_capability(sample: SupportsPropertySample) -> SupportsPropertyClean | None:
    if isinstance(sample, SupportsPropertyClean):
        return sample
    return None


def validate_catalog(catalog: Iterable[CorrectionRule]) -> None:
    """Raise :class:`CatalogError` for the first rule without an issue."""

    for index, rule in enumerate(catalog):
        if not rule.issue or not rule.issue.strip():
            raise CatalogError(
                f"No issue associated with cleanup rule #{index} for ship {rule.ship_id}",
                index=index,
                ship_id=rule.ship_id,
            )


def compile_guards(
    stage: "Stage | str",
    only_unconditional: bool = False,
    *,
    catalog: Optional[Sequence[CorrectionRule]] = None,
    clock: Optional[Clock] = None,
) -> List[CleanupGuard]:
    """Compile the rules of ``catalog`` that run during ``stage``.

    The returned guards keep catalog order; later rules may depend on values
    written by earlier ones. The whole catalog is validated before any guard is
    built.
    """

    if catalog is None:
        from vessel_cleanup.cleanup.catalog import CATALOG

        catalog = CATALOG
    resolved_stage = Stage.parse(stage)
    resolved_clock = clock or utc_now

    rules = list(catalog)
    validate_catalog(rules)

    guards: List[CleanupGuard] = []
    for rule in rules:
        if only_unconditional and not rule.unconditional:
            continue
        if rule.stage != resolved_stage:
            continue
        guards.append(CleanupGuard(rule, resolved_clock))
    logger.debug(
        "Compiled %d cleanup guards for %s",
        len(guards),
        resolved_stage.value,
        extra={
            "event": "cleanup.compiled",
            "stage": resolved_stage.value,
            "only_unconditional": only_unconditional,
            "guards": len(guards),
        },
    )
    return guards


def run_guards(guards: Iterable[CleanupGuard], sample: SupportsPropertySample) -> int:
    """Invoke ``guards`` in order on ``sample`` and return how many matched.

    The bulk-clear capability is resolved once for the sample rather than per
    rule.
    """

    cleaner = _clean_capability(sample)
    matched = 0
    for guard in guards:
        if guard.apply(sample, cleaner):
            matched += 1
    return matched
