"""
Aggregate Ingestion

Turns raw backend rows into validated, immutable records:
- ingest(): per-performer leaderboard rows for one scope
- merge_scopes(): today and all-time aggregates keyed by performer id
- ingest_scout_levels(): the scout level table
- ingest_rater_profile(): a rater's SP stats

Bad leaderboard rows surface as ValidationError objects so the caller can
drop a single row instead of blanking the whole board. Trend flags sent by
the backend (ratingTrend, xpTrend) are ignored; trends are derived from the
raw baseline values instead.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from scoutboard.constants import RankConstants, ScopeConstants
from scoutboard.data_models.leaderboard import MergedPerformer, PerformerAggregate
from scoutboard.data_models.profile import RaterProfile, ScoutLevel
from scoutboard.utils.leaderboard_exceptions import ConfigurationError, ValidationError
from scoutboard.utils.scout_levels import validate_levels

_MISSING = object()


@dataclass
class IngestionResult:
    """Aggregates that passed validation and the errors for rows that did not."""
    aggregates: List[PerformerAggregate] = field(default_factory=list)
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _parse_number(value: Any, field_name: str, record_id: Optional[str], integer: bool):
    """Parse a numeric cell. Spreadsheet backends may send numbers as strings."""
    if isinstance(value, bool):
        raise ValidationError(field_name, "expected a number, got a boolean", record_id)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValidationError(field_name, f"not a number: {value!r}", record_id)
    if not isinstance(value, (int, float)):
        raise ValidationError(field_name, f"expected a number, got {type(value).__name__}", record_id)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(field_name, "must be finite", record_id)

    if integer:
        if isinstance(value, float):
            if not value.is_integer():
                raise ValidationError(field_name, f"expected a whole number, got {value}", record_id)
            value = int(value)
        if value < 0:
            raise ValidationError(field_name, f"cannot be negative ({value})", record_id)
        return value

    return float(value)


def _required_number(raw: Mapping, field_name: str, record_id: Optional[str], integer: bool):
    value = raw.get(field_name, _MISSING)
    if value is _MISSING or value is None:
        raise ValidationError(field_name, "missing", record_id)
    return _parse_number(value, field_name, record_id, integer)


def _optional_number(raw: Mapping, field_name: str, record_id: Optional[str], integer: bool):
    value = raw.get(field_name)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return _parse_number(value, field_name, record_id, integer)


def _optional_text(raw: Mapping, field_name: str) -> Optional[str]:
    value = raw.get(field_name)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _check_rating_range(value: float, field_name: str, record_id: Optional[str]):
    if not 0 <= value <= RankConstants.MAX_RATING:
        raise ValidationError(
            field_name, f"must be between 0 and {RankConstants.MAX_RATING} ({value})", record_id
        )


def validate_record(raw: Mapping, scope: str) -> PerformerAggregate:
    """
    Validate one raw leaderboard row and build its aggregate.

    Args:
        raw: Row as returned by the backend
        scope: ScopeConstants.TODAY or ScopeConstants.ALL_TIME

    Returns:
        PerformerAggregate for the row

    Raises:
        ValidationError: on the first invariant the row breaks
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("record", f"expected an object, got {type(raw).__name__}")

    raw_id = raw.get('id')
    record_id = str(raw_id).strip() if raw_id is not None else ""
    if not record_id:
        raise ValidationError("id", "missing")

    name = _optional_text(raw, 'name')
    if name is None:
        raise ValidationError("name", "missing", record_id)

    rating_count = _required_number(raw, 'ratingCount', record_id, integer=True)
    comment_count = _required_number(raw, 'commentCount', record_id, integer=True)
    average_rating = _required_number(raw, 'averageRating', record_id, integer=False)
    _check_rating_range(average_rating, 'averageRating', record_id)

    if rating_count == 0 and average_rating != 0:
        raise ValidationError(
            "averageRating", f"must be 0 when ratingCount is 0 ({average_rating})", record_id
        )
    if rating_count > 0 and average_rating < RankConstants.MIN_RATING:
        raise ValidationError(
            "averageRating",
            f"must be at least {RankConstants.MIN_RATING} when rated ({average_rating})",
            record_id,
        )

    xp = _optional_number(raw, 'xp', record_id, integer=True)
    baseline_xp = _optional_number(raw, 'previousXp', record_id, integer=True)
    baseline_rating = _optional_number(raw, 'previousAverageRating', record_id, integer=False)
    if baseline_rating is not None:
        _check_rating_range(baseline_rating, 'previousAverageRating', record_id)

    return PerformerAggregate(
        id=record_id,
        name=name,
        scope=scope,
        average_rating=average_rating,
        rating_count=rating_count,
        comment_count=comment_count,
        xp=xp,
        baseline_rating=baseline_rating,
        baseline_xp=baseline_xp,
        bio=_optional_text(raw, 'bio'),
        social_link=_optional_text(raw, 'socialLink'),
    )


def ingest(raw_records: Iterable[Mapping], scope: str, strict: bool = False) -> IngestionResult:
    """
    Validate a batch of raw leaderboard rows for one scope.

    Args:
        raw_records: Rows from the backend
        scope: ScopeConstants.TODAY or ScopeConstants.ALL_TIME
        strict: Raise on the first bad row instead of collecting it

    Returns:
        IngestionResult with the valid aggregates in input order

    Raises:
        ValueError: for an unknown scope
        ValidationError: in strict mode, for the first bad row
    """
    if scope not in ScopeConstants.ALL_SCOPES:
        raise ValueError(f"Unknown scope: {scope}")

    result = IngestionResult()
    seen_ids = set()

    for raw in raw_records:
        try:
            aggregate = validate_record(raw, scope)
            if aggregate.id in seen_ids:
                raise ValidationError("id", "duplicate id in scope", aggregate.id)
        except ValidationError as e:
            if strict:
                raise
            result.errors.append(e)
            continue

        seen_ids.add(aggregate.id)
        result.aggregates.append(aggregate)

    return result


def merge_scopes(
    today: Iterable[PerformerAggregate],
    all_time: Iterable[PerformerAggregate]
) -> Dict[str, MergedPerformer]:
    """Key today and all-time aggregates by performer id."""
    today_by_id = {aggregate.id: aggregate for aggregate in today}
    all_time_by_id = {aggregate.id: aggregate for aggregate in all_time}

    merged = {}
    for performer_id in list(today_by_id) + [pid for pid in all_time_by_id if pid not in today_by_id]:
        merged[performer_id] = MergedPerformer(
            id=performer_id,
            today=today_by_id.get(performer_id),
            all_time=all_time_by_id.get(performer_id),
        )
    return merged


def ingest_scout_levels(raw_levels: Iterable[Mapping]) -> List[ScoutLevel]:
    """
    Build the scout level table.

    Raises:
        ConfigurationError: if a row is malformed or thresholds do not
            strictly increase
    """
    levels = []
    for position, raw in enumerate(raw_levels):
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"level {position} is not an object")
        name = _optional_text(raw, 'name')
        if name is None:
            raise ConfigurationError(f"level {position} has no name")
        try:
            min_sp = _required_number(raw, 'minSP', name, integer=True)
        except ValidationError as e:
            raise ConfigurationError(f"level '{name}': {e.reason}")
        levels.append(ScoutLevel(name=name, min_sp=min_sp))

    validate_levels(levels)
    return levels


def ingest_rater_profile(raw: Mapping) -> RaterProfile:
    """
    Build a rater profile. Missing counters default to 0.

    Raises:
        ValidationError: for negative or non-numeric counters
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("stats", f"expected an object, got {type(raw).__name__}")

    def counter(field_name: str) -> int:
        value = _optional_number(raw, field_name, None, integer=True)
        return value if value is not None else 0

    return RaterProfile(
        total_sp=counter('totalSP'),
        ratings_submitted=counter('ratingsSubmitted'),
        comments_written=counter('commentsWritten'),
    )
