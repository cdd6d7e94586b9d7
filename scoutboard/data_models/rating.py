"""
Rating submission data models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class RatingInput:
    """A rater's pending, editable rating for one performer."""
    score: int = 0
    tags: List[str] = field(default_factory=list)
    comment: str = ""


@dataclass(frozen=True)
class SubmittedRating:
    """A single validated rating ready for the backend."""
    performer_id: str
    rating: int
    feedback_tags: Tuple[str, ...] = ()
    comment: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            'id': self.performer_id,
            'rating': self.rating,
            'feedbackTags': list(self.feedback_tags),
            'comment': self.comment,
        }


@dataclass(frozen=True)
class RatingSubmission:
    """A batch of ratings from one rater at one venue."""
    ratings: List[SubmittedRating]
    rater_email: str
    venue_name: str
    first_name: str
    last_name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            'ratings': [rating.to_payload() for rating in self.ratings],
            'raterEmail': self.rater_email,
            'venueName': self.venue_name,
            'firstName': self.first_name,
            'lastName': self.last_name,
        }
        if self.latitude is not None and self.longitude is not None:
            payload['latitude'] = self.latitude
            payload['longitude'] = self.longitude
        return payload
