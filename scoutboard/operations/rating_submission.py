"""
Rating Submission

Builds the batch of ratings a rater sends at the end of a set. Only
performers with a star score are sent, and a performer the rater already
rated today cannot be rated again.
"""

from typing import Mapping, Optional, Tuple

from scoutboard.constants import RankConstants
from scoutboard.data_models.profile import RaterSession
from scoutboard.data_models.rating import RatingInput, RatingSubmission, SubmittedRating
from scoutboard.utils.leaderboard_exceptions import SubmissionError


def build_submission(
    pending: Mapping[str, RatingInput],
    already_rated: Mapping[str, int],
    session: RaterSession,
    coords: Optional[Tuple[float, float]] = None
) -> RatingSubmission:
    """
    Validate pending ratings and package them for the backend.

    Args:
        pending: performer_id -> rating being edited
        already_rated: performer_id -> score the rater gave earlier today
        session: Logged-in rater and venue
        coords: Optional (latitude, longitude)

    Returns:
        RatingSubmission with one entry per rated performer

    Raises:
        SubmissionError: if the session is incomplete, a score is out of
            range, a performer was already rated, or nothing is left to send
    """
    if not (session.email and session.venue and session.first_name and session.last_name):
        raise SubmissionError("Authentication error. Please log in again.")

    ratings = []
    for performer_id, rating_input in pending.items():
        if not rating_input or rating_input.score <= 0:
            continue
        if performer_id in already_rated:
            raise SubmissionError(f"Performer {performer_id} has already been rated today.")
        if not RankConstants.MIN_RATING <= rating_input.score <= RankConstants.MAX_RATING:
            raise SubmissionError(
                f"Ratings must be between {RankConstants.MIN_RATING} and {RankConstants.MAX_RATING} stars."
            )
        ratings.append(SubmittedRating(
            performer_id=performer_id,
            rating=rating_input.score,
            feedback_tags=tuple(rating_input.tags or ()),
            comment=(rating_input.comment or "").strip(),
        ))

    if not ratings:
        raise SubmissionError("No new ratings to submit.")

    latitude, longitude = coords if coords else (None, None)
    return RatingSubmission(
        ratings=ratings,
        rater_email=session.email,
        venue_name=session.venue,
        first_name=session.first_name,
        last_name=session.last_name,
        latitude=latitude,
        longitude=longitude,
    )
