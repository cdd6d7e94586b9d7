"""
Client for the backend script endpoint.

Every backend operation is a POST of a JSON body carrying an "action" name.
The body is sent as text/plain, which the script host accepts without a CORS
preflight. A successful reply is a JSON object with status "success"; any
other reply becomes a BackendError subclass.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from scoutboard.config import Config
from scoutboard.constants import ScopeConstants
from scoutboard.data_models.rating import RatingSubmission
from scoutboard.utils.leaderboard_exceptions import (
    BackendNetworkError,
    BackendPermissionError,
    BackendResponseError,
    BackendScriptError,
    MissingFieldError,
)

logger = logging.getLogger(__name__)


class WebAppClient:
    """Async client for the backend script."""

    def __init__(
        self,
        url: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            url: Script endpoint, defaults to Config.WEB_APP_URL
            timeout: Request timeout in seconds, defaults to Config.REQUEST_TIMEOUT
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.url = url or Config.WEB_APP_URL
        if not self.url:
            raise ValueError("Backend URL is required")
        self._client = httpx.AsyncClient(
            timeout=timeout or Config.REQUEST_TIMEOUT,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def post(self, action: str, **params) -> Dict[str, Any]:
        """
        Send one action to the script and return its reply.

        Raises:
            BackendNetworkError: if the endpoint cannot be reached
            BackendPermissionError: if an HTML error page comes back
            BackendResponseError: for other error statuses or a non-JSON body
            BackendScriptError: if the script reports a failure
        """
        payload = {'action': action, **params}
        try:
            response = await self._client.post(
                self.url,
                content=json.dumps(payload),
                headers={'Content-Type': 'text/plain;charset=utf-8'},
            )
        except httpx.TransportError as e:
            logger.error(f"Network error posting '{action}' to backend: {e}")
            raise BackendNetworkError(str(e)) from e

        if response.is_error:
            raise self._error_from_response(response)

        try:
            result = response.json()
        except ValueError:
            raise BackendResponseError(
                f"The server returned a non-JSON response to {action}", response.status_code
            )

        if not isinstance(result, dict) or result.get('status') != 'success':
            message = result.get('message') if isinstance(result, dict) else None
            logger.error(f"Backend action '{action}' failed: {message}")
            raise BackendScriptError(message)

        return result

    @staticmethod
    def _error_from_response(response: httpx.Response) -> Exception:
        status = response.status_code
        text = response.text
        if '<html' in text.lower():
            return BackendPermissionError(status)
        try:
            error_json = json.loads(text)
        except ValueError:
            return BackendResponseError(f"The server responded with an error: {status} - {text}", status)
        message = error_json.get('message') if isinstance(error_json, dict) else None
        return BackendResponseError(message or f"The server responded with an error: {status}", status)

    @staticmethod
    def _require(result: Dict[str, Any], action: str, *fields: str):
        for field_name in fields:
            if result.get(field_name) is None:
                raise MissingFieldError(action, field_name)

    # Leaderboard and profile data

    async def fetch_aggregates(self, venue_name: str, scope: str) -> List[Dict[str, Any]]:
        """Raw per-performer stats for a venue in one scope."""
        if scope not in ScopeConstants.FETCH_ACTIONS:
            raise ValueError(f"Unknown scope: {scope}")
        action = ScopeConstants.FETCH_ACTIONS[scope]
        result = await self.post(action, venueName=venue_name)
        self._require(result, action, 'leaderboard')
        return result['leaderboard']

    async def fetch_rater_profile(self, rater_email: str) -> Dict[str, Any]:
        result = await self.post('getRaterStats', raterEmail=rater_email)
        self._require(result, 'getRaterStats', 'stats')
        return result['stats']

    async def fetch_scout_levels(self) -> List[Dict[str, Any]]:
        result = await self.post('getScoutLevels')
        self._require(result, 'getScoutLevels', 'scoutLevels')
        return result['scoutLevels']

    # Venue and rating data

    async def get_venues_for_today(self) -> List[str]:
        result = await self.post('getVenuesForToday')
        self._require(result, 'getVenuesForToday', 'venues')
        return result['venues']

    async def get_performers(self, venue_name: str) -> List[Dict[str, Any]]:
        result = await self.post('getPerformers', venueName=venue_name)
        self._require(result, 'getPerformers', 'performers')
        return result['performers']

    async def get_todays_ratings(self, rater_email: str, venue_name: str) -> Dict[str, int]:
        """performer_id -> score the rater already gave today."""
        result = await self.post('getTodaysRatings', raterEmail=rater_email, venueName=venue_name)
        self._require(result, 'getTodaysRatings', 'ratings')
        return result['ratings']

    async def get_feedback_tags(self) -> Dict[str, List[str]]:
        result = await self.post('getFeedbackTags')
        self._require(result, 'getFeedbackTags', 'positive', 'constructive')
        return {'positive': result['positive'], 'constructive': result['constructive']}

    async def submit_ratings(self, submission: RatingSubmission) -> int:
        """Send a rating batch, returning the scout points it earned."""
        result = await self.post('submitRatings', **submission.to_payload())
        points = result.get('pointsEarned') or 0
        try:
            return int(points)
        except (TypeError, ValueError):
            raise BackendResponseError(f"The server returned invalid pointsEarned: {points!r}")

    async def get_feedback_summary(self, performer_id: str, venue_name: str, scope: str) -> str:
        """AI summary of a performer's comments for one scope."""
        if scope not in ScopeConstants.SUMMARY_ACTIONS:
            raise ValueError(f"Unknown scope: {scope}")
        action = ScopeConstants.SUMMARY_ACTIONS[scope]
        result = await self.post(action, performerId=performer_id, venueName=venue_name)
        summary = result.get('summary')
        if not isinstance(summary, str) or not summary.strip():
            raise BackendScriptError(
                "The AI returned an empty summary. This can happen if the comments "
                "are too short or lack specific feedback."
            )
        return summary

    # Login

    async def login_by_email(self, email: str) -> Dict[str, Any]:
        """Returns {'user': ..., 'userType': 'performer' | 'audience'}."""
        result = await self.post('loginByEmail', email=email)
        self._require(result, 'loginByEmail', 'user', 'userType')
        return {'user': result['user'], 'userType': result['userType']}

    async def request_login_link(self, email: str, venue_name: str, first_name: str, last_name: str) -> None:
        await self.post(
            'requestLogin',
            email=email,
            venueName=venue_name,
            firstName=first_name,
            lastName=last_name,
        )

    async def login_with_token(self, token: str) -> Dict[str, str]:
        result = await self.post('verifyToken', token=token)
        self._require(result, 'verifyToken', 'email')
        return {
            'email': result['email'],
            'venue': result.get('venue', ''),
            'first_name': result.get('firstName', ''),
            'last_name': result.get('lastName', ''),
        }
