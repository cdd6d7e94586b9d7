"""
Tests for the backend script client using httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from scoutboard.data_models.rating import RatingSubmission, SubmittedRating
from scoutboard.services.backend_client import WebAppClient
from scoutboard.utils.leaderboard_exceptions import (
    BackendNetworkError,
    BackendPermissionError,
    BackendResponseError,
    BackendScriptError,
    MissingFieldError,
)

URL = "https://script.example.com/exec"


def run_with(handler, call):
    """Run call(client) against a client whose requests go to handler."""
    async def runner():
        async with WebAppClient(URL, transport=httpx.MockTransport(handler)) as client:
            return await call(client)
    return asyncio.run(runner())


def reply(**body):
    body.setdefault('status', 'success')
    return httpx.Response(200, json=body)


def test_post_sends_action_as_plain_text_json():
    seen = {}

    def handler(request):
        seen['content_type'] = request.headers['content-type']
        seen['body'] = json.loads(request.content)
        return reply(leaderboard=[])

    result = run_with(handler, lambda client: client.fetch_aggregates("The Lexington", "today"))

    assert result == []
    assert seen['content_type'] == 'text/plain;charset=utf-8'
    assert seen['body'] == {'action': 'getLeaderboardData', 'venueName': 'The Lexington'}


def test_all_time_scope_uses_all_time_action():
    actions = []

    def handler(request):
        actions.append(json.loads(request.content)['action'])
        return reply(leaderboard=[{'id': 'p1'}])

    result = run_with(handler, lambda client: client.fetch_aggregates("The Lexington", "all_time"))
    assert actions == ['getAllTimeLeaderboardData']
    assert result == [{'id': 'p1'}]


def test_unknown_scope_is_rejected_before_sending():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(ValueError):
        run_with(handler, lambda client: client.fetch_aggregates("The Lexington", "weekly"))


def test_html_error_page_is_permission_error():
    def handler(request):
        return httpx.Response(403, text="<HTML><body>Access denied</body></HTML>")

    with pytest.raises(BackendPermissionError) as exc_info:
        run_with(handler, lambda client: client.fetch_scout_levels())
    assert exc_info.value.status_code == 403


def test_json_error_body_message_is_used():
    def handler(request):
        return httpx.Response(500, json={'message': 'Sheet locked'})

    with pytest.raises(BackendResponseError) as exc_info:
        run_with(handler, lambda client: client.fetch_scout_levels())
    assert str(exc_info.value) == 'Sheet locked'
    assert exc_info.value.status_code == 500


def test_plain_error_body():
    def handler(request):
        return httpx.Response(502, text="Bad gateway")

    with pytest.raises(BackendResponseError) as exc_info:
        run_with(handler, lambda client: client.fetch_scout_levels())
    assert "502 - Bad gateway" in str(exc_info.value)


def test_script_failure_status():
    def handler(request):
        return httpx.Response(200, json={'status': 'error', 'message': 'Unknown venue'})

    with pytest.raises(BackendScriptError) as exc_info:
        run_with(handler, lambda client: client.get_performers("Nowhere"))
    assert str(exc_info.value) == 'Unknown venue'


def test_non_json_success_body():
    def handler(request):
        return httpx.Response(200, text="ok")

    with pytest.raises(BackendResponseError):
        run_with(handler, lambda client: client.get_venues_for_today())


def test_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BackendNetworkError):
        run_with(handler, lambda client: client.get_venues_for_today())


def test_missing_field():
    def handler(request):
        return reply()

    with pytest.raises(MissingFieldError) as exc_info:
        run_with(handler, lambda client: client.fetch_rater_profile("fan@example.com"))
    assert exc_info.value.field == 'stats'


def test_feedback_tags_require_both_groups():
    def handler(request):
        return reply(positive=['Great Energy'])

    with pytest.raises(MissingFieldError):
        run_with(handler, lambda client: client.get_feedback_tags())


def test_empty_summary_is_an_error():
    def handler(request):
        return reply(summary='   ')

    with pytest.raises(BackendScriptError):
        run_with(handler, lambda client: client.get_feedback_summary("p1", "The Lexington", "today"))


def test_summary_action_per_scope():
    actions = []

    def handler(request):
        actions.append(json.loads(request.content)['action'])
        return reply(summary='Crowd loved the harmonies.')

    summary = run_with(handler, lambda client: client.get_feedback_summary("p1", "The Lexington", "all_time"))
    assert summary == 'Crowd loved the harmonies.'
    assert actions == ['getAllTimeFeedbackSummary']


def test_submit_ratings_returns_points():
    seen = {}

    def handler(request):
        seen['body'] = json.loads(request.content)
        return reply(pointsEarned=25)

    submission = RatingSubmission(
        ratings=[SubmittedRating('p1', 5, ('Great Energy',), 'Brilliant')],
        rater_email='fan@example.com',
        venue_name='The Lexington',
        first_name='Sam',
        last_name='Lee',
    )
    points = run_with(handler, lambda client: client.submit_ratings(submission))

    assert points == 25
    assert seen['body']['action'] == 'submitRatings'
    assert seen['body']['ratings'][0]['feedbackTags'] == ['Great Energy']


def test_submit_ratings_defaults_to_zero_points():
    submission = RatingSubmission([SubmittedRating('p1', 3)], 'a@b.c', 'V', 'A', 'B')
    assert run_with(lambda request: reply(), lambda client: client.submit_ratings(submission)) == 0


def test_submit_ratings_rejects_non_numeric_points():
    submission = RatingSubmission([SubmittedRating('p1', 3)], 'a@b.c', 'V', 'A', 'B')
    with pytest.raises(BackendResponseError):
        run_with(lambda request: reply(pointsEarned='lots'), lambda client: client.submit_ratings(submission))


def test_login_with_token():
    def handler(request):
        return reply(email='fan@example.com', venue='The Lexington', firstName='Sam', lastName='Lee')

    details = run_with(handler, lambda client: client.login_with_token("abc123"))
    assert details == {
        'email': 'fan@example.com',
        'venue': 'The Lexington',
        'first_name': 'Sam',
        'last_name': 'Lee',
    }


def test_client_requires_url(monkeypatch):
    from scoutboard.config import Config
    monkeypatch.setattr(Config, 'WEB_APP_URL', '')
    with pytest.raises(ValueError):
        WebAppClient()
