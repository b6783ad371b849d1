"""Shared fixtures: a scripted stand-in for requests.Session."""
from unittest.mock import Mock

import pytest
import requests


def make_comment(n, **overrides):
    comment = {
        "user_name": f"user-{n}",
        "created_at": f"2024-06-{(n % 28) + 1:02d}",
        "body": f"review body {n}",
        "rate": n % 5 + 1,
        "is_buyer": n % 2 == 0,
        "recommendation_status": "recommended",
    }
    comment.update(overrides)
    return comment


def make_page(start, count, total_pages=None):
    data = {"comments": [make_comment(start + i) for i in range(count)]}
    if total_pages is not None:
        data["pager"] = {"current_page": 1, "total_pages": total_pages}
    return {"status": 200, "data": data}


def _response(payload):
    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    return response


def _http_error(status):
    response = Mock()
    response.status_code = status
    response.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error")
    return response


class ScriptedSession:
    """Replays per-page scripts. Each entry is a payload dict, an exception, or an int HTTP status."""

    def __init__(self, script):
        self.script = {page: list(steps) for page, steps in script.items()}
        self.calls = []

    def get(self, url, params=None, timeout=None):
        page = params["page"]
        self.calls.append(page)
        steps = self.script.get(page) or [{"data": {"comments": []}}]
        step = steps.pop(0) if len(steps) > 1 else steps[0]
        if isinstance(step, BaseException):
            raise step
        if isinstance(step, int):
            return _http_error(step)
        return _response(step)

    def attempts_for(self, page):
        return self.calls.count(page)


@pytest.fixture
def scripted_session():
    return ScriptedSession


@pytest.fixture
def page():
    return make_page


@pytest.fixture
def comment():
    return make_comment
