"""Shared fixtures: a service whose session transport is replaced by a route table."""
import json
from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from concept_insights.service import ConceptInsights
from concept_insights.settings import Settings

BASE_URL = "https://ci.example.com/api"
BASE_PATH = "/api"
ACCOUNT_ID = "acct123"


def make_response(status=200, payload=None, text=None, url=BASE_URL):
    """Build a requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    if payload is not None:
        body = json.dumps(payload)
        resp.headers["Content-Type"] = "application/json"
    else:
        body = text or ""
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    resp.url = url
    return resp


def query_of(prepared):
    """Decoded query string of a prepared request, one value per key."""
    return {k: v[0] for k, v in parse_qs(urlsplit(prepared.url).query).items()}


class FakeTransport:
    """Stands in for Session.send: records prepared requests and answers from a route table."""

    def __init__(self):
        self.routes = {}
        self.sent = []

    def add(self, method, path, status=200, payload=None, text=None):
        self.routes[(method, path)] = (status, payload, text)

    def __call__(self, prepared, **kwargs):
        self.sent.append(prepared)
        path = urlsplit(prepared.url).path[len(BASE_PATH):]
        status, payload, text = self.routes.get(
            (prepared.method, path), (404, {"error": f"no route for {path}"}, None)
        )
        return make_response(status, payload, text, url=prepared.url)

    def calls(self, method, path):
        return [r for r in self.sent if r.method == method and urlsplit(r.url).path == BASE_PATH + path]

    @property
    def last(self):
        return self.sent[-1]


@pytest.fixture
def settings():
    return Settings(username="user", password="secret", api_base_url=BASE_URL, _env_file=None)


@pytest.fixture
def transport():
    t = FakeTransport()
    t.add("GET", "/v2/accounts", payload={"accounts": [{"account_id": ACCOUNT_ID, "user": "user"}]})
    return t


@pytest.fixture
def service(settings, transport):
    svc = ConceptInsights(settings=settings)
    with patch.object(svc.client.session, "send", side_effect=transport):
        yield svc
    svc.close()
