import json

import pytest
import requests


class FakeResponse:
    def __init__(self, payload=None, status=200, text=None):
        self.payload = payload
        self.status_code = status
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.text is not None:
            return json.loads(self.text)
        return self.payload


class FakeSession:
    """Serves rows[offset:offset+limit]; `fail` maps a request number (0-based) to a response or exception."""

    def __init__(self, rows, fail=None):
        self.rows = rows
        self.fail = fail or {}
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        n = len(self.calls)
        self.calls.append(dict(params))
        if n in self.fail:
            f = self.fail[n]
            if isinstance(f, Exception):
                raise f
            return f
        off, lim = params["$offset"], params["$limit"]
        return FakeResponse(self.rows[off:off + lim])

    def close(self):
        pass


def make_rows(k, year=2020, weight="3100"):
    return [{"model_year": str(year), "unladen_weight": weight, "vin": f"VIN{i:06d}"} for i in range(k)]


@pytest.fixture
def rows():
    return make_rows


@pytest.fixture
def session():
    return FakeSession


@pytest.fixture
def response():
    return FakeResponse
