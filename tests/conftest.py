# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: an operation context wired to an httpx MockTransport."""

from __future__ import annotations

import json
import logging
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from common_api.entities.country.descriptor import DESCRIPTOR as COUNTRY
from common_api.http import HttpClient

BASE_URL = "http://test/api"


class Recorder:
    """MockTransport handler answering canned responses and recording requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def reply(self, status_code: int = 200, **kwargs: Any) -> Recorder:
        self.responses.append(httpx.Response(status_code, **kwargs))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json=None)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def http(recorder):
    return HttpClient(BASE_URL, transport=httpx.MockTransport(recorder))


@pytest.fixture
def make_context(http, tmp_path):
    """Build the context an operation template expects, for any descriptor."""

    def factory(descriptor=COUNTRY):
        return SimpleNamespace(
            descriptor=descriptor,
            http=http,
            logger=logging.getLogger(f"tests.{descriptor.name}"),
            progress=MagicMock(),
            download_dir=tmp_path,
        )

    return factory


@pytest.fixture
def ctx(make_context):
    return make_context()
