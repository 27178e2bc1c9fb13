"""Shared fixtures: an in-memory Business Communications service and credentials."""

from __future__ import annotations

import copy
import itertools
import json
from typing import Any, Callable, Optional

import httplib2
import pytest
from googleapiclient.errors import HttpError

from bizcomms import google_factory
from bizcomms.field_mask import FieldMask
from bizcomms.google_factory import BusinessCommunicationsFactory


def http_error(status: int, message: str) -> HttpError:
    resp = httplib2.Response({"status": str(status)})
    content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
    return HttpError(resp, content)


class FakeRequest:
    """Mimics googleapiclient.http.HttpRequest: nothing happens until execute()."""

    def __init__(self, fn: Callable[[], dict]) -> None:
        self._fn = fn

    def execute(self) -> dict:
        return self._fn()


class FakeCollection:
    """One resource family stored in memory, keyed by resource name."""

    def __init__(self, kind: str, strict: bool = True) -> None:
        self.kind = kind
        self.strict = strict
        self.store: dict[str, dict] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._ids = itertools.count(1)

    def _lookup(self, name: str) -> dict:
        if name not in self.store:
            raise http_error(404, f"Requested entity was not found: {name}")
        return self.store[name]

    def create(self, parent: Optional[str] = None, body: Optional[dict] = None) -> FakeRequest:
        self.calls.append(("create", {"parent": parent, "body": body}))

        def run() -> dict:
            prefix = f"{parent}/{self.kind}" if parent else self.kind
            name = f"{prefix}/{self.kind[:-1]}{next(self._ids)}"
            resource = copy.deepcopy(body or {})
            resource["name"] = name
            self.store[name] = resource
            return copy.deepcopy(resource)

        return FakeRequest(run)

    def get(self, name: str) -> FakeRequest:
        self.calls.append(("get", {"name": name}))
        return FakeRequest(lambda: copy.deepcopy(self._lookup(name)))

    def patch(self, name: str, body: dict, updateMask: str) -> FakeRequest:  # noqa: N803
        self.calls.append(("patch", {"name": name, "body": body, "updateMask": updateMask}))

        def run() -> dict:
            current = self._lookup(name)
            mask = FieldMask.parse(updateMask)
            missing = mask.missing_paths(body)
            if self.strict and missing:
                raise http_error(400, f"Invalid update mask paths: {', '.join(missing)}")
            self.store[name] = mask.apply(current, body)
            return copy.deepcopy(self.store[name])

        return FakeRequest(run)

    def list(
        self,
        parent: Optional[str] = None,
        pageSize: int = 100,  # noqa: N803
        pageToken: Optional[str] = None,  # noqa: N803
    ) -> FakeRequest:
        self.calls.append(("list", {"parent": parent, "pageSize": pageSize, "pageToken": pageToken}))

        def run() -> dict:
            prefix = f"{parent}/{self.kind}/" if parent else f"{self.kind}/"
            names = sorted(n for n in self.store if n.startswith(prefix))
            start = int(pageToken or 0)
            page = names[start:start + pageSize]
            resp: dict = {self.kind: [copy.deepcopy(self.store[n]) for n in page]}
            if start + pageSize < len(names):
                resp["nextPageToken"] = str(start + pageSize)
            return resp

        return FakeRequest(run)

    def delete(self, name: str) -> FakeRequest:
        self.calls.append(("delete", {"name": name}))

        def run() -> dict:
            self._lookup(name)
            del self.store[name]
            return {}

        return FakeRequest(run)


class FakeBrands(FakeCollection):
    def __init__(self, strict: bool = True) -> None:
        super().__init__("brands", strict)
        self._agents = FakeCollection("agents", strict)
        self._locations = FakeCollection("locations", strict)

    def agents(self) -> FakeCollection:
        return self._agents

    def locations(self) -> FakeCollection:
        return self._locations


class FakeBusinessCommunications:
    """Stand-in for build('businesscommunications', 'v1')."""

    def __init__(self, strict: bool = True) -> None:
        self._brands = FakeBrands(strict)

    def brands(self) -> FakeBrands:
        return self._brands


class FakeCredentials:
    service_account_email = "bc-agent@test-project.iam.gserviceaccount.com"


@pytest.fixture
def fake_service() -> FakeBusinessCommunications:
    return FakeBusinessCommunications(strict=True)


@pytest.fixture
def factory(monkeypatch: pytest.MonkeyPatch, fake_service: FakeBusinessCommunications) -> BusinessCommunicationsFactory:
    """A factory whose handshake and discovery build are served in memory."""
    monkeypatch.setattr(
        google_factory, "load_service_account_credentials",
        lambda path, scopes: FakeCredentials(),
    )
    monkeypatch.setattr(google_factory, "build", lambda *args, **kwargs: fake_service)
    return BusinessCommunicationsFactory("unused-credentials.json")


@pytest.fixture
def brand(fake_service: FakeBusinessCommunications) -> dict:
    """A stored brand, created directly in the fake."""
    return fake_service.brands().create(body={"displayName": "Test Brand"}).execute()


@pytest.fixture
def agent_body() -> dict:
    return {
        "displayName": "A Test Agent",
        "businessMessagesAgent": {
            "defaultLocale": "en",
            "logoUrl": "https://storage.googleapis.com/sample-logos/google-logo.png",
            "conversationalSettings": {
                "en": {
                    "privacyPolicy": {"url": "http://www.company.com/privacy"},
                    "welcomeMessage": {"text": "Welcome! How can I help?"},
                },
                "fr": {
                    "privacyPolicy": {"url": "http://www.company.com/privacy"},
                    "welcomeMessage": {"text": "Bienvenue !"},
                },
            },
            "entryPointConfigs": [
                {"allowedEntryPoint": "LOCATION"},
                {"allowedEntryPoint": "NON_LOCAL"},
            ],
            "surveyConfig": {
                "templateQuestionIds": ["GOOGLE_DEFINED_ASSOCIATE_SATISFACTION"],
            },
        },
    }
