"""Shared fixtures: a fresh demo back end per test and a fixed access token."""

import pytest

from bookhub_admin.controllers.remote import SessionCredentials
from bookhub_admin.services.bookhub_service_demo import DemoBookhubService

TOKEN = "test-token"


class CallLog:
    """Wraps service methods and records the positional arguments of every call."""

    def __init__(self) -> None:
        self.calls: dict[str, list[tuple]] = {}

    def wrap(self, service, name: str) -> None:
        original = getattr(service, name)
        calls = self.calls.setdefault(name, [])

        async def recorded(*args, **kwargs):
            calls.append(args)
            return await original(*args, **kwargs)

        setattr(service, name, recorded)

    def count(self, name: str) -> int:
        return len(self.calls.get(name, []))


@pytest.fixture
def service() -> DemoBookhubService:
    return DemoBookhubService()


@pytest.fixture
def credentials() -> SessionCredentials:
    return SessionCredentials(TOKEN)


@pytest.fixture
def call_log() -> CallLog:
    return CallLog()
