"""Shared fixtures: scripted engines and a controllable clock."""

import asyncio

import pytest

from arabic_legal_translator.translator.base import BaseEngine

ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "DEEPL_API_KEY",
    "GOOGLE_TRANSLATE_API_KEY",
    "LEGAL_TRANSLATOR_ENGINE_TIMEOUT_MS",
    "LEGAL_TRANSLATOR_ACCEPTANCE_THRESHOLD",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class ScriptedEngine(BaseEngine):
    """
    Engine that replays a list of responses, one per call.

    An exception in the list is raised instead of returned; the last entry
    repeats once the list is exhausted.
    """

    def __init__(self, name, responses, delay=0.0):
        self._name = name
        self.responses = list(responses)
        self.delay = delay
        self.calls = 0
        self.prompts = []

    @property
    def name(self):
        return self._name

    async def translate(self, prompt):
        self.calls += 1
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        response = self.responses[min(self.calls, len(self.responses)) - 1]
        if isinstance(response, BaseException):
            raise response
        return response


class GatedEngine(ScriptedEngine):
    """Engine that blocks until the test opens its gate."""

    def __init__(self, name, responses):
        super().__init__(name, responses)
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def translate(self, prompt):
        self.started.set()
        await self.gate.wait()
        return await super().translate(prompt)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def engine_factory():
    return ScriptedEngine


@pytest.fixture
def gated_engine_factory():
    return GatedEngine


@pytest.fixture
def clock():
    return FakeClock()
