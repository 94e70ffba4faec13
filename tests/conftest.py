"""Shared fixtures for the API tests.

Uses FastAPI TestClient (in-memory, no network) and fakes for the OpenAI
client and the Playwright driver, so no browser or API key is needed.
"""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

import main
from app.settings import get_settings


EXAMPLE_PLAN = {
    "summary": {
        "title": "Retire at 50",
        "corpus_inr": 20000000,
        "monthly_swp_inr": 80000,
        "equity_pct": 60,
        "stability_pct": 30,
        "liquid_pct": 10,
    },
    "funds": [{"scheme": "Fund A", "allocation_pct": 60}],
    "guardrails": {},
    "disclaimer": "Educational only",
}


@pytest.fixture()
def example_plan():
    return json.loads(json.dumps(EXAMPLE_PLAN))


@pytest.fixture()
def site_root(tmp_path, monkeypatch, example_plan):
    """A throwaway site root holding data/plan.json."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "plan.json").write_text(json.dumps(example_plan), encoding="utf-8")

    monkeypatch.setenv("SITE_ROOT", str(tmp_path))
    monkeypatch.delenv("PLAN_PATH", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("RATE_LIMIT_DISABLED", "true")
    monkeypatch.delenv("RATE_LIMIT_PER_MINUTE", raising=False)
    monkeypatch.delenv("MAX_BODY_BYTES", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture()
def make_client(site_root):
    """Build a fresh app after the test has adjusted the environment."""

    def _make() -> TestClient:
        get_settings.cache_clear()
        return TestClient(main.create_app())

    return _make


@pytest.fixture()
def client(make_client):
    return make_client()


# ---------------------------------------------------------------------------
# Playwright fake
# ---------------------------------------------------------------------------
class FakePage:
    def __init__(self, browser):
        self.browser = browser
        self.content = None
        self.wait_until = None
        self.pdf_kwargs = None

    async def set_content(self, html, wait_until=None):
        if self.browser.driver.fail_on == "set_content":
            raise RuntimeError("page crashed")
        self.content = html
        self.wait_until = wait_until

    async def pdf(self, **kwargs):
        if self.browser.driver.fail_on == "pdf":
            raise RuntimeError("print failed")
        self.pdf_kwargs = kwargs
        # the "PDF" is the printed HTML, so tests can look inside it
        return b"%PDF-1.4\n" + self.content.encode("utf-8")


class FakeBrowser:
    def __init__(self, driver):
        self.driver = driver
        self.closed = False
        self.pages = []

    async def new_page(self):
        page = FakePage(self)
        self.pages.append(page)
        return page

    async def close(self):
        self.closed = True
        self.driver.open_browsers -= 1


class FakeChromium:
    def __init__(self, driver):
        self.driver = driver

    async def launch(self, headless=True, args=None):
        if self.driver.fail_on == "launch":
            raise RuntimeError("No usable sandbox!")
        self.driver.launch_kwargs = {"headless": headless, "args": list(args or [])}
        browser = FakeBrowser(self.driver)
        self.driver.browsers.append(browser)
        self.driver.open_browsers += 1
        return browser


class FakePlaywrightDriver:
    """Stands in for ``async_playwright()`` and counts live browsers."""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.chromium = FakeChromium(self)
        self.browsers = []
        self.open_browsers = 0
        self.started = 0
        self.stopped = 0
        self.launch_kwargs = None

    def __call__(self):
        return self

    async def start(self):
        self.started += 1
        return self

    async def stop(self):
        self.stopped += 1

    @property
    def last_page(self):
        return self.browsers[-1].pages[-1]


@pytest.fixture()
def fake_playwright(monkeypatch):
    driver = FakePlaywrightDriver()
    monkeypatch.setattr("app.report.pdf.async_playwright", driver)
    return driver


# ---------------------------------------------------------------------------
# OpenAI fake
# ---------------------------------------------------------------------------
def completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeAsyncOpenAI:
    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = []
        self.closed = False
        self.api_key = None
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def __call__(self, api_key=None, **kwargs):
        self.api_key = api_key
        return self

    async def _create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    async def close(self):
        self.closed = True


@pytest.fixture()
def fake_openai(monkeypatch):
    """Install a fake AsyncOpenAI; call it with the outcome to return or raise."""

    def _install(outcome):
        fake = FakeAsyncOpenAI(outcome)
        monkeypatch.setattr("app.llm.finance_qa.AsyncOpenAI", fake)
        return fake

    return _install
