from typing import List, Optional

import pytest

from chatgpt_handoff.config import Config
from chatgpt_handoff.desktop import Desktop
from chatgpt_handoff.handoff import HandoffService
from chatgpt_handoff.rpc import Dispatcher


class FakeDesktop(Desktop):
    """Records clipboard/browser calls instead of touching the OS."""

    name = "fake"

    def __init__(self, copy_error: Optional[Exception] = None, open_error: Optional[Exception] = None):
        self.copy_error = copy_error
        self.open_error = open_error
        self.copied: List[str] = []
        self.opened: List[str] = []

    def copy(self, text: str) -> None:
        self.copied.append(text)
        if self.copy_error:
            raise self.copy_error

    def open_url(self, url: str) -> None:
        self.opened.append(url)
        if self.open_error:
            raise self.open_error


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def desktop() -> FakeDesktop:
    return FakeDesktop()


@pytest.fixture
def service(desktop) -> HandoffService:
    return HandoffService(desktop)


@pytest.fixture
def dispatcher(config, service) -> Dispatcher:
    return Dispatcher(config, service)


def rpc(method: str, params=None, id_val=1) -> dict:
    payload = {"jsonrpc": "2.0", "id": id_val, "method": method}
    if params is not None:
        payload["params"] = params
    return payload


def call_params(prompt) -> dict:
    return {"name": "handoff_to_chatgpt", "arguments": {"prompt": prompt}}
