import pytest

from chatgpt_handoff.deeplink import CHATGPT_BASE_URL, MAX_DEEPLINK_LENGTH
from chatgpt_handoff.desktop import BrowserError, ClipboardError
from chatgpt_handoff.handoff import CONFIRMATION, HandoffError, HandoffService
from tests.conftest import FakeDesktop


def test_handoff_copies_and_opens_deeplink(service, desktop):
    outcome = service.handoff("Research X")
    assert outcome.message == CONFIRMATION
    assert outcome.browser_attempted is True
    assert desktop.copied == ["Research X"]
    assert desktop.opened == [CHATGPT_BASE_URL + "Research+X"]


def test_clipboard_receives_original_prompt(service, desktop):
    service.handoff("  padded prompt \n")
    assert desktop.copied == ["  padded prompt \n"]


@pytest.mark.parametrize("prompt", ["", " ", "\n\t  "])
def test_blank_prompt_is_rejected_before_any_side_effect(service, desktop, prompt):
    with pytest.raises(HandoffError, match="prompt is required"):
        service.handoff(prompt)
    assert desktop.copied == []
    assert desktop.opened == []


def test_clipboard_failure_fails_the_handoff():
    desktop = FakeDesktop(copy_error=ClipboardError("no clipboard utility found (install xclip or xsel)"))
    with pytest.raises(HandoffError) as exc:
        HandoffService(desktop).handoff("Research X")
    assert str(exc.value) == (
        "failed to copy prompt to clipboard: no clipboard utility found (install xclip or xsel)"
    )
    assert desktop.opened == []


def test_clipboard_failure_wins_even_if_browser_would_work():
    desktop = FakeDesktop(copy_error=ClipboardError("pbcopy exited with status 1"))
    with pytest.raises(HandoffError):
        HandoffService(desktop).handoff("short")


@pytest.mark.parametrize("error", [BrowserError("no suitable browser found"), RuntimeError("boom")])
def test_browser_failure_is_invisible(error):
    desktop = FakeDesktop(open_error=error)
    outcome = HandoffService(desktop).handoff("Research X")
    assert outcome.message == CONFIRMATION
    assert outcome.browser_attempted is True
    assert len(desktop.opened) == 1


@pytest.mark.parametrize("extra, opened", [(-1, 1), (0, 1), (1, 0)])
def test_browser_only_opened_within_threshold(service, desktop, extra, opened):
    prompt = "a" * (MAX_DEEPLINK_LENGTH - len(CHATGPT_BASE_URL) + extra)
    outcome = service.handoff(prompt)
    assert len(desktop.opened) == opened
    assert outcome.browser_attempted is bool(opened)
    assert desktop.copied == [prompt]
