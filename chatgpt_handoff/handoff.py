import logging
from dataclasses import dataclass

from chatgpt_handoff.deeplink import build_deeplink
from chatgpt_handoff.desktop import Desktop, DesktopError

logger = logging.getLogger("tools")

CONFIRMATION = "Request sent. Now wait for the user to share ChatGPT's response."


class HandoffError(Exception):
    pass


@dataclass(frozen=True)
class HandoffOutcome:
    message: str
    browser_attempted: bool


class HandoffService:
    """Hands a prompt to ChatGPT in two phases.

    Phase one copies the prompt to the clipboard and is required: any failure
    aborts the handoff. Phase two opens the deeplink when it fits the length
    limit and is best-effort: failures are logged and dropped.
    """

    def __init__(self, desktop: Desktop):
        self.desktop = desktop

    def handoff(self, prompt: str) -> HandoffOutcome:
        if not prompt.strip():
            raise HandoffError("prompt is required")
        # clipboard gets the prompt exactly as sent
        self.copy_prompt(prompt)
        attempted = self.open_deeplink(prompt)
        return HandoffOutcome(message=CONFIRMATION, browser_attempted=attempted)

    def copy_prompt(self, prompt: str) -> None:
        try:
            self.desktop.copy(prompt)
        except DesktopError as e:
            logger.warning(f"clipboard copy failed: {e}")
            raise HandoffError(f"failed to copy prompt to clipboard: {e}") from e

    def open_deeplink(self, prompt: str) -> bool:
        link = build_deeplink(prompt)
        if not link.usable:
            logger.debug(f"deeplink skipped len={link.length}")
            return False
        try:
            self.desktop.open_url(link.url)
        except Exception as e:
            logger.debug(f"deeplink open failed: {e}")
        return True
