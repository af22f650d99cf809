"""
OS side effects used by the handoff tool: clipboard write and browser open.

One Desktop implementation per OS family, picked once at startup. Commands
block until the external utility exits; there are no timeouts.
"""

import sys
import shutil
import logging
import subprocess
from typing import List, Optional, Sequence

logger = logging.getLogger("desktop")


class DesktopError(RuntimeError):
    pass


class ClipboardError(DesktopError):
    pass


class BrowserError(DesktopError):
    pass


LINUX_CLIPBOARD_COMMANDS: List[List[str]] = [
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
]

LINUX_BROWSERS: List[str] = [
    "xdg-open",
    "sensible-browser",
    "x-www-browser",
    "firefox",
    "chromium",
    "google-chrome",
]


def _run(cmd: Sequence[str], *, text_input: Optional[str] = None, error_cls=DesktopError) -> None:
    """Run one external command; launch failures and non-zero exits become error_cls."""
    logger.debug(f"exec {cmd[0]}")
    try:
        # child stdout must never reach ours: it is the stdio protocol channel
        subprocess.run(list(cmd), input=text_input, encoding="utf-8", stdout=subprocess.DEVNULL, check=True)
    except subprocess.CalledProcessError as e:
        raise error_cls(f"{cmd[0]} exited with status {e.returncode}") from e
    except (OSError, ValueError) as e:
        raise error_cls(f"{cmd[0]}: {e}") from e


class Desktop:
    """Two-method contract: copy text to the clipboard, open a URL in a browser."""

    name = "generic"

    def copy(self, text: str) -> None:
        raise NotImplementedError

    def open_url(self, url: str) -> None:
        raise NotImplementedError


class MacDesktop(Desktop):
    name = "darwin"

    def copy(self, text: str) -> None:
        _run(["pbcopy"], text_input=text, error_cls=ClipboardError)

    def open_url(self, url: str) -> None:
        _run(["open", url], error_cls=BrowserError)


def powershell_quote(text: str) -> str:
    # single-quoted PowerShell literal: only ' needs escaping (doubled)
    return "'" + text.replace("'", "''") + "'"


class WindowsDesktop(Desktop):
    name = "windows"

    def copy(self, text: str) -> None:
        script = "Set-Clipboard -Value " + powershell_quote(text)
        _run(["powershell", "-NoProfile", "-Command", script], error_cls=ClipboardError)

    def open_url(self, url: str) -> None:
        _run(["rundll32", "url.dll,FileProtocolHandler", url], error_cls=BrowserError)


class LinuxDesktop(Desktop):
    name = "linux"

    def _clipboard_command(self) -> List[str]:
        for cmd in LINUX_CLIPBOARD_COMMANDS:
            if shutil.which(cmd[0]):
                return cmd
        raise ClipboardError("no clipboard utility found (install xclip or xsel)")

    def _browser(self) -> str:
        for browser in LINUX_BROWSERS:
            if shutil.which(browser):
                return browser
        raise BrowserError("no suitable browser found")

    def copy(self, text: str) -> None:
        _run(self._clipboard_command(), text_input=text, error_cls=ClipboardError)

    def open_url(self, url: str) -> None:
        _run([self._browser(), url], error_cls=BrowserError)


def detect_desktop(platform: Optional[str] = None) -> Desktop:
    """Pick the implementation for the host OS family (sys.platform by default)."""
    platform = platform or sys.platform
    if platform == "darwin":
        return MacDesktop()
    if platform.startswith("win"):
        return WindowsDesktop()
    return LinuxDesktop()
