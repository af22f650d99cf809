from dataclasses import dataclass
from urllib.parse import quote_plus

CHATGPT_BASE_URL = "https://chatgpt.com/?q="
MAX_DEEPLINK_LENGTH = 1800


@dataclass(frozen=True)
class Deeplink:
    url: str

    @property
    def length(self) -> int:
        return len(self.url)

    @property
    def usable(self) -> bool:
        # inclusive bound
        return self.length <= MAX_DEEPLINK_LENGTH


def build_deeplink(prompt: str) -> Deeplink:
    """Form-encode the prompt (space -> '+') onto the ChatGPT ?q= URL."""
    return Deeplink(CHATGPT_BASE_URL + quote_plus(prompt))
