"""Prompt contract for `tauri init` and the answer sequence that satisfies it.

`tauri init` asks six questions in a fixed order that the tool does not
document. The contract pins that order, the text each prompt contains,
and the command-line flag that answers the same question without a
prompt.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

CONTRACT_VERSION = "tauri-init/1"
DEFAULT_IDENTIFIER = "expo-app"
SEPARATOR = "-"

WEB_ASSETS_PATH = "../web-build"
DEV_SERVER_URL = "http://localhost:19006"
DEV_COMMAND = "expo start --web"
BUILD_COMMAND = "expo build:web"

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def app_identifier(name: Optional[str]) -> str:
    """Derive the application identifier from a manifest project name.

        "Sample Proj!!" -> "sample-proj"
        None            -> "expo-app"
    """
    if not isinstance(name, str):
        return DEFAULT_IDENTIFIER
    slug = _NON_ALPHANUMERIC.sub(SEPARATOR, name.lower()).strip(SEPARATOR)
    return slug or DEFAULT_IDENTIFIER


@dataclass(frozen=True)
class Prompt:
    key: str
    text: str
    flag: str
    answer: str


@dataclass(frozen=True)
class PromptContract:
    """Ordered prompts of one `tauri init` version, with their answers."""

    version: str
    prompts: Tuple[Prompt, ...]

    @classmethod
    def for_identifier(cls, identifier: str) -> "PromptContract":
        return cls(
            version=CONTRACT_VERSION,
            prompts=(
                Prompt("app_name", "app name", "--app-name", identifier),
                Prompt("window_title", "window title", "--window-title", identifier),
                Prompt("web_assets", "web assets", "--frontend-dist", WEB_ASSETS_PATH),
                Prompt("dev_server_url", "dev server", "--dev-url", DEV_SERVER_URL),
                Prompt("dev_command", "frontend dev command", "--before-dev-command", DEV_COMMAND),
                Prompt("build_command", "frontend build command", "--before-build-command", BUILD_COMMAND),
            ),
        )

    def answers(self) -> Tuple[str, ...]:
        return tuple(prompt.answer for prompt in self.prompts)

    def piped_input(self) -> str:
        """Answers serialized one per line, each newline-terminated."""
        return "".join(f"{answer}\n" for answer in self.answers())

    def flags(self) -> List[str]:
        args = []
        for prompt in self.prompts:
            args.extend([prompt.flag, prompt.answer])
        return args

    def unanswered_prompts(self, transcript: str) -> List[Prompt]:
        """Return the prompts whose text never appeared, in order, in transcript.

        Matching is case-insensitive and must follow contract order: a
        prompt is only found if it appears after the previous one.
        """
        lowered = transcript.lower()
        position = 0
        missing = []
        for prompt in self.prompts:
            index = lowered.find(prompt.text.lower(), position)
            if index < 0:
                missing.append(prompt)
                continue
            position = index + len(prompt.text)
        return missing


def build_answer_sequence(project_name: Optional[str]) -> Tuple[str, ...]:
    """Return the six wizard answers for a project with the given manifest name."""
    return PromptContract.for_identifier(app_identifier(project_name)).answers()
