"""
This module contains the IOInterface abstract base class and its implementations.

An IOInterface is the only way the engine talks to people: narration goes out
through ``output`` and human decisions come back through ``read_choice``,
which yields either a hand/table index (``int``) or a command word (``str``,
e.g. ``"pass"`` or ``"take"``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Union

import aiofiles

Choice = Union[int, str]


def parse_choice(raw: str) -> Optional[Choice]:
    """
    Parse a raw line of user input.

    All whitespace is dropped. A non-negative integer comes back as ``int``,
    any other text as a lower-cased command, and an empty line as ``None``.

    >>> parse_choice(" 1 2 ")
    12
    >>> parse_choice("Take")
    'take'
    >>> parse_choice("   ") is None
    True
    """
    text = "".join(raw.split())
    if not text:
        return None
    if text.isdigit():
        return int(text)
    return text.lower()


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for input/output operations in the game.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass

    def read_choice(self, prompt: str) -> Choice:
        """
        Ask for an index or a command, re-prompting until the answer parses.
        """
        while True:
            choice = parse_choice(self.input(prompt))
            if choice is not None:
                return choice
            self.output("Please enter a card number or a command.")


class DummyIOInterface(IOInterface):
    """
    A dummy IO interface for simulation purposes. Does not perform any actual IO.

    Only bots should be seated at a game using this interface; asking it for
    a choice is an error.
    """

    def output(self, message: str) -> None:
        """Simulates output operation."""
        pass

    def input(self, prompt: str) -> str:
        """Simulates input operation."""
        return ""

    def read_choice(self, prompt: str) -> Choice:
        raise ValueError("DummyIOInterface can't answer prompts.")


class TestIOInterface(IOInterface):
    """
    A test IO interface. Collects output messages and replays scripted input.

    Methods
    -------
    def output(self, message):
        Collect an output message.

    def input(self, prompt):
        Return the next scripted response.

    def add_responses(self, *responses):
        Queue raw responses for ``input``/``read_choice``.
    """

    __test__ = False

    def __init__(self, responses: Optional[List[str]] = None):
        self.sent_messages: List[str] = []
        self.prompts: List[str] = []
        self.input_responses: List[str] = list(responses or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        raise ValueError("No more responses left in TestIOInterface queue.")

    def add_responses(self, *responses: str) -> None:
        """Queue raw responses, e.g. ``add_responses("2", "take")``."""
        self.input_responses.extend(responses)


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive gameplay.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)


class LoggingIOInterface(IOInterface):
    """
    A logging IO interface for recording purposes. Writes output messages to a log file.

    Output is written synchronously for the engine and asynchronously through
    ``output_async`` for async hosts. Input is not supported, so only bots
    should be seated at a game that uses it.
    """

    def __init__(self, log_file_path: str):
        self.log_file_path = log_file_path

    def output(self, message: str) -> None:
        """Write an output message to the log file."""
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def input(self, prompt: str) -> str:
        """Log the prompt and return empty string."""
        self.output(f"[INPUT PROMPT] {prompt}")
        return ""

    def read_choice(self, prompt: str) -> Choice:
        self.output(f"[INPUT PROMPT] {prompt}")
        raise ValueError("LoggingIOInterface can't answer prompts.")

    async def output_async(self, message: str) -> None:
        """Async version of output."""
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")
