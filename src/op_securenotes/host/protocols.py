"""Host Protocols.

The engine never talks to an editor or terminal directly. A host embeds
the package and implements three protocols:

    - DocumentHost: allocates documents, edits their lines and modified
      flag, and fires lifecycle triggers
    - Prompter: free-text input, single choice and multi-choice confirm
    - Notifier: one-line user notifications

Prompts are coroutines; a dismissed prompt returns None, which is distinct
from an empty answer.
"""

from __future__ import annotations

from abc import abstractmethod
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")

DocumentId = int
TriggerHandler = Callable[[DocumentId], None]


class TriggerEvent(Enum):
    """Document lifecycle triggers."""

    CONTENT_CHANGED = "content_changed"
    WRITE_REQUESTED = "write_requested"
    READ_REQUESTED = "read_requested"
    CLOSED = "closed"


class WriteMode(Enum):
    """How a document's write requests are handled.

    Attributes:
        NORMAL: The host writes the document itself
        INTERCEPTED: Writes are routed to the WRITE_REQUESTED trigger
    """

    NORMAL = "normal"
    INTERCEPTED = "intercepted"


class DocumentHost(Protocol):
    """Protocol for the document lifecycle controller."""

    @abstractmethod
    def allocate(
        self,
        content_type: str,
        write_mode: WriteMode,
        title: str,
        initial_lines: Sequence[str],
    ) -> DocumentId:
        """Create and display a document.

        Raises:
            DocumentHostError: If the document cannot be created
        """
        ...

    @abstractmethod
    def replace_lines(self, document_id: DocumentId, lines: Sequence[str]) -> None:
        """Replace the full line range of a document."""
        ...

    @abstractmethod
    def get_lines(self, document_id: DocumentId) -> list[str]:
        ...

    @abstractmethod
    def set_modified(self, document_id: DocumentId, modified: bool) -> None:
        ...

    @abstractmethod
    def is_modified(self, document_id: DocumentId) -> bool:
        ...

    @abstractmethod
    def set_content_type(self, document_id: DocumentId, content_type: str) -> None:
        """(Re)assign the content type, restoring highlighting."""
        ...

    @abstractmethod
    def register_trigger(
        self,
        document_id: DocumentId,
        event: TriggerEvent,
        handler: TriggerHandler,
    ) -> None:
        ...


class Prompter(Protocol):
    """Protocol for interactive prompting."""

    @abstractmethod
    async def input(self, prompt: str, default: Optional[str] = None) -> Optional[str]:
        """Ask for free text. None when dismissed."""
        ...

    @abstractmethod
    async def select(
        self,
        options: Sequence[T],
        prompt: str,
        labeler: Callable[[T], str] = str,
    ) -> Optional[T]:
        """Ask the user to pick one option. None when dismissed."""
        ...

    @abstractmethod
    async def confirm(self, prompt: str, choices: Sequence[str]) -> Optional[int]:
        """Ask the user to pick a choice. Index of the choice, None when dismissed."""
        ...


class Notifier(Protocol):
    """Protocol for user-visible notifications."""

    @abstractmethod
    def info(self, message: str) -> None:
        ...

    @abstractmethod
    def success(self, message: str) -> None:
        ...

    @abstractmethod
    def warning(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...
