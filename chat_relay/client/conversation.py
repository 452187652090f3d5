"""In-memory conversation owned by one chat session."""

from collections.abc import Iterator

from chat_relay.models.schemas import Role, Turn

GREETING = "Hi! I’m your AI assistant. Ask me anything."


class Conversation:
    """Ordered sequence of turns, oldest first.

    Appended turns are never reordered or removed. The only in-place change
    is ``replace_trailing``, used while a reply streams into the last turn.
    """

    def __init__(self, greeting: str = GREETING) -> None:
        self._greeting = greeting
        self._turns: list[Turn] = [Turn(role=Role.ASSISTANT, content=greeting)]

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def last(self) -> Turn | None:
        return self._turns[-1] if self._turns else None

    def append(self, role: Role, content: str) -> Turn:
        turn = Turn(role=role, content=content)
        self._turns.append(turn)
        return turn

    def add_user(self, text: str) -> Turn:
        """Append a user turn.

        Raises:
            ValueError: If the text is empty after trimming.
        """
        text = text.strip()
        if not text:
            raise ValueError("Message must not be empty")
        return self.append(Role.USER, text)

    def replace_trailing(self, content: str) -> None:
        """Replace the content of the last turn, keeping its role."""
        if not self._turns:
            raise IndexError("Conversation is empty")
        self._turns[-1] = Turn(role=self._turns[-1].role, content=content)

    def reset(self) -> None:
        """Start over with only the greeting."""
        self._turns = [Turn(role=Role.ASSISTANT, content=self._greeting)]

    def history(self) -> list[dict[str, str]]:
        """Serialize the turns for the request payload."""
        return [turn.model_dump(mode="json") for turn in self._turns]
