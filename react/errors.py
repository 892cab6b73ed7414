"""Errors raised by the tool-calling loop."""


class ToolLoopError(Exception):
    """A user turn could not be completed."""


class MaxToolRoundsExceeded(ToolLoopError):
    """The model kept requesting tools past the round limit."""

    def __init__(self, max_rounds: int):
        super().__init__(f"Model requested tools for more than {max_rounds} rounds")
        self.max_rounds = max_rounds
