"""Exceptions raised by the synthesis core."""


class GenerationError(Exception):
    """The generative backend failed or returned an unusable payload."""

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class SynthesisError(Exception):
    """A synthesis run failed.

    The message is intended to be displayed directly to the user.
    """

    pass


SYNTHESIS_FAILED_MESSAGE = (
    "Synthesis failed. The model might be busy or the request timed out."
)
