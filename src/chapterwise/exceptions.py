# src/chapterwise/exceptions.py
"""Exceptions raised by the answer pipeline.

Every error the pipeline surfaces to callers derives from ChapterwiseError, so
request layers can map the whole family with a single except clause and still
distinguish the cases that need different HTTP statuses.
"""


class ChapterwiseError(Exception):
    """Base class for all Chapterwise errors."""


class NotFoundError(ChapterwiseError):
    """A requested record does not exist."""


class QuestionNotFoundError(NotFoundError):
    """Raised when a question id does not resolve to a stored question."""

    def __init__(self, question_id: str) -> None:
        super().__init__(f"Question not found: {question_id}")
        self.question_id = question_id


class ChaptersNotFoundError(NotFoundError):
    """Raised when a title has no chapters at all."""

    def __init__(self, title_id: str) -> None:
        super().__init__(f"No chapters found for title: {title_id}")
        self.title_id = title_id


class DataIntegrityError(ChapterwiseError):
    """Stored chapter data is missing or malformed (e.g. a bad embedding)."""


class NoRelevantContentError(ChapterwiseError):
    """No chapter survived the spoiler boundary, so there is nothing to answer from."""


class ProviderError(ChapterwiseError):
    """An embedding or generation provider call failed.

    Attributes:
        model: Model identifier of the failing call, if known.
    """

    def __init__(self, message: str, model: str | None = None) -> None:
        super().__init__(message)
        self.model = model


class ProviderTimeoutError(ProviderError):
    """A provider call exceeded its timeout."""


class EmptyResponseError(ChapterwiseError):
    """The generation provider answered but returned no usable text."""


class QuestionBusyError(ChapterwiseError):
    """Another pipeline run currently holds the lease on this question."""

    def __init__(self, question_id: str, message: str | None = None) -> None:
        super().__init__(message or f"Question {question_id} is already being answered")
        self.question_id = question_id
