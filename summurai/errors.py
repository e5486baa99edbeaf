class SummuraiError(Exception):
    """
    Base class for failures that are turned into ``{"error": message}`` responses.
    """

    status_code = 500


class MissingFieldError(SummuraiError):
    status_code = 400


class PayloadTooLargeError(SummuraiError):
    status_code = 413


class UnsupportedInputError(SummuraiError):
    pass


class ExtractionError(SummuraiError):
    pass


class SummarizationError(SummuraiError):
    pass


class MissingCredentialError(SummarizationError):
    pass


class SummarizationAPIError(SummarizationError):
    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body

        super().__init__(f'LLM API error: {status} {body}')


__all__ = [
    'ExtractionError',
    'MissingCredentialError',
    'MissingFieldError',
    'PayloadTooLargeError',
    'SummarizationAPIError',
    'SummarizationError',
    'SummuraiError',
    'UnsupportedInputError',
]
