import time
from typing import Awaitable, Callable

from kreuzberg import extract_bytes

from summurai.errors import ExtractionError
from summurai.logs import get_logger
from summurai.modules.monitoring import EXTRACTION_DURATION_METRIC

log = get_logger(__name__)

PDF_MIME_TYPE = 'application/pdf'

TextExtractor = Callable[[bytes], Awaitable[str]]


async def extract(buffer: bytes) -> str:
    """
    Extract text from a PDF buffer.
    """

    if not buffer:
        return ''

    start = time.perf_counter()

    try:
        result = await extract_bytes(buffer, mime_type=PDF_MIME_TYPE)
    except Exception as e:
        raise ExtractionError(f'Failed to extract text: {e}') from e
    finally:
        EXTRACTION_DURATION_METRIC.observe(time.perf_counter() - start)

    text = result.content or ''
    log.info(f'Extracted {len(text)} characters from {len(buffer)} bytes')

    return text


__all__ = ['TextExtractor', 'extract']
