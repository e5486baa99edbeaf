import json

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from summurai.errors import MissingFieldError, UnsupportedInputError
from summurai.logs import get_logger
from summurai.models.v1.document import BufferPayload, DocumentResult, SummaryPayload, SummaryResult
from summurai.modules.documents.extractor import TextExtractor
from summurai.modules.documents.payload import normalize
from summurai.modules.summaries.processor import SummarizationClient

log = get_logger(__name__)

router = APIRouter()


def get_extractor(request: Request) -> TextExtractor:
    return request.app.state.extractor


def get_summarizer(request: Request) -> SummarizationClient:
    return request.app.state.summarizer


def is_missing(value) -> bool:
    # empty arrays and objects are values, empty scalars are not
    return value is None or (isinstance(value, (str, int, float)) and not value)


async def to_text(payload, extractor: TextExtractor) -> str:
    normalized = await normalize(payload)

    if normalized.is_text:
        return normalized.text

    return await extractor(normalized.buffer)


async def read_blob_request(request: Request):
    """
    Returns the uploaded ``file`` of a multipart request or the ``blob`` field of a JSON body.
    """

    content_type = request.headers.get('content-type', '')

    if content_type.startswith('multipart/form-data'):
        form = await request.form()
        file = form.get('file')

        return file if isinstance(file, UploadFile) else None

    body = await request.body()
    if not body:
        return None

    try:
        data = json.loads(body)
    except ValueError as e:
        raise UnsupportedInputError(f'Request body is not valid JSON: {e}') from e

    return data.get('blob') if isinstance(data, dict) else None


@router.post('/buffer-to-text')
async def buffer_to_text(
    payload: BufferPayload | None = None,
    extractor: TextExtractor = Depends(get_extractor),
    summarizer: SummarizationClient = Depends(get_summarizer),
) -> DocumentResult:
    """
    Extracts and summarizes a document sent as a number array or a base64 string.
    """

    if payload is None or is_missing(payload.buffer):
        raise MissingFieldError('buffer required in body')

    text = await to_text(payload.buffer, extractor)
    summary = await summarizer.summarize(text)

    return DocumentResult(text=text, summary=summary)


@router.post('/blob-to-text')
async def blob_to_text(
    request: Request,
    extractor: TextExtractor = Depends(get_extractor),
    summarizer: SummarizationClient = Depends(get_summarizer),
) -> DocumentResult:
    """
    Extracts and summarizes a multipart **file** upload or a JSON **blob**.
    """

    blob = await read_blob_request(request)
    if is_missing(blob):
        raise MissingFieldError('file (multipart) or blob (JSON) required')

    if isinstance(blob, UploadFile):
        log.debug(f'Received upload {blob.filename} ({blob.content_type})')

    text = await to_text(blob, extractor)
    summary = await summarizer.summarize(text)

    return DocumentResult(text=text, summary=summary)


@router.post('/summarize')
async def summarize(
    payload: SummaryPayload | None = None, summarizer: SummarizationClient = Depends(get_summarizer)
) -> SummaryResult:
    """
    Summarizes **text**, prefixed with **context** when given.
    """

    if payload is None or not payload.text:
        raise MissingFieldError('text required')

    summary = await summarizer.summarize(payload.text, payload.context, max_tokens=payload.max_tokens)

    return SummaryResult(summary=summary)


__all__ = ['get_extractor', 'get_summarizer', 'router']
