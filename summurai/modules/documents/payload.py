"""
Turns the different shapes clients send documents in into a single byte buffer.

Browsers hand over array-buffer or Blob-like objects, JSON callers can only send
strings or number arrays and multipart uploads arrive as file objects, so the
caller never declares an encoding. Resolution happens in this order:

1. bytes-like values are used as they are
2. sequences of ints in 0-255 become one byte per element
3. strings are base64-decoded and kept as a buffer when they start with the
   PDF magic number, otherwise parsed as a JSON number array (rule 2),
   otherwise taken as plain text that skips extraction
4. file-like objects contribute their ``data`` field or the result of
   ``read()``, which is resolved again from rule 1
5. anything else is rejected
"""

import base64
import binascii
import inspect
import json
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, model_validator

from summurai.errors import UnsupportedInputError

PDF_MAGIC = b'%PDF'

URL_SAFE_ALPHABET = str.maketrans('-_', '+/')
NON_BASE64_CHARS = re.compile(r'[^A-Za-z0-9+/]')


class PayloadKind(Enum):
    BYTES = 'bytes'
    NUMERIC_ARRAY = 'numeric_array'
    BASE64 = 'base64'
    NUMERIC_ARRAY_STRING = 'numeric_array_string'
    PLAIN_TEXT = 'plain_text'
    UPLOADED_FILE = 'uploaded_file'


class NormalizedPayload(BaseModel):
    kind: PayloadKind
    buffer: Optional[bytes] = None
    text: Optional[str] = None

    @model_validator(mode='after')
    def check_single_result(self):
        if (self.buffer is None) == (self.text is None):
            raise ValueError('Exactly one of buffer or text must be set')

        return self

    @property
    def is_text(self) -> bool:
        return self.text is not None


def is_byte_sequence(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def is_numeric_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def get_embedded_data(value: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get('data')

    return getattr(value, 'data', None)


def is_uploaded_file(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray, memoryview, list, tuple)):
        return False

    return get_embedded_data(value) is not None or callable(getattr(value, 'read', None))


def classify(value: Any) -> PayloadKind:
    """
    Tags a non-string payload. Strings are tagged by :func:`sniff_string` since
    their kind depends on their contents.
    """

    if is_byte_sequence(value):
        return PayloadKind.BYTES

    if is_numeric_array(value):
        return PayloadKind.NUMERIC_ARRAY

    if is_uploaded_file(value):
        return PayloadKind.UPLOADED_FILE

    raise UnsupportedInputError(f'Unsupported input type: {type(value).__name__}')


def numeric_array_to_bytes(values) -> bytes:
    for item in values:
        if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
            raise UnsupportedInputError(f'Numeric arrays may only contain integers in 0-255, got {item!r}')

    return bytes(values)


def decode_pdf_base64(value: str) -> Optional[bytes]:
    # url-safe alphabet, stray characters and missing padding are tolerated
    compact = NON_BASE64_CHARS.sub('', value.translate(URL_SAFE_ALPHABET))
    compact += '=' * (-len(compact) % 4)

    try:
        decoded = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError):
        return None

    return decoded if decoded[:4] == PDF_MAGIC else None


def parse_numeric_array(value: str) -> Optional[list]:
    try:
        parsed = json.loads(value)
    except ValueError:
        return None

    return parsed if isinstance(parsed, list) else None


def sniff_string(value: str) -> NormalizedPayload:
    decoded = decode_pdf_base64(value)
    if decoded is not None:
        return NormalizedPayload(kind=PayloadKind.BASE64, buffer=decoded)

    array = parse_numeric_array(value)
    if array is not None:
        return NormalizedPayload(kind=PayloadKind.NUMERIC_ARRAY_STRING, buffer=numeric_array_to_bytes(array))

    return NormalizedPayload(kind=PayloadKind.PLAIN_TEXT, text=value)


async def read_uploaded_file(value: Any) -> Any:
    data = get_embedded_data(value)
    if data is not None:
        return data

    data = value.read()
    if inspect.isawaitable(data):
        data = await data

    return data


async def normalize(value: Any) -> NormalizedPayload:
    """
    Resolves a raw payload to either a canonical byte buffer or plain text.
    """

    if isinstance(value, str):
        return sniff_string(value)

    kind = classify(value)

    if kind == PayloadKind.BYTES:
        return NormalizedPayload(kind=kind, buffer=bytes(value))

    if kind == PayloadKind.NUMERIC_ARRAY:
        return NormalizedPayload(kind=kind, buffer=numeric_array_to_bytes(value))

    data = await read_uploaded_file(value)

    # file contents must resolve to bytes, a file that yields text is not a document
    if isinstance(data, str) or is_uploaded_file(data):
        raise UnsupportedInputError(f'Unsupported file contents: {type(data).__name__}')

    resolved = await normalize(data)

    return NormalizedPayload(kind=PayloadKind.UPLOADED_FILE, buffer=resolved.buffer)


__all__ = ['NormalizedPayload', 'PayloadKind', 'classify', 'normalize', 'sniff_string']
