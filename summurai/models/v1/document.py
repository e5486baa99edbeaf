from typing import Any, Optional

from pydantic import BaseModel


class BufferPayload(BaseModel):
    buffer: Any = None

    model_config = {
        'json_schema_extra': {
            'examples': [
                {'buffer': 'JVBERi0xLjQK...'},
                {'buffer': [37, 80, 68, 70, 45, 49, 46, 52]},
            ]
        }
    }


class SummaryPayload(BaseModel):
    text: Optional[str] = None
    context: Optional[str] = None
    max_tokens: Optional[int] = None

    model_config = {
        'json_schema_extra': {
            'examples': [{'text': 'Your text here', 'context': 'Lecture notes for week 3'}]
        }
    }


class DocumentResult(BaseModel):
    text: str
    summary: str


class SummaryResult(BaseModel):
    summary: str


class EnvStatus(BaseModel):
    OPENAI_API_KEY_SET: bool


class ServerStatus(BaseModel):
    message: str
    status: str
    timestamp: str
    env: EnvStatus


__all__ = ['BufferPayload', 'DocumentResult', 'EnvStatus', 'ServerStatus', 'SummaryPayload', 'SummaryResult']
