from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

PROMETHEUS_NAMESPACE = 'Summurai'
PROMETHEUS_DOCUMENTS_SUBSYSTEM = 'Documents'
PROMETHEUS_SUMMARIES_SUBSYSTEM = 'Summaries'

EXTRACTION_DURATION_METRIC = Histogram(
    'extraction_duration_seconds',
    documentation='Time spent extracting text from a document buffer',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_DOCUMENTS_SUBSYSTEM,
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30],
)

SUMMARY_DURATION_METRIC = Histogram(
    'summary_duration_seconds',
    documentation='Time spent waiting for the chat-completion api',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    buckets=[0.25, 0.5, 1, 2, 4, 8, 16, 32, 64],
)

SUMMARY_ERROR_COUNTER = Counter(
    'summary_errors',
    documentation='Number of failed summarization requests',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
)

instrumentator = Instrumentator(excluded_handlers=['/metrics', '/test'])


__all__ = [
    'EXTRACTION_DURATION_METRIC',
    'PROMETHEUS_DOCUMENTS_SUBSYSTEM',
    'PROMETHEUS_NAMESPACE',
    'PROMETHEUS_SUMMARIES_SUBSYSTEM',
    'SUMMARY_DURATION_METRIC',
    'SUMMARY_ERROR_COUNTER',
    'instrumentator',
]
