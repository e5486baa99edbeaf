import asyncio
import importlib.metadata
import os
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.responses import FileResponse

from summurai import http_client
from summurai.env import app_port, enable_metrics
from summurai.logs import get_logger
from summurai.models.v1.document import EnvStatus, ServerStatus
from summurai.modules.documents.extractor import extract
from summurai.modules.summaries.processor import SummarizationClient, SummarizerConfig
from summurai.routers.documents import router as documents_router
from summurai.utils import create_app, create_webserver

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(main_app: FastAPI):
    config = SummarizerConfig.from_env()

    main_app.state.config = config
    main_app.state.extractor = extract
    main_app.state.summarizer = SummarizationClient(config)

    log.info(f'Summurai {importlib.metadata.version("summurai")} is up, using model {config.model}')

    if not config.api_key:
        log.warning('OPENAI_API_KEY is not set, summarization requests will fail')

    yield

    log.info('Summurai is shutting down')

    await http_client.close()


app = create_app(title='Summurai', lifespan=lifespan)
app.include_router(documents_router)

if enable_metrics:
    from summurai.modules.monitoring import instrumentator

    instrumentator.instrument(app).expose(app, include_in_schema=False)


def get_config(request: Request) -> SummarizerConfig:
    return request.app.state.config


@app.get('/')
def root():
    return FileResponse(os.path.join(os.path.dirname(__file__), 'index.html'))


@app.get('/test')
def test(config: SummarizerConfig = Depends(get_config)) -> ServerStatus:
    return ServerStatus(
        message='Server is up and running!',
        status='success',
        timestamp=datetime.now(timezone.utc).isoformat(),
        env=EnvStatus(OPENAI_API_KEY_SET=bool(config.api_key)),
    )


async def main():
    await create_webserver('summurai.main:app', port=app_port)


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except Exception as e:
        log.error(e)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
