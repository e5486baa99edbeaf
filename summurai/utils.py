import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from summurai.env import cors_allow_origin_regex, cors_allow_origins, max_body_size
from summurai.errors import PayloadTooLargeError, SummuraiError
from summurai.logs import get_logger, uvicorn_log_config

log = get_logger(__name__)


def error_response(error: Exception) -> JSONResponse:
    status_code = error.status_code if isinstance(error, SummuraiError) else 500

    return JSONResponse(status_code=status_code, content={'error': str(error) or type(error).__name__})


def describe_validation_error(error: RequestValidationError) -> str:
    details = []

    for item in error.errors():
        location = '.'.join(str(part) for part in item.get('loc', ()))
        details.append(f'{location}: {item.get("msg")}' if location else str(item.get('msg')))

    return 'Invalid request: ' + '; '.join(details)


async def handle_error(request: Request, error: SummuraiError) -> JSONResponse:
    log.error(f'{request.method} {request.url.path} failed: {error}')

    return error_response(error)


async def handle_validation_error(request: Request, error: RequestValidationError) -> JSONResponse:
    message = describe_validation_error(error)
    log.error(f'{request.method} {request.url.path} failed: {message}')

    return JSONResponse(status_code=500, content={'error': message})


def create_app(**kwargs):
    app = FastAPI(**kwargs)
    app.add_exception_handler(SummuraiError, handle_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # only the declared length is checked, chunked uploads are left to the server
    @app.middleware('http')
    async def guard_request(request: Request, call_next):
        content_length = request.headers.get('content-length')

        if content_length and content_length.isdigit() and int(content_length) > max_body_size:
            return error_response(PayloadTooLargeError(f'Request body exceeds {max_body_size} bytes'))

        try:
            return await call_next(request)
        except Exception as e:
            log.exception(f'{request.method} {request.url.path} failed: {e}')

            return error_response(e)

    # added last so it wraps the guard and rejected requests still carry cors headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins,
        allow_origin_regex=cors_allow_origin_regex,
        allow_methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization'],
    )

    return app


async def create_webserver(app, port):
    server_config = uvicorn.Config(
        app,
        host='0.0.0.0',
        port=port,
        log_config=uvicorn_log_config,
    )
    server = uvicorn.Server(server_config)
    await server.serve()


__all__ = ['create_app', 'create_webserver']
