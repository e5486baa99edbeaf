import logging
import sys
from logging import Filter, LogRecord

from uvicorn.logging import DefaultFormatter

from summurai.env import log_level

LOG_FORMAT = '%(asctime)s %(name)s %(levelprefix)s %(message)s'
ACCESS_LOG_FORMAT = '%(asctime)s %(name)s %(levelprefix)s %(client_addr)s - "%(request_line)s" %(status_code)s'


class HealthCheckFilter(Filter):
    """
    Drops uvicorn access lines for endpoints that get polled by monitors and browsers.
    """

    quiet_paths = ('/favicon.ico', '/metrics', '/test')

    def filter(self, record: LogRecord) -> bool:
        args = record.args if isinstance(record.args, tuple) else ()

        # uvicorn access records carry (client, method, path, http version, status)
        if len(args) >= 3:
            return args[2] not in self.quiet_paths

        return True


stdout_handler = logging.StreamHandler(sys.stdout)
stdout_handler.setFormatter(DefaultFormatter(LOG_FORMAT))

logging.basicConfig(level=log_level, handlers=[stdout_handler])


def get_logger(name):
    return logging.getLogger(name)


def build_uvicorn_log_config(level: str) -> dict:
    def stdout(formatter: str, **extra) -> dict:
        return {'formatter': formatter, 'class': 'logging.StreamHandler', 'stream': 'ext://sys.stdout', **extra}

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'filters': {'health_check': {'()': HealthCheckFilter}},
        'formatters': {
            'default': {'()': 'uvicorn.logging.DefaultFormatter', 'fmt': LOG_FORMAT, 'use_colors': None},
            'access': {'()': 'uvicorn.logging.AccessFormatter', 'fmt': ACCESS_LOG_FORMAT},
        },
        'handlers': {
            'default': stdout('default'),
            'access': stdout('access', filters=['health_check']),
        },
        'loggers': {
            'uvicorn': {'handlers': ['default'], 'level': level, 'propagate': False},
            'uvicorn.error': {'level': level},
            'uvicorn.access': {'handlers': ['access'], 'level': level, 'propagate': False},
        },
    }


uvicorn_log_config = build_uvicorn_log_config(log_level)


__all__ = ['HealthCheckFilter', 'build_uvicorn_log_config', 'get_logger', 'uvicorn_log_config']
