import json
import logging
import sys
from typing import Any

from loguru import logger

from salesdesk import settings
from salesdesk.common import context

_LEVEL_ICONS = {
    logging.DEBUG: '🔬',
    logging.WARNING: '⚠️',
    logging.ERROR: '💣💥',
    logging.CRITICAL: '🚨',
}
_DEFAULT_ICON = '✏️'

_LOCAL_FORMAT = (
    '<green>{{time:YYYY-MM-DD HH:mm:ss.SSS}}</green> | {icon} '
    ' <cyan>{{name}}</cyan>:<cyan>{{function}}</cyan>:<cyan>{{line}}</cyan> '
    '- <level>{{message}}</level>\n'
)
# Request summary lines carry a duration and skip the call site
_LOCAL_REQUEST_FORMAT = (
    '<green>{{time:YYYY-MM-DD HH:mm:ss.SSS}}</green> | <magenta>{meta}</magenta> - <level>{{message}}</level>\n'
)


class InterceptHandler(logging.Handler):
    """
    Routes stdlib logging (uvicorn, sqlalchemy) into loguru, see
    https://loguru.readthedocs.io/en/stable/overview.html#entirely-compatible-with-standard-logging
    """

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that actually logged
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def deployed_log_formatter(record: dict[str, Any]) -> str:
    """
    One JSON document per line for the log shipper
    """
    extra = record['extra']
    if record['exception'] is not None:
        exc = record['exception']
        record['exception'] = None
        extra['error'] = {'exception_type': type(exc.value).__name__, 'message': str(exc.value)}

    extra.update(
        timestamp=record['time'].strftime('%Y-%m-%dT%H:%M:%S,%f'),
        message=record['message'],
        level=record['level'].name,
        logger=record['name'],
        # Lines logged outside the request middleware still get the ids
        request_id=extra.get('request_id') or context.get_safe_request_id() or '',
        user_id=context.get_safe_user_id() or '',
        breadcrumb=context.get_safe_breadcrumb() or '',
    )
    extra['serialized'] = json.dumps(extra, default=str)
    return '{extra[serialized]}\n'


def local_log_formatter(record: dict[str, Any]) -> str:
    level = record['level'].no
    duration = record['extra'].get('duration')

    if duration is None:
        log_format = _LOCAL_FORMAT.format(icon=_LEVEL_ICONS.get(level, _DEFAULT_ICON))
    else:
        meta = _LEVEL_ICONS.get(level, _DEFAULT_ICON) if level >= logging.WARNING else f'⏱️ {duration}s'
        log_format = _LOCAL_REQUEST_FORMAT.format(meta=meta)

    if record['exception'] is None:
        return log_format

    if not settings.DEBUG:
        return log_format + '{exception}\n'

    from rich.console import Console
    from rich.traceback import Traceback

    exc_type, exc_value, traceback = record['exception']
    Console().print(
        Traceback.from_exception(
            exc_type=exc_type,
            exc_value=exc_value,
            traceback=traceback,
            show_locals=True,
            locals_max_length=5,
            locals_max_string=25,
            locals_hide_dunder=True,
            max_frames=10,
        )
    )
    return log_format


def configure_logging() -> None:
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(settings.LOG_LEVEL)

    # Everything propagates to the intercepting root handler
    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    # Request lines come from RequestResponseMiddleware instead
    logging.getLogger('uvicorn.access').propagate = False

    logger.remove()
    logger.add(
        sys.stdout,
        serialize=False,
        backtrace=False,
        diagnose=False,
        level=settings.LOG_LEVEL,
        format=deployed_log_formatter if settings.IS_DEPLOYED_ENV else local_log_formatter,
    )
    logger.info(f'logging level: {settings.LOG_LEVEL}')
