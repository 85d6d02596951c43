"""
Logging utilities for showing engine logs in the GUI console.

Records from the `question_toolkit` loggers are pushed onto a queue as
(message, level) pairs; the window drains the queue on a timer and hands
each entry to a ConsoleWidget.
"""
from __future__ import annotations

import logging
from queue import Empty, Queue
from typing import Callable, Optional


class QueueLogHandler(logging.Handler):
    """Logging handler that puts (message, level) pairs on a queue."""

    def __init__(self, log_queue: Queue, level: int = logging.DEBUG):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.log_queue.put((self.format(record), record.levelname))
        except Exception:
            self.handleError(record)


def attach_queue_handler(log_queue: Queue, logger_name: Optional[str] = "question_toolkit") -> QueueLogHandler:
    """
    Attach a QueueLogHandler to a logger.

    Args:
        log_queue: Queue receiving (message, level) pairs
        logger_name: Logger to attach to (None = root logger)

    Returns:
        The attached handler, for detach_queue_handler
    """
    handler = QueueLogHandler(log_queue)
    logging.getLogger(logger_name).addHandler(handler)
    return handler


def detach_queue_handler(handler: QueueLogHandler, logger_name: Optional[str] = "question_toolkit") -> None:
    logging.getLogger(logger_name).removeHandler(handler)


def drain_log_queue(log_queue: Queue, sink: Callable[[str, str], None]) -> int:
    """
    Pass every queued entry to `sink(level, message)`.

    Returns:
        Number of entries drained
    """
    count = 0
    while True:
        try:
            message, level = log_queue.get_nowait()
        except Empty:
            return count
        sink(level, message)
        log_queue.task_done()
        count += 1
