import json
import logging
import logging.handlers
import queue

# Records are queued so registry readers never block on console I/O
_log_queue: queue.SimpleQueue = queue.SimpleQueue()

queue_handler = logging.handlers.QueueHandler(_log_queue)

console_handler = logging.StreamHandler()

listener = logging.handlers.QueueListener(_log_queue, console_handler)
listener.start()

# Named logger so applications embedding the registry keep their own root
logger = logging.getLogger("mimeregistry")
logger.setLevel(logging.DEBUG)
logger.addHandler(queue_handler)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        return json.dumps(payload)


def configure_logging(json_logging: bool = False) -> None:
    """
    Call this at application startup to toggle JSON vs text logging.
    """
    if json_logging:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s [%(name)s] %(message)s"
            )
        )
