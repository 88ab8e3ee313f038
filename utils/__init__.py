from utils.logger import logger
from utils.wait_helper import PollEngine, exists, wait_until

__all__ = [
    "logger",
    "PollEngine",
    "wait_until",
    "exists",
]
