"""
Base interface for verification algorithms.
"""
import time
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class Algorithm(ABC):
    """
    Base class for algorithms with a reset / run lifecycle.

    execute() always starts from a clean state, so one instance can be run
    repeatedly.
    """

    def execute(self) -> int:
        """
        Reset derived state and run the algorithm.

        Returns:
            Elapsed time in milliseconds
        """
        self.reset_state()
        start_time = time.time()
        self._execute_internal()
        elapsed_ms = int((time.time() - start_time) * 1000)
        logger.info("%s finished in %d ms", type(self).__name__, elapsed_ms)
        return elapsed_ms

    @abstractmethod
    def _execute_internal(self) -> None:
        """Run the algorithm on already loaded data."""
        pass

    @abstractmethod
    def reset_state(self) -> None:
        """Drop every result of a previous run."""
        pass
