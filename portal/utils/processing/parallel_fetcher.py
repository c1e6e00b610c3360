"""Concurrent fetch of independent data sets"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)

MAX_FETCH_WORKERS = 4


class ParallelFetcher:
    """Runs independent read callables in a thread pool and joins on all of them"""

    @staticmethod
    def fetch_all(tasks: Dict[str, Callable[[], Any]]) -> Dict[str, Any]:
        """Return ``{name: result}``; the first failing task's exception is re-raised"""
        if not tasks:
            return {}

        start_time = time.time()
        workers = min(len(tasks), MAX_FETCH_WORKERS)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {name: executor.submit(task) for name, task in tasks.items()}
            results = {name: future.result() for name, future in futures.items()}

        elapsed = time.time() - start_time
        logger.debug(f"Fetched {len(tasks)} data sets in {elapsed:.3f}s: {', '.join(tasks)}")
        return results
