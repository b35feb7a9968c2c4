"""
Async API for ConceptProcessor.

Runs per-profile passes and bulk processing on a thread pool so callers
on an event loop are never blocked.

Example:
    >>> from conceptgraph import ConceptProcessor
    >>> from conceptgraph.async_api import AsyncProcessor
    >>> import asyncio
    >>>
    >>> processor = ConceptProcessor()
    >>> processor.learn("neural networks learn patterns")
    >>>
    >>> async def main():
    ...     async with AsyncProcessor(processor, max_workers=4) as async_proc:
    ...         single = await async_proc.process_async("neural networks")
    ...         many = await async_proc.batch_process_async(
    ...             ["neural networks", "learn patterns"],
    ...             concurrency=2
    ...         )
    ...     return single, many
    >>>
    >>> asyncio.run(main())
"""

import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional

from .results import ProcessingResult

logger = logging.getLogger(__name__)


class AsyncProcessor:
    """
    Async wrapper for ConceptProcessor.

    Attributes:
        processor: The underlying ConceptProcessor instance
    """

    def __init__(self, processor, max_workers: int = 4):
        """
        Initialize async processor wrapper.

        Args:
            processor: ConceptProcessor instance to wrap
            max_workers: Maximum number of worker threads (default: 4)

        Raises:
            ValueError: If max_workers < 1
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.processor = processor
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("AsyncProcessor has been shut down")

    async def process_async(
        self,
        raw_input: Any,
        profile_override: Optional[str] = None
    ) -> ProcessingResult:
        """
        Process text with one executor task per profile.

        The configuration and profile set are fixed before any task starts;
        results are merged once every profile has finished. The call is
        timed as ``process_async`` in the processor's metrics.

        Args:
            raw_input: Text to process
            profile_override: Run under this profile only

        Returns:
            ProcessingResult, identical to what ``processor.process`` returns.

        Raises:
            RegistryMisconfigurationError: If no profiles are registered or
                the override names an unknown profile.
            RuntimeError: If the processor has been shut down.
        """
        self._check_open()
        processor = self.processor

        start = time.perf_counter()
        try:
            config = processor.validated_config()
            profiles = processor.select_profiles(profile_override)
            concepts = processor.extractor.extract(raw_input)

            loop = asyncio.get_running_loop()
            tasks = [
                loop.run_in_executor(self._executor, processor.run_profile, profile, concepts, config)
                for profile in profiles
            ]
            results = await asyncio.gather(*tasks)
            return processor.finalize(results, config)
        finally:
            processor._metrics.record_timing(
                "process_async",
                (time.perf_counter() - start) * 1000.0,
                context={'profile_override': profile_override}
            )

    async def batch_process_async(
        self,
        texts: List[Any],
        concurrency: int = 4,
        profile_override: Optional[str] = None
    ) -> List[ProcessingResult]:
        """
        Process many inputs concurrently.

        Args:
            texts: Inputs to process
            concurrency: Maximum inputs in flight (default: 4)
            profile_override: Run every input under this profile only

        Returns:
            One ProcessingResult per input, in input order.

        Raises:
            ValueError: If concurrency < 1
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._check_open()
        if not texts:
            return []

        loop = asyncio.get_running_loop()
        sem = asyncio.Semaphore(concurrency)

        async def process_with_semaphore(text: Any) -> ProcessingResult:
            async with sem:
                return await loop.run_in_executor(
                    self._executor,
                    lambda: self.processor.process(text, profile_override=profile_override)
                )

        results = await asyncio.gather(*(process_with_semaphore(text) for text in texts))
        logger.debug("Batch processed %d inputs", len(results))
        return list(results)

    def shutdown(self, wait: bool = True) -> None:
        """
        Shut down the worker pool.

        Args:
            wait: Block until running tasks complete
        """
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait)
        logger.info("Async processor closed")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        self.shutdown()
        return False
