"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/signatures.py
Parallel acquisition of content signatures before content-mode clustering.

Each file is hashed independently on a thread pool. A read failure is recorded for that
file only; the batch always runs to completion and nothing is returned until every
signature has resolved.
"""

import os
import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Callable, Tuple

from filesim.core.models import File, SignatureError, SignatureFailure
from filesim.core.hasher import HasherImpl
from filesim.core.interfaces import Hasher

logger = logging.getLogger(__name__)


class SignatureCollector:
    """
    Computes content signatures for a batch of files.

    Attributes:
        hasher: Hasher used for every file (memoizes into File.signature)
        max_workers: Thread pool size, defaults to the number of CPUs
    """

    def __init__(self, hasher: Hasher = None, max_workers: Optional[int] = None):
        self.hasher = hasher or HasherImpl()
        self.max_workers = max_workers or os.cpu_count() or 1

    def collect(
            self,
            files: List[File],
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[File], List[SignatureFailure]]:
        """
        Hash every file.

        Returns:
            A tuple containing:
                - Files whose signature was computed, in input order
                - One SignatureFailure per file that could not be read, in input order
        """
        if not files:
            return [], []

        start_time = time.time()
        total = len(files)
        processed = 0

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self.hasher.compute_full_hash, file): file
                for file in files
            }

            for future in as_completed(futures):
                file = futures[future]
                try:
                    future.result()
                except SignatureError as e:
                    logger.warning(f"Skipping {file.path}: {e}")

                processed += 1
                if progress_callback:
                    progress_callback("Content signatures", processed, total)

        ready = [f for f in files if f.signature.is_computed]
        failures = [
            SignatureFailure(path=f.path, reason=f.signature.error or "unknown error")
            for f in files if not f.signature.is_computed
        ]

        logger.debug(
            f"Computed {len(ready)} signatures ({len(failures)} failed) "
            f"in {time.time() - start_time:.2f} seconds"
        )
        return ready, failures
