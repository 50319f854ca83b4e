from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor

import pytest

from logthis.buffering import BufferRegistry


@pytest.fixture
def registry() -> BufferRegistry:
    return BufferRegistry()


@pytest.fixture
def pool() -> Iterator[ThreadPoolExecutor]:
    executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="test-flush")
    yield executor
    executor.shutdown(wait=True)
