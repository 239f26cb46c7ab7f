from concurrent.futures import ThreadPoolExecutor
from threading import Barrier

from flakeid import SequenceGenerator, melt
from flakeid.utils.snowflake import EPOCH_OFFSET
from tests.utils import FakeClock

THREADS = 8
IDS_PER_THREAD = 2500


def _generate_concurrently(generator: SequenceGenerator) -> list[list[int]]:
    barrier = Barrier(THREADS)

    def worker() -> list[int]:
        barrier.wait()
        return [generator.next_id() for _ in range(IDS_PER_THREAD)]

    with ThreadPoolExecutor(THREADS) as pool:
        futures = [pool.submit(worker) for _ in range(THREADS)]
        return [future.result() for future in futures]


def test_concurrent_ids_are_unique():
    results = _generate_concurrently(SequenceGenerator(1, 2))

    all_ids = [snowflake_id for ids in results for snowflake_id in ids]
    assert len(set(all_ids)) == THREADS * IDS_PER_THREAD

    for ids in results:
        assert ids == sorted(ids)


def test_concurrent_ids_with_frozen_clock_spill_into_next_milliseconds():
    clock = FakeClock(start=EPOCH_OFFSET + 1)
    generators: list[SequenceGenerator] = []

    def advancing_clock() -> int:
        # Time moves on only once the current millisecond is exhausted
        now = clock()
        if generators and generators[0].sequence >= 4094:
            clock.tick()
        return now

    generator = SequenceGenerator(1, 2, clock=advancing_clock)
    generators.append(generator)

    results = _generate_concurrently(generator)

    all_ids = [snowflake_id for ids in results for snowflake_id in ids]
    assert len(set(all_ids)) == len(all_ids)

    sequences = [melt(snowflake_id).sequence for snowflake_id in all_ids]
    assert max(sequences) == 4094
    assert min(sequences) == 1
