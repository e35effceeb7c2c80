import asyncio

import pytest

from portsniffer.scanners.limiter import ConcurrencyLimiter


def test_limiter_caps_in_flight_holders():
    async def runner():
        limiter = ConcurrencyLimiter(3)
        observed = []

        async def work():
            async with limiter:
                observed.append(limiter.in_flight)
                await asyncio.sleep(0.01)

        await asyncio.gather(*(work() for _ in range(20)))
        return limiter, observed

    limiter, observed = asyncio.run(runner())
    assert max(observed) <= 3
    assert limiter.peak == 3
    assert limiter.in_flight == 0


def test_limiter_of_one_is_sequential():
    async def runner():
        limiter = ConcurrencyLimiter(1)
        order = []

        async def work(index):
            async with limiter:
                order.append(("start", index))
                await asyncio.sleep(0)
                order.append(("end", index))

        await asyncio.gather(*(work(i) for i in range(5)))
        return limiter, order

    limiter, order = asyncio.run(runner())
    assert limiter.peak == 1
    for position in range(0, len(order), 2):
        assert order[position][0] == "start"
        assert order[position + 1] == ("end", order[position][1])


def test_limiter_releases_slot_on_error():
    async def runner():
        limiter = ConcurrencyLimiter(1)

        async def failing():
            async with limiter:
                raise RuntimeError("probe exploded")

        with pytest.raises(RuntimeError):
            await failing()

        # The slot must be free again, otherwise this would block forever.
        await asyncio.wait_for(limiter.acquire(), timeout=1.0)
        limiter.release()
        return limiter

    limiter = asyncio.run(runner())
    assert limiter.in_flight == 0


def test_limiter_accepts_limits_above_config_range():
    assert ConcurrencyLimiter(500).limit == 500


@pytest.mark.parametrize("limit", [0, -1])
def test_limiter_rejects_non_positive_limit(limit):
    with pytest.raises(ValueError):
        ConcurrencyLimiter(limit)
