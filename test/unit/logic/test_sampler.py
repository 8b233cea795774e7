from typing import Any

import pytest

from spindown.logic.sampler import ActivitySampler


@pytest.mark.asyncio
async def test_sample_returns_visible_devices_without_io(fake_iostat: Any) -> None:
    iostat = fake_iostat(["nvme0n1", "sda", "sdaa", "sdb"], [{"nvme0n1", "sdaa"}])
    assert await ActivitySampler(iostat).sample(600) == {"sda", "sdb"}
    assert iostat.windows == [600]


@pytest.mark.asyncio
async def test_sample_uses_one_window_per_call(fake_iostat: Any) -> None:
    iostat = fake_iostat(["sda"], [set(), {"sda"}])
    sampler = ActivitySampler(iostat)
    assert await sampler.sample(30) == {"sda"}
    assert await sampler.sample(30) == set()
    assert iostat.windows == [30, 30]


@pytest.mark.asyncio
async def test_sample_all_active(fake_iostat: Any) -> None:
    iostat = fake_iostat(["sda", "sdb"], [{"sda", "sdb"}])
    assert await ActivitySampler(iostat).sample(600) == set()


@pytest.mark.asyncio
async def test_sample_ignores_active_devices_not_listed(fake_iostat: Any) -> None:
    iostat = fake_iostat(["sda"], [{"dm-0", "sda"}])
    assert await ActivitySampler(iostat).sample(600) == set()
