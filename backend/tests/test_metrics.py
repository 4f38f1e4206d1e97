"""Unit tests for the metrics helpers."""
from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry, Histogram

from shared.utils.metrics import atrack_latency, write_metrics_textfile


def histogram() -> tuple[Histogram, CollectorRegistry]:
    registry = CollectorRegistry()
    return Histogram("ms_test_duration_seconds", "test", registry=registry), registry


@pytest.mark.asyncio
async def test_atrack_latency_observes_once() -> None:
    hist, registry = histogram()
    async with atrack_latency(hist):
        pass
    assert registry.get_sample_value("ms_test_duration_seconds_count") == 1


@pytest.mark.asyncio
async def test_atrack_latency_observes_when_body_raises() -> None:
    hist, registry = histogram()
    with pytest.raises(RuntimeError):
        async with atrack_latency(hist):
            raise RuntimeError("boom")
    assert registry.get_sample_value("ms_test_duration_seconds_count") == 1


def test_write_metrics_textfile_ignores_unwritable_path(tmp_path) -> None:
    write_metrics_textfile(str(tmp_path / "missing" / "ms.prom"))
    assert not (tmp_path / "missing").exists()
