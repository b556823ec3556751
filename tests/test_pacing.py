# Project: climate-stats
# Owner: GreenUnicorn
"""Tests for pacing.py — pacers and the paced() sequence."""

from unittest.mock import MagicMock, patch

import pytest

from climate_stats.pacing import FixedDelayPacer, NoDelayPacer, paced


def test_paced_yields_items_in_order():
    assert list(paced([3, 1, 2], NoDelayPacer())) == [3, 1, 2]


def test_paced_waits_only_between_items():
    """Three items → two waits, none before the first or after the last."""
    pacer = MagicMock()
    list(paced(["a", "b", "c"], pacer))
    assert pacer.wait.call_count == 2


def test_paced_single_item_never_waits():
    pacer = MagicMock()
    assert list(paced(["only"], pacer)) == ["only"]
    pacer.wait.assert_not_called()


def test_paced_waits_before_yielding_next_item():
    events = []
    pacer = MagicMock()
    pacer.wait.side_effect = lambda: events.append("wait")
    for item in paced([1, 2], pacer):
        events.append(item)
    assert events == [1, "wait", 2]


def test_fixed_delay_pacer_sleeps():
    with patch("climate_stats.pacing.time.sleep") as mock_sleep:
        FixedDelayPacer(0.2).wait()
    mock_sleep.assert_called_once_with(0.2)


def test_zero_delay_pacer_does_not_sleep():
    with patch("climate_stats.pacing.time.sleep") as mock_sleep:
        FixedDelayPacer(0).wait()
    mock_sleep.assert_not_called()


def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        FixedDelayPacer(-1)
