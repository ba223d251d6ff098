#!/usr/bin/env python3

"""
Pytest coverage for schedule deltas around the playlist day.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from castgraphlib.core import schedule
from castgraphlib.core import utils
from castgraphlib.core.config import PlayoutConfig

#============================================

def _config(day_start: float = 0.0) -> PlayoutConfig:
	config = PlayoutConfig()
	config.playlist.start_sec = day_start
	return config

#============================================

def _freeze_clock(monkeypatch, current_time: float) -> None:
	monkeypatch.setattr(utils, "get_sec", lambda: current_time)

#============================================

def test_behind_schedule_is_negative(monkeypatch) -> None:
	"""
	Ensure a start in the past gives a negative delta.
	"""
	_freeze_clock(monkeypatch, 3605.0)
	(delta, total_delta) = schedule.get_delta(_config(), 3600.0)
	assert delta == -5.0
	assert total_delta == 86400.0 - 3605.0

#============================================

def test_ahead_of_schedule_is_positive(monkeypatch) -> None:
	"""
	Ensure a start in the future gives a positive delta.
	"""
	_freeze_clock(monkeypatch, 3590.0)
	(delta, _) = schedule.get_delta(_config(), 3600.0)
	assert delta == 10.0

#============================================

def test_midnight_start_just_before_midnight(monkeypatch) -> None:
	"""
	Ensure the first item of a midnight playlist counts from the next day.
	"""
	_freeze_clock(monkeypatch, 86398.0)
	(delta, total_delta) = schedule.get_delta(_config(), 0.0)
	assert delta == pytest.approx(2.0)
	assert total_delta == pytest.approx(2.0)

#============================================

def test_after_midnight_with_morning_day_start(monkeypatch) -> None:
	"""
	Ensure times after midnight belong to the running playlist day.
	"""
	_freeze_clock(monkeypatch, 3600.0)
	(delta, total_delta) = schedule.get_delta(_config(21600.0), 90005.0)
	assert delta == pytest.approx(5.0)
	assert total_delta == pytest.approx(18000.0)

#============================================

def test_full_day_delta_is_folded(monkeypatch) -> None:
	"""
	Ensure deltas of about one day are folded back to the short distance.
	"""
	_freeze_clock(monkeypatch, 86395.0)
	(delta, _) = schedule.get_delta(_config(), 5.0)
	assert delta == pytest.approx(-10.0)

#============================================

def test_custom_playlist_length(monkeypatch) -> None:
	"""
	Ensure shorter playlist days end earlier.
	"""
	_freeze_clock(monkeypatch, 7200.0)
	config = _config()
	config.playlist.length_sec = 43200.0
	(_, total_delta) = schedule.get_delta(config, 7200.0)
	assert total_delta == 36000.0

#============================================

@pytest.mark.parametrize(
	"timecode, seconds",
	[
		("01:00:00", 3600.0),
		("00:01:30.5", 90.5),
		("05:10", 310.0),
		("42", 42.0),
		(7.25, 7.25),
	],
)
def test_time_to_sec(timecode, seconds: float) -> None:
	"""
	Ensure timecodes and plain numbers convert to seconds.
	"""
	assert schedule.time_to_sec(timecode) == seconds

#============================================

def test_get_sec_within_day() -> None:
	"""
	Ensure the wall clock helper stays inside one day.
	"""
	current_time = utils.get_sec()
	assert 0.0 <= current_time < schedule.DAY_SECONDS
