#!/usr/bin/env python3

from castgraphlib.core import utils

#============================================

DAY_SECONDS = 86400.0

#============================================

def time_to_sec(timecode) -> float:
	return float(utils.parse_timecode(timecode))

#============================================

def get_delta(config, begin: float) -> tuple:
	"""
	Distance between a scheduled start and the wall clock.

	Args:
		config: PlayoutConfig with playlist and general sections.
		begin: scheduled start, seconds since midnight.

	Returns:
		(delta, total_delta): delta is begin minus now, negative when
		playout runs behind schedule; total_delta is the time left until
		the playlist day ends.
	"""
	current_time = utils.get_sec()
	start = config.playlist.start_sec
	length = config.playlist.length_sec
	target_length = DAY_SECONDS
	if length > 0 and length != target_length:
		target_length = length
	if begin == start and start == 0 and DAY_SECONDS - current_time < 4:
		current_time -= DAY_SECONDS
	elif start >= current_time and begin != start:
		current_time += DAY_SECONDS
	current_delta = begin - current_time
	tolerance = config.general.stop_threshold + 2
	if utils.is_close(abs(current_delta), DAY_SECONDS, tolerance):
		current_delta = abs(current_delta) - DAY_SECONDS
	if current_time < start:
		total_delta = start - current_time
	else:
		total_delta = target_length + start - current_time
	return (current_delta, total_delta)
