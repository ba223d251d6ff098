#!/usr/bin/env python3

import sys
import time
from decimal import Decimal
from fractions import Fraction

#============================================

_QUIET_MODE = False

#============================================

def set_quiet_mode(value: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(value)

#============================================

def print_warning(message: str) -> None:
	if _QUIET_MODE:
		return
	print(f"WARNING: {message}", file=sys.stderr)

#============================================

def print_error(message: str) -> None:
	if _QUIET_MODE:
		return
	print(f"ERROR: {message}", file=sys.stderr)

#============================================

def is_close(a: float, b: float, tolerance: float) -> bool:
	return abs(a - b) <= tolerance

#============================================

def aspect_ratio(ratio_string, config) -> float:
	"""
	Source aspect from a probed "W:H" display ratio.

	Falls back to the configured target aspect when no ratio is known.
	Malformed numbers raise ValueError.
	"""
	if ratio_string is None or ratio_string == '':
		return config.processing.aspect
	parts = ratio_string.split(':')
	if len(parts) != 2:
		raise ValueError(f"aspect ratio must be W:H, got {ratio_string!r}")
	width = float(parts[0])
	height = float(parts[1])
	return width / height

#============================================

def frame_rate(rational_string: str, default_factor: float = 1.0) -> float:
	"""
	Frame rate from a probed "N/D" rational.
	"""
	if '/' not in rational_string:
		return float(rational_string) / default_factor
	parts = rational_string.split('/')
	rate = float(parts[0])
	factor = float(parts[1])
	return rate / factor

#============================================

def format_number(value) -> str:
	text = f"{float(value):.6f}"
	if '.' in text:
		text = text.rstrip('0').rstrip('.')
	if text == '-0':
		text = '0'
	return text

#============================================

def parse_fps(raw_fps) -> Fraction:
	if raw_fps is None:
		raise RuntimeError("processing.fps is required")
	if isinstance(raw_fps, bool):
		raise RuntimeError("processing.fps must be int, float, or fraction string")
	if isinstance(raw_fps, int):
		return Fraction(raw_fps, 1)
	if isinstance(raw_fps, float):
		return Fraction(str(raw_fps))
	if isinstance(raw_fps, str):
		if '/' in raw_fps:
			parts = raw_fps.split('/')
			return Fraction(int(parts[0]), int(parts[1]))
		return Fraction(raw_fps)
	raise RuntimeError("processing.fps must be int, float, or fraction string")

#============================================

def parse_timecode(raw_time) -> Decimal:
	if raw_time is None:
		raise RuntimeError("time value is required")
	if isinstance(raw_time, int):
		return Decimal(raw_time)
	if isinstance(raw_time, float):
		return Decimal(str(raw_time))
	if isinstance(raw_time, str):
		value = raw_time.strip()
		if ':' not in value:
			return Decimal(value)
		parts = value.split(':')
		seconds = Decimal(parts.pop())
		minutes = Decimal(parts.pop())
		hours = Decimal(0)
		if len(parts) > 0:
			hours = Decimal(parts.pop())
		return hours * Decimal(3600) + minutes * Decimal(60) + seconds
	raise RuntimeError("time values must be int, float, or timecode string")

#============================================

def get_sec() -> float:
	"""
	Seconds since local midnight, with sub-second precision.
	"""
	now = time.time()
	local = time.localtime(now)
	fraction = now - int(now)
	return local.tm_hour * 3600 + local.tm_min * 60 + local.tm_sec + fraction
