#!/usr/bin/env python3

import re
from castgraphlib.core import utils

#============================================

VIDEO_LINK = "[c_v_out]"
AUDIO_LINK = "[c_a_out]"

# leading separator or input link, and trailing output link
LINK_PATTERN = re.compile(r"^;?(\[[^\[]+\])?|\[[^\[]+\]$")

#============================================

def _strip_links(fragment: str) -> str:
	return LINK_PATTERN.sub('', fragment.strip())

#============================================

def filter_node(raw_filter: str) -> tuple:
	"""
	Split a user supplied filter into its video and audio part.

	The parts are marked by the output links [c_v_out] and [c_a_out].
	Surrounding links are removed so both parts can be chained like any
	other operator.

	Returns:
		(video_filter, audio_filter), empty strings for missing parts.
	"""
	video_filter = ''
	audio_filter = ''
	if raw_filter is None:
		return (video_filter, audio_filter)
	raw_filter = raw_filter.strip()
	has_video = VIDEO_LINK in raw_filter
	has_audio = AUDIO_LINK in raw_filter
	if has_video and has_audio:
		video_pos = raw_filter.find(VIDEO_LINK)
		audio_pos = raw_filter.find(AUDIO_LINK)
		delimiter = VIDEO_LINK
		if video_pos > audio_pos:
			delimiter = AUDIO_LINK
		(first, second) = raw_filter.split(delimiter, 1)
		if AUDIO_LINK in second:
			video_filter = _strip_links(first)
			audio_filter = _strip_links(second)
		else:
			video_filter = _strip_links(second)
			audio_filter = _strip_links(first)
	elif has_video:
		video_filter = _strip_links(raw_filter)
	elif has_audio:
		audio_filter = _strip_links(raw_filter)
	elif raw_filter != '' and raw_filter != '~':
		utils.print_error("custom filter is not well formatted, use correct "
			"out link names ([c_v_out] and/or [c_a_out]), filter skipped")
	return (video_filter, audio_filter)
