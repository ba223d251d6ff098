#!/usr/bin/env python3

import os
from castgraphlib.core import utils

#============================================

def escape_path(path: str) -> str:
	# movie= takes a filter option value, so drive colons need escaping
	return path.replace('\\', '/').replace(':', '\\\\:')

#============================================

def logo_available(config) -> bool:
	processing = config.processing
	if not processing.add_logo:
		return False
	return os.path.isfile(processing.logo)

#============================================

def filter_node(config, add_tail: bool) -> str:
	"""
	Logo overlay body: ends the running chain as [v], loads the logo as a
	looped movie source and scales its alpha to the configured opacity.

	With add_tail the overlay statement is appended, otherwise the caller
	adds its own fades before closing with overlay_tail().
	"""
	if not logo_available(config):
		return ''
	processing = config.processing
	opacity = utils.format_number(processing.logo_opacity)
	logo_chain = f"[v];movie={escape_path(processing.logo)}:loop=0,"
	logo_chain += "setpts=N/(FRAME_RATE*TB),"
	logo_chain += f"format=rgba,colorchannelmixer=aa={opacity}"
	if add_tail:
		logo_chain += overlay_tail(config)
	return logo_chain

#============================================

def overlay_tail(config) -> str:
	return f"[l];[v][l]{config.processing.logo_filter}:shortest=1"
