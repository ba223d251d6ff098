#!/usr/bin/env python3

from castgraphlib.core import utils

#============================================

def filter_node(config) -> str:
	"""
	Single pass loudnorm operator from the processing loudness targets.
	"""
	processing = config.processing
	loud_i = utils.format_number(processing.loud_i)
	loud_tp = utils.format_number(processing.loud_tp)
	loud_lra = utils.format_number(processing.loud_lra)
	return f"loudnorm=I={loud_i}:TP={loud_tp}:LRA={loud_lra}"
