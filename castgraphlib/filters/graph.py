#!/usr/bin/env python3

import os
from castgraphlib.core import utils
from castgraphlib.filters import chain as chainlib
from castgraphlib.filters import custom as custom_leaf
from castgraphlib.filters import loudnorm as loudnorm_leaf
from castgraphlib.filters import overlay as overlay_leaf
from castgraphlib.filters import steps
from castgraphlib.filters.chain import FilterGraph, FilterKind

#============================================

def audio_indexes(config) -> list:
	processing = config.processing
	if processing.audio_track_index == -1:
		return list(range(processing.audio_tracks))
	return [processing.audio_track_index]

#============================================

def _has_audio_file(node) -> bool:
	return node.audio != '' and os.path.isfile(node.audio)

#============================================

def build_filters(config, node, text_registry=None) -> FilterGraph:
	"""
	Run every decision for one media item, in playout order.

	Geometry is normalized before timing, fades come after geometry and
	the logo sits on top of the faded picture.
	"""
	chain = FilterGraph()
	if _has_audio_file(node):
		chain.audio_position = 1
	v_stream = node.probe.first_video() if node.probe is not None else None
	if v_stream is not None:
		aspect = utils.aspect_ratio(v_stream.display_aspect_ratio, config)
		frame_rate = utils.frame_rate(v_stream.r_frame_rate, 1.0)
		steps.deinterlace(v_stream.field_order, chain)
		steps.pad(aspect, chain, v_stream, config)
		steps.fps(frame_rate, chain, config)
		steps.scale(v_stream.width, v_stream.height, aspect, chain, config)
		steps.extend_video(node, chain)
	else:
		# no usable video metadata (unprobed, audio only, cover art only)
		steps.fps(0.0, chain, config)
		steps.scale(None, None, 1.0, chain, config)
	steps.add_text(node, chain, config, text_registry)
	steps.fade(node, chain, 0, FilterKind.VIDEO)
	steps.overlay(node, chain, config)
	steps.realtime(node, chain, config, FilterKind.VIDEO)
	(proc_vf, proc_af) = custom_leaf.filter_node(config.processing.custom_filter)
	(list_vf, list_af) = custom_leaf.filter_node(node.custom_filter)
	steps.custom(proc_vf, chain, 0, FilterKind.VIDEO)
	steps.custom(list_vf, chain, 0, FilterKind.VIDEO)
	for nr in audio_indexes(config):
		has_stream = node.probe is not None and node.probe.audio_stream(nr) is not None
		if has_stream or _has_audio_file(node):
			steps.extend_audio(node, chain, nr)
		elif not node.is_live:
			steps.add_audio(node, chain, nr)
		# the chain must exist for every track, even when nothing else applies
		chain.add_filter(chainlib.operator("anull"), nr, FilterKind.AUDIO)
		steps.add_loudnorm(chain, config, nr)
		steps.fade(node, chain, nr, FilterKind.AUDIO)
		steps.audio_volume(chain, config, nr)
		steps.realtime(node, chain, config, FilterKind.AUDIO, nr)
		steps.custom(proc_af, chain, nr, FilterKind.AUDIO)
		steps.custom(list_af, chain, nr, FilterKind.AUDIO)
	chain.close_chains()
	return chain

#============================================

def filter_chains(config, node, text_registry=None) -> list:
	chain = build_filters(config, node, text_registry)
	return chain.build_final_chain()

#============================================

def ingest_filter(config) -> list:
	"""
	Filter arguments for a live ingest feed of unknown geometry.
	"""
	processing = config.processing
	chain = FilterGraph()
	target_fps = utils.format_number(processing.fps)
	target_aspect = utils.format_number(processing.aspect)
	chain.add_filter(f"fps={target_fps}", 0, FilterKind.VIDEO)
	chain.add_filter(f"scale={processing.width}:{processing.height}", 0, FilterKind.VIDEO)
	chain.add_filter(f"setdar=dar={target_aspect}", 0, FilterKind.VIDEO)
	chain.add_filter("fade=in:st=0:d=0.5", 0, FilterKind.VIDEO)
	logo_chain = overlay_leaf.filter_node(config, True)
	if logo_chain != '':
		chain.add_filter(chainlib.continuation(logo_chain), 0, FilterKind.VIDEO)
	(ingest_vf, ingest_af) = custom_leaf.filter_node(config.ingest.custom_filter)
	steps.custom(ingest_vf, chain, 0, FilterKind.VIDEO)
	chain.add_filter("anull", 0, FilterKind.AUDIO)
	if processing.loudnorm_ingest:
		chain.add_filter(loudnorm_leaf.filter_node(config), 0, FilterKind.AUDIO)
	steps.custom(ingest_af, chain, 0, FilterKind.AUDIO)
	chain.close_chains()
	return chain.build_final_chain()
