#!/usr/bin/env python3

"""
One decision per processing concern.

Each function looks at the media item and the configuration and adds the
matching fragments to the filter graph, or nothing when the concern does
not apply.
"""

from castgraphlib.core import utils
from castgraphlib.core import schedule
from castgraphlib.core.config import OutputMode
from castgraphlib.filters import chain as chainlib
from castgraphlib.filters import loudnorm as loudnorm_leaf
from castgraphlib.filters import overlay as overlay_leaf
from castgraphlib.filters import text as text_leaf
from castgraphlib.filters.chain import FilterGraph, FilterKind

#============================================

ASPECT_TOLERANCE = 0.03
EXTEND_TOLERANCE = 0.1
REALTIME_MAX_SPEED = 1.1

#============================================

def _kind_prefix(kind: FilterKind) -> str:
	if kind == FilterKind.AUDIO:
		return 'a'
	return ''

#============================================

def deinterlace(field_order, chain: FilterGraph) -> None:
	if field_order is not None and field_order != 'progressive':
		chain.add_filter(chainlib.operator("yadif=0:-1:0"), 0, FilterKind.VIDEO)

#============================================

def pad(aspect: float, chain: FilterGraph, v_stream, config) -> None:
	processing = config.processing
	if utils.is_close(aspect, processing.aspect, ASPECT_TOLERANCE):
		return
	scale = ''
	width = v_stream.width if v_stream is not None else None
	height = v_stream.height if v_stream is not None else None
	if width is not None and height is not None:
		# shrink the overflowing side first so the padded frame stays small
		if width > processing.width and aspect > processing.aspect:
			scale = f"scale={processing.width}:-1,"
		elif height > processing.height and aspect < processing.aspect:
			scale = f"scale=-1:{processing.height},"
	ratio = f"{processing.width}/{processing.height}"
	chain.add_filter(chainlib.operator(
		f"{scale}pad=max(iw\\,ih*({ratio})):ow/({ratio}):(ow-iw)/2:(oh-ih)/2"),
		0, FilterKind.VIDEO)

#============================================

def fps(frame_rate: float, chain: FilterGraph, config) -> None:
	if frame_rate != config.processing.fps:
		target = utils.format_number(config.processing.fps)
		chain.add_filter(chainlib.operator(f"fps={target}"), 0, FilterKind.VIDEO)

#============================================

def scale(width, height, aspect: float, chain: FilterGraph, config) -> None:
	processing = config.processing
	target_aspect = utils.format_number(processing.aspect)
	if width is not None and height is not None:
		if width != processing.width or height != processing.height:
			chain.add_filter(chainlib.operator(
				f"scale={processing.width}:{processing.height}"), 0, FilterKind.VIDEO)
		else:
			# keeps the video chain present when geometry already matches
			chain.add_filter(chainlib.operator("null"), 0, FilterKind.VIDEO)
		if not utils.is_close(aspect, processing.aspect, ASPECT_TOLERANCE):
			chain.add_filter(chainlib.operator(f"setdar=dar={target_aspect}"),
				0, FilterKind.VIDEO)
		return
	chain.add_filter(chainlib.operator(
		f"scale={processing.width}:{processing.height}"), 0, FilterKind.VIDEO)
	chain.add_filter(chainlib.operator(f"setdar=dar={target_aspect}"),
		0, FilterKind.VIDEO)

#============================================

def fade(node, chain: FilterGraph, nr: int, kind: FilterKind) -> None:
	prefix = _kind_prefix(kind)
	if node.seek > 0.0 or node.is_live:
		chain.add_filter(chainlib.operator(f"{prefix}fade=in:st=0:d=0.5"), nr, kind)
	fade_start = node.out - node.seek - 1.0
	if node.out != node.duration and fade_start > 0.0:
		start = utils.format_number(fade_start)
		chain.add_filter(chainlib.operator(f"{prefix}fade=out:st={start}:d=1.0"),
			nr, kind)

#============================================

def overlay(node, chain: FilterGraph, config) -> None:
	if node.category == 'advertisement':
		return
	logo_chain = overlay_leaf.filter_node(config, False)
	if logo_chain == '':
		return
	if node.last_ad:
		logo_chain += ",fade=in:st=0:d=1.0:alpha=1"
	if node.next_ad:
		start = utils.format_number(node.out - node.seek - 1.0)
		logo_chain += f",fade=out:st={start}:d=1.0:alpha=1"
	logo_chain += overlay_leaf.overlay_tail(config)
	chain.add_filter(chainlib.continuation(logo_chain), 0, FilterKind.VIDEO)

#============================================

def extend_video(node, chain: FilterGraph) -> None:
	video_duration = node.video_duration()
	if video_duration is None:
		return
	target = node.out - node.seek
	available = video_duration - node.seek
	if target > available + EXTEND_TOLERANCE and node.duration >= node.out:
		stop_duration = utils.format_number(target - available)
		chain.add_filter(chainlib.operator(
			f"tpad=stop_mode=add:stop_duration={stop_duration}"), 0, FilterKind.VIDEO)

#============================================

def add_text(node, chain: FilterGraph, config, registry=None) -> None:
	text_config = config.text
	if not text_config.add_text:
		return
	if not text_config.text_from_filename and config.out.mode != OutputMode.HLS:
		return
	fragment = text_leaf.filter_node(config, node, registry)
	if fragment == '':
		return
	chain.add_filter(chainlib.operator(fragment), 0, FilterKind.VIDEO)

#============================================

def add_audio(node, chain: FilterGraph, nr: int) -> None:
	utils.print_warning(f"missing audio track (id {nr}) from {node.source}")
	duration = utils.format_number(node.out - node.seek)
	chain.add_filter(chainlib.source(
		f"aevalsrc=0:channel_layout=stereo:duration={duration}:sample_rate=48000"),
		nr, FilterKind.AUDIO)

#============================================

def extend_audio(node, chain: FilterGraph, nr: int) -> None:
	audio_duration = node.audio_duration(nr)
	if audio_duration is None:
		return
	target = node.out - node.seek
	available = audio_duration - node.seek
	if target > available + EXTEND_TOLERANCE and node.duration >= node.out:
		whole_duration = utils.format_number(target)
		chain.add_filter(chainlib.operator(f"apad=whole_dur={whole_duration}"),
			nr, FilterKind.AUDIO)

#============================================

def add_loudnorm(chain: FilterGraph, config, nr: int) -> None:
	if config.processing.add_loudnorm:
		chain.add_filter(chainlib.operator(loudnorm_leaf.filter_node(config)),
			nr, FilterKind.AUDIO)

#============================================

def audio_volume(chain: FilterGraph, config, nr: int) -> None:
	volume = config.processing.volume
	if volume != 1.0:
		chain.add_filter(chainlib.operator(f"volume={utils.format_number(volume)}"),
			nr, FilterKind.AUDIO)

#============================================

def realtime_speed(node, config) -> float:
	"""
	Playback speed that brings a late item back onto its schedule.

	Only items starting from the beginning with a known start time are
	sped up, and never by 10% or more.
	"""
	speed = 1.0
	if node.begin is None or node.seek != 0.0:
		return speed
	(delta, _) = schedule.get_delta(config, node.begin)
	duration = node.out - node.seek
	if delta < 0.0:
		factor = duration / (duration + delta) if duration + delta != 0 else 0.0
		if 0.0 < factor < REALTIME_MAX_SPEED and delta < config.general.stop_threshold:
			speed = factor
	return speed

#============================================

def realtime(node, chain: FilterGraph, config, kind: FilterKind, nr: int = 0) -> None:
	if config.out.mode != OutputMode.HLS:
		return
	if kind == FilterKind.AUDIO and config.general.generate:
		return
	prefix = _kind_prefix(kind)
	speed = utils.format_number(realtime_speed(node, config))
	chain.add_filter(chainlib.operator(f"{prefix}realtime=speed={speed}"), nr, kind)

#============================================

def custom(filter_text: str, chain: FilterGraph, nr: int, kind: FilterKind) -> None:
	if filter_text == '':
		return
	chain.add_filter(chainlib.operator(filter_text), nr, kind)
