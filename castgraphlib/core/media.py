#!/usr/bin/env python3

import os
from castgraphlib import medialib

#============================================

def _optional_int(value):
	if value is None:
		return None
	return int(value)

#============================================

def _optional_float(value):
	if value is None or value == '' or value == 'N/A':
		return None
	try:
		return float(value)
	except ValueError:
		return None

#============================================

class VideoStream():
	def __init__(self, width: int = None, height: int = None,
		display_aspect_ratio: str = None, r_frame_rate: str = "0/1",
		field_order: str = None, duration: str = None):
		self.width = width
		self.height = height
		self.display_aspect_ratio = display_aspect_ratio
		self.r_frame_rate = r_frame_rate
		self.field_order = field_order
		self.duration = duration

	#============================
	@classmethod
	def from_ffprobe(cls, stream: dict) -> 'VideoStream':
		aspect = stream.get('display_aspect_ratio')
		# ffprobe reports 0:1 when the container carries no aspect
		if aspect in ('0:1', 'N/A'):
			aspect = None
		return cls(
			width=_optional_int(stream.get('width')),
			height=_optional_int(stream.get('height')),
			display_aspect_ratio=aspect,
			r_frame_rate=stream.get('r_frame_rate', "0/1"),
			field_order=stream.get('field_order'),
			duration=stream.get('duration'),
		)

	#============================
	def duration_seconds(self):
		return _optional_float(self.duration)

#============================================

class AudioStream():
	def __init__(self, duration: str = None, channels: int = None,
		sample_rate: str = None):
		self.duration = duration
		self.channels = channels
		self.sample_rate = sample_rate

	#============================
	@classmethod
	def from_ffprobe(cls, stream: dict) -> 'AudioStream':
		return cls(
			duration=stream.get('duration'),
			channels=_optional_int(stream.get('channels')),
			sample_rate=stream.get('sample_rate'),
		)

	#============================
	def duration_seconds(self):
		return _optional_float(self.duration)

#============================================

class MediaProbe():
	def __init__(self, video_streams: list = None, audio_streams: list = None,
		format_duration: str = None):
		self.video_streams = video_streams if video_streams is not None else []
		self.audio_streams = audio_streams if audio_streams is not None else []
		self.format_duration = format_duration

	#============================
	@classmethod
	def from_ffprobe(cls, data: dict) -> 'MediaProbe':
		if not isinstance(data, dict):
			raise RuntimeError("ffprobe data must be a mapping")
		video_streams = []
		audio_streams = []
		for stream in data.get('streams', []):
			codec_type = stream.get('codec_type')
			if codec_type == 'video':
				# cover art is reported as a video stream
				disposition = stream.get('disposition', {})
				if disposition.get('attached_pic') == 1:
					continue
				video_streams.append(VideoStream.from_ffprobe(stream))
			elif codec_type == 'audio':
				audio_streams.append(AudioStream.from_ffprobe(stream))
		format_duration = data.get('format', {}).get('duration')
		return cls(video_streams, audio_streams, format_duration)

	#============================
	def first_video(self):
		if len(self.video_streams) == 0:
			return None
		return self.video_streams[0]

	#============================
	def audio_stream(self, index: int):
		if index < 0 or index >= len(self.audio_streams):
			return None
		return self.audio_streams[index]

	#============================
	def duration_seconds(self):
		return _optional_float(self.format_duration)

#============================================

class Media():
	def __init__(self, index: int, source: str, do_probe: bool = True,
		seek: float = 0.0, out: float = None, duration: float = None):
		self.index = index
		self.source = source
		self.audio = ""
		self.seek = float(seek)
		self.out = out
		self.duration = duration
		self.duration_audio = 0.0
		self.probe = None
		self.probe_audio = None
		self.category = ""
		self.is_live = False
		self.begin = None
		self.last_ad = False
		self.next_ad = False
		self.custom_filter = ""
		if do_probe and os.path.isfile(source):
			self.add_probe()
		self._apply_defaults()

	#============================
	def add_probe(self) -> None:
		self.probe = MediaProbe.from_ffprobe(medialib.getMediaInfo(self.source))
		if self.duration is None:
			self.duration = self.probe.duration_seconds()
		if self.audio != "" and os.path.isfile(self.audio):
			self.add_audio_probe()

	#============================
	def add_audio_probe(self) -> None:
		self.probe_audio = MediaProbe.from_ffprobe(medialib.getMediaInfo(self.audio))
		audio_duration = self.probe_audio.duration_seconds()
		if audio_duration is not None:
			self.duration_audio = audio_duration

	#============================
	def set_audio(self, audio_file: str) -> None:
		self.audio = audio_file
		if self.probe is not None and os.path.isfile(audio_file):
			self.add_audio_probe()

	#============================
	def _apply_defaults(self) -> None:
		if self.duration is None:
			self.duration = 0.0
		self.duration = float(self.duration)
		if self.out is None:
			self.out = self.duration
		self.out = float(self.out)
		if self.out < self.seek:
			raise RuntimeError(f"media out ({self.out}) is before seek ({self.seek})")

	#============================
	def audio_duration(self, index: int):
		"""
		Duration of audio track `index`, from the separate audio file
		when one is attached.
		"""
		if self.audio != "" and os.path.isfile(self.audio):
			if self.probe_audio is not None:
				stream = self.probe_audio.audio_stream(index)
				if stream is not None and stream.duration_seconds() is not None:
					return stream.duration_seconds()
			if self.duration_audio > 0:
				return self.duration_audio
			return None
		if self.probe is None:
			return None
		stream = self.probe.audio_stream(index)
		if stream is None:
			return None
		return stream.duration_seconds()

	#============================
	def video_duration(self):
		if self.probe is None:
			return None
		stream = self.probe.first_video()
		if stream is None:
			return None
		return stream.duration_seconds()
