#!/usr/bin/env python3

import os
import enum
import yaml
from castgraphlib.core import utils

#============================================

class OutputMode(enum.Enum):
	DESKTOP = 'desktop'
	HLS = 'hls'
	NULL = 'null'
	STREAM = 'stream'

	#============================
	@classmethod
	def parse(cls, value) -> 'OutputMode':
		if isinstance(value, cls):
			return value
		if not isinstance(value, str):
			raise RuntimeError("out.mode must be a string")
		try:
			return cls(value.strip().lower())
		except ValueError:
			names = ', '.join(mode.value for mode in cls)
			raise RuntimeError(f"out.mode must be one of: {names}") from None

#============================================

class GeneralConfig():
	def __init__(self):
		self.stop_threshold = 11.0
		self.generate = False

#============================================

class PlaylistConfig():
	def __init__(self):
		self.day_start = "00:00:00"
		self.start_sec = 0.0
		self.length = "24:00:00"
		self.length_sec = 86400.0

#============================================

class ProcessingConfig():
	def __init__(self):
		self.width = 1024
		self.height = 576
		self.aspect = 1.778
		self.fps = 25.0
		self.add_logo = False
		self.logo = ""
		self.logo_opacity = 0.7
		self.logo_filter = "overlay=W-w-12:12"
		self.add_loudnorm = False
		self.loudnorm_ingest = False
		self.loud_i = -18.0
		self.loud_tp = -1.5
		self.loud_lra = 11.0
		self.volume = 1.0
		self.audio_tracks = 1
		self.audio_track_index = -1
		self.custom_filter = ""

#============================================

class IngestConfig():
	def __init__(self):
		self.custom_filter = ""

#============================================

class TextConfig():
	def __init__(self):
		self.add_text = False
		self.text_from_filename = False
		self.fontfile = ""
		self.style = "x=(w-tw)/2:y=(h-line_h)*0.9:fontsize=24:fontcolor=#ffffff:box=1:boxcolor=#000000:boxborderw=4"
		self.regex = r"^.+[/\\](.*)(.mp4|.mkv)$"
		self.zmq_stream_socket = None
		self.zmq_server_socket = None

#============================================

class OutputConfig():
	def __init__(self):
		self.mode = OutputMode.DESKTOP

#============================================

class PlayoutConfig():
	def __init__(self):
		self.config_file = None
		self.general = GeneralConfig()
		self.playlist = PlaylistConfig()
		self.processing = ProcessingConfig()
		self.ingest = IngestConfig()
		self.text = TextConfig()
		self.out = OutputConfig()

#============================================

class ConfigLoader():
	def __init__(self, yaml_file: str):
		self.yaml_file = yaml_file

	#============================
	def load(self) -> PlayoutConfig:
		data = self._load_yaml()
		return self.from_dict(data)

	#============================
	def from_dict(self, data: dict) -> PlayoutConfig:
		config = PlayoutConfig()
		config.config_file = self.yaml_file
		self._parse_general(config.general, self._section(data, 'general'))
		self._parse_playlist(config.playlist, self._section(data, 'playlist'))
		self._parse_processing(config.processing, self._section(data, 'processing'))
		self._parse_ingest(config.ingest, self._section(data, 'ingest'))
		self._parse_text(config.text, self._section(data, 'text'))
		self._parse_out(config.out, self._section(data, 'out'))
		return config

	#============================
	def _load_yaml(self) -> dict:
		if not os.path.isfile(self.yaml_file):
			raise RuntimeError(f"config file not found: {self.yaml_file}")
		file_size = os.path.getsize(self.yaml_file)
		if file_size > 10 ** 7:
			raise RuntimeError("yaml file is larger than 10MB")
		with open(self.yaml_file, 'r') as data_file:
			data = yaml.safe_load(data_file)
		if data is None:
			data = {}
		if not isinstance(data, dict):
			raise RuntimeError("config yaml must be a mapping at the top level")
		return data

	#============================
	def _section(self, data: dict, key: str) -> dict:
		section = data.get(key)
		if section is None:
			return {}
		if not isinstance(section, dict):
			raise RuntimeError(f"{key} must be a mapping")
		return section

	#============================
	def _parse_general(self, general: GeneralConfig, section: dict) -> None:
		general.stop_threshold = float(section.get('stop_threshold', general.stop_threshold))
		general.generate = bool(section.get('generate', general.generate))

	#============================
	def _parse_playlist(self, playlist: PlaylistConfig, section: dict) -> None:
		day_start = section.get('day_start', playlist.day_start)
		length = section.get('length', playlist.length)
		playlist.day_start = str(day_start)
		playlist.start_sec = float(utils.parse_timecode(day_start))
		playlist.length = str(length)
		playlist.length_sec = float(utils.parse_timecode(length))
		if playlist.start_sec < 0 or playlist.start_sec >= 86400:
			raise RuntimeError("playlist.day_start must be within one day")

	#============================
	def _parse_processing(self, processing: ProcessingConfig, section: dict) -> None:
		processing.width = int(section.get('width', processing.width))
		processing.height = int(section.get('height', processing.height))
		if processing.width <= 0 or processing.height <= 0:
			raise RuntimeError("processing.width and processing.height must be positive")
		aspect = section.get('aspect')
		if aspect is None:
			aspect = processing.width / processing.height
		processing.aspect = float(aspect)
		processing.fps = float(utils.parse_fps(section.get('fps', 25)))
		if processing.fps <= 0:
			raise RuntimeError("processing.fps must be positive")
		processing.add_logo = bool(section.get('add_logo', processing.add_logo))
		processing.logo = str(section.get('logo') or "")
		processing.logo_opacity = float(section.get('logo_opacity', processing.logo_opacity))
		processing.logo_filter = str(section.get('logo_filter', processing.logo_filter))
		processing.add_loudnorm = bool(section.get('add_loudnorm', processing.add_loudnorm))
		processing.loudnorm_ingest = bool(
			section.get('loudnorm_ingest', processing.loudnorm_ingest))
		processing.loud_i = float(section.get('loud_i', processing.loud_i))
		processing.loud_tp = float(section.get('loud_tp', processing.loud_tp))
		processing.loud_lra = float(section.get('loud_lra', processing.loud_lra))
		processing.volume = float(section.get('volume', processing.volume))
		processing.audio_tracks = int(section.get('audio_tracks', processing.audio_tracks))
		if processing.audio_tracks < 0:
			raise RuntimeError("processing.audio_tracks must not be negative")
		processing.audio_track_index = int(
			section.get('audio_track_index', processing.audio_track_index))
		processing.custom_filter = str(section.get('custom_filter') or "")

	#============================
	def _parse_ingest(self, ingest: IngestConfig, section: dict) -> None:
		ingest.custom_filter = str(section.get('custom_filter') or "")

	#============================
	def _parse_text(self, text: TextConfig, section: dict) -> None:
		text.add_text = bool(section.get('add_text', text.add_text))
		text.text_from_filename = bool(
			section.get('text_from_filename', text.text_from_filename))
		text.fontfile = str(section.get('fontfile') or "")
		text.style = str(section.get('style', text.style))
		text.regex = str(section.get('regex', text.regex))
		text.zmq_stream_socket = section.get('zmq_stream_socket')
		text.zmq_server_socket = section.get('zmq_server_socket')

	#============================
	def _parse_out(self, out: OutputConfig, section: dict) -> None:
		out.mode = OutputMode.parse(section.get('mode', out.mode.value))
