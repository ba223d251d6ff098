#!/usr/bin/env python3

"""
Filter graph builder.

Every (kind, track) pair owns one ChainSegment. Segments are opened on the
first fragment addressed to a new track, closed with their output label when
the next track of the same kind starts, and rendered in creation order into
one -filter_complex program.
"""

import enum

#============================================

class FilterKind(enum.Enum):
	AUDIO = 'a'
	VIDEO = 'v'

	def __str__(self) -> str:
		return self.value

#============================================

class FragmentKind(enum.Enum):
	# plain operator, joined to the chain with a comma
	OPERATOR = 'operator'
	# generator that needs no input selector (aevalsrc, movie)
	SOURCE = 'source'
	# carries its own linkage (";" or "[" prefixed), spliced verbatim
	CONTINUATION = 'continuation'

#============================================

class Fragment():
	def __init__(self, text: str, kind: FragmentKind = FragmentKind.OPERATOR):
		if not isinstance(text, str) or text == '':
			raise RuntimeError("filter fragment must be a non-empty string")
		self.text = text
		self.kind = kind

	def __repr__(self) -> str:
		return f"Fragment({self.text!r}, {self.kind.name})"

#============================================

def operator(text: str) -> Fragment:
	return Fragment(text, FragmentKind.OPERATOR)

#============================================

def source(text: str) -> Fragment:
	return Fragment(text, FragmentKind.SOURCE)

#============================================

def continuation(text: str) -> Fragment:
	return Fragment(text, FragmentKind.CONTINUATION)

#============================================

class ChainSegment():
	def __init__(self, kind: FilterKind, track: int, position: int):
		self.kind = kind
		self.track = track
		self.position = position
		self.fragments = []
		self.is_open = False
		self.is_closed = False

	#============================
	@property
	def label(self) -> str:
		return f"{self.kind}out{self.track}"

	#============================
	@property
	def selector(self) -> str:
		return f"[{self.position}:{self.kind}:{self.track}]"

	#============================
	def open(self, fragment: Fragment) -> None:
		if self.is_open or self.is_closed:
			raise RuntimeError(f"chain segment {self.label} was already opened")
		if fragment.kind == FragmentKind.CONTINUATION:
			raise RuntimeError(
				f"chain segment {self.label} cannot start with a linked fragment")
		self.fragments.append(fragment)
		self.is_open = True

	#============================
	def append(self, fragment: Fragment) -> None:
		if not self.is_open:
			raise RuntimeError(f"chain segment {self.label} is not open")
		if fragment.kind == FragmentKind.SOURCE:
			raise RuntimeError(
				f"source fragment must start a new chain, not {self.label}")
		self.fragments.append(fragment)

	#============================
	def close(self) -> None:
		if not self.is_open:
			raise RuntimeError(f"chain segment {self.label} is not open")
		self.is_open = False
		self.is_closed = True

	#============================
	def render(self) -> str:
		text = ''
		first = self.fragments[0]
		if first.kind != FragmentKind.SOURCE:
			text += self.selector
		text += first.text
		for fragment in self.fragments[1:]:
			if fragment.kind == FragmentKind.CONTINUATION:
				text += fragment.text
			else:
				text += f",{fragment.text}"
		if self.is_closed:
			text += f"[{self.label}]"
		return text

#============================================

class FilterGraph():
	def __init__(self, audio_position: int = 0, video_position: int = 0):
		self.audio_position = audio_position
		self.video_position = video_position
		self.audio_last = -1
		self.video_last = -1
		self.audio_map = []
		self.video_map = []
		self.output_map = []
		self.segments = {}
		self.order = []

	#============================
	def add_filter(self, fragment, track_nr: int, kind: FilterKind) -> None:
		if isinstance(fragment, str):
			fragment = Fragment(fragment)
		last = self._last_track(kind)
		if last != track_nr:
			if last != -1:
				self.segments[(kind, last)].close()
			self._open_segment(fragment, track_nr, kind)
			return
		self.segments[(kind, track_nr)].append(fragment)

	#============================
	def _open_segment(self, fragment: Fragment, track_nr: int,
		kind: FilterKind) -> None:
		key = (kind, track_nr)
		if key in self.segments:
			raise RuntimeError(f"track {kind}:{track_nr} already has a closed chain")
		if kind == FilterKind.AUDIO:
			position = self.audio_position
		else:
			position = self.video_position
		segment = ChainSegment(kind, track_nr, position)
		segment.open(fragment)
		self.segments[key] = segment
		self.order.append(key)
		label = f"[{segment.label}]"
		if kind == FilterKind.AUDIO:
			self.audio_map.append(label)
			self.audio_last = track_nr
		else:
			self.video_map.append(label)
			self.video_last = track_nr
		self.output_map.extend(['-map', label])

	#============================
	def _last_track(self, kind: FilterKind) -> int:
		if kind == FilterKind.AUDIO:
			return self.audio_last
		return self.video_last

	#============================
	def close_chains(self) -> None:
		for key in self.order:
			segment = self.segments[key]
			if segment.is_open:
				segment.close()

	#============================
	def chain(self, kind: FilterKind) -> str:
		parts = []
		for key in self.order:
			if key[0] == kind:
				parts.append(self.segments[key].render())
		return ';'.join(parts)

	#============================
	@property
	def audio_chain(self) -> str:
		return self.chain(FilterKind.AUDIO)

	#============================
	@property
	def video_chain(self) -> str:
		return self.chain(FilterKind.VIDEO)

	#============================
	def labels(self, kind: FilterKind) -> list:
		if kind == FilterKind.AUDIO:
			return list(self.audio_map)
		return list(self.video_map)

	#============================
	def build_final_chain(self) -> list:
		"""
		Arguments for the encoder: the filter program and its -map pairs.

		A kind without any chain is mapped straight from its input.
		"""
		parts = []
		video_chain = self.video_chain
		audio_chain = self.audio_chain
		if video_chain != '':
			parts.append(video_chain)
		if audio_chain != '':
			parts.append(audio_chain)
		cmd = []
		if len(parts) > 0:
			cmd.extend(['-filter_complex', ';'.join(parts)])
		if len(self.video_map) == 0:
			cmd.extend(['-map', f"{self.video_position}:v"])
		cmd.extend(self.output_map)
		if len(self.audio_map) == 0:
			cmd.extend(['-map', f"{self.audio_position}:a"])
		return cmd
