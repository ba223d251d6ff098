#!/usr/bin/env python3

import os
import re
import threading
from castgraphlib.core.config import OutputMode

#============================================

# zmq commands address the overlay as drawtext@dyntext, on every item
DYNTEXT_LABEL = 'dyntext'

#============================================

class TextOverlayRegistry():
	"""
	Shared state of the dynamic text overlay.

	Holds the drawtext parameters last sent over zmq, so a freshly built
	filter graph shows the same message. One registry may be shared by
	concurrent filter builds; every method takes the internal lock.
	"""
	def __init__(self):
		self._lock = threading.Lock()
		self._fragments = []

	#============================
	def store(self, params: str) -> None:
		with self._lock:
			self._fragments = [params] + [f for f in self._fragments if f != params]

	#============================
	def find(self, keyword: str):
		with self._lock:
			for fragment in self._fragments:
				if keyword in fragment:
					return fragment
		return None

	#============================
	def clear(self) -> None:
		with self._lock:
			self._fragments = []

#============================================

def escape_text(text: str) -> str:
	text = text.replace("'", "'\\\\\\''")
	text = text.replace('%', '\\\\\\%')
	text = text.replace(':', '\\:')
	return text

#============================================

def _font_option(config) -> str:
	fontfile = config.text.fontfile
	if fontfile and os.path.isfile(fontfile):
		return f":fontfile='{fontfile}'"
	return ''

#============================================

def _text_from_source(config, source: str) -> str:
	match = re.search(config.text.regex, source)
	if match is None or match.lastindex is None:
		return source
	return match.group(1)

#============================================

def filter_node(config, node=None, registry: TextOverlayRegistry = None) -> str:
	"""
	drawtext operator for lower thirds.

	Static text is taken from the file name of the node; otherwise a zmq
	receiver is chained in front of a named drawtext instance so the text
	can be changed while playing.
	"""
	font = _font_option(config)
	if config.text.text_from_filename and node is not None:
		text = escape_text(_text_from_source(config, node.source))
		return f"drawtext=text='{text}':{config.text.style}{font}"
	if config.out.mode == OutputMode.HLS:
		socket = config.text.zmq_server_socket
	else:
		socket = config.text.zmq_stream_socket
	if not socket:
		return ''
	params = f"text=''{font}"
	if registry is not None:
		stored = registry.find('text')
		if stored is not None:
			params = stored
	address = str(socket).replace(':', '\\:')
	return f"zmq=b=tcp\\\\://'{address}',drawtext@{DYNTEXT_LABEL}={params}"
