#!/usr/bin/env python3

"""
Tests for the filter graph chain builder.
"""

# Standard Library
import os
import sys
import unittest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from castgraphlib.filters import chain as chainlib
from castgraphlib.filters.chain import FilterGraph, FilterKind

#============================================

class ChainBuilderTest(unittest.TestCase):
	#============================================
	def test_same_track_continues_chain(self) -> None:
		"""Ensure repeated calls on one track only add commas."""
		graph = FilterGraph()
		graph.add_filter("yadif=0:-1:0", 0, FilterKind.VIDEO)
		graph.add_filter("fps=25", 0, FilterKind.VIDEO)
		self.assertEqual(graph.video_chain, "[0:v:0]yadif=0:-1:0,fps=25")
		self.assertEqual(graph.video_map, ["[vout0]"])
		graph.close_chains()
		self.assertEqual(graph.video_chain, "[0:v:0]yadif=0:-1:0,fps=25[vout0]")

	#============================================
	def test_new_track_closes_previous(self) -> None:
		"""Ensure a new track closes the open segment exactly once."""
		graph = FilterGraph()
		graph.add_filter("anull", 0, FilterKind.AUDIO)
		graph.add_filter("volume=0.5", 0, FilterKind.AUDIO)
		graph.add_filter("anull", 1, FilterKind.AUDIO)
		self.assertEqual(graph.audio_chain,
			"[0:a:0]anull,volume=0.5[aout0];[0:a:1]anull")
		graph.close_chains()
		self.assertEqual(graph.audio_chain,
			"[0:a:0]anull,volume=0.5[aout0];[0:a:1]anull[aout1]")
		self.assertEqual(graph.audio_map, ["[aout0]", "[aout1]"])

	#============================================
	def test_source_fragment_has_no_selector(self) -> None:
		"""Ensure generators open a chain without an input selector."""
		graph = FilterGraph()
		graph.add_filter(chainlib.source("aevalsrc=0:duration=5"), 0, FilterKind.AUDIO)
		graph.add_filter("anull", 0, FilterKind.AUDIO)
		graph.close_chains()
		self.assertEqual(graph.audio_chain, "aevalsrc=0:duration=5,anull[aout0]")

	#============================================
	def test_continuation_spliced_verbatim(self) -> None:
		"""Ensure linked fragments are not joined with a comma."""
		graph = FilterGraph()
		graph.add_filter("null", 0, FilterKind.VIDEO)
		graph.add_filter(chainlib.continuation("[v];movie=logo.png[l];[v][l]overlay"),
			0, FilterKind.VIDEO)
		graph.close_chains()
		self.assertEqual(graph.video_chain,
			"[0:v:0]null[v];movie=logo.png[l];[v][l]overlay[vout0]")

	#============================================
	def test_continuation_cannot_open_chain(self) -> None:
		"""Ensure a linked fragment needs a running chain."""
		graph = FilterGraph()
		with self.assertRaises(RuntimeError):
			graph.add_filter(chainlib.continuation("[v];movie=logo.png"),
				0, FilterKind.VIDEO)

	#============================================
	def test_source_cannot_extend_chain(self) -> None:
		"""Ensure a generator is only accepted as the first fragment."""
		graph = FilterGraph()
		graph.add_filter("anull", 0, FilterKind.AUDIO)
		with self.assertRaises(RuntimeError):
			graph.add_filter(chainlib.source("aevalsrc=0"), 0, FilterKind.AUDIO)

	#============================================
	def test_reopening_closed_track_raises(self) -> None:
		"""Ensure output labels cannot be produced twice."""
		graph = FilterGraph()
		graph.add_filter("anull", 0, FilterKind.AUDIO)
		graph.add_filter("anull", 1, FilterKind.AUDIO)
		with self.assertRaises(RuntimeError):
			graph.add_filter("volume=2", 0, FilterKind.AUDIO)

	#============================================
	def test_empty_fragment_rejected(self) -> None:
		"""Ensure empty fragments never reach the chain."""
		graph = FilterGraph()
		with self.assertRaises(RuntimeError):
			graph.add_filter("", 0, FilterKind.VIDEO)

	#============================================
	def test_audio_position_selects_second_input(self) -> None:
		"""Ensure a separate audio input is read from index 1."""
		graph = FilterGraph(audio_position=1)
		graph.add_filter("anull", 0, FilterKind.AUDIO)
		graph.close_chains()
		self.assertEqual(graph.audio_chain, "[1:a:0]anull[aout0]")

	#============================================
	def test_output_map_in_creation_order(self) -> None:
		"""Ensure -map pairs follow the order segments were opened."""
		graph = FilterGraph()
		graph.add_filter("null", 0, FilterKind.VIDEO)
		graph.add_filter("anull", 0, FilterKind.AUDIO)
		graph.add_filter("anull", 1, FilterKind.AUDIO)
		graph.close_chains()
		cmd = graph.build_final_chain()
		self.assertEqual(cmd, [
			'-filter_complex',
			"[0:v:0]null[vout0];[0:a:0]anull[aout0];[0:a:1]anull[aout1]",
			'-map', '[vout0]', '-map', '[aout0]', '-map', '[aout1]',
		])

	#============================================
	def test_map_labels_match_opened_labels(self) -> None:
		"""Ensure every mapped label is produced once by the program."""
		graph = FilterGraph()
		graph.add_filter("null", 0, FilterKind.VIDEO)
		for nr in range(3):
			graph.add_filter("anull", nr, FilterKind.AUDIO)
		graph.close_chains()
		cmd = graph.build_final_chain()
		program = cmd[1]
		mapped = cmd[3::2]
		self.assertEqual(mapped,
			graph.labels(FilterKind.VIDEO) + graph.labels(FilterKind.AUDIO))
		self.assertEqual(len(mapped), len(set(mapped)))
		for label in mapped:
			self.assertEqual(program.count(label), 1)

	#============================================
	def test_empty_graph_uses_passthrough_maps(self) -> None:
		"""Ensure no -filter_complex is emitted without filters."""
		self.assertEqual(FilterGraph().build_final_chain(),
			['-map', '0:v', '-map', '0:a'])
		self.assertEqual(FilterGraph(audio_position=1).build_final_chain(),
			['-map', '0:v', '-map', '1:a'])

	#============================================
	def test_missing_kind_is_passed_through(self) -> None:
		"""Ensure a kind without chain is mapped from its input."""
		graph = FilterGraph(audio_position=1)
		graph.add_filter("anull", 0, FilterKind.AUDIO)
		graph.close_chains()
		self.assertEqual(graph.build_final_chain(), [
			'-filter_complex', "[1:a:0]anull[aout0]",
			'-map', '0:v', '-map', '[aout0]',
		])
		graph = FilterGraph(audio_position=1)
		graph.add_filter("null", 0, FilterKind.VIDEO)
		graph.close_chains()
		self.assertEqual(graph.build_final_chain(), [
			'-filter_complex', "[0:v:0]null[vout0]",
			'-map', '[vout0]', '-map', '1:a',
		])

	#============================================
	def test_segment_transitions(self) -> None:
		"""Ensure segments follow open, append, close."""
		segment = chainlib.ChainSegment(FilterKind.VIDEO, 0, 0)
		with self.assertRaises(RuntimeError):
			segment.append(chainlib.operator("null"))
		segment.open(chainlib.operator("null"))
		segment.append(chainlib.operator("fps=25"))
		segment.close()
		with self.assertRaises(RuntimeError):
			segment.append(chainlib.operator("fps=30"))
		with self.assertRaises(RuntimeError):
			segment.close()
		self.assertEqual(segment.render(), "[0:v:0]null,fps=25[vout0]")

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
