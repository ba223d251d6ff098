#!/usr/bin/env python3

"""
Print the ffmpeg filter arguments for one media item.
"""

# Standard Library
import argparse
import re
import shlex

# PIP3 modules
from rich.console import Console
from rich.text import Text

# local repo modules
from castgraphlib import filtergraphlib
from castgraphlib.core import schedule
from castgraphlib.core import utils
from castgraphlib.core.config import ConfigLoader
from castgraphlib.core.media import Media

#============================================

NORD_COLORS = {
	'foreground': "#D8DEE9",
	'command': "#ECEFF4",
	'flags': "#81A1C1",
	'numbers': "#B48EAD",
	'paths': "#A3BE8C",
	'strings': "#EBCB8B",
	'labels': "#88C0D0",
}

#============================================

def parse_args():
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="Playout filter graph builder")
	parser.add_argument('-c', '--config', dest='config_file', required=True,
		help='playout yaml config')
	parser.add_argument('-i', '--input', dest='source',
		help='media file to build the filter graph for')
	parser.add_argument('-a', '--audio', dest='audio_file',
		help='separate audio file for the media item')
	parser.add_argument('-s', '--seek', dest='seek', type=float, default=0.0,
		help='trim start in seconds')
	parser.add_argument('-e', '--out', dest='out', type=float,
		help='trim end in seconds')
	parser.add_argument('-b', '--begin', dest='begin',
		help='scheduled start as hh:mm:ss')
	parser.add_argument('--category', dest='category', default='',
		help='item category, e.g. advertisement')
	parser.add_argument('--custom-filter', dest='custom_filter', default='',
		help='per item custom filter')
	parser.add_argument('-l', '--live', dest='is_live', action='store_true',
		help='item is a live source')
	parser.add_argument('-g', '--ingest', dest='ingest', action='store_true',
		help='print the live ingest filter instead')
	parser.add_argument('-p', '--plain', dest='plain', action='store_true',
		help='print without colors')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='suppress warnings')
	args = parser.parse_args()
	if not args.ingest and args.source is None:
		parser.error("--input is required unless --ingest is given")
	return args

#============================================

def build_command_styles() -> list:
	return [
		(re.compile(r"(?<![\w\]])-[A-Za-z][A-Za-z0-9_]*"), NORD_COLORS['flags']),
		(re.compile(r"\b\d+\.\d+\b"), NORD_COLORS['numbers']),
		(re.compile(r"\b\d+\b(?!\.\d)"), NORD_COLORS['numbers']),
		(re.compile(r"\[[A-Za-z0-9:_]+\]"), NORD_COLORS['labels']),
		(re.compile(r"'[^']*'|\"[^\"]*\""), NORD_COLORS['strings']),
		(re.compile(r"(?:/|~|\./|\.\./)[^\s'\"`,;\[]+"), NORD_COLORS['paths']),
	]

#============================================

def highlight_command(command: str, styles: list = None):
	if command is None or command == "":
		return ""
	if styles is None:
		styles = build_command_styles()
	text = Text(command, style=f"bold {NORD_COLORS['command']}")
	for pattern, style in styles:
		for match in pattern.finditer(command):
			text.stylize(style, match.start(), match.end())
	return text

#============================================

def make_media(args) -> Media:
	node = Media(0, args.source, do_probe=True, seek=args.seek, out=args.out)
	if args.audio_file:
		node.set_audio(args.audio_file)
	node.category = args.category
	node.custom_filter = args.custom_filter
	node.is_live = args.is_live
	if args.begin is not None:
		node.begin = schedule.time_to_sec(args.begin)
	return node

#============================================

def main():
	args = parse_args()
	utils.set_quiet_mode(args.quiet)
	config = ConfigLoader(args.config_file).load()
	if args.ingest:
		cmd = filtergraphlib.ingest_filter(config)
	else:
		node = make_media(args)
		registry = filtergraphlib.TextOverlayRegistry()
		cmd = filtergraphlib.filter_chains(config, node, registry)
	command = shlex.join(cmd)
	if args.plain:
		print(command)
		return
	console = Console(highlight=False)
	console.print(highlight_command(command))


if __name__ == '__main__':
	main()
