#!/usr/bin/env python3

from castgraphlib.filters.graph import filter_chains
from castgraphlib.filters.graph import ingest_filter
from castgraphlib.filters.graph import build_filters
from castgraphlib.filters.chain import FilterGraph
from castgraphlib.filters.chain import FilterKind
from castgraphlib.filters.text import TextOverlayRegistry

__all__ = [
	'filter_chains',
	'ingest_filter',
	'build_filters',
	'FilterGraph',
	'FilterKind',
	'TextOverlayRegistry',
]
