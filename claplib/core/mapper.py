#!/usr/bin/env python3

"""
Convert between parsed YAML documents and typed CLAP values.

Decoding assumes validator.validate_document already accepted the document.
"""

from claplib.core.schema import ClapFormat
from claplib.core.schema import ClapImageRatio
from claplib.core.schema import ClapMeta
from claplib.core.schema import ClapOutputType
from claplib.core.schema import ClapSegment
from claplib.core.schema import ClapSegmentCategory

#============================================

def meta_to_document(meta: ClapMeta) -> dict:
	document = {
		'title': meta.title,
		'description': meta.description,
		'synopsis': meta.synopsis,
	}
	if meta.bpm is not None:
		document['bpm'] = meta.bpm
	document['frameRate'] = meta.frame_rate
	document['tags'] = list(meta.tags)
	document['width'] = meta.width
	document['height'] = meta.height
	document['imageRatio'] = meta.image_ratio.value
	document['isLoop'] = meta.is_loop
	document['isInteractive'] = meta.is_interactive
	return document

#============================================

def segment_to_document(segment: ClapSegment) -> dict:
	return {
		'track': segment.track,
		'startTimeInMs': segment.start_time_in_ms,
		'endTimeInMs': segment.end_time_in_ms,
		'category': segment.category.value,
		'prompt': segment.prompt,
		'label': segment.label,
		'outputType': segment.output_type.value,
	}

#============================================

def document_from_clap(clap) -> dict:
	"""
	Build the YAML-ready mapping for a ClapFile.
	"""
	return {
		'format': clap.format.value,
		'meta': meta_to_document(clap.meta),
		'segments': [segment_to_document(segment) for segment in clap.segments],
	}

#============================================

def meta_from_document(meta: dict) -> ClapMeta:
	if meta is None:
		return ClapMeta()
	defaults = ClapMeta()
	image_ratio = defaults.image_ratio
	if meta.get('imageRatio') is not None:
		image_ratio = ClapImageRatio.from_text(meta['imageRatio'])

	def pick(key: str, default):
		value = meta.get(key)
		if value is None:
			return default
		return value

	return ClapMeta(
		title=pick('title', defaults.title),
		description=pick('description', defaults.description),
		synopsis=pick('synopsis', defaults.synopsis),
		bpm=meta.get('bpm'),
		frame_rate=pick('frameRate', defaults.frame_rate),
		tags=tuple(pick('tags', defaults.tags)),
		width=pick('width', defaults.width),
		height=pick('height', defaults.height),
		image_ratio=image_ratio,
		is_loop=pick('isLoop', defaults.is_loop),
		is_interactive=pick('isInteractive', defaults.is_interactive),
	)

#============================================

def segment_from_document(segment: dict) -> ClapSegment:
	return ClapSegment(
		track=segment['track'],
		start_time_in_ms=segment['startTimeInMs'],
		end_time_in_ms=segment['endTimeInMs'],
		category=ClapSegmentCategory.from_text(segment['category']),
		output_type=ClapOutputType.from_text(segment['outputType']),
		prompt=segment.get('prompt') or "",
		label=segment.get('label') or "",
	)

#============================================

def parts_from_document(document: dict) -> tuple:
	"""
	Extract (format, meta, segments) from a validated document.
	"""
	clap_format = ClapFormat.from_text(document['format'])
	meta = meta_from_document(document.get('meta'))
	segments = tuple(segment_from_document(segment)
		for segment in document.get('segments') or [])
	return (clap_format, meta, segments)
