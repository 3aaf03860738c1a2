#!/usr/bin/env python3

"""
Schema checks for parsed CLAP documents and for typed ClapFile values.
"""

from claplib.core import mapper
from claplib.core.errors import MissingOrUnsupportedHeaderError
from claplib.core.errors import SchemaValidationError
from claplib.core.schema import ClapFormat
from claplib.core.schema import ClapImageRatio
from claplib.core.schema import ClapMeta
from claplib.core.schema import ClapOutputType
from claplib.core.schema import ClapSegment
from claplib.core.schema import ClapSegmentCategory

#============================================

META_TEXT_FIELDS = ('title', 'description', 'synopsis')
META_POSITIVE_INT_FIELDS = ('frameRate', 'width', 'height')
META_BOOL_FIELDS = ('isLoop', 'isInteractive')
SEGMENT_REQUIRED_FIELDS = ('track', 'startTimeInMs', 'endTimeInMs', 'category',
	'outputType')
SEGMENT_TEXT_FIELDS = ('prompt', 'label')

#============================================

def is_integer(value) -> bool:
	# yaml booleans are ints in python, they do not count here
	return isinstance(value, int) and not isinstance(value, bool)

#============================================

def check_format(document: dict) -> ClapFormat:
	"""
	Resolve the format marker at the document root.

	Raises:
		MissingOrUnsupportedHeaderError: marker absent or unknown.
	"""
	if 'format' not in document:
		raise MissingOrUnsupportedHeaderError("document has no format marker")
	return ClapFormat.from_text(document['format'])

#============================================

def check_meta(meta) -> None:
	if meta is None:
		return
	if not isinstance(meta, dict):
		raise SchemaValidationError("must be a mapping", field='meta')
	for name in META_TEXT_FIELDS:
		value = meta.get(name)
		if value is not None and not isinstance(value, str):
			raise SchemaValidationError("must be a string", field=f"meta.{name}")
	for name in META_POSITIVE_INT_FIELDS:
		value = meta.get(name)
		if value is None:
			continue
		if not is_integer(value) or value <= 0:
			raise SchemaValidationError("must be a positive integer",
				field=f"meta.{name}")
	bpm = meta.get('bpm')
	if bpm is not None and (not is_integer(bpm) or bpm <= 0):
		raise SchemaValidationError("must be a positive integer or absent",
			field='meta.bpm')
	for name in META_BOOL_FIELDS:
		value = meta.get(name)
		if value is not None and not isinstance(value, bool):
			raise SchemaValidationError("must be a boolean", field=f"meta.{name}")
	tags = meta.get('tags')
	if tags is not None:
		if not isinstance(tags, list):
			raise SchemaValidationError("must be a sequence of strings",
				field='meta.tags')
		for tag in tags:
			if not isinstance(tag, str):
				raise SchemaValidationError("must be a sequence of strings",
					field='meta.tags')
	image_ratio = meta.get('imageRatio')
	if image_ratio is not None:
		ClapImageRatio.from_text(image_ratio, field='meta.imageRatio')

#============================================

def check_time_range(start, end, index: int) -> None:
	if start < 0:
		raise SchemaValidationError("must be >= 0", field='startTimeInMs',
			segment_index=index)
	if start >= end:
		raise SchemaValidationError(
			f"start time {start} must be before end time {end}",
			field='endTimeInMs', segment_index=index)

#============================================

def check_segment(segment, index: int) -> None:
	if not isinstance(segment, dict):
		raise SchemaValidationError("must be a mapping", segment_index=index)
	for name in SEGMENT_REQUIRED_FIELDS:
		if segment.get(name) is None:
			raise SchemaValidationError("is required", field=name,
				segment_index=index)
	for name in ('track', 'startTimeInMs', 'endTimeInMs'):
		if not is_integer(segment[name]):
			raise SchemaValidationError("must be an integer", field=name,
				segment_index=index)
	if segment['track'] < 0:
		raise SchemaValidationError("must be >= 0", field='track',
			segment_index=index)
	check_time_range(segment['startTimeInMs'], segment['endTimeInMs'], index)
	ClapSegmentCategory.from_text(segment['category'], field='category',
		segment_index=index)
	ClapOutputType.from_text(segment['outputType'], field='outputType',
		segment_index=index)
	for name in SEGMENT_TEXT_FIELDS:
		value = segment.get(name)
		if value is not None and not isinstance(value, str):
			raise SchemaValidationError("must be a string", field=name,
				segment_index=index)

#============================================

def validate_document(document: dict) -> None:
	"""
	Check a parsed document before it is mapped to typed values.

	The header is checked first so a foreign document fails with a header
	error rather than a field error. Reports the first failure found.
	"""
	check_format(document)
	check_meta(document.get('meta'))
	segments = document.get('segments')
	if segments is None:
		return
	if not isinstance(segments, list):
		raise SchemaValidationError("must be a sequence", field='segments')
	for index, segment in enumerate(segments):
		check_segment(segment, index)

#============================================

def check_typed_segment(segment, index: int) -> None:
	if not isinstance(segment, ClapSegment):
		raise SchemaValidationError("must be a ClapSegment", segment_index=index)
	if not isinstance(segment.category, ClapSegmentCategory):
		raise SchemaValidationError("must be a ClapSegmentCategory",
			field='category', segment_index=index)
	if not isinstance(segment.output_type, ClapOutputType):
		raise SchemaValidationError("must be a ClapOutputType",
			field='outputType', segment_index=index)

#============================================

def check_no_null_fields(document: dict) -> None:
	# absent fields decode to defaults, so None would not round trip
	for (name, value) in document['meta'].items():
		if value is None:
			raise SchemaValidationError("must not be None", field=f"meta.{name}")
	for (index, segment) in enumerate(document['segments']):
		for (name, value) in segment.items():
			if value is None:
				raise SchemaValidationError("must not be None", field=name,
					segment_index=index)

#============================================

def validate_clap(clap) -> None:
	"""
	Check typed values handed to ClapFile.create.

	Enum members are checked on the typed values, then the encoded document
	goes through validate_document so that anything create() accepts also
	decodes back to an equal value.
	"""
	if not isinstance(clap.format, ClapFormat):
		raise MissingOrUnsupportedHeaderError(
			f"unsupported format marker: {clap.format!r}", found=clap.format)
	if not isinstance(clap.meta, ClapMeta):
		raise SchemaValidationError("must be a ClapMeta", field='meta')
	if not isinstance(clap.meta.image_ratio, ClapImageRatio):
		raise SchemaValidationError("must be a ClapImageRatio",
			field='meta.imageRatio')
	for (index, segment) in enumerate(clap.segments):
		check_typed_segment(segment, index)
	document = mapper.document_from_clap(clap)
	check_no_null_fields(document)
	validate_document(document)
