"""
Pytest coverage for claplib.core.validator schema checks.
"""

# Standard Library
import copy
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from claplib.core import validator
from claplib.core.errors import MissingOrUnsupportedHeaderError
from claplib.core.errors import SchemaValidationError

#============================================

VALID_DOCUMENT = {
	'format': 'clap0',
	'meta': {
		'title': "Validator",
		'description': "",
		'synopsis': "",
		'bpm': 90,
		'frameRate': 24,
		'tags': ['a', 'a'],
		'width': 640,
		'height': 640,
		'imageRatio': 'square',
		'isLoop': False,
		'isInteractive': True,
	},
	'segments': [
		{
			'track': 0,
			'startTimeInMs': 0,
			'endTimeInMs': 1000,
			'category': 'dialogue',
			'prompt': "hello",
			'label': "line 1",
			'outputType': 'audio',
		},
		{
			'track': 2,
			'startTimeInMs': 500,
			'endTimeInMs': 900,
			'category': 'camera',
			'outputType': 'text',
		},
	],
}

#============================================

def _document() -> dict:
	return copy.deepcopy(VALID_DOCUMENT)

#============================================

def test_valid_document_passes() -> None:
	"""
	Ensure the reference document validates without error.
	"""
	validator.validate_document(_document())

#============================================

def test_minimal_document_passes() -> None:
	"""
	Ensure meta and segments are optional.
	"""
	validator.validate_document({'format': 'clap0'})
	validator.validate_document({'format': 'clap0', 'meta': None, 'segments': None})

#============================================

@pytest.mark.parametrize("marker", [None, "clap1", "CLAP0", 0, ["clap0"]])
def test_unsupported_format_marker(marker) -> None:
	"""
	Ensure unknown markers are rejected as header errors.
	"""
	document = _document()
	document['format'] = marker
	with pytest.raises(MissingOrUnsupportedHeaderError):
		validator.validate_document(document)

#============================================

def test_header_checked_before_fields() -> None:
	"""
	Ensure a missing header wins over broken fields.
	"""
	document = _document()
	del document['format']
	document['meta']['width'] = "wide"
	with pytest.raises(MissingOrUnsupportedHeaderError):
		validator.validate_document(document)

#============================================

@pytest.mark.parametrize(("field", "value"), [
	('title', 12),
	('bpm', 0),
	('bpm', True),
	('frameRate', -1),
	('width', 1.5),
	('height', "1080"),
	('tags', "single"),
	('tags', ['ok', 3]),
	('imageRatio', 'panorama'),
	('isLoop', "yes"),
	('isInteractive', 1),
])
def test_bad_meta_field(field: str, value) -> None:
	"""
	Ensure each bad meta field is named in the error.
	"""
	document = _document()
	document['meta'][field] = value
	with pytest.raises(SchemaValidationError) as excinfo:
		validator.validate_document(document)
	assert excinfo.value.field == f"meta.{field}"
	assert excinfo.value.segment_index is None

#============================================

def test_meta_must_be_mapping() -> None:
	"""
	Ensure a non-mapping meta section is rejected.
	"""
	document = _document()
	document['meta'] = ['title']
	with pytest.raises(SchemaValidationError) as excinfo:
		validator.validate_document(document)
	assert excinfo.value.field == 'meta'

#============================================

@pytest.mark.parametrize("field", ['track', 'startTimeInMs', 'endTimeInMs',
	'category', 'outputType'])
def test_missing_segment_field(field: str) -> None:
	"""
	Ensure required segment fields report their index and name.
	"""
	document = _document()
	del document['segments'][1][field]
	with pytest.raises(SchemaValidationError) as excinfo:
		validator.validate_document(document)
	assert excinfo.value.segment_index == 1
	assert excinfo.value.field == field

#============================================

@pytest.mark.parametrize(("start", "end"), [(100, 100), (200, 100), (-5, 100)])
def test_bad_time_range(start: int, end: int) -> None:
	"""
	Ensure start must be non-negative and before end.
	"""
	document = _document()
	document['segments'][0]['startTimeInMs'] = start
	document['segments'][0]['endTimeInMs'] = end
	with pytest.raises(SchemaValidationError) as excinfo:
		validator.validate_document(document)
	assert excinfo.value.segment_index == 0

#============================================

@pytest.mark.parametrize(("field", "value"), [
	('track', -1),
	('track', "0"),
	('startTimeInMs', 1.0),
	('category', 'podcast'),
	('outputType', 'hologram'),
	('prompt', ['text']),
	('label', 7),
])
def test_bad_segment_field(field: str, value) -> None:
	"""
	Ensure bad segment values name the field and index.
	"""
	document = _document()
	document['segments'][1][field] = value
	with pytest.raises(SchemaValidationError) as excinfo:
		validator.validate_document(document)
	assert excinfo.value.segment_index == 1
	assert excinfo.value.field == field
	assert "segments[1]" in str(excinfo.value)

#============================================

def test_segments_must_be_sequence() -> None:
	"""
	Ensure segments given as a mapping are rejected.
	"""
	document = _document()
	document['segments'] = {'track': 0}
	with pytest.raises(SchemaValidationError):
		validator.validate_document(document)
	document['segments'] = ["not a mapping"]
	with pytest.raises(SchemaValidationError) as excinfo:
		validator.validate_document(document)
	assert excinfo.value.segment_index == 0
