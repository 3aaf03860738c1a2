"""
Pytest coverage for document mapping and enum text conversion.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from claplib.core import mapper
from claplib.core.clapfile import ClapFile
from claplib.core.errors import MissingOrUnsupportedHeaderError
from claplib.core.errors import SchemaValidationError
from claplib.core.schema import ClapFormat
from claplib.core.schema import ClapImageRatio
from claplib.core.schema import ClapMeta
from claplib.core.schema import ClapOutputType
from claplib.core.schema import ClapSegment
from claplib.core.schema import ClapSegmentCategory

#============================================

@pytest.mark.parametrize("enum_class", [ClapImageRatio, ClapSegmentCategory,
	ClapOutputType, ClapFormat])
def test_enum_text_is_bidirectional(enum_class) -> None:
	"""
	Ensure every member maps to one string and back.
	"""
	values = [member.value for member in enum_class]
	assert len(values) == len(set(values))
	for member in enum_class:
		assert enum_class.from_text(member.value) is member
		assert str(member) == member.value

#============================================

def test_unknown_enum_text_raises() -> None:
	"""
	Ensure unknown strings fail instead of falling back to a default.
	"""
	with pytest.raises(SchemaValidationError) as excinfo:
		ClapSegmentCategory.from_text("podcast", field='category', segment_index=3)
	assert excinfo.value.segment_index == 3
	with pytest.raises(MissingOrUnsupportedHeaderError):
		ClapFormat.from_text("clap-9")

#============================================

def test_document_from_clap_uses_wire_names() -> None:
	"""
	Ensure encoded documents use camelCase keys and enum strings.
	"""
	segment = ClapSegment(track=3, start_time_in_ms=10, end_time_in_ms=20,
		category=ClapSegmentCategory.WEATHER, output_type=ClapOutputType.IMAGE,
		prompt="rain", label="storm")
	clap = ClapFile.create(meta=ClapMeta(title="Wire", tags=["x"]),
		segments=[segment])
	document = mapper.document_from_clap(clap)
	assert document['format'] == 'clap0'
	assert list(document.keys()) == ['format', 'meta', 'segments']
	assert document['meta']['frameRate'] == 24
	assert document['meta']['imageRatio'] == 'landscape'
	assert document['meta']['tags'] == ['x']
	assert 'bpm' not in document['meta']
	assert document['segments'] == [{
		'track': 3,
		'startTimeInMs': 10,
		'endTimeInMs': 20,
		'category': 'weather',
		'prompt': "rain",
		'label': "storm",
		'outputType': 'image',
	}]

#============================================

def test_parts_from_document_applies_defaults() -> None:
	"""
	Ensure absent optional fields take their defaults.
	"""
	document = {
		'format': 'clap0',
		'meta': {'title': "Defaults", 'bpm': 100},
		'segments': [
			{'track': 1, 'startTimeInMs': 0, 'endTimeInMs': 5,
				'category': 'sound', 'outputType': 'audio'},
		],
	}
	(clap_format, meta, segments) = mapper.parts_from_document(document)
	assert clap_format == ClapFormat.CLAP0
	assert meta == ClapMeta(title="Defaults", bpm=100)
	assert segments[0].prompt == ""
	assert segments[0].label == ""
	assert segments[0].category == ClapSegmentCategory.SOUND
	assert segments[0].duration_in_ms == 5

#============================================

def test_parts_from_document_without_sections() -> None:
	"""
	Ensure a header-only document maps to an empty project.
	"""
	(clap_format, meta, segments) = mapper.parts_from_document({'format': 'clap0'})
	assert clap_format == ClapFormat.CLAP0
	assert meta == ClapMeta()
	assert segments == ()

#============================================

def test_segment_order_preserved() -> None:
	"""
	Ensure unsorted and overlapping segments keep insertion order.
	"""
	segments = [
		ClapSegment(track=0, start_time_in_ms=900, end_time_in_ms=1000,
			category=ClapSegmentCategory.ACTION, output_type=ClapOutputType.VIDEO),
		ClapSegment(track=0, start_time_in_ms=0, end_time_in_ms=950,
			category=ClapSegmentCategory.ACTION, output_type=ClapOutputType.VIDEO),
		ClapSegment(track=5, start_time_in_ms=100, end_time_in_ms=200,
			category=ClapSegmentCategory.STYLE, output_type=ClapOutputType.TEXT),
	]
	clap = ClapFile.create(segments=segments)
	decoded = ClapFile.from_source(clap.to_data_uri())
	assert list(decoded.segments) == segments
