#!/usr/bin/env python3

"""
Typed values for a CLAP project: format marker, metadata and segments.

Constructors take already-validated values; claplib.core.validator is the
single place where field types, enum membership and time ranges are checked.
"""

import dataclasses
import enum
from claplib.core.errors import MissingOrUnsupportedHeaderError
from claplib.core.errors import SchemaValidationError

#============================================

class _TextEnum(enum.Enum):
	"""Enum with exactly one canonical string per member."""

	@classmethod
	def from_text(cls, text, field: str = None, segment_index: int = None):
		if isinstance(text, str):
			for member in cls:
				if member.value == text:
					return member
		allowed = ", ".join(member.value for member in cls)
		raise SchemaValidationError(f"unknown value {text!r}, expected one of: {allowed}",
			field=field, segment_index=segment_index)

	def __str__(self) -> str:
		return self.value

#============================================

class ClapFormat(_TextEnum):
	CLAP0 = 'clap0'

	@classmethod
	def from_text(cls, text, field: str = None, segment_index: int = None):
		for member in cls:
			if member.value == text:
				return member
		raise MissingOrUnsupportedHeaderError(
			f"unsupported format marker: {text!r}", found=text)

#============================================

class ClapImageRatio(_TextEnum):
	LANDSCAPE = 'landscape'
	PORTRAIT = 'portrait'
	SQUARE = 'square'

#============================================

class ClapSegmentCategory(_TextEnum):
	SPLAT = 'splat'
	MESH = 'mesh'
	DEPTH = 'depth'
	EVENT = 'event'
	INTERFACE = 'interface'
	PHENOMENON = 'phenomenon'
	VIDEO = 'video'
	STORYBOARD = 'storyboard'
	TRANSITION = 'transition'
	CHARACTERS = 'characters'
	LOCATION = 'location'
	TIME = 'time'
	ERA = 'era'
	LIGHTING = 'lighting'
	WEATHER = 'weather'
	ACTION = 'action'
	MUSIC = 'music'
	SOUND = 'sound'
	DIALOGUE = 'dialogue'
	STYLE = 'style'
	CAMERA = 'camera'
	GENERIC = 'generic'

#============================================

class ClapOutputType(_TextEnum):
	TEXT = 'text'
	ANIMATION = 'animation'
	INTERFACE = 'interface'
	EVENT = 'event'
	PHENOMENON = 'phenomenon'
	TRANSITION = 'transition'
	IMAGE = 'image'
	VIDEO = 'video'
	AUDIO = 'audio'
	TABULAR = 'tabular'

#============================================

@dataclasses.dataclass(frozen=True)
class ClapMeta():
	title: str = ""
	description: str = ""
	synopsis: str = ""
	bpm: int = None
	frame_rate: int = 24
	tags: tuple = ()
	width: int = 1024
	height: int = 576
	image_ratio: ClapImageRatio = ClapImageRatio.LANDSCAPE
	is_loop: bool = False
	is_interactive: bool = False

	def __post_init__(self):
		# lists handed in by callers are frozen into tuples
		object.__setattr__(self, 'tags', tuple(self.tags))

#============================================

@dataclasses.dataclass(frozen=True)
class ClapSegment():
	track: int
	start_time_in_ms: int
	end_time_in_ms: int
	category: ClapSegmentCategory
	output_type: ClapOutputType
	prompt: str = ""
	label: str = ""

	@property
	def duration_in_ms(self) -> int:
		return self.end_time_in_ms - self.start_time_in_ms
