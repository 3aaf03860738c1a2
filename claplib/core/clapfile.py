#!/usr/bin/env python3

import dataclasses
import os
from claplib.core import envelope
from claplib.core import mapper
from claplib.core import utils
from claplib.core import validator
from claplib.core.errors import ClapError
from claplib.core.schema import ClapFormat
from claplib.core.schema import ClapMeta

#============================================

@dataclasses.dataclass(frozen=True)
class ClapFile():
	"""
	A CLAP project: format marker, metadata and an ordered segment timeline.

	Values are immutable. Build one with ClapFile.create() or decode one with
	ClapFile.from_source(); serialize() and to_data_uri() never modify it.
	"""
	format: ClapFormat
	meta: ClapMeta
	segments: tuple

	def __post_init__(self):
		object.__setattr__(self, 'segments', tuple(self.segments))

	#============================
	@classmethod
	def create(cls, meta: ClapMeta = None, segments=None,
		clap_format: ClapFormat = ClapFormat.CLAP0):
		"""
		Build a ClapFile from typed values.

		Raises:
			SchemaValidationError: a segment has start >= end, a negative
				start or track, or a non-enum category/output type.
		"""
		if meta is None:
			meta = ClapMeta()
		clap = cls(format=clap_format, meta=meta, segments=tuple(segments or ()))
		validator.validate_clap(clap)
		return clap

	#============================
	@classmethod
	def from_source(cls, source):
		"""
		Decode gzip bytes, data URI text, or raw YAML text.

		Raises:
			EmptyInputError, DecompressionError, DocumentSyntaxError,
			MissingOrUnsupportedHeaderError, SchemaValidationError
		"""
		document = envelope.read_document(source)
		validator.validate_document(document)
		(clap_format, meta, segments) = mapper.parts_from_document(document)
		return cls(format=clap_format, meta=meta, segments=segments)

	#============================
	@classmethod
	def load_from_file(cls, path: str,
		config: envelope.CodecConfig = envelope.DEFAULT_CONFIG):
		utils.ensure_file_exists(path)
		file_size = os.path.getsize(path)
		if file_size > config.max_file_bytes:
			raise ClapError(f"clap file is larger than {config.max_file_bytes} bytes: {path}")
		with open(path, 'rb') as clap_file:
			data = clap_file.read()
		return cls.from_source(data)

	#============================
	def to_document(self) -> dict:
		return mapper.document_from_clap(self)

	#============================
	def to_yaml(self) -> str:
		return envelope.emit_document(self.to_document())

	#============================
	def serialize(self, config: envelope.CodecConfig = envelope.DEFAULT_CONFIG) -> bytes:
		return envelope.encode_document(self.to_document(), config=config)

	#============================
	def to_data_uri(self, config: envelope.CodecConfig = envelope.DEFAULT_CONFIG) -> str:
		return envelope.encode_document(self.to_document(), data_uri=True,
			config=config)

	#============================
	def save_to_file(self, path: str,
		config: envelope.CodecConfig = envelope.DEFAULT_CONFIG) -> None:
		data = self.serialize(config)
		with open(path, 'wb') as clap_file:
			clap_file.write(data)

	#============================
	def segments_by_category(self, category) -> list:
		return [segment for segment in self.segments if segment.category == category]

	#============================
	def segments_by_track(self, track: int) -> list:
		return [segment for segment in self.segments if segment.track == track]

	#============================
	def tracks(self) -> list:
		return sorted(set(segment.track for segment in self.segments))

	#============================
	def duration_in_ms(self) -> int:
		if len(self.segments) == 0:
			return 0
		return max(segment.end_time_in_ms for segment in self.segments)
