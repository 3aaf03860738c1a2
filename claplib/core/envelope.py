#!/usr/bin/env python3

"""
Envelope codec for CLAP data.

A CLAP document travels as YAML text, gzip-compressed, and optionally
base64-encoded behind a data URI prefix. Decoding accepts any of those
shapes and hands back the document text; encoding runs the other way.
"""

import base64
import binascii
import dataclasses
import enum
import gzip
import zlib
import yaml
from claplib.core.errors import DecompressionError
from claplib.core.errors import DocumentSyntaxError
from claplib.core.errors import EmptyInputError

#============================================

DATA_URI_PREFIX = "data:application/x-gzip;base64,"
LEGACY_DATA_URI_PREFIXES = (
	"data:application/octet-stream;base64,",
)
GZIP_MAGIC = b"\x1f\x8b"

#============================================

@dataclasses.dataclass(frozen=True)
class CodecConfig():
	"""
	Settings for encoding and loading CLAP data.

	Attributes:
		compress_level: gzip level, 1 (fast) to 9 (small).
		max_file_bytes: refuse to load files larger than this.
	"""
	compress_level: int = 9
	max_file_bytes: int = 10 ** 7

DEFAULT_CONFIG = CodecConfig()

#============================================

class InputShape(enum.Enum):
	DATA_URI = 'data_uri'
	COMPRESSED = 'compressed'
	TEXT = 'text'

#============================================

def _data_uri_prefix(text: str) -> str:
	"""
	Return the data URI prefix that text starts with, or None.
	"""
	for prefix in (DATA_URI_PREFIX,) + LEGACY_DATA_URI_PREFIXES:
		if text.startswith(prefix):
			return prefix
	return None

#============================================

def _as_text(raw: bytes) -> str:
	try:
		return raw.decode('utf-8')
	except UnicodeDecodeError as error:
		raise DecompressionError(
			"input is neither gzip data nor UTF-8 text") from error

#============================================

def detect_shape(source) -> InputShape:
	"""
	Classify decoder input.

	The media type decides first: str input is a data URI or raw document
	text, binary input is compressed when it carries the gzip magic and is
	otherwise read as UTF-8 text and classified like str input.

	Args:
		source: bytes, bytearray, memoryview or str.

	Returns:
		InputShape: the detected shape.

	Raises:
		EmptyInputError: source has zero length.
		DecompressionError: binary source is neither gzip nor UTF-8 text.
	"""
	if isinstance(source, (bytearray, memoryview)):
		source = bytes(source)
	if not isinstance(source, (bytes, str)):
		raise TypeError(f"cannot decode CLAP data from {type(source).__name__}")
	if len(source) == 0:
		raise EmptyInputError("input is empty")
	if isinstance(source, bytes):
		if source.startswith(GZIP_MAGIC):
			return InputShape.COMPRESSED
		source = _as_text(source)
	if _data_uri_prefix(source) is not None:
		return InputShape.DATA_URI
	return InputShape.TEXT

#============================================

def decode_data_uri(text: str) -> bytes:
	"""
	Strip the data URI prefix and base64-decode the payload.

	Padding is optional. The payload must be gzip data.
	"""
	prefix = _data_uri_prefix(text)
	if prefix is None:
		raise DecompressionError("missing data URI prefix")
	payload = "".join(text[len(prefix):].split())
	payload += "=" * (-len(payload) % 4)
	try:
		compressed = base64.b64decode(payload, validate=True)
	except (binascii.Error, ValueError) as error:
		raise DecompressionError(f"data URI payload is not valid base64: {error}") from error
	if not compressed.startswith(GZIP_MAGIC):
		raise DecompressionError("data URI payload is not gzip data")
	return compressed

#============================================

def decompress(compressed: bytes) -> str:
	"""
	Gunzip compressed bytes into document text.
	"""
	if not compressed.startswith(GZIP_MAGIC):
		raise DecompressionError("input is not gzip data")
	try:
		raw = gzip.decompress(compressed)
	except (OSError, EOFError, zlib.error) as error:
		raise DecompressionError(f"corrupt gzip stream: {error}") from error
	if len(raw) == 0:
		raise EmptyInputError("compressed payload is empty")
	return _as_text(raw)

#============================================

def decode_text(source) -> str:
	"""
	Turn any accepted input shape into document text.

	Args:
		source: gzip bytes, data URI text, or raw document text (str or bytes).

	Returns:
		str: the YAML document text.
	"""
	shape = detect_shape(source)
	if isinstance(source, (bytearray, memoryview)):
		source = bytes(source)
	if shape == InputShape.COMPRESSED:
		return decompress(source)
	if isinstance(source, bytes):
		source = _as_text(source)
	if shape == InputShape.DATA_URI:
		return decompress(decode_data_uri(source))
	return source

#============================================

def parse_document(text: str) -> dict:
	"""
	Parse YAML text into a plain mapping.
	"""
	try:
		document = yaml.safe_load(text)
	except yaml.YAMLError as error:
		mark = getattr(error, 'problem_mark', None)
		problem = getattr(error, 'problem', None) or str(error)
		if mark is not None:
			raise DocumentSyntaxError(f"malformed YAML: {problem}",
				line=mark.line + 1, column=mark.column + 1) from error
		raise DocumentSyntaxError(f"malformed YAML: {problem}") from error
	except RecursionError as error:
		raise DocumentSyntaxError("malformed YAML: nesting is too deep") from error
	if not isinstance(document, dict):
		raise DocumentSyntaxError(
			f"document root must be a mapping, got {type(document).__name__}")
	return document

#============================================

def read_document(source) -> dict:
	"""
	Detect, unwrap and parse decoder input in one step.
	"""
	return parse_document(decode_text(source))

#============================================

def emit_document(document: dict) -> str:
	return yaml.safe_dump(document, sort_keys=False, allow_unicode=True,
		default_flow_style=False)

#============================================

def compress_text(text: str, config: CodecConfig = DEFAULT_CONFIG) -> bytes:
	# mtime=0 keeps output identical for identical documents
	return gzip.compress(text.encode('utf-8'), compresslevel=config.compress_level,
		mtime=0)

#============================================

def to_data_uri(compressed: bytes) -> str:
	return DATA_URI_PREFIX + base64.b64encode(compressed).decode('ascii')

#============================================

def encode_document(document: dict, data_uri: bool = False,
	config: CodecConfig = DEFAULT_CONFIG):
	"""
	Emit, compress and optionally wrap a document.

	Returns:
		bytes, or str when data_uri is True.
	"""
	compressed = compress_text(emit_document(document), config)
	if data_uri:
		return to_data_uri(compressed)
	return compressed
