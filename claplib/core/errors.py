#!/usr/bin/env python3

"""
Error kinds raised while decoding CLAP data.
"""

#============================================

class ClapError(RuntimeError):
	"""Base error for every CLAP failure."""
	pass

#============================================

class EmptyInputError(ClapError):
	"""Zero-length input handed to the decoder."""
	pass

#============================================

class DecompressionError(ClapError):
	"""Gzip stream or data URI payload could not be decoded."""
	pass

#============================================

class DocumentSyntaxError(ClapError):
	"""Document text is not a well-formed YAML mapping."""
	def __init__(self, message: str, line: int = None, column: int = None):
		if line is not None:
			message = f"{message} (line {line}, column {column})"
		super().__init__(message)
		self.line = line
		self.column = column

#============================================

class MissingOrUnsupportedHeaderError(ClapError):
	"""Document has no recognized format marker."""
	def __init__(self, message: str, found=None):
		super().__init__(message)
		self.found = found

#============================================

class SchemaValidationError(ClapError):
	"""A field, enum or time range failed schema checks."""
	def __init__(self, message: str, field: str = None, segment_index: int = None):
		location = ""
		if segment_index is not None:
			location = f"segments[{segment_index}]"
			if field is not None:
				location += f".{field}"
		elif field is not None:
			location = field
		if location:
			message = f"{location}: {message}"
		super().__init__(message)
		self.field = field
		self.segment_index = segment_index
