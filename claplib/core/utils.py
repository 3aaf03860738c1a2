#!/usr/bin/env python3

import os
from claplib.core.errors import ClapError

_QUIET_MODE = False

#============================================

def set_quiet_mode(enabled: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(enabled)

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def print_message(message: str) -> None:
	if is_quiet_mode():
		return
	print(message)

#============================================

def ensure_file_exists(filepath: str) -> None:
	if not os.path.exists(filepath):
		raise ClapError(f"file not found: {filepath}")
	if not os.path.isfile(filepath):
		raise ClapError(f"not a regular file: {filepath}")
	return

#============================================

def format_timecode(time_in_ms: int) -> str:
	"""
	Format milliseconds as HH:MM:SS.mmm.
	"""
	if time_in_ms < 0:
		raise ValueError("time must be >= 0")
	(total_seconds, millis) = divmod(time_in_ms, 1000)
	(total_minutes, seconds) = divmod(total_seconds, 60)
	(hours, minutes) = divmod(total_minutes, 60)
	return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"
