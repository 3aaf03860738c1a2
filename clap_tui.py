#!/usr/bin/env python3

"""
Textual TUI inspector for CLAP files.
"""

# Standard Library
import argparse
import os
import sys
import threading
import time
import traceback

script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
	sys.path.insert(0, script_dir)

# PIP3 modules
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import RichLog, Static
from rich.text import Text

# local repo modules
from claplib.core import utils
from claplib.core.clapfile import ClapFile

#============================================

NORD_COLORS = {
	'background': "#2E3440",
	'foreground': "#D8DEE9",
	'dim': "#4C566A",
	'header': "#88C0D0",
	'numbers': "#B48EAD",
	'paths': "#A3BE8C",
	'strings': "#EBCB8B",
	'error': "#BF616A",
}

# one color per broad kind of segment output
OUTPUT_TYPE_COLORS = {
	'video': "#88C0D0",
	'image': "#8FBCBB",
	'audio': "#A3BE8C",
	'text': "#EBCB8B",
}

#============================================

def parse_args():
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="CLAP file inspector")
	parser.add_argument('-i', '--input', dest='input_file', required=True,
		help='clap file, yaml document, or text file holding a data URI')
	parser.add_argument('-d', '--debug', dest='debug_log', action='store_true',
		help='write debug log to clap_tui.log in the current directory')
	args = parser.parse_args()
	return args

#============================================

class ClapTuiApp(App):
	BINDINGS = [
		("q", "quit", "Quit"),
	]

	CSS = """
	#root {
		height: 1fr;
	}

	#top_row {
		height: 40%;
		min-height: 10;
	}

	#left_panel {
		width: 40%;
		height: 1fr;
		border: solid gray;
	}

	#right_panel {
		width: 60%;
		height: 1fr;
		border: solid gray;
	}

	#summary_title {
		height: 1;
		color: #88C0D0;
	}

	#summary {
		height: 1fr;
	}

	#meta_title {
		height: 1;
		color: #88C0D0;
	}

	#meta_info {
		height: 1fr;
	}

	#footer_note {
		height: 1;
		color: #4C566A;
	}

	#log {
		height: 1fr;
		border: solid gray;
	}
	"""

	def __init__(self, input_file: str, debug_log: bool = False):
		super().__init__()
		self.input_file = input_file
		self.clap = None
		self.error_text = None
		self.load_seconds = None
		self.summary_widget = None
		self.meta_widget = None
		self.log_widget = None
		self.debug_mode = debug_log
		self.log_path = None
		self.log_lock = threading.Lock()
		if self.debug_mode:
			self.log_path = os.path.join(os.getcwd(), "clap_tui.log")
			self._reset_log()
			self._write_log(f"debug log: {self.log_path}")

	#============================
	def compose(self) -> ComposeResult:
		yield Static("CLAP TUI", id="header")
		with Vertical(id="root"):
			with Horizontal(id="top_row"):
				with Vertical(id="left_panel"):
					yield Static("Summary", id="summary_title")
					yield Static("", id="summary")
					yield Static("Press q to quit", id="footer_note")
				with Vertical(id="right_panel"):
					yield Static("Metadata", id="meta_title")
					yield Static("", id="meta_info")
			yield RichLog(id="log", wrap=True, highlight=False)

	#============================
	def on_mount(self) -> None:
		self.summary_widget = self.query_one("#summary", Static)
		self.meta_widget = self.query_one("#meta_info", Static)
		self.log_widget = self.query_one(RichLog)
		thread = threading.Thread(target=self._load_clap, daemon=True)
		thread.start()

	#============================
	def _load_clap(self) -> None:
		start_time = time.time()
		try:
			clap = ClapFile.load_from_file(self.input_file)
			self.load_seconds = time.time() - start_time
			self.call_from_thread(self._show_clap, clap)
		except Exception as exc:
			self.call_from_thread(self._set_error, str(exc), traceback.format_exc())

	#============================
	def _set_error(self, text: str, trace_text: str = None) -> None:
		self.error_text = text
		if trace_text:
			self._write_log(trace_text)
		if self.log_widget is not None:
			self.log_widget.write(
				Text(f"error: {text}", style=f"bold {NORD_COLORS['error']}")
			)
		self._update_summary()

	#============================
	def _show_clap(self, clap: ClapFile) -> None:
		self.clap = clap
		self._write_log(f"loaded {len(clap.segments)} segments from {self.input_file}")
		self._update_summary()
		self._update_meta()
		if self.log_widget is None:
			return
		for index, segment in enumerate(clap.segments):
			self.log_widget.write(self._segment_line(index, segment))

	#============================
	def _segment_line(self, index: int, segment) -> Text:
		line = Text()
		line.append(f"{index:4d} ", style=NORD_COLORS['dim'])
		line.append(f"T{segment.track:<3d}", style=NORD_COLORS['numbers'])
		line.append(self._format_range(segment.start_time_in_ms,
			segment.end_time_in_ms), style=NORD_COLORS['numbers'])
		line.append(f" {segment.category.value:<12}", style=NORD_COLORS['header'])
		output_style = OUTPUT_TYPE_COLORS.get(segment.output_type.value,
			NORD_COLORS['foreground'])
		line.append(f"{segment.output_type.value:<10}", style=output_style)
		label = segment.label or segment.prompt
		line.append(label, style=NORD_COLORS['strings'])
		return line

	#============================
	def _update_summary(self) -> None:
		if self.summary_widget is None:
			return
		summary = Text()
		summary.append("File: ", style=NORD_COLORS['dim'])
		summary.append(self.input_file, style=NORD_COLORS['paths'])
		summary.append("\n")
		status = "loading"
		status_style = NORD_COLORS['foreground']
		if self.error_text is not None:
			status = "failed"
			status_style = NORD_COLORS['error']
		elif self.clap is not None:
			status = "loaded"
			status_style = NORD_COLORS['paths']
		summary.append("Status: ", style=NORD_COLORS['dim'])
		summary.append(status, style=status_style)
		if self.clap is not None:
			summary.append("\n")
			summary.append("Format: ", style=NORD_COLORS['dim'])
			summary.append(self.clap.format.value, style=NORD_COLORS['strings'])
			summary.append("\n")
			summary.append("Segments: ", style=NORD_COLORS['dim'])
			summary.append(f"{len(self.clap.segments)}", style=NORD_COLORS['numbers'])
			summary.append(" | Tracks: ", style=NORD_COLORS['dim'])
			summary.append(f"{len(self.clap.tracks())}", style=NORD_COLORS['numbers'])
			summary.append("\n")
			summary.append("Duration: ", style=NORD_COLORS['dim'])
			summary.append(utils.format_timecode(self.clap.duration_in_ms()),
				style=NORD_COLORS['numbers'])
		if self.load_seconds is not None:
			summary.append("\n")
			summary.append("Decoded in: ", style=NORD_COLORS['dim'])
			summary.append(self._format_duration(self.load_seconds),
				style=NORD_COLORS['numbers'])
		self.summary_widget.update(summary)

	#============================
	def _update_meta(self) -> None:
		if self.meta_widget is None or self.clap is None:
			return
		meta = self.clap.meta
		rows = [
			("Title", meta.title or "N/A"),
			("Synopsis", meta.synopsis or "N/A"),
			("Size", f"{meta.width}x{meta.height} ({meta.image_ratio.value})"),
			("Frame rate", f"{meta.frame_rate} fps"),
			("BPM", "N/A" if meta.bpm is None else f"{meta.bpm}"),
			("Tags", ", ".join(meta.tags) or "N/A"),
			("Loop", "yes" if meta.is_loop else "no"),
			("Interactive", "yes" if meta.is_interactive else "no"),
		]
		text = Text()
		for (index, (name, value)) in enumerate(rows):
			if index > 0:
				text.append("\n")
			text.append(f"{name}: ", style=NORD_COLORS['dim'])
			value_style = NORD_COLORS['foreground']
			if value == "N/A":
				value_style = NORD_COLORS['dim']
			text.append(value, style=value_style)
		self.meta_widget.update(text)

	#============================
	def _write_log(self, message: str) -> None:
		if not self.debug_mode or self.log_path is None:
			return
		timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
		line = f"[{timestamp}] {message}\n"
		with self.log_lock:
			with open(self.log_path, "a", encoding="utf-8") as handle:
				handle.write(line)

	#============================
	def _reset_log(self) -> None:
		if not self.debug_mode or self.log_path is None:
			return
		with self.log_lock:
			with open(self.log_path, "w", encoding="utf-8"):
				return

	#============================
	def _format_range(self, start_ms: int, end_ms: int) -> str:
		start_text = utils.format_timecode(start_ms)
		end_text = utils.format_timecode(end_ms)
		return f" {start_text} -> {end_text}"

	#============================
	def _format_duration(self, seconds: float) -> str:
		if seconds < 1:
			return f"{seconds * 1000:.0f}ms"
		if seconds < 60:
			return f"{seconds:.1f}s"
		minutes = int(seconds // 60)
		remaining = seconds - (minutes * 60)
		return f"{minutes}m {remaining:04.1f}s"

#============================================

def main():
	args = parse_args()
	app = ClapTuiApp(args.input_file, debug_log=args.debug_log)
	app.run()

#============================================

if __name__ == '__main__':
	main()
