#!/usr/bin/env python3

import argparse
import sys
from claplib.core import utils
from claplib.core.clapfile import ClapFile
from claplib.core.errors import ClapError

#============================================

def parse_args(argv=None):
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(description="Inspect and convert CLAP files")
	parser.add_argument('-i', '--input', dest='input_file', required=True,
		help='clap file, yaml document, or text file holding a data URI')
	parser.add_argument('-o', '--output', dest='output_file',
		help='write the decoded project to this path')
	parser.add_argument('-f', '--format', dest='output_format', default='clap',
		choices=('clap', 'yaml', 'datauri'),
		help='form of the written output')
	parser.add_argument('-p', '--dump', dest='dump_yaml', action='store_true',
		help='print the yaml document to stdout')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='do not print the project summary')
	args = parser.parse_args(argv)
	return args

#============================================

def summarize(clap: ClapFile) -> str:
	lines = []
	lines.append(f"format: {clap.format.value}")
	lines.append(f"title: {clap.meta.title}")
	lines.append(f"resolution: {clap.meta.width}x{clap.meta.height} "
		f"({clap.meta.image_ratio.value}) @ {clap.meta.frame_rate} fps")
	lines.append(f"segments: {len(clap.segments)} on {len(clap.tracks())} track(s)")
	lines.append(f"duration: {utils.format_timecode(clap.duration_in_ms())}")
	return "\n".join(lines)

#============================================

def write_output(clap: ClapFile, output_file: str, output_format: str) -> None:
	if output_format == 'clap':
		clap.save_to_file(output_file)
		return
	if output_format == 'yaml':
		text = clap.to_yaml()
	else:
		text = clap.to_data_uri() + "\n"
	with open(output_file, 'w', encoding='utf-8') as handle:
		handle.write(text)

#============================================

def main(argv=None) -> int:
	args = parse_args(argv)
	utils.set_quiet_mode(args.quiet)
	try:
		clap = ClapFile.load_from_file(args.input_file)
		if args.output_file is not None:
			write_output(clap, args.output_file, args.output_format)
		if args.dump_yaml:
			print(clap.to_yaml(), end="")
		else:
			utils.print_message(summarize(clap))
	except (ClapError, OSError) as error:
		print(f"error: {error}", file=sys.stderr)
		return 1
	finally:
		utils.set_quiet_mode(False)
	return 0


if __name__ == '__main__':
	sys.exit(main())
