#!/usr/bin/env python3
"""
HRSF - Command Line Version
Verify, convert and preview scenes stored in the HRSF JSON scene format
"""

import argparse
import sys
from pathlib import Path

from readers import is_supported_format, SUPPORTED_EXTENSIONS
from scene_converter import SceneConverter, PREVIEW_TARGETS


def build_parser():
    parser = argparse.ArgumentParser(
        prog='hrsf',
        description='Verify, convert and preview HRSF scene files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Verify a scene (meshes, material ids, path section times)
  hrsf scene.json --verify-only

  # Re-save a scene into one JSON file, dropping unused materials
  hrsf scene.json ./output --single-file --remove-unused-materials

  # Print the camera path sampled at 30 fps
  hrsf scene.json --preview-path camera --fps 30

  # Print the path of the second light for 10 seconds
  hrsf scene.json --preview-path light --index 1 --duration 10
        """
    )

    parser.add_argument('input', type=str, help='Input scene root file (.json)')
    parser.add_argument('output', type=str, nargs='?',
                        help='Output directory for the converted scene')
    parser.add_argument('--scene-name', type=str,
                        help='Base name of the output files (default: input file name)')
    parser.add_argument('--single-file', action='store_true',
                        help='Store camera, lights, materials and environment inline')
    parser.add_argument('--remove-unused-materials', action='store_true',
                        help='Drop materials that no mesh shape uses')
    parser.add_argument('--verify-only', action='store_true',
                        help='Only load and verify the scene')
    parser.add_argument('--preview-path', choices=PREVIEW_TARGETS,
                        help='Print sampled positions of an animation path')
    parser.add_argument('--index', type=int, default=0,
                        help='Light or mesh index for --preview-path (default: 0)')
    parser.add_argument('--fps', type=float, default=24,
                        help='Samples per second for --preview-path (default: 24)')
    parser.add_argument('--duration', type=float,
                        help='Seconds to sample for --preview-path (default: one lap)')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.with_suffix('.json').exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    if not is_supported_format(str(input_path)):
        print(f"Error: Unsupported file format: {input_path.suffix}", file=sys.stderr)
        print(f"Supported formats: {', '.join(sorted(e for e in SUPPORTED_EXTENSIONS if e))}", file=sys.stderr)
        return 1

    if args.fps <= 0:
        print("Error: --fps must be positive", file=sys.stderr)
        return 1

    converter = SceneConverter()

    if args.verify_only:
        result = converter.verify(str(input_path))
    elif args.preview_path:
        result = converter.preview_path(
            str(input_path),
            target=args.preview_path,
            index=args.index,
            fps=args.fps,
            duration=args.duration,
        )
    else:
        if not args.output:
            print("Error: Please specify an output directory", file=sys.stderr)
            print("       OR use --verify-only / --preview-path", file=sys.stderr)
            return 1

        result = converter.convert(
            input_file=str(input_path),
            output_dir=args.output,
            scene_name=args.scene_name,
            single_file=args.single_file,
            remove_unused_materials=args.remove_unused_materials,
        )

    if not result.get('success'):
        print(f"\n✗ {result.get('message', 'Failed')}", file=sys.stderr)
        return 1

    print(f"\n✓ {result['message']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
