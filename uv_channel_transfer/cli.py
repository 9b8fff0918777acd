"""
Command Line Interface for UV Channel Transfer.
"""

import argparse
import logging
import os
import sys

from .utils.logger import setup_logger, get_logger
from .utils.error_handler import UVTransferError
from .core.mesh import is_supported_channel
from .core.rasterizer import render_mesh_preview
from .core.validator import UVValidator
from .config.config_manager import ConfigManager
from .scene import MeshSlot, MeshSlotKind, SceneObject
from .storage.mesh_store import MeshStore
from .tool import ToolConfig, UVTransferTool
from .visualization.preview_exporter import PreviewExporter, default_preview_name


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="uv-channel-transfer",
        description="UV Channel Transfer - Copy a UV channel between meshes with equal vertex counts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Copy UV channel 1 from source to target and save the new mesh
  uv-channel-transfer transfer source.npz target.npz -o target_FixedUV.npz --channel 1

  # Save a 512x512 preview of UV channel 0
  uv-channel-transfer preview mesh.npz -o mesh_uv0.png

  # Source and target previews side by side
  uv-channel-transfer compare source.npz target.npz -o compare.png
"""
    )

    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')
    parser.add_argument('--log-dir', help='Directory for log files')
    parser.add_argument('--config-dir', help='Directory holding user presets')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    transfer_parser = subparsers.add_parser('transfer', help='Copy a UV channel from source to target')
    transfer_parser.add_argument('source', help='Source mesh file')
    transfer_parser.add_argument('target', help='Target mesh file')
    transfer_parser.add_argument('-o', '--output', help='Output mesh file (defaults to <target>_FixedUV.npz)')
    transfer_parser.add_argument('--channel', type=int, help='UV channel index (0-3)')
    transfer_parser.add_argument('--preset', help='Use configuration preset')
    transfer_parser.add_argument('--preview-dir', help='Write source/target previews after the transfer')

    preview_parser = subparsers.add_parser('preview', help='Render a UV preview image')
    preview_parser.add_argument('mesh', help='Mesh file')
    preview_parser.add_argument('-o', '--output', help='Output PNG file')
    preview_parser.add_argument('--channel', type=int, default=0, help='UV channel index')
    preview_parser.add_argument('--resolution', type=int, default=512, help='Preview size in pixels')

    compare_parser = subparsers.add_parser('compare', help='Render source and target previews side by side')
    compare_parser.add_argument('source', help='Source mesh file')
    compare_parser.add_argument('target', help='Target mesh file')
    compare_parser.add_argument('-o', '--output', required=True, help='Output image file')
    compare_parser.add_argument('--channel', type=int, default=0, help='UV channel index')
    compare_parser.add_argument('--resolution', type=int, default=512, help='Preview size in pixels')

    info_parser = subparsers.add_parser('info', help='Show mesh and UV channel info')
    info_parser.add_argument('mesh', help='Mesh file')

    subparsers.add_parser('presets', help='List available presets')

    return parser


def _scene_object(name: str, mesh) -> SceneObject:
    """Wrap a loaded mesh in a scene object with a mesh filter."""
    return SceneObject(name=name, mesh_filter=MeshSlot(MeshSlotKind.MESH_FILTER, mesh))


def cmd_transfer(args) -> int:
    """Execute transfer command."""
    logger = get_logger('uv_channel_transfer')

    config_manager = ConfigManager(args.config_dir)
    if args.preset:
        config = config_manager.get_preset(args.preset)
        if config is None:
            logger.error(f"Preset not found: {args.preset}")
            return 1
    else:
        config = ToolConfig()

    store = MeshStore()
    tool = UVTransferTool(config=config, store=store)
    if args.channel is not None:
        tool.uv_channel = args.channel
    tool.show_preview = bool(args.preview_dir)

    try:
        tool.source_object = _scene_object("source", store.load(args.source))
        tool.target_object = _scene_object("target", store.load(args.target))

        output = args.output
        if not output:
            target_dir = os.path.dirname(args.target)
            output = os.path.join(target_dir, tool.default_save_name() + ".npz")

        result = tool.transfer_uvs(output)
    except UVTransferError as e:
        logger.error(f"Transfer failed: {e}")
        return 1

    if not result.success:
        print("Transfer failed!")
        print(f"  Error: {result.error.message}")
        return 1

    print("\nTransfer completed successfully!")
    print(f"  UV channel: {result.channel}")
    print(f"  Vertices: {result.target_vertices}")
    print(f"  Output: {output}")

    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  - {warning.message}")

    if args.preview_dir:
        exporter = PreviewExporter()
        path = os.path.join(args.preview_dir, f"uv{tool.uv_channel}_comparison.png")
        exporter.export_comparison(tool.source_preview, tool.target_preview, path)
        print(f"  Previews: {path}")

    return 0


def cmd_preview(args) -> int:
    """Execute preview command."""
    logger = get_logger('uv_channel_transfer')

    try:
        mesh = MeshStore().load(args.mesh)
        image = render_mesh_preview(mesh, args.channel, args.resolution)
        output_path = args.output or default_preview_name(mesh.name, args.channel)
        PreviewExporter().save_png(image, output_path)
    except UVTransferError as e:
        logger.error(f"Preview failed: {e}")
        return 1

    print(f"UV preview saved to: {output_path}")
    return 0


def cmd_compare(args) -> int:
    """Execute compare command."""
    logger = get_logger('uv_channel_transfer')

    store = MeshStore()
    validator = UVValidator()

    try:
        source_mesh = store.load(args.source)
        target_mesh = store.load(args.target)

        source_image = render_mesh_preview(source_mesh, args.channel, args.resolution)
        target_image = render_mesh_preview(target_mesh, args.channel, args.resolution)
        PreviewExporter().export_comparison(
            source_image, target_image, args.output,
            title=f"UV{args.channel}: {source_mesh.name} vs {target_mesh.name}"
        )
    except UVTransferError as e:
        logger.error(f"Compare failed: {e}")
        return 1

    channel = args.channel if is_supported_channel(args.channel) else 0
    comp = validator.compare_uv_channels(
        source_mesh.get_uv(channel),
        target_mesh.get_uv(channel),
    )

    print("\nComparison Results:")
    print(f"  Source UV count: {comp['count1']}")
    print(f"  Target UV count: {comp['count2']}")
    if 'mean_distance' in comp:
        print(f"  Mean distance: {comp['mean_distance']:.6f}")
        print(f"  Max distance: {comp['max_distance']:.6f}")
    print(f"\n  Comparison image: {args.output}")

    return 0


def cmd_info(args) -> int:
    """Execute info command."""
    logger = get_logger('uv_channel_transfer')

    try:
        mesh = MeshStore().load(args.mesh)
    except UVTransferError as e:
        logger.error(f"Info failed: {e}")
        return 1

    print(UVValidator().generate_report(mesh))
    return 0


def cmd_presets(args) -> int:
    """List available presets."""
    config_manager = ConfigManager(args.config_dir)

    print("\nAvailable Presets:")
    print("-" * 50)

    for name in config_manager.get_preset_names():
        info = config_manager.get_preset_info(name)
        print(f"\n  {name}:")
        print(f"    {info['description']}")

    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    console_level = logging.DEBUG if args.verbose else logging.INFO
    setup_logger(log_dir=args.log_dir, console_level=console_level)

    commands = {
        'transfer': cmd_transfer,
        'preview': cmd_preview,
        'compare': cmd_compare,
        'info': cmd_info,
        'presets': cmd_presets,
    }

    return commands[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
