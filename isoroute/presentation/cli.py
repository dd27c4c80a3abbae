"""Command line interface for IsoRoute."""
import argparse
import json
import logging
import math
import sys
from typing import List, Optional

from ..application.services.movement_controller import MovementController
from ..domain.models.world import WorldTransform
from ..domain.services.route_finder import RouteFinder
from ..domain.services.route_tracer import RouteTracer
from ..infrastructure.persistence.event_bus import EventBus
from ..shared.configuration import ConfigManager, initialize_config
from ..shared.exceptions import IsoRouteException, RouteNotFoundError
from ..shared.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def setup_environment(config_path: Optional[str] = None,
                      log_level: Optional[str] = None,
                      strict: bool = True) -> ConfigManager:
    """Load configuration and configure logging.

    With strict=False only the logging settings must be valid, so the
    config command can still report errors in the other categories.
    """
    config = initialize_config(config_path)
    if log_level:
        config.update_logging_settings(level=log_level)
    config.require_valid(None if strict else ("logging",))
    setup_logging(config.get_settings().logging)
    return config


def _build_finder(config: ConfigManager, args) -> RouteFinder:
    grid = config.get_settings().grid
    width = args.width if args.width is not None else grid.map_width
    height = args.height if args.height is not None else grid.map_height
    return RouteFinder(width, height)


def _format_cell(cell) -> str:
    return f"({cell.x}, {cell.y})"


def _format_point(point) -> str:
    return f"({point.x:.2f}, {point.y:.2f}, {point.z:.2f})"


def run_find(config: ConfigManager, args) -> int:
    """Print the route between two cells."""
    finder = _build_finder(config, args)
    try:
        route = finder.find((args.sx, args.sy), (args.gx, args.gy))
    except RouteNotFoundError as e:
        print(f"No route: {e}")
        return 1

    print(" -> ".join(_format_cell(cell) for cell in route))
    print(f"{len(route)} cells, cost {finder.route_cost(route):.3f}")
    return 0


def run_simulate(config: ConfigManager, args) -> int:
    """Walk an entity between two cells and print its sampled positions."""
    settings = config.get_settings()
    finder = _build_finder(config, args)
    tracer = RouteTracer.from_settings(settings.tracer)
    bus = EventBus()

    controller = MovementController(
        finder, tracer, WorldTransform.from_settings(settings.world),
        start_cell=(args.sx, args.sy), event_publisher=bus
    )

    if not controller.move_to((args.gx, args.gy)):
        print(f"Move to ({args.gx}, {args.gy}) rejected")
        return 1

    if not controller.is_moving:
        print(f"Already at ({args.gx}, {args.gy})")
        return 0

    delta = 1.0 / args.fps
    tick = 0
    while controller.is_moving:
        position, direction = tracer.get_position_and_direction()
        if tick % args.every == 0:
            print(f"t={tracer.elapsed_seconds:.3f}s pos={_format_point(position)} facing={direction.value}")
        controller.tick(delta)
        tick += 1

    print(f"t={tracer.elapsed_seconds:.3f}s pos={_format_point(controller.position)} arrived")
    print(f"{len(bus.get_event_history())} events published")
    return 0


def run_config(config: ConfigManager, args) -> int:
    """Print configuration location and validation status."""
    print(json.dumps(config.get_config_info(), indent=2))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="isoroute",
        description="IsoRoute - grid route finding and route tracing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s find 0 0 5 3                 # Print route from (0, 0) to (5, 3)
  %(prog)s find 0 0 10 7 --width 10 --height 10
  %(prog)s simulate 0 0 5 5 --fps 30    # Trace the walk at 30 ticks per second
  %(prog)s config                       # Show configuration info
        """
    )

    parser.add_argument('-c', '--config', help='Configuration file path')
    parser.add_argument(
        '--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Override configured log level'
    )
    parser.add_argument('--version', action='version', version='%(prog)s 1.0.0')

    subparsers = parser.add_subparsers(dest='mode', help='Operation mode')

    def add_route_arguments(sub):
        for name in ('sx', 'sy', 'gx', 'gy'):
            sub.add_argument(name, type=int)
        sub.add_argument('--width', type=int, help='Grid width (default from config)')
        sub.add_argument('--height', type=int, help='Grid height (default from config)')

    find_parser = subparsers.add_parser('find', help='Find a route between two cells')
    add_route_arguments(find_parser)

    simulate_parser = subparsers.add_parser('simulate', help='Trace a walk between two cells')
    add_route_arguments(simulate_parser)
    simulate_parser.add_argument('--fps', type=float, default=60.0, help='Ticks per second')
    simulate_parser.add_argument('--every', type=int, default=10, help='Print every N ticks')

    subparsers.add_parser('config', help='Show configuration info')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.mode is None:
        parser.print_help()
        return 1

    if args.mode == 'simulate':
        if not math.isfinite(args.fps) or args.fps <= 0 or args.every <= 0:
            parser.error("--fps must be a finite positive number and --every positive")

    handlers = {
        'find': run_find,
        'simulate': run_simulate,
        'config': run_config,
    }

    try:
        config = setup_environment(args.config, args.log_level,
                                   strict=args.mode != 'config')
        return handlers[args.mode](config, args)
    except IsoRouteException as e:
        logger.error(f"{args.mode} failed: {e}")
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
