"""
Command-line interface for neoimpact.

Usage:
    # State of each asteroid 30 days after its element epoch, and a plot of the orbits
    python -m neoimpact orbit 433.json 99942.json --days 30 --plot orbits.png

    # Impact effects for every object in a NeoWs feed
    python -m neoimpact impact feed.json --density 2.5 --angle 45 --distance 200

    # Use a density preset and save the analyses
    python -m neoimpact impact feed.json --preset Iron --output analyses.json
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from tqdm import tqdm

from neoimpact.constants import (
    DEFAULT_DENSITY,
    DEFAULT_IMPACT_ANGLE,
    DEFAULT_DISTANCE_KM,
    DEFAULT_ORBIT_SCALE,
    DEFAULT_PATH_POINTS,
)
from neoimpact.impact import simulate_impact
from neoimpact.io import load_asteroids, load_neo_feed, write_analyses
from neoimpact.scenario import DENSITY_PRESETS, ImpactScenarioInput, ScenarioParameters, density_preset

logger = logging.getLogger("neoimpact")


def _setup_orbit_parser(subparsers):
    """
    Set up the orbit subcommand parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        The subparsers object from the main parser

    Returns
    -------
    argparse.ArgumentParser
        The configured orbit parser
    """
    orbit_parser = subparsers.add_parser(
        'orbit',
        help='Propagate asteroid orbits from SBDB payloads',
    )
    orbit_parser.add_argument(
        'sbdb_files',
        type=Path,
        nargs='+',
        metavar='SBDB_JSON',
        help='JSON files holding SBDB API responses (one payload or a list of payloads each)'
    )
    orbit_parser.add_argument(
        '--days', '-t',
        type=float,
        default=0.0,
        help='Elapsed time past the element epoch in days (default: 0.0)'
    )
    orbit_parser.add_argument(
        '--scale', '-s',
        type=float,
        default=DEFAULT_ORBIT_SCALE,
        help=f'Scene units per AU (default: {DEFAULT_ORBIT_SCALE})'
    )
    orbit_parser.add_argument(
        '--points', '-n',
        type=int,
        default=DEFAULT_PATH_POINTS,
        help=f'Number of segments in each orbit path (default: {DEFAULT_PATH_POINTS})'
    )
    orbit_parser.add_argument(
        '--plot',
        type=Path,
        default=None,
        metavar='PNG',
        help='Render the orbit paths to this image file'
    )
    return orbit_parser


def _setup_impact_parser(subparsers):
    """
    Set up the impact subcommand parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        The subparsers object from the main parser

    Returns
    -------
    argparse.ArgumentParser
        The configured impact parser
    """
    presets = ', '.join(f'"{p.label}" ({p.value})' for p in DENSITY_PRESETS)
    impact_parser = subparsers.add_parser(
        'impact',
        help='Simulate impact effects for every object in a NeoWs feed',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Density presets (g/cm^3): {presets}",
    )
    impact_parser.add_argument(
        'feed',
        type=Path,
        metavar='FEED_JSON',
        help='NeoWs feed response, or a JSON list of NEO records'
    )
    density_group = impact_parser.add_mutually_exclusive_group()
    density_group.add_argument(
        '--density', '-d',
        type=float,
        default=None,
        help=f'Impactor density in g/cm^3 (default: {DEFAULT_DENSITY})'
    )
    density_group.add_argument(
        '--preset', '-p',
        type=str,
        default=None,
        help='Density preset label, e.g. "Iron"'
    )
    impact_parser.add_argument(
        '--angle', '-a',
        type=float,
        default=DEFAULT_IMPACT_ANGLE,
        help=f'Impact angle from horizontal in degrees, (0, 90] (default: {DEFAULT_IMPACT_ANGLE})'
    )
    impact_parser.add_argument(
        '--distance', '-r',
        type=float,
        default=DEFAULT_DISTANCE_KM,
        help=f'Observer distance from the impact in km (default: {DEFAULT_DISTANCE_KM})'
    )
    impact_parser.add_argument(
        '--output', '-o',
        type=Path,
        default=None,
        metavar='JSON',
        help='Write the analyses to this JSON file'
    )
    return impact_parser


def run_orbit(args):
    """Execute the orbit subcommand."""
    asteroids = []
    for path in args.sbdb_files:
        asteroids.extend(load_asteroids(path))

    for asteroid in asteroids:
        state = asteroid.get_state(args.days, scale=args.scale)
        pos = np.asarray(state.position)
        print(f"{asteroid.name}")
        print(f"  a = {asteroid.elements.a:.6f} AU, e = {asteroid.elements.e:.6f}, "
              f"period = {asteroid.get_period('year'):.3f} yr ({asteroid.orbit_class()})")
        print(f"  t = {args.days:.2f} d: r = {state.radius:.6f} AU, "
              f"true anomaly = {np.rad2deg(state.true_anomaly):.3f} deg")
        print(f"  position = [{pos[0]:.6f}, {pos[1]:.6f}, {pos[2]:.6f}]")

    if args.plot is not None:
        from neoimpact.plot import plot_orbits
        plot_orbits(asteroids, num_points=args.points, scale=args.scale, output=args.plot)
        print(f"Orbit plot written to {args.plot}")


def run_impact(args):
    """Execute the impact subcommand."""
    if args.preset is not None:
        density = density_preset(args.preset).value
    elif args.density is not None:
        density = args.density
    else:
        density = DEFAULT_DENSITY

    # Scenario scalars are validated once; a bad NEO record only skips that record
    params = ScenarioParameters(density=density, angle=args.angle, distance=args.distance)

    neos = load_neo_feed(args.feed)

    analyses = []
    for neo in tqdm(neos, desc='Simulating impacts', disable=len(neos) < 2):
        try:
            scenario = ImpactScenarioInput.from_neo(neo, **params.model_dump())
        except ValueError as err:
            logger.warning("Skipping %s: %s", neo.get('name', '<unnamed>'), err)
            continue
        analyses.append(simulate_impact(scenario))

    for analysis in analyses:
        crater = analysis.crater
        crater_txt = (f"{crater.type} crater {crater.final_diameter:.0f} m"
                      if crater is not None else "no crater")
        print(f"{analysis.name:30s} {analysis.energy.megatons_tnt:12.4g} Mt  "
              f"{analysis.severity:12s} {crater_txt}")

    if args.output is not None:
        write_analyses(args.output, analyses, **params.model_dump())
        print(f"Analyses written to {args.output}")


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog='neoimpact',
        description='Near-Earth asteroid orbit propagation and impact effects',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )
    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        required=True,
    )
    _setup_orbit_parser(subparsers)
    _setup_impact_parser(subparsers)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        if args.command == 'orbit':
            run_orbit(args)
        elif args.command == 'impact':
            run_impact(args)
    except (FileNotFoundError, ValueError) as err:
        raise SystemExit(f"Error: {err}")


if __name__ == '__main__':
    sys.exit(main())
