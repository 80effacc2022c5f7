"""Command line entry point for the CruiseMaps SDK."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path

from cruisemaps.client import CruiseMapsClient
from cruisemaps.domain.profiles import load_config
from cruisemaps.render.engine import StyleMapEngine
from cruisemaps.render.preview import render_placeholder, render_preview
from cruisemaps.render.style_loader import StaticStyleLoader
from cruisemaps.services.autoconfig import configure_from_env
from cruisemaps.shared.errors import CruiseMapsError

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER = 'map'
SECONDS_PER_DAY = 86400


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file), encoding='utf-8'))
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cruisemaps',
        description='CruiseMaps - cruise itinerary maps',
    )
    parser.add_argument('--config', type=Path, help='TOML profile (default: environment)')
    parser.add_argument('--env-file', type=Path, help='.env file with credentials')
    parser.add_argument('--log-file', type=Path)
    parser.add_argument('-v', '--verbose', action='store_true')
    sub = parser.add_subparsers(dest='command', required=True)

    ships = sub.add_parser('ships', help='List ships')
    ships.add_argument('--offset', type=int, default=0)
    ships.add_argument('--limit', type=int, default=10)

    render = sub.add_parser('render', help='Render a ship itinerary')
    render.add_argument('--ship-id', type=int, required=True)
    render.add_argument(
        '--start-date', type=int, default=None, help='unix seconds (default: now)'
    )
    render.add_argument('--days', type=int, default=7)
    render.add_argument('--style', help='map style URL, e.g. mapbox://styles/mapbox/dark-v11')
    render.add_argument('--3d', dest='is_3d', action='store_true')
    render.add_argument('--no-arrows', action='store_true')
    render.add_argument('--out-style', type=Path, help='write the composed style JSON')
    render.add_argument('--out-preview', type=Path, help='write a PNG preview')
    render.add_argument(
        '--offline', action='store_true', help='do not fetch the base style from Mapbox'
    )
    return parser


def _configure(client: CruiseMapsClient, args: argparse.Namespace) -> bool:
    if args.config is not None:
        client.configure(load_config(args.config))
        return True
    result = configure_from_env(client, args.env_file)
    if not result.configured:
        logger.error('Not configured: pass --config or set credentials in the environment')
    return result.configured


async def _list_ships(client: CruiseMapsClient, args: argparse.Namespace) -> int:
    response = await client.fetch_ships({'offset': args.offset, 'limit': args.limit})
    for ship in response.ships:
        print(f'{ship.id:>6}  {ship.display_name}')
    print(f'-- {len(response.ships)} of {response.total_ship_count}')
    return 0


async def _render(client: CruiseMapsClient, args: argparse.Namespace) -> int:
    map_config = client.get_config().map_defaults.model_copy(
        update={'is_3d': args.is_3d, 'has_arrows': not args.no_arrows}
    )
    if args.style:
        client.add_map_style(args.style)
        map_config = map_config.model_copy(update={'map_style': args.style})

    surface = client.surfaces.add(DEFAULT_CONTAINER)
    start_date = args.start_date if args.start_date is not None else int(time.time())
    ok = await client.load_map(
        {
            'container': DEFAULT_CONTAINER,
            'data': {
                'ship_id': args.ship_id,
                'start_date': start_date,
                'duration': args.days * SECONDS_PER_DAY,
            },
            'map': map_config,
        }
    )
    instance = client.get_map(DEFAULT_CONTAINER)
    if not ok or instance is None:
        logger.error('Map for ship %s was not rendered', args.ship_id)
        if args.out_preview is not None:
            render_placeholder(
                map_config.width, map_config.height, surface.placeholder or ''
            ).save(args.out_preview)
        return 1

    if args.out_style is not None:
        args.out_style.write_text(
            json.dumps(instance.handle.to_style(), ensure_ascii=False, indent=2),
            encoding='utf-8',
        )
        logger.info('Style written to %s', args.out_style)
    if args.out_preview is not None:
        render_preview(instance.handle).save(args.out_preview)
        logger.info('Preview written to %s', args.out_preview)
    return 0


async def run(args: argparse.Namespace) -> int:
    engine = StyleMapEngine(StaticStyleLoader()) if getattr(args, 'offline', False) else None
    async with CruiseMapsClient(engine=engine) as client:
        if not _configure(client, args):
            return 2
        if args.command == 'ships':
            return await _list_ships(client, args)
        return await _render(client, args)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    try:
        return asyncio.run(run(args))
    except CruiseMapsError as e:
        logger.error('%s', e)
        return 1
    except Exception as e:
        logger.error(f'Unexpected failure: {e}', exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
