"""Tests for itinerary layer composition and 3D effects."""

import pytest

from cruisemaps.domain.models import Map3DConfig, MapConfig, PortStyle, PortStyleConfig, TrackStyle
from cruisemaps.render.effects import add_3d_effects
from cruisemaps.render.engine import MapOptions, StyleMapEngine
from cruisemaps.render.layers import (
    add_arrows_layer,
    add_ports_layer,
    add_track_layer,
    compose_layers,
    resolve_port_styles,
    track_opacity_expression,
)
from cruisemaps.render.style_loader import StaticStyleLoader
from cruisemaps.render.surface import Surface
from cruisemaps.shared.errors import EngineError


async def _ready_map():
    surface = Surface('c1', width=600, height=400)
    engine = StyleMapEngine(StaticStyleLoader())
    m = engine.create_map(
        surface, MapOptions(style='mapbox://styles/mapbox/streets-v11', center=(0, 0), zoom=3)
    )
    await m.wait_style_ready()
    return m


class TestTrackLayer:
    """Tests for add_track_layer."""

    @pytest.mark.asyncio
    async def test_adds_source_and_line(self, itinerary):
        """Creates the shared source and a styled line layer."""
        engine_map = await _ready_map()
        add_track_layer(engine_map, itinerary)

        assert engine_map.get_source('track-source')['data'] is itinerary
        layer = engine_map.get_layer('track-layer')
        assert layer['type'] == 'line'
        assert layer['source'] == 'track-source'
        assert layer['paint']['line-color'] == 'green'
        assert layer['paint']['line-width'] == 1.5
        assert layer['paint']['line-opacity'] == [
            'interpolate', ['linear'], ['zoom'], 8, 1.0, 9, 0.5, 10, 0.3,
        ]

    @pytest.mark.asyncio
    async def test_custom_style(self, itinerary):
        """Track color and width follow the given style."""
        engine_map = await _ready_map()
        add_track_layer(engine_map, itinerary, TrackStyle(color='#123456', width=3))
        paint = engine_map.get_layer('track-layer')['paint']
        assert paint['line-color'] == '#123456'
        assert paint['line-width'] == 3

    @pytest.mark.asyncio
    async def test_second_call_replaces_data_only(self, itinerary):
        """Re-attaching updates the data and keeps a single layer."""
        engine_map = await _ready_map()
        add_track_layer(engine_map, itinerary)
        other = {'type': 'FeatureCollection', 'features': []}
        add_track_layer(engine_map, other)

        assert engine_map.get_source('track-source')['data'] is other
        assert engine_map.layer_ids == ['track-layer']


class TestPortsAndArrows:
    """Tests for ports and arrows layers."""

    @pytest.mark.asyncio
    async def test_ports_before_track_fails(self):
        """Ports read the track source, so the order is enforced."""
        engine_map = await _ready_map()
        with pytest.raises(EngineError, match='track-source'):
            add_ports_layer(engine_map)

    @pytest.mark.asyncio
    async def test_ports_layer_expressions(self, itinerary):
        """Port radius and color depend on Feature_type."""
        engine_map = await _ready_map()
        add_track_layer(engine_map, itinerary)
        add_ports_layer(engine_map)

        layer = engine_map.get_layer('ports-layer')
        assert layer['type'] == 'circle'
        assert layer['filter'] == ['==', '$type', 'Point']
        color = layer['paint']['circle-color']
        assert color[0] == 'case'
        assert ['==', ['get', 'Feature_type'], 'start'] in color
        assert color[2] == '#27ae60'
        assert color[4] == '#e74c3c'
        assert color[5] == '#ff6b6b'
        assert layer['paint']['circle-radius'][-1] == 6
        assert layer['paint']['circle-stroke-color'] == '#ffffff'
        assert layer['paint']['circle-stroke-width'] == 2
        assert layer['paint']['circle-opacity'] == 0.9

    @pytest.mark.asyncio
    async def test_arrows_layer(self, itinerary):
        """Arrows are a line-placed symbol layer on LineStrings."""
        engine_map = await _ready_map()
        add_track_layer(engine_map, itinerary)
        add_arrows_layer(engine_map)

        layer = engine_map.get_layer('arrow-icons')
        assert layer['type'] == 'symbol'
        assert layer['filter'] == ['==', '$type', 'LineString']
        assert layer['layout']['symbol-placement'] == 'line'
        assert layer['layout']['symbol-spacing'] == 60
        assert layer['layout']['text-field'] == '▶'
        assert layer['layout']['text-rotation-alignment'] == 'map'
        assert layer['layout']['text-allow-overlap'] is True

    @pytest.mark.asyncio
    async def test_attach_twice_is_noop(self, itinerary):
        """Attaching the same layer twice changes nothing."""
        engine_map = await _ready_map()
        add_track_layer(engine_map, itinerary)
        add_ports_layer(engine_map)
        add_arrows_layer(engine_map)
        before = engine_map.to_style()

        add_ports_layer(engine_map)
        add_arrows_layer(engine_map)

        assert engine_map.to_style() == before

    def test_resolve_port_styles_partial(self):
        """Missing entries fall back to defaults."""
        start, end, mid = resolve_port_styles(
            PortStyleConfig(start_port=PortStyle(color='blue', radius=12))
        )
        assert (start.color, start.radius) == ('blue', 12)
        assert end.color == '#e74c3c'
        assert mid.radius == 6

    def test_track_opacity_expression(self):
        """Opacity fades with zoom."""
        expr = track_opacity_expression()
        assert expr[:3] == ['interpolate', ['linear'], ['zoom']]
        assert expr[3:] == [8, 1.0, 9, 0.5, 10, 0.3]


class TestEffects:
    """Tests for add_3d_effects."""

    @pytest.mark.asyncio
    async def test_applies_fog_terrain_sky(self):
        """Fog, DEM source, terrain and sky layer are added."""
        engine_map = await _ready_map()
        add_3d_effects(engine_map)

        assert engine_map.fog['horizon-blend'] == 0.02
        assert engine_map.get_source('mapbox-dem')['type'] == 'raster-dem'
        assert engine_map.terrain == {'source': 'mapbox-dem', 'exaggeration': 1.5}
        sky = engine_map.get_layer('sky')
        assert sky['type'] == 'sky'
        assert sky['paint']['sky-type'] == 'atmosphere'

    @pytest.mark.asyncio
    async def test_second_call_noop(self):
        """No-op when the sky layer already exists."""
        engine_map = await _ready_map()
        add_3d_effects(engine_map)
        before = engine_map.to_style()
        add_3d_effects(engine_map)
        assert engine_map.to_style() == before

    @pytest.mark.asyncio
    async def test_disabled(self):
        """A disabled config adds nothing."""
        engine_map = await _ready_map()
        add_3d_effects(engine_map, Map3DConfig(enabled=False))
        assert engine_map.get_layer('sky') is None
        assert engine_map.fog is None


class TestComposeLayers:
    """Tests for compose_layers."""

    @pytest.mark.asyncio
    async def test_default_order(self, itinerary):
        """Track, arrows, ports; no 3D by default."""
        engine_map = await _ready_map()
        compose_layers(engine_map, itinerary, MapConfig())
        assert engine_map.layer_ids == ['track-layer', 'arrow-icons', 'ports-layer']

    @pytest.mark.asyncio
    async def test_no_arrows_with_3d(self, itinerary):
        """has_arrows=False skips arrows; is_3d adds the sky last."""
        engine_map = await _ready_map()
        compose_layers(engine_map, itinerary, MapConfig(has_arrows=False, is_3d=True))
        assert engine_map.layer_ids == ['track-layer', 'ports-layer', 'sky']
        assert engine_map.terrain is not None

    @pytest.mark.asyncio
    async def test_compose_twice_idempotent(self, itinerary):
        """Composing twice keeps one copy of every layer."""
        engine_map = await _ready_map()
        cfg = MapConfig(is_3d=True)
        compose_layers(engine_map, itinerary, cfg)
        compose_layers(engine_map, itinerary, cfg)
        assert engine_map.layer_ids == ['track-layer', 'arrow-icons', 'ports-layer', 'sky']
