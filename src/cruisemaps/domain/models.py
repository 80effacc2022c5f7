from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from cruisemaps.shared.constants import (
    DEFAULT_API_BASE_URL,
    DEFAULT_ITINERARIES_ENDPOINT,
    DEFAULT_MAP_CENTER,
    DEFAULT_MAP_HEIGHT,
    DEFAULT_MAP_STYLE,
    DEFAULT_MAP_STYLES,
    DEFAULT_MAP_WIDTH,
    DEFAULT_SHIPS_ENDPOINT,
    DEFAULT_ZOOM_LEVEL,
    END_PORT_COLOR,
    END_PORT_RADIUS,
    FOG_COLOR,
    FOG_HIGH_COLOR,
    FOG_HORIZON_BLEND,
    FOG_SPACE_COLOR,
    FOG_STAR_INTENSITY,
    HTTP_RETRIES_DEFAULT,
    HTTP_TIMEOUT_MS_DEFAULT,
    INTERMEDIATE_PORT_COLOR,
    INTERMEDIATE_PORT_RADIUS,
    SKY_ATMOSPHERE_COLOR,
    SKY_HALO_COLOR,
    SKY_OPACITY,
    SKY_SUN_INTENSITY,
    SKY_SUN_POSITION,
    START_PORT_COLOR,
    START_PORT_RADIUS,
    TERRAIN_EXAGGERATION,
    TRACK_COLOR_DEFAULT,
    TRACK_WIDTH_DEFAULT,
)


class _SdkModel(BaseModel):
    """Base model: snake_case fields, camelCase aliases of the JS configuration."""

    model_config = {
        'alias_generator': to_camel,
        'populate_by_name': True,
        'extra': 'ignore',
    }


# --- Core config


class NetworkConfig(_SdkModel):
    """Retry policy of the network client."""

    model_config = {'frozen': True}

    # Максимальное число попыток запроса (включая первую)
    max_retries: int = HTTP_RETRIES_DEFAULT
    # Таймаут одной попытки (мс)
    timeout_ms: int = HTTP_TIMEOUT_MS_DEFAULT

    @field_validator('max_retries')
    @classmethod
    def validate_max_retries(cls, v):
        v = int(v)
        if v < 1:
            msg = 'max_retries must be >= 1'
            raise ValueError(msg)
        return v

    @field_validator('timeout_ms')
    @classmethod
    def validate_timeout_ms(cls, v):
        v = int(v)
        if v <= 0:
            msg = 'timeout_ms must be > 0'
            raise ValueError(msg)
        return v


RetryPolicy = NetworkConfig


class ApiConfig(_SdkModel):
    api_base_url: str = DEFAULT_API_BASE_URL
    ships_endpoint: str = DEFAULT_SHIPS_ENDPOINT
    itineraries_endpoint: str = DEFAULT_ITINERARIES_ENDPOINT
    # Статический каталог судов вместо запроса к backend
    use_mock_ships: bool = True


# --- User config


class PortStyle(_SdkModel):
    color: str
    radius: float


class PortStyleConfig(_SdkModel):
    start_port: PortStyle | None = None
    end_port: PortStyle | None = None
    intermediate_ports: PortStyle | None = None


class TrackStyle(_SdkModel):
    color: str = TRACK_COLOR_DEFAULT
    width: float = TRACK_WIDTH_DEFAULT


def default_port_style() -> PortStyleConfig:
    return PortStyleConfig(
        start_port=PortStyle(color=START_PORT_COLOR, radius=START_PORT_RADIUS),
        end_port=PortStyle(color=END_PORT_COLOR, radius=END_PORT_RADIUS),
        intermediate_ports=PortStyle(
            color=INTERMEDIATE_PORT_COLOR, radius=INTERMEDIATE_PORT_RADIUS
        ),
    )


class MapConfig(_SdkModel):
    """Visual settings of one rendered map."""

    map_style: str = DEFAULT_MAP_STYLE
    zoom_level: float = DEFAULT_ZOOM_LEVEL
    height: int = DEFAULT_MAP_HEIGHT
    width: int = DEFAULT_MAP_WIDTH
    # to_camel даёт 'is3D', в исходной конфигурации ключ 'is3d'
    is_3d: bool = Field(default=False, alias='is3d')
    # Неинтерактивная карта (без жестов)
    is_static: bool = False
    has_arrows: bool = True
    # (lng, lat)
    center: tuple[float, float] = DEFAULT_MAP_CENTER
    port_style: PortStyleConfig = Field(default_factory=default_port_style)
    track_style: TrackStyle | None = Field(default_factory=TrackStyle)

    @field_validator('width', 'height')
    @classmethod
    def validate_size(cls, v):
        v = int(v)
        if v <= 0:
            msg = 'map width/height must be positive'
            raise ValueError(msg)
        return v


class AuthConfig(_SdkModel):
    # Токен движка карт (Mapbox)
    mapbox_key: str = Field(alias='mapBoxKey')
    # Bearer-ключ backend API
    cruisemaps_key: str = Field(alias='cruiseMapsKey')


class Config(_SdkModel):
    """Full SDK configuration."""

    auth: AuthConfig
    map_defaults: MapConfig = Field(default_factory=MapConfig)
    available_map_styles: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MAP_STYLES)
    )
    api: ApiConfig = Field(default_factory=ApiConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)


# --- Requests / responses


class LoadMapData(_SdkModel):
    ship_id: int
    # unix seconds
    start_date: int
    # seconds
    duration: int


class LoadMapParams(_SdkModel):
    # Идентификатор контейнера (поверхности) для карты
    container: str
    data: LoadMapData
    # Если не задано, используются map_defaults из конфигурации
    map: MapConfig | None = None


class FetchShipsOptions(_SdkModel):
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=10, ge=0)


class Ship(BaseModel):
    id: int
    name: str
    cruise_line: str
    imo_number: int | None = None
    display_name: str
    mmsi: int


class FetchShipsResponse(BaseModel):
    total_ship_count: int
    ships: list[Ship]


# --- 3D effects


class FogConfig(_SdkModel):
    color: str = FOG_COLOR
    high_color: str = FOG_HIGH_COLOR
    horizon_blend: float = FOG_HORIZON_BLEND
    space_color: str = FOG_SPACE_COLOR
    star_intensity: float = FOG_STAR_INTENSITY


class SkyConfig(_SdkModel):
    sky_type: str = 'atmosphere'
    sun_position: tuple[float, float] = SKY_SUN_POSITION
    sun_intensity: float = SKY_SUN_INTENSITY
    atmosphere_color: str = SKY_ATMOSPHERE_COLOR
    halo_color: str = SKY_HALO_COLOR
    opacity: float = SKY_OPACITY


class TerrainConfig(_SdkModel):
    exaggeration: float = TERRAIN_EXAGGERATION


class Map3DConfig(_SdkModel):
    enabled: bool = True
    fog: FogConfig | None = Field(default_factory=FogConfig)
    sky: SkyConfig | None = Field(default_factory=SkyConfig)
    terrain: TerrainConfig | None = Field(default_factory=TerrainConfig)
