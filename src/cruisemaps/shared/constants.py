from enum import Enum

# --- Mapbox
# Базовый URL Mapbox Styles API
MAPBOX_STYLES_BASE = 'https://api.mapbox.com/styles/v1'

# Префикс style URL в формате mapbox://
MAPBOX_STYLE_SCHEME = 'mapbox://styles/'

# Стиль по умолчанию
DEFAULT_MAP_STYLE = 'mapbox://styles/mapbox/streets-v11'

# Каталог стилей, доступных сразу после конфигурации
DEFAULT_MAP_STYLES = (
    'mapbox://styles/mapbox/streets-v11',
    'mapbox://styles/mapbox/light-v11',
    'mapbox://styles/mapbox/dark-v11',
    'mapbox://styles/mapbox/satellite-v9',
    'mapbox://styles/mapbox/satellite-streets-v11',
    'mapbox://styles/mapbox/navigation-day-v1',
    'mapbox://styles/mapbox/navigation-night-v1',
)

# Таймаут загрузки стиля (секунды)
STYLE_LOAD_TIMEOUT_S = 10.0

# --- Map defaults
DEFAULT_ZOOM_LEVEL = 10
DEFAULT_MAP_WIDTH = 600
DEFAULT_MAP_HEIGHT = 400
# Центр карты (lng, lat)
DEFAULT_MAP_CENTER = (-74.5, 40.0)

# --- Backend API
DEFAULT_API_BASE_URL = 'http://localhost:8000/api/v1'
DEFAULT_SHIPS_ENDPOINT = 'http://localhost:8000/api/v1/ships'
DEFAULT_ITINERARIES_ENDPOINT = 'http://localhost:8000/api/v1/ships'

# --- Network
HTTP_RETRIES_DEFAULT = 3
HTTP_TIMEOUT_MS_DEFAULT = 30000
# Задержка между попытками: 2**attempt * HTTP_BACKOFF_BASE_MS
HTTP_BACKOFF_BASE_MS = 1000

HTTP_OK = 200
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_TOO_MANY_REQUESTS = 429

# Количество видимых символов API-ключа при маскировке
API_KEY_VISIBLE_PREFIX_LEN = 4

# --- Environment auto-configuration
ENV_MAPBOX_KEY = 'CRUISEMAPS_MAPBOX_KEY'
ENV_CRUISEMAPS_KEY = 'CRUISEMAPS_API_KEY'

# --- Layer and source ids
TRACK_SOURCE_ID = 'track-source'
TRACK_LAYER_ID = 'track-layer'
PORTS_LAYER_ID = 'ports-layer'
ARROWS_LAYER_ID = 'arrow-icons'
SKY_LAYER_ID = 'sky'
TERRAIN_SOURCE_ID = 'mapbox-dem'
TERRAIN_SOURCE_URL = 'mapbox://mapbox.mapbox-terrain-dem-v1'

# Property that distinguishes start/end/intermediate ports
FEATURE_TYPE_PROPERTY = 'Feature_type'
FEATURE_TYPE_START = 'start'
FEATURE_TYPE_END = 'end'

# --- Track style
TRACK_COLOR_DEFAULT = 'green'
TRACK_WIDTH_DEFAULT = 1.5
# Прозрачность трека по зуму: (zoom, opacity)
TRACK_OPACITY_STOPS = ((8, 1.0), (9, 0.5), (10, 0.3))

# --- Port style
START_PORT_COLOR = '#27ae60'
START_PORT_RADIUS = 10
END_PORT_COLOR = '#e74c3c'
END_PORT_RADIUS = 10
INTERMEDIATE_PORT_COLOR = '#ff6b6b'
INTERMEDIATE_PORT_RADIUS = 6
PORT_STROKE_COLOR = '#ffffff'
PORT_STROKE_WIDTH = 2
PORT_OPACITY = 0.9

# --- Direction arrows
ARROW_GLYPH = '▶'
ARROW_SPACING_PX = 60
ARROW_TEXT_SIZE = 16
ARROW_COLOR = '#ffffff'
ARROW_HALO_COLOR = '#3498db'
ARROW_HALO_WIDTH = 2

# --- Bounds fitting
FIT_BOUNDS_PADDING_PX = 50
FIT_BOUNDS_MAX_ZOOM = 12

# --- Web Mercator (Mapbox GL использует тайл 512 px)
GL_TILE_SIZE = 512
MERCATOR_MAX_LAT_DEG = 85.051129
MAX_ZOOM = 22

# --- 3D effects
FOG_COLOR = 'rgb(186, 210, 235)'
FOG_HIGH_COLOR = 'rgb(36, 92, 223)'
FOG_HORIZON_BLEND = 0.02
FOG_SPACE_COLOR = 'rgb(11, 11, 25)'
FOG_STAR_INTENSITY = 0.6
SKY_SUN_POSITION = (0.0, 0.0)
SKY_SUN_INTENSITY = 15.0
SKY_ATMOSPHERE_COLOR = 'rgba(135, 206, 235, 1)'
SKY_HALO_COLOR = 'rgba(255, 255, 255, 0.5)'
SKY_OPACITY = 1.0
TERRAIN_EXAGGERATION = 1.5
TERRAIN_TILE_SIZE = 512
TERRAIN_MAX_ZOOM = 14

# --- Preview
PREVIEW_BACKGROUND_COLOR = (255, 255, 255)
PREVIEW_PLACEHOLDER_TEXT = 'Map unavailable'


class MapState(str, Enum):
    """Состояние контейнера карты."""

    LOADING = 'loading'
    READY = 'ready'
    FAILED = 'failed'
