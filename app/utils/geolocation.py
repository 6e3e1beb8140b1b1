import math

from app.core.errors import LocationUnavailableError
from app.core.logger import get_module_logger

log = get_module_logger(__name__)

EARTH_RADIUS_KM = 6371.0

# gazetteer offline (ciudades principales); clave = nombre visible
CITY_COORDINATES: dict[str, tuple[float, float]] = {
    "Mumbai": (19.0760, 72.8777),
    "Delhi": (28.7041, 77.1025),
    "New Delhi": (28.6139, 77.2090),
    "Bangalore": (12.9716, 77.5946),
    "Bengaluru": (12.9716, 77.5946),
    "Hyderabad": (17.3850, 78.4867),
    "Ahmedabad": (23.0225, 72.5714),
    "Chennai": (13.0827, 80.2707),
    "Kolkata": (22.5726, 88.3639),
    "Surat": (21.1702, 72.8311),
    "Pune": (18.5204, 73.8567),
    "Jaipur": (26.9124, 75.7873),
    "Lucknow": (26.8467, 80.9462),
    "Kanpur": (26.4499, 80.3319),
    "Nagpur": (21.1458, 79.0882),
    "Indore": (22.7196, 75.8577),
    "Thane": (19.2183, 72.9781),
    "Bhopal": (23.2599, 77.4126),
    "Visakhapatnam": (17.6868, 83.2185),
    "Patna": (25.5941, 85.1376),
    "Vadodara": (22.3072, 73.1812),
    "Ghaziabad": (28.6692, 77.4538),
    "Ludhiana": (30.9010, 75.8573),
    "Agra": (27.1767, 78.0081),
    "Nashik": (19.9975, 73.7898),
    "Faridabad": (28.4089, 77.3178),
    "Rajkot": (22.3039, 70.8022),
    "Varanasi": (25.3176, 82.9739),
    "Srinagar": (34.0837, 74.7973),
    "Amritsar": (31.6340, 74.8723),
    "Navi Mumbai": (19.0330, 73.0297),
    "Prayagraj": (25.4358, 81.8463),
    "Allahabad": (25.4358, 81.8463),
    "Ranchi": (23.3441, 85.3096),
    "Coimbatore": (11.0168, 76.9558),
    "Vijayawada": (16.5062, 80.6480),
    "Jodhpur": (26.2389, 73.0243),
    "Madurai": (9.9252, 78.1198),
    "Raipur": (21.2514, 81.6296),
    "Chandigarh": (30.7333, 76.7794),
    "Guwahati": (26.1445, 91.7362),
    "Mysuru": (12.2958, 76.6394),
    "Mysore": (12.2958, 76.6394),
    "Gurugram": (28.4595, 77.0266),
    "Gurgaon": (28.4595, 77.0266),
    "Bhubaneswar": (20.2961, 85.8245),
    "Noida": (28.5355, 77.3910),
    "Kochi": (9.9312, 76.2673),
    "Cochin": (9.9312, 76.2673),
    "Dehradun": (30.3165, 78.0322),
    "Thiruvananthapuram": (8.5241, 76.9366),
    "Mangalore": (12.9141, 74.8560),
    "Udaipur": (24.5714, 73.6953),
    # internacionales
    "New York": (40.7128, -74.0060),
    "Los Angeles": (34.0522, -118.2437),
    "London": (51.5074, -0.1278),
    "Paris": (48.8566, 2.3522),
    "Tokyo": (35.6762, 139.6503),
    "Sydney": (-33.8688, 151.2093),
    "Dubai": (25.2048, 55.2708),
    "Singapore": (1.3521, 103.8198),
}

_BY_LOWER = {name.lower(): coords for name, coords in CITY_COORDINATES.items()}
# nombres largos primero para que "New Delhi" gane sobre "Delhi"
_PARTIAL_ORDER = sorted(_BY_LOWER, key=len, reverse=True)


def get_city_coordinates(city_name: str) -> tuple[float, float] | None:
    """Exacto, luego sin mayúsculas, luego coincidencia parcial."""
    name = (city_name or "").strip()
    if not name:
        return None
    if name in CITY_COORDINATES:
        return CITY_COORDINATES[name]
    normalized = name.lower()
    if normalized in _BY_LOWER:
        return _BY_LOWER[normalized]
    for city in _PARTIAL_ORDER:
        if city in normalized or (len(normalized) >= 4 and normalized in city):
            return _BY_LOWER[city]
    return None


def geocode_address(address: str) -> tuple[float, float]:
    """
    Dirección libre -> (lat, lon). Prueba cada tramo separado por comas
    (de lo más específico a lo más general) y luego la cadena completa.
    """
    if not address or not address.strip():
        raise LocationUnavailableError()

    parts = [p.strip() for p in address.split(",") if p.strip()]
    for part in reversed(parts):
        coords = get_city_coordinates(part)
        if coords:
            return coords
    coords = get_city_coordinates(address)
    if coords:
        return coords

    log.warning("Could not geocode address: %s", address)
    raise LocationUnavailableError(
        "Could not determine coordinates for the given address. Please enable GPS or update your profile address."
    )


def build_profile_address(address: str | None, city: str | None, region: str | None) -> str | None:
    """`address, city || region` sin tramos vacíos; None si no hay nada."""
    parts = [p.strip() for p in (address, city or region) if p and p.strip()]
    return ", ".join(parts) or None


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))
