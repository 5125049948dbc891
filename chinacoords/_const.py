"""
Constants declarations for chinacoords
"""

# Krasovsky 1940 ellipsoid, as used by the GCJ-02 distortion
KRASOVSKY_A = 6378245.0  # Semi-major axis (meters)
KRASOVSKY_E2 = 0.00669342162296594323  # Eccentricity squared

# Origin the distortion model is evaluated around
REFERENCE_LON = 105.0
REFERENCE_LAT = 35.0

# Bounding box within which the GCJ-02 distortion is applied (exclusive)
REGION_MIN_LON = 73.66
REGION_MAX_LON = 135.05
REGION_MIN_LAT = 3.86
REGION_MAX_LAT = 53.55

# BD-09 polar perturbation
X_PI = 52.35987755982988  # pi * 3000 / 180
BD_LON_OFFSET = 0.0065
BD_LAT_OFFSET = 0.0060
BD_Z_OFFSET = 0.00002
BD_THETA_OFFSET = 0.000003

# GCJ-02 -> WGS84 bisection search
ACCURACY_THRESHOLD = 1e-10  # Degrees
SEARCH_HALF_WIDTH = 0.01  # Degrees, roughly 1km
MAX_ITERATIONS = 100

# Names accepted wherever a coordinate system is specified
WGS84 = 'wgs84'
GCJ02 = 'gcj02'
BD09 = 'bd09'
COORDINATE_SYSTEMS = (WGS84, GCJ02, BD09)
