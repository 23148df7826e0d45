"""Fixed constants: NAIF body IDs, DAF layout, physical constants, GM values."""

# Body IDs (NAIF)
SSB_ID = 0
EARTH_BARYCENTER_ID = 3
MARS_BARYCENTER_ID = 4
SUN_ID = 10
MOON_ID = 301
EARTH_ID = 399
MARS_ID = 499

# Frame IDs (NAIF built-in inertial)
J2000_FRAME_ID = 1
ECLIPJ2000_FRAME_ID = 17

# Speed of light (km/s)
CLIGHT_KM_S = 299792.458

# Time: seconds per unit (for interval conversion)
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0

# DAF layout: fixed 1024-byte records of 128 double-precision words
DAF_RECORD_BYTES = 1024
DAF_RECORD_WORDS = 128
DAF_WORD_BYTES = 8
DAF_MAX_SUMMARY_WORDS = 125  # words left after the 3-word summary record control area
DAF_CONTROL_WORDS = 3
DAF_IFNAME_LEN = 60

# SPK summary format
SPK_ND = 2
SPK_NI = 6

# JPL DE / IMCCE INPOP binary ephemerides
J2000_JD = 2451545.0
JPL_MAX_CONSTANTS = 400
JPL_CHEBYSHEV_BODIES = 12  # IPT rows: 11 bodies plus nutations
INPOP_DE_NUMBER = 100
JPL_AU_KM_RANGE = (1.4e8, 1.6e8)
JPL_EMRAT_RANGE = (80.0, 82.0)
JPL_MAX_RECORD_DAYS = 100.0

# TCB to TDB (IAU 2006 Resolution B3)
L_B = 1.550519768e-8
TDB0_SECONDS = -6.55e-5
T0_JD = 2443144.5003725

# Longest center-of-motion chain walked before giving up
MAX_CHAIN_LENGTH = 20

# Light-time iteration defaults
DEFAULT_LIGHT_TIME_TOLERANCE = 1.0e-10  # seconds
DEFAULT_LIGHT_TIME_MAX_ITERATIONS = 3

# State table limits
MAX_TABLE_STEPS = 100000
DEFAULT_MIN_INTERVAL_SECONDS = 1.0

# Gravitational parameters (km^3/s^2) matching the DE ephemerides.
GM_KM3_S2: dict[int, float] = {
    10: 1.3271244004127942e11,  # Sun
    1: 2.2031868551400003e04,  # Mercury barycenter
    2: 3.2485859200000000e05,  # Venus barycenter
    3: 4.0350323562548019e05,  # Earth-Moon barycenter
    399: 3.9860043550702266e05,  # Earth
    301: 4.9028001184575496e03,  # Moon
    4: 4.2828375815756102e04,  # Mars barycenter
    5: 1.2671276409999998e08,  # Jupiter barycenter
    6: 3.7940584841799997e07,  # Saturn barycenter
    7: 5.7945563999999985e06,  # Uranus barycenter
    8: 6.8365271005803989e06,  # Neptune barycenter
    9: 9.7550000000000000e02,  # Pluto barycenter
}
GM_KM3_S2[SSB_ID] = sum(GM_KM3_S2[body] for body in (10, 1, 2, 3, 4, 5, 6, 7, 8, 9))


def gm_of(body_id: int) -> float | None:
    """Return gravitational parameter (km^3/s^2) for a NAIF body ID.

    Parameters:
        body_id: NAIF body ID (e.g. 399 for Earth, 0 for the solar system barycenter).

    Returns:
        GM in km^3/s^2, or None if the body has no tabulated value.
    """
    return GM_KM3_S2.get(body_id)
