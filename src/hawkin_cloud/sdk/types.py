"""
Hawkin API types, enums, and constants.

Regional hosts, the canonical test-type table and the force-time column
categories live here.
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Union

from hawkin_cloud.sdk.exceptions import ConfigError, ValidationError


class Region(Enum):
    """Hawkin cloud region, by display name."""
    AMERICAS = "Americas"
    EUROPE = "Europe"
    ASIA_PACIFIC = "Asia/Pacific"
    DEV = "Dev"


REGION_HOSTS = {
    Region.AMERICAS: "cloud.hawkindynamics.com",
    Region.EUROPE: "eu.cloud.hawkindynamics.com",
    Region.ASIA_PACIFIC: "apac.cloud.hawkindynamics.com",
    Region.DEV: "cloud.dev.hawkindynamics.com",
}


def resolve_region(region: Union[Region, str]) -> Region:
    """Accept a Region member or its display value ("Europe", ...)."""
    if isinstance(region, Region):
        return region
    for member in Region:
        if region == member.value or region == member.name:
            return member
    valid = ", ".join(f"'{r.value}'" for r in Region)
    raise ConfigError(f"Unknown region {region!r}. Must be one of: {valid}")


def token_url(region: Region) -> str:
    return f"https://{REGION_HOSTS[region]}/api/token"


def api_url(region: Region) -> str:
    return f"https://{REGION_HOSTS[region]}/api/dev"


class TestType(NamedTuple):
    """A test protocol, keyed by its canonical id."""
    canonical_id: str
    name: str
    abbreviation: str


TEST_TYPES = [
    TestType("7nNduHeM5zETPjHxvm7s", "Countermovement Jump", "CMJ"),
    TestType("QEG7m7DhYsD6BrcQ8pic", "Squat Jump", "SJ"),
    TestType("2uS5XD5kXmWgIZ5HhQ3A", "Isometric Test", "ISO"),
    TestType("gyBETpRXpdr63Ab2E0V8", "Drop Jump", "DJ"),
    TestType("5pRSUQVSJVnxijpPMck3", "Free Run", "FR"),
    TestType("pqgf2TPUOQOQs6r0HQWb", "CMJ Rebound", "CMJR"),
    TestType("r4fhrkPdYlLxYQxEeM78", "Multi Rebound", "MR"),
    TestType("ubeWMPN1lJFbuQbAM97s", "Weigh In", "WI"),
    TestType("rKgI4y3ItTAzUekTUpvR", "Drop Landing", "DL"),
    TestType("4KlQgKmBxbOY6uKTLDFL", "TS Free Run", "TSFR"),
    TestType("umnEZPgi6zaxuw0KhUpM", "TS Isometric Test", "TSISO"),
]

TEST_TYPES_BY_ID = {t.canonical_id: t for t in TEST_TYPES}


def resolve_test_type(value: str) -> str:
    """Return the canonical id for a test type id, name or abbreviation.

    Raises:
        ValidationError: If the value matches no known test type.
    """
    if isinstance(value, str):
        for t in TEST_TYPES:
            if value in (t.canonical_id, t.name, t.abbreviation):
                return t.canonical_id
    raise ValidationError(f"typeId incorrect: {value!r}. Check your entry")


# Force-time column categories.
# Raw payload key -> output column, in output order.
FORCE_TIME_TIME = ("Time(s)", "time_s")

FORCE_TIME_PRIMARY = {
    "RightForce(N)": "force_right",
    "LeftForce(N)": "force_left",
    "CombinedForce(N)": "force_combined",
    "Velocity(m/s)": "velocity_m_s",
    "Displacement(m)": "displacement_m",
    "Power(W)": "power_w",
}

FORCE_TIME_TRI_AXIAL = {
    "LeftForceX(N)": "force_left_x",
    "LeftForceY(N)": "force_left_y",
    "RightForceX(N)": "force_right_x",
    "RightForceY(N)": "force_right_y",
    "LeftMomentX(Nm)": "moment_left_x",
    "LeftMomentY(Nm)": "moment_left_y",
    "RightMomentX(Nm)": "moment_right_x",
    "RightMomentY(Nm)": "moment_right_y",
}


class ForceTimeCategory(Enum):
    """Which primary columns a test type produces."""
    FULL = "full"
    COMBINED_ONLY = "combined_only"
    REDUCED = "reduced"


FORCE_TIME_COLUMNS: Dict[ForceTimeCategory, List[str]] = {
    ForceTimeCategory.FULL: [
        "RightForce(N)", "LeftForce(N)", "CombinedForce(N)",
        "Velocity(m/s)", "Displacement(m)", "Power(W)",
    ],
    ForceTimeCategory.COMBINED_ONLY: ["CombinedForce(N)"],
    ForceTimeCategory.REDUCED: ["RightForce(N)", "LeftForce(N)", "CombinedForce(N)"],
}

FORCE_TIME_CATEGORY_BY_TYPE = {
    "7nNduHeM5zETPjHxvm7s": ForceTimeCategory.FULL,           # CMJ
    "QEG7m7DhYsD6BrcQ8pic": ForceTimeCategory.FULL,           # SJ
    "gyBETpRXpdr63Ab2E0V8": ForceTimeCategory.FULL,           # DJ
    "pqgf2TPUOQOQs6r0HQWb": ForceTimeCategory.FULL,           # CMJR
    "r4fhrkPdYlLxYQxEeM78": ForceTimeCategory.FULL,           # MR
    "rKgI4y3ItTAzUekTUpvR": ForceTimeCategory.FULL,           # DL
    "2uS5XD5kXmWgIZ5HhQ3A": ForceTimeCategory.REDUCED,        # ISO
    "5pRSUQVSJVnxijpPMck3": ForceTimeCategory.REDUCED,        # FR
    "ubeWMPN1lJFbuQbAM97s": ForceTimeCategory.REDUCED,        # WI
    "4KlQgKmBxbOY6uKTLDFL": ForceTimeCategory.COMBINED_ONLY,  # TSFR
    "umnEZPgi6zaxuw0KhUpM": ForceTimeCategory.COMBINED_ONLY,  # TSISO
}
