"""Fall protection and anchorage value objects."""

from __future__ import annotations

from enum import Enum


class SurfaceType(str, Enum):
    """Surface below the working area.

    The surface determines the extra clearance margin added for
    rebound and penetration. ``OTHER`` has no table entry and uses
    the default margin.
    """

    CONCRETE = "concrete"
    STEEL = "steel"
    GROUND = "ground"
    WATER = "water"
    OTHER = "other"


class FallSystemType(str, Enum):
    """Kind of fall protection system in use.

    Attributes:
        ARREST: Fall arrest system that stops a fall in progress.
        PERSONAL: Personal fall arrest system limited to 0.6 m free fall.
        RESTRAINT: Restraint system that prevents reaching the fall edge.
        POSITIONING: Work positioning system.
    """

    ARREST = "arrest"
    PERSONAL = "personal"
    RESTRAINT = "restraint"
    POSITIONING = "positioning"


class AnchorType(str, Enum):
    """Supported anchor designs."""

    BEAM_CLAMP = "beam-clamp"
    CONCRETE_ANCHOR = "concrete-anchor"
    ROOF_ANCHOR = "roof-anchor"


class AnchorMaterial(str, Enum):
    """Anchor material or installation method.

    Each anchor type only reacts to the materials relevant to it, e.g.
    ``EPOXY`` and ``WEDGE`` affect concrete anchors and ``THROUGH_BOLT``
    affects roof anchors.
    """

    STEEL = "steel"
    ALUMINUM = "aluminum"
    EPOXY = "epoxy"
    WEDGE = "wedge"
    SLEEVE = "sleeve"
    THROUGH_BOLT = "through-bolt"
    WELDED = "welded"
