"""Fixed gear catalog: keys, labels, display order and exclusive groups."""

from __future__ import annotations

from dataclasses import dataclass

from run_conditions.models.recommendation import GearItem

GEAR_LABELS: dict[str, str] = {
    # Tops
    "sports_bra": "Sports bra",
    "tank_top": "Tank top",
    "short_sleeve": "Short-sleeve tech tee",
    "long_sleeve": "Long-sleeve base",
    "vest": "Running vest",
    "light_jacket": "Light jacket",
    "insulated_jacket": "Insulated jacket",
    "windbreaker": "Windbreaker",
    "rain_shell": "Packable rain shell",
    # Bottoms
    "split_shorts": "Split shorts",
    "shorts": "Shorts",
    "tights": "Running tights",
    "thermal_tights": "Thermal tights",
    # Head and face
    "cap": "Cap",
    "brim_cap": "Cap for rain",
    "headband": "Ear band",
    "beanie": "Beanie",
    "balaclava": "Balaclava",
    "neck_gaiter": "Neck gaiter",
    # Arms and hands
    "arm_sleeves": "Arm sleeves",
    "arm_sleeves_optional": "Arm sleeves (Optional)",
    "light_gloves": "Light gloves",
    "medium_gloves": "Medium gloves",
    "mittens": "Mittens",
    "mittens_liner": "Glove liner (under mittens)",
    # Feet
    "light_socks": "Light socks",
    "heavy_socks": "Heavy socks",
    "double_socks": "Double socks (layered)",
    # Accessories
    "sunglasses": "Sunglasses",
    "sunscreen": "Sunscreen",
    "hydration": "Bring water",
    "energy_nutrition": "Energy gels/chews",
    "anti_chafe": "Anti-chafe balm",
}

GLOVE_KEYS = ("light_gloves", "medium_gloves", "mittens", "mittens_liner")
SOCK_KEYS = ("light_socks", "heavy_socks", "double_socks")

PERFORMANCE_ORDER = (
    "sports_bra", "tank_top", "short_sleeve", "long_sleeve", "vest",
    "light_jacket", "insulated_jacket", "split_shorts", "shorts", "tights",
    "thermal_tights", "cap", "brim_cap", "headband", "beanie", "arm_sleeves",
    "arm_sleeves_optional", "light_gloves", "medium_gloves", "mittens",
    "mittens_liner", "windbreaker", "rain_shell", "sunglasses", "sunscreen",
    "hydration", "energy_nutrition", "anti_chafe", "light_socks",
    "heavy_socks", "double_socks", "neck_gaiter",
)

COMFORT_ORDER = (
    "sports_bra", "short_sleeve", "long_sleeve", "tank_top", "light_jacket",
    "insulated_jacket", "vest", "tights", "thermal_tights", "shorts",
    "split_shorts", "beanie", "headband", "cap", "brim_cap", "arm_sleeves",
    "arm_sleeves_optional", "mittens", "mittens_liner", "medium_gloves",
    "light_gloves", "heavy_socks", "light_socks", "double_socks",
    "neck_gaiter", "windbreaker", "rain_shell", "sunglasses", "sunscreen",
    "hydration", "energy_nutrition", "anti_chafe",
)


@dataclass(frozen=True)
class ExclusiveGroup:
    """Items that must not be worn together.

    ``keys`` is ordered by preference: when several are present, the first
    one wins and the rest are dropped.
    """

    name: str
    keys: tuple[str, ...]

    def resolve(self, gear: frozenset[str]) -> frozenset[str]:
        present = [key for key in self.keys if key in gear]
        if len(present) < 2:
            return gear
        return gear - frozenset(present[1:])


EXCLUSIVE_GROUPS = (
    ExclusiveGroup("headwear", ("brim_cap", "cap")),
    ExclusiveGroup("shell", ("rain_shell", "windbreaker")),
    ExclusiveGroup("jacket", ("insulated_jacket", "light_jacket")),
    ExclusiveGroup("core", ("light_jacket", "vest")),
    ExclusiveGroup("gloves", ("mittens", "medium_gloves", "light_gloves")),
    ExclusiveGroup("socks", ("double_socks", "heavy_socks", "light_socks")),
)


def resolve_conflicts(gear: frozenset[str]) -> frozenset[str]:
    """Apply every exclusive group, in order."""
    for group in EXCLUSIVE_GROUPS:
        gear = group.resolve(gear)
    return gear


def sort_keys(gear: frozenset[str], order: tuple[str, ...]) -> list[str]:
    """Sort by position in ``order``; unranked keys go last, by name."""
    rank = {key: index for index, key in enumerate(order)}
    return sorted(gear, key=lambda key: (rank.get(key, len(order)), key))


def to_items(
    gear: frozenset[str],
    order: tuple[str, ...],
    cold_hands_keys: frozenset[str] = frozenset(),
) -> list[GearItem]:
    """Build the ordered, labeled list for one outfit variant."""
    return [
        GearItem(
            key=key,
            label=GEAR_LABELS.get(key, key),
            cold_hands=key in cold_hands_keys,
        )
        for key in sort_keys(gear, order)
    ]
