"""
Named color dictionary and nearest-name lookup.

The dictionary is a static, immutable table grouped into families. Lookup is
a linear scan under a "redmean" weighted RGB distance.
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

import numpy as np

from .models import RGB, NamedColor
from .space import RGBLike, as_rgb

SHADE_OFFSET = 40

_COLOR_FAMILIES: Tuple[Tuple[str, Tuple[Tuple[str, Tuple[int, int, int]], ...]], ...] = (
    ("red", (
        ("Red", (255, 0, 0)),
        ("Crimson", (220, 20, 60)),
        ("Scarlet", (255, 36, 0)),
        ("Ruby", (224, 17, 95)),
        ("Cherry", (222, 49, 99)),
        ("Wine", (114, 47, 55)),
        ("Burgundy", (128, 0, 32)),
        ("Maroon", (128, 0, 0)),
        ("Brick", (203, 65, 84)),
        ("Rose", (255, 0, 127)),
        ("Salmon", (250, 128, 114)),
        ("Coral", (255, 127, 80)),
        ("Tomato", (255, 99, 71)),
        ("Vermilion", (227, 66, 52)),
        ("Cardinal", (196, 30, 58)),
    )),
    ("orange", (
        ("Orange", (255, 165, 0)),
        ("Tangerine", (255, 159, 0)),
        ("Pumpkin", (255, 117, 24)),
        ("Carrot", (237, 145, 33)),
        ("Apricot", (251, 206, 177)),
        ("Peach", (255, 218, 185)),
        ("Burnt Orange", (204, 85, 0)),
        ("Rust", (183, 65, 14)),
        ("Terracotta", (226, 114, 91)),
        ("Amber", (255, 191, 0)),
        ("Saffron", (244, 196, 48)),
        ("Marigold", (234, 162, 33)),
    )),
    ("yellow", (
        ("Yellow", (255, 255, 0)),
        ("Gold", (255, 215, 0)),
        ("Honey", (235, 150, 5)),
        ("Mustard", (255, 219, 88)),
        ("Lemon", (255, 247, 0)),
        ("Canary", (255, 239, 0)),
        ("Butter", (255, 255, 149)),
        ("Cream", (255, 253, 208)),
        ("Champagne", (247, 231, 206)),
        ("Blonde", (250, 240, 190)),
        ("Maize", (251, 236, 93)),
        ("Flax", (238, 220, 130)),
    )),
    ("green", (
        ("Green", (0, 128, 0)),
        ("Lime", (0, 255, 0)),
        ("Emerald", (80, 200, 120)),
        ("Jade", (0, 168, 107)),
        ("Mint", (152, 255, 152)),
        ("Sage", (176, 208, 176)),
        ("Forest", (34, 139, 34)),
        ("Olive", (128, 128, 0)),
        ("Moss", (138, 154, 91)),
        ("Grass", (124, 252, 0)),
        ("Seafoam", (159, 226, 191)),
        ("Teal", (0, 128, 128)),
        ("Pine", (1, 121, 111)),
        ("Jungle", (41, 171, 135)),
        ("Hunter", (53, 94, 59)),
        ("Spring", (0, 255, 127)),
        ("Pistachio", (147, 197, 114)),
        ("Chartreuse", (127, 255, 0)),
        ("Fern", (79, 121, 66)),
        ("Avocado", (86, 130, 3)),
    )),
    ("blue", (
        ("Blue", (0, 0, 255)),
        ("Sky", (135, 206, 235)),
        ("Azure", (0, 127, 255)),
        ("Navy", (0, 0, 128)),
        ("Royal", (65, 105, 225)),
        ("Cobalt", (0, 71, 171)),
        ("Sapphire", (15, 82, 186)),
        ("Ocean", (0, 119, 190)),
        ("Cerulean", (0, 123, 167)),
        ("Denim", (21, 96, 189)),
        ("Steel", (70, 130, 180)),
        ("Powder", (176, 224, 230)),
        ("Baby Blue", (137, 207, 240)),
        ("Ice", (153, 255, 255)),
        ("Turquoise", (64, 224, 208)),
        ("Aqua", (0, 255, 255)),
        ("Cyan", (0, 255, 255)),
        ("Midnight", (25, 25, 112)),
        ("Cornflower", (100, 149, 237)),
        ("Prussian", (0, 49, 83)),
    )),
    ("purple", (
        ("Purple", (128, 0, 128)),
        ("Violet", (238, 130, 238)),
        ("Lavender", (230, 230, 250)),
        ("Lilac", (200, 162, 200)),
        ("Plum", (142, 69, 133)),
        ("Orchid", (218, 112, 214)),
        ("Grape", (111, 45, 168)),
        ("Amethyst", (153, 102, 204)),
        ("Mauve", (224, 176, 255)),
        ("Indigo", (75, 0, 130)),
        ("Eggplant", (97, 64, 81)),
        ("Magenta", (255, 0, 255)),
        ("Fuchsia", (255, 0, 255)),
        ("Periwinkle", (204, 204, 255)),
        ("Heliotrope", (223, 115, 255)),
        ("Wisteria", (201, 160, 220)),
    )),
    ("pink", (
        ("Pink", (255, 192, 203)),
        ("Hot Pink", (255, 105, 180)),
        ("Blush", (222, 93, 131)),
        ("Bubblegum", (255, 193, 204)),
        ("Flamingo", (252, 142, 172)),
        ("Watermelon", (253, 70, 89)),
        ("Raspberry", (227, 11, 92)),
        ("Rouge", (169, 64, 118)),
        ("Dusty Rose", (194, 137, 162)),
        ("Carnation", (255, 166, 201)),
        ("Fandango", (181, 51, 137)),
    )),
    ("brown", (
        ("Brown", (139, 69, 19)),
        ("Chocolate", (123, 63, 0)),
        ("Coffee", (111, 78, 55)),
        ("Mocha", (151, 114, 92)),
        ("Chestnut", (149, 69, 53)),
        ("Cinnamon", (210, 105, 30)),
        ("Caramel", (255, 213, 145)),
        ("Tan", (210, 180, 140)),
        ("Beige", (245, 245, 220)),
        ("Khaki", (195, 176, 145)),
        ("Sand", (194, 178, 128)),
        ("Taupe", (72, 60, 50)),
        ("Umber", (99, 81, 71)),
        ("Sienna", (160, 82, 45)),
        ("Mahogany", (192, 64, 0)),
        ("Auburn", (165, 42, 42)),
        ("Copper", (184, 115, 51)),
        ("Bronze", (205, 127, 50)),
        ("Ochre", (204, 119, 34)),
        ("Walnut", (119, 63, 26)),
    )),
    ("neutral", (
        ("White", (255, 255, 255)),
        ("Ivory", (255, 255, 240)),
        ("Pearl", (234, 224, 200)),
        ("Snow", (255, 250, 250)),
        ("Bone", (227, 218, 201)),
        ("Linen", (250, 240, 230)),
        ("Silver", (192, 192, 192)),
        ("Ash", (178, 190, 181)),
        ("Slate", (112, 128, 144)),
        ("Charcoal", (54, 69, 79)),
        ("Smoke", (115, 130, 118)),
        ("Fog", (175, 180, 175)),
        ("Gray", (128, 128, 128)),
        ("Graphite", (65, 65, 65)),
        ("Onyx", (53, 56, 57)),
        ("Ebony", (33, 36, 33)),
        ("Jet", (52, 52, 52)),
        ("Black", (0, 0, 0)),
        ("Gainsboro", (220, 220, 220)),
        ("Dim Gray", (105, 105, 105)),
    )),
    ("metallic", (
        ("Rose Gold", (183, 110, 121)),
        ("Brass", (181, 166, 66)),
        ("Pewter", (142, 142, 130)),
        ("Platinum", (229, 228, 226)),
        ("Gunmetal", (42, 52, 57)),
    )),
)

COLOR_FAMILIES: Mapping[str, Tuple[NamedColor, ...]] = MappingProxyType({
    family: tuple(NamedColor(name=name, rgb=RGB(*rgb), family=family) for name, rgb in entries)
    for family, entries in _COLOR_FAMILIES
})

NAMED_COLORS: Tuple[NamedColor, ...] = tuple(
    color for family in COLOR_FAMILIES.values() for color in family
)

_REFERENCE_RGB = np.array([tuple(color.rgb) for color in NAMED_COLORS], dtype=np.float64)


def _redmean_distances(rgb: RGB) -> np.ndarray:
    query = np.array(tuple(rgb), dtype=np.float64)
    r_mean = (query[0] + _REFERENCE_RGB[:, 0]) / 2
    diff = _REFERENCE_RGB - query
    return np.sqrt(
        (2 + r_mean / 256) * diff[:, 0] ** 2
        + 4 * diff[:, 1] ** 2
        + (2 + (255 - r_mean) / 256) * diff[:, 2] ** 2
    )


def find_nearest_named_color(rgb: RGBLike) -> NamedColor:
    """Dictionary entry closest to ``rgb``; the earliest entry wins ties."""
    distances = _redmean_distances(as_rgb(rgb))
    return NAMED_COLORS[int(np.argmin(distances))]


def describe_shade(rgb: RGBLike, reference: NamedColor) -> str:
    """
    Qualify a reference name by how much darker or lighter the query is.

    Compares mean channel values; beyond 40 levels either way the name gets a
    "Dark " or "Light " prefix.
    """
    lightness = sum(as_rgb(rgb)) / 3
    reference_lightness = sum(reference.rgb) / 3

    if lightness < reference_lightness - SHADE_OFFSET:
        return f"Dark {reference.name}"
    if lightness > reference_lightness + SHADE_OFFSET:
        return f"Light {reference.name}"
    return reference.name


def get_color_name(rgb: RGBLike) -> str:
    """Human-readable name for any RGB color. Never fails."""
    rgb = as_rgb(rgb)
    return describe_shade(rgb, find_nearest_named_color(rgb))


def get_colors_by_family(family: str) -> List[NamedColor]:
    """Entries of one family (case-insensitive); unknown families give []."""
    return list(COLOR_FAMILIES.get(family.lower(), ()))


def search_colors_by_name(query: str) -> List[NamedColor]:
    """Case-insensitive substring search over entry names."""
    needle = query.lower()
    return [color for color in NAMED_COLORS if needle in color.name.lower()]


def get_all_named_colors() -> List[NamedColor]:
    return list(NAMED_COLORS)
