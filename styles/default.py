"""
Default tag transform style.

Each function receives tags as a dict and returns its decision positionally:

- filter_tags_node(tags, num_tags) -> (filter, tags)
- filter_tags_way(tags, num_tags) -> (filter, tags, polygon, roads)
- filter_basic_tags_rel(tags, num_tags) -> (filter, tags)
- filter_tags_relation_member(tags, member_tags, roles, num_members)
  -> (filter, tags, member_superseded, boundary, polygon, roads)

``filter`` is truthy to drop the object. Flags are integers.
"""

POLYGON_KEYS = {
    "aeroway", "amenity", "building", "harbour", "historic", "landuse",
    "leisure", "man_made", "military", "natural", "office", "place",
    "power", "public_transport", "shop", "sport", "tourism", "water",
    "waterway", "wetland",
}

DELETE_KEYS = {"note", "source", "created_by", "fixme", "FIXME"}

DELETE_PREFIXES = ("note:", "source:", "tiger:")

ROAD_HIGHWAYS = {"motorway", "trunk", "primary", "secondary"}


def _clean(tags):
    return {
        k: v for k, v in tags.items()
        if k not in DELETE_KEYS and not k.startswith(DELETE_PREFIXES)
    }


def _is_road(tags):
    if tags.get("highway") in ROAD_HIGHWAYS:
        return True
    if tags.get("railway") == "rail" and tags.get("service") is None:
        return True
    return tags.get("boundary") == "administrative"


def _is_polygon(tags):
    if tags.get("area") == "yes":
        return True
    if tags.get("area") == "no":
        return False
    return any(key in POLYGON_KEYS for key in tags)


def filter_tags_node(tags, num_tags):
    tags = _clean(tags)
    return not tags, tags


def filter_tags_way(tags, num_tags):
    tags = _clean(tags)
    if not tags:
        return 1, tags, 0, 0
    return 0, tags, int(_is_polygon(tags)), int(_is_road(tags))


def filter_basic_tags_rel(tags, num_tags):
    tags = _clean(tags)
    if tags.get("type") not in ("multipolygon", "boundary", "route"):
        return 1, tags
    return 0, tags


def filter_tags_relation_member(tags, member_tags, roles, num_members):
    tags = _clean(tags)
    superseded = [0] * num_members
    rel_type = tags.get("type")

    if rel_type == "boundary" or (rel_type == "multipolygon" and "boundary" in tags):
        return 0, tags, superseded, 1, 0, int(_is_road(tags))

    if rel_type == "route":
        return 0, tags, superseded, 0, 0, int(_is_road(tags))

    if rel_type != "multipolygon":
        return 1, tags, superseded, 0, 0, 0

    # Old-style multipolygons carry their tags on the outer ways
    if len(tags) == 1:
        for member, role in zip(member_tags, roles):
            if role == "outer":
                tags.update(_clean(member))

    tags.pop("type", None)
    if not tags:
        return 1, tags, superseded, 0, 0, 0

    for index, member in enumerate(member_tags):
        member = _clean(member)
        if member and all(tags.get(k) == v for k, v in member.items()):
            superseded[index] = 1

    tags["type"] = "multipolygon"
    return 0, tags, superseded, 0, 1, int(_is_road(tags))
