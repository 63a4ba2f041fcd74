# ABOUTME: Tests for spot identity and the spot name lookup
# ABOUTME: Unknown ids must resolve to "Unknown" instead of failing

from surfline2influx.spots import UNKNOWN_SPOT_NAME, Spot, SpotNameResolver


def test_resolves_known_spot():
    resolver = SpotNameResolver({"5842041f4e65fad6a7708841": "Pacific Beach"})
    assert resolver.resolve("5842041f4e65fad6a7708841") == "Pacific Beach"


def test_unknown_spot_resolves_to_sentinel():
    resolver = SpotNameResolver({"5842041f4e65fad6a7708841": "Pacific Beach"})
    assert resolver.resolve("not-a-spot") == UNKNOWN_SPOT_NAME == "Unknown"


def test_from_spots_inverts_config_mapping():
    """Config maps label -> id; the resolver maps id -> label"""
    resolver = SpotNameResolver.from_spots({
        "Pacific Beach": "5842041f4e65fad6a7708841",
        "Ocean Beach": "5842041f4e65fad6a770883f",
    })
    assert resolver.resolve("5842041f4e65fad6a770883f") == "Ocean Beach"


def test_resolver_copies_its_input():
    """Mutating the source mapping afterwards does not change lookups"""
    names = {"abc": "Old Name"}
    resolver = SpotNameResolver(names)
    names["abc"] = "New Name"

    assert resolver.resolve("abc") == "Old Name"


def test_spot_builds_immutable_hashable_spot():
    resolver = SpotNameResolver({"abc": "Windansea Beach"})
    spot = resolver.spot("abc")

    assert spot == Spot(spot_id="abc", name="Windansea Beach")
    assert {spot: 1}[Spot("abc", "Windansea Beach")] == 1


def test_spot_str_includes_name_and_id():
    assert str(Spot("abc", "Ocean Beach")) == "Ocean Beach (abc)"
