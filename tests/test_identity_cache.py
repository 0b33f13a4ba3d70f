from fakes import FakeArray, make_client
from powerstore_exporter.cache import RESOURCE_TYPES, IdentityCache


def full_array():
    return FakeArray(lists={
        "appliance": [{"id": "A1", "name": "appliance-1"}, {"id": "A2", "name": "appliance-2"}],
        "volume_list_cma_view": [{"id": "v1", "name": "db01"}, {"id": "v2", "name": None}],
        "volume_group_list_cma_view": [{"id": "g1", "name": "vg-db", "appliance_ids": ["A1", "A2"]}],
        "eth_port": [{"id": "e1", "name": "BaseEnclosure-NodeA-IoModule0-FEPort0"}],
        "fc_port": [{"id": "f1", "name": "BaseEnclosure-NodeA-IoModule1-FEPort0"}],
        "hardware": lambda params: [{"id": "d1", "name": "Drive_0"}] if params.get("type") == "eq.Drive" else [],
        "nas_server": [{"id": "n1", "name": "nas01"}],
        "file_system": [{"id": "fs1", "name": "share01"}],
    })


def built_cache(array):
    client = make_client(array)
    client.session.authenticate()
    cache = IdentityCache(client)
    cache.build_all()
    return cache


def test_build_all_populates_every_type():
    array = full_array()
    cache = built_cache(array)

    assert cache.entries("appliance") == {"A1": "appliance-1", "A2": "appliance-2"}
    assert cache.lookup("eth_port", "e1") == "BaseEnclosure-NodeA-IoModule0-FEPort0"
    assert cache.lookup("drive", "d1") == "Drive_0"
    assert cache.ids("file_system") == ["fs1"]
    assert len(array.gets()) == len(RESOURCE_TYPES)


def test_volume_group_keeps_appliance_ids():
    cache = built_cache(full_array())

    assert cache.attribute("volume_group", "g1", "appliance_ids") == ["A1", "A2"]
    assert cache.attribute("volume_group", "missing", "appliance_ids") is None


def test_missing_name_and_unknown_id():
    cache = built_cache(full_array())

    assert cache.lookup("volume", "v2") == ""
    assert cache.lookup("volume", "nope") is None
    assert cache.lookup("not_a_type", "v1") is None
    assert cache.entries("not_a_type") == {}


def test_failed_type_leaves_empty_table_others_usable():
    array = full_array()
    array.fail_paths["volume_list_cma_view"] = 500
    cache = built_cache(array)

    assert cache.entries("volume") == {}
    assert cache.ids("volume") == []
    assert cache.entries("nas_server") == {"n1": "nas01"}


def test_non_list_response_is_a_failed_build():
    array = full_array()
    array.lists["fc_port"] = {"message": "unexpected"}
    cache = built_cache(array)

    assert cache.entries("fc_port") == {}
    assert cache.entries("eth_port") != {}


def test_rebuild_replaces_table():
    array = full_array()
    cache = built_cache(array)
    previous = cache.entries("nas_server")

    array.lists["nas_server"] = [{"id": "n2", "name": "nas02"}]
    cache.build("nas_server")

    assert cache.entries("nas_server") == {"n2": "nas02"}
    assert previous == {"n1": "nas01"}
